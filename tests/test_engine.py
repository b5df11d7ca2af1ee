import re
from typing import List

import pytest

from core.context import RepositorySnapshot
from core.engine import DetectionEngine, DetectionResult
from models.detection import DetectedTech
from models.technology import DetectionRule, TechKind


def _names(detections: List[DetectedTech]) -> List[str]:
    return [d.name for d in detections]


def _by_name(detections: List[DetectedTech]) -> dict:
    return {d.name: d for d in detections}


def test_next_project_with_manifest(engine):
    snapshot = RepositorySnapshot(
        file_paths=["next.config.js", "src/app/page.tsx"],
        manifest={"dependencies": {"next": "14.0.0", "react": "18.2.0"}},
    )
    detections = engine.detect_all(snapshot)
    found = _by_name(detections)

    assert found["Next.js"].confidence == 90
    assert found["React"].confidence == 50
    assert found["TypeScript"].confidence == 30
    for name in ("Next.js", "React", "TypeScript"):
        assert found[name].evidence_text()

    assert found["Next.js"].evidence_text() == [
        "Found files: next.config.js",
        "Found in package.json: next",
        "Version: 14.0.0",
    ]
    assert found["Next.js"].version == "14.0.0"
    assert found["React"].evidence_text() == ["Found in package.json: react", "Version: 18.2.0"]
    assert found["TypeScript"].evidence_text() == ["Found 1 matching files"]
    assert _names(detections)[:3] == ["Next.js", "React", "TypeScript"]


def test_python_project_without_manifest(engine):
    snapshot = RepositorySnapshot(file_paths=["requirements.txt", "app.py"])
    detections = engine.detect_all(snapshot)

    assert _names(detections) == ["Python", "Flask"]
    assert [d.confidence for d in detections] == [70, 40]
    python = detections[0]
    assert python.evidence_text() == ["Found files: requirements.txt", "Found 1 matching files"]
    assert python.version is None


def test_empty_snapshot(engine):
    result = engine.analyze(RepositorySnapshot())
    assert engine.detect_all(RepositorySnapshot()) == []
    assert len(result) == 0
    assert result.get_primary_framework() is None


def test_pom_only_detects_spring_boot(engine):
    result = engine.analyze(RepositorySnapshot(file_paths=["pom.xml"]))
    assert [(d.name, d.confidence) for d in result] == [("Spring Boot", 40)]
    assert result.get_languages() == []
    assert result.get_primary_framework().name == "Spring Boot"


def test_equal_confidence_keeps_catalog_order(engine):
    snapshot = RepositorySnapshot(file_paths=["manage.py", "app.py"])
    first = engine.detect_all(snapshot)
    second = engine.detect_all(snapshot)

    assert _names(first) == ["Django", "Flask", "Python"]
    assert first == second
    assert engine.analyze(snapshot).get_primary_framework().name == "Django"


def test_tie_break_follows_declaration_order():
    rules = [
        DetectionRule(name="Beta", kind=TechKind.FRAMEWORK, filename_signals=("beta.conf",)),
        DetectionRule(name="Alpha", kind=TechKind.FRAMEWORK, filename_signals=("alpha.conf",)),
    ]
    snapshot = RepositorySnapshot(file_paths=["alpha.conf", "beta.conf"])
    assert _names(DetectionEngine(rules).detect_all(snapshot)) == ["Beta", "Alpha"]
    assert _names(DetectionEngine(list(reversed(rules))).detect_all(snapshot)) == ["Alpha", "Beta"]


def test_filename_signal_is_substring_match(engine):
    found = _by_name(engine.detect_all(RepositorySnapshot(file_paths=["src/myapp.py"])))
    assert found["Flask"].confidence == 40
    assert found["Flask"].evidence_text() == ["Found files: app.py"]


def test_all_signals_are_clamped_to_hundred():
    rule = DetectionRule(
        name="Everything",
        kind=TechKind.LIBRARY,
        filename_signals=("every.config",),
        manifest_keys=("everything",),
        path_patterns=(re.compile(r"\.every$"),),
    )
    snapshot = RepositorySnapshot(
        file_paths=["every.config", "a.every", "b.every"],
        manifest={"devDependencies": {"everything": "^2.1.0"}},
    )
    [tech] = DetectionEngine([rule]).detect_all(snapshot)

    assert tech.confidence == 100
    assert tech.version == "2.1.0"
    assert tech.evidence_text() == [
        "Found files: every.config",
        "Found in package.json: everything",
        "Version: ^2.1.0",
        "Found 2 matching files",
    ]


def test_manifest_merges_runtime_and_dev_dependencies(engine):
    snapshot = RepositorySnapshot(
        file_paths=[],
        manifest={
            "dependencies": {"redux": "4.2.1"},
            "devDependencies": {"@reduxjs/toolkit": "1.9.0", "typescript": "~5.3.3"},
        },
    )
    found = _by_name(engine.detect_all(snapshot))
    assert found["Redux"].evidence_text() == ["Found in package.json: redux, @reduxjs/toolkit", "Version: 4.2.1"]
    assert found["TypeScript"].version == "5.3.3"


def test_manifest_keys_ignored_without_manifest(engine):
    found = _by_name(engine.detect_all(RepositorySnapshot(file_paths=["package.json"])))
    assert "React" not in found
    assert found["JavaScript"].confidence == 40


def test_empty_dependency_value_does_not_count(engine):
    snapshot = RepositorySnapshot(file_paths=[], manifest={"dependencies": {"react": ""}})
    assert engine.detect_all(snapshot) == []


def test_malformed_manifest_sections_are_ignored(engine):
    snapshot = RepositorySnapshot(
        file_paths=["index.js", None, 42],
        manifest={"dependencies": ["react"], "devDependencies": None},
    )
    assert _names(engine.detect_all(snapshot)) == ["JavaScript"]


@pytest.mark.parametrize(
    "files, manifest",
    [
        (["next.config.js", "src/app/page.tsx", "tailwind.config.ts"], {"dependencies": {"next": "14.0.0"}}),
        (["requirements.txt", "app.py", "manage.py", "Dockerfile"], None),
        (["src/App.vue", "vite.config.ts"], {"devDependencies": {"vite": "5.0.0", "pinia": "2.1.0"}}),
    ],
)
def test_result_properties(engine, files, manifest):
    snapshot = RepositorySnapshot(file_paths=files, manifest=manifest)
    detections = engine.detect_all(snapshot)
    result = DetectionResult(detections)

    assert detections == engine.detect_all(snapshot)
    for tech in detections:
        assert 0 < tech.confidence <= 100
        assert tech.evidence
    confidences = [d.confidence for d in detections]
    assert confidences == sorted(confidences, reverse=True)

    assert result.get_frameworks() == [d for d in detections if d.kind is TechKind.FRAMEWORK]
    assert result.get_languages() == [d for d in detections if d.kind is TechKind.LANGUAGE]
    assert result.get_libraries() == [d for d in detections if d.kind is TechKind.LIBRARY]
    assert result.get_tools() == [d for d in detections if d.kind is TechKind.TOOL]
    frameworks = result.get_frameworks()
    assert result.get_primary_framework() == (frameworks[0] if frameworks else None)


def test_rule_without_matching_signals_is_not_detected(engine):
    detections = engine.detect_all(RepositorySnapshot(file_paths=["README.md", "docs/index.md"]))
    assert detections == []


def test_tools_are_excluded_from_libraries(engine):
    snapshot = RepositorySnapshot(file_paths=["webpack.config.js"], manifest={"dependencies": {"bootstrap": "5.3.2"}})
    result = engine.analyze(snapshot)

    assert _names(result.get_tools()) == ["Webpack"]
    assert _names(result.get_libraries()) == ["Bootstrap"]


def test_result_to_dict(engine):
    snapshot = RepositorySnapshot(file_paths=["angular.json"], manifest={"dependencies": {"@angular/core": "^17.0.0"}})
    data = engine.analyze(snapshot).to_dict()

    assert data["primaryFramework"]["name"] == "Angular"
    assert data["primaryFramework"]["type"] == "framework"
    assert data["primaryFramework"]["confidence"] == 90
    assert data["primaryFramework"]["version"] == "17.0.0"
    assert data["frameworks"] == [data["primaryFramework"]]
    assert data["languages"] == []
