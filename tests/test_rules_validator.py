import re

from core.rules_validator import (
    find_duplicate_names,
    find_filename_overlaps,
    find_manifest_key_overlaps,
    find_signalless_rules,
    main,
    print_validation_report,
)
from models.technology import DetectionRule, TechKind


def _rules():
    return [
        DetectionRule(name="Alpha", kind=TechKind.FRAMEWORK, filename_signals=("app.py",), manifest_keys=("shared",)),
        DetectionRule(name="Beta", kind=TechKind.FRAMEWORK, filename_signals=("myapp.py",), manifest_keys=("shared",)),
        DetectionRule(name="Alpha", kind=TechKind.LIBRARY, path_patterns=(re.compile(r"\.a$"),)),
        DetectionRule(name="Ghost", kind=TechKind.TOOL),
    ]


def test_find_duplicate_names():
    assert find_duplicate_names(_rules()) == {"Alpha": 2}


def test_find_filename_overlaps_includes_substrings():
    assert find_filename_overlaps(_rules()) == {"app.py": ["Alpha", "Beta"]}


def test_find_manifest_key_overlaps():
    assert find_manifest_key_overlaps(_rules()) == {"shared": ["Alpha", "Beta"]}


def test_find_signalless_rules():
    assert find_signalless_rules(_rules()) == ["Ghost"]


def test_bundled_catalog_is_clean(catalog):
    assert find_duplicate_names(list(catalog)) == {}
    assert find_signalless_rules(list(catalog)) == []


def test_print_validation_report(capsys):
    print_validation_report(_rules())
    out = capsys.readouterr().out
    assert "DUPLICATE NAMES: 1" in out
    assert "'app.py' -> Alpha, Beta" in out
    assert "RULES WITHOUT SIGNALS: Ghost" in out


def test_main_exit_code(tmp_path, capsys):
    (tmp_path / "ok.yaml").write_text("- name: Solo\n  kind: tool\n  files: [solo.cfg]\n")
    assert main(["--rules-dir", str(tmp_path), "--no-verbose"]) == 0
    (tmp_path / "bad.yaml").write_text("- name: Solo\n  kind: tool\n  files: [other.cfg]\n")
    assert main(["--rules-dir", str(tmp_path)]) == 1
    assert "CATALOG VALIDATION REPORT" in capsys.readouterr().out
