from core.manifest import parse_package_json, split_requirements, summarize_package_json
from core.structure import analyze_structure, get_directories, get_file_types


def test_structure_flags():
    files = [
        "Dockerfile",
        ".github/workflows/ci.yml",
        "src/__tests__/app.test.ts",
        "src/index.ts",
    ]
    summary = analyze_structure(files)

    assert summary.has_dockerfile
    assert summary.has_ci
    assert summary.has_tests
    assert summary.directories == [".github", "src"]


def test_structure_flags_absent():
    summary = analyze_structure(["README.md", "lib/main.go"])
    assert not summary.has_dockerfile
    assert not summary.has_ci
    assert not summary.has_tests


def test_ci_markers():
    assert analyze_structure([".gitlab-ci.yml"]).has_ci
    assert analyze_structure(["ci/jenkins/Jenkinsfile"]).has_ci


def test_directories_are_top_level_and_sorted():
    assert get_directories(["b/x.py", "a/y/z.py", "root.py", "b/w.py"]) == ["a", "b"]


def test_file_types():
    types = get_file_types(["a.py", "b/c.py", "Makefile", "d.tar.gz", "weird."])
    assert types == {"py": 2, "Makefile": 1, "gz": 1, "no-extension": 1}


def test_structure_to_dict_keys():
    data = analyze_structure(["x.py"]).to_dict()
    assert set(data) == {"hasDockerFile", "hasCI", "hasTests", "directories", "fileTypes"}
    assert data["fileTypes"] == {"py": 1}


def test_parse_package_json():
    assert parse_package_json('{"name": "demo", "dependencies": {"react": "18.2.0"}}')["name"] == "demo"
    assert parse_package_json("{not json") is None
    assert parse_package_json("[1, 2]") is None


def test_summarize_package_json_keeps_names_only():
    summary = summarize_package_json(
        {
            "name": "demo",
            "version": "0.1.0",
            "scripts": {"build": "next build"},
            "dependencies": {"next": "14.0.0", "react": "18.2.0"},
            "devDependencies": {"typescript": "5.3.3"},
        }
    )
    assert summary == {
        "name": "demo",
        "version": "0.1.0",
        "scripts": {"build": "next build"},
        "dependencies": ["next", "react"],
        "devDependencies": ["typescript"],
    }


def test_summarize_package_json_missing_sections():
    summary = summarize_package_json({"name": "bare"})
    assert summary["dependencies"] == []
    assert summary["devDependencies"] == []
    assert summary["version"] is None


def test_split_requirements():
    assert split_requirements("flask==3.0.0\n\n  \nrequests>=2\n") == ["flask==3.0.0", "requests>=2"]
