"""Shallow structural summary of a repository file listing."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

CI_MARKERS = (".github/workflows", ".gitlab-ci.yml", "jenkins")
TEST_MARKERS = ("test", "spec", "__tests__")
NO_EXTENSION = "no-extension"


@dataclass(frozen=True)
class StructureSummary:
    has_dockerfile: bool = False
    has_ci: bool = False
    has_tests: bool = False
    directories: List[str] = field(default_factory=list)
    file_types: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasDockerFile": self.has_dockerfile,
            "hasCI": self.has_ci,
            "hasTests": self.has_tests,
            "directories": list(self.directories),
            "fileTypes": dict(self.file_types),
        }


def get_directories(files: Iterable[str]) -> List[str]:
    """Sorted top-level directories of nested paths."""
    dirs = set()
    for path in files:
        parts = path.split("/")
        if len(parts) > 1:
            dirs.add(parts[0])
    return sorted(dirs)


def get_file_types(files: Iterable[str]) -> Dict[str, int]:
    """Count paths per extension (text after the last dot of the path)."""
    types: Dict[str, int] = {}
    for path in files:
        ext = path.rsplit(".", 1)[-1] or NO_EXTENSION
        types[ext] = types.get(ext, 0) + 1
    return types


def analyze_structure(files: List[str]) -> StructureSummary:
    return StructureSummary(
        has_dockerfile=any("Dockerfile" in f for f in files),
        has_ci=any(marker in f for f in files for marker in CI_MARKERS),
        has_tests=any(marker in f for f in files for marker in TEST_MARKERS),
        directories=get_directories(files),
        file_types=get_file_types(files),
    )
