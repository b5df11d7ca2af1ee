from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Parsed package.json (or any manifest with dependency sections)
Manifest = Mapping[str, Any]

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


@dataclass(frozen=True)
class RepositorySnapshot:
    """Per-request bundle of repository facts the engine evaluates."""
    file_paths: Tuple[str, ...] = field(default_factory=tuple)
    manifest: Optional[Manifest] = None # None when no manifest was retrievable

    def __post_init__(self):
        # Accept any iterable of paths but store an immutable copy of the strings
        paths = tuple(p for p in (self.file_paths or ()) if isinstance(p, str))
        object.__setattr__(self, "file_paths", paths)

    def merged_dependencies(self) -> Dict[str, Any]:
        """Runtime and development dependencies in one lookup space."""
        merged: Dict[str, Any] = {}
        if not isinstance(self.manifest, Mapping):
            return merged
        for section in DEPENDENCY_SECTIONS:
            deps = self.manifest.get(section)
            if isinstance(deps, Mapping):
                merged.update(deps)
        return merged
