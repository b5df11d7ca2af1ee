from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.technology import TechKind

FILENAME_SIGNAL = "filename"
MANIFEST_SIGNAL = "manifest"
PATTERN_SIGNAL = "pattern"


@dataclass(frozen=True)
class Evidence:
    """Represents one signal that contributed to a technology detection."""
    signal: str # 'filename', 'manifest' or 'pattern'
    matches: Tuple[str, ...] = field(default_factory=tuple)
    count: int = 0 # Number of matching paths, for pattern signals
    version: Optional[str] = None # Raw manifest version of the first matched key

    def describe(self) -> List[str]:
        """Render this evidence as human-readable lines."""
        if self.signal == FILENAME_SIGNAL:
            return [f"Found files: {', '.join(self.matches)}"]
        if self.signal == MANIFEST_SIGNAL:
            lines = [f"Found in package.json: {', '.join(self.matches)}"]
            if self.version:
                lines.append(f"Version: {self.version}")
            return lines
        if self.signal == PATTERN_SIGNAL:
            return [f"Found {self.count} matching files"]
        return [f"{self.signal}: {', '.join(self.matches)}"]


@dataclass(frozen=True)
class DetectedTech:
    """Represents a detected technology."""
    name: str
    kind: TechKind
    confidence: int
    evidence: Tuple[Evidence, ...]
    version: Optional[str] = None # Taken from the manifest when available
    weight: int = 0
    icon: Optional[str] = None

    def evidence_text(self) -> List[str]:
        lines: List[str] = []
        for item in self.evidence:
            lines.extend(item.describe())
        return lines

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.kind.value,
            "confidence": self.confidence,
            "evidence": self.evidence_text(),
        }
        if self.version:
            data["version"] = self.version
        if self.icon:
            data["icon"] = self.icon
        return data
