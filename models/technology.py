import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TechKind(Enum):
    """Kind of technology a rule detects."""
    FRAMEWORK = "framework"
    LANGUAGE = "language"
    LIBRARY = "library"
    TOOL = "tool"


@dataclass(frozen=True)
class DetectionRule:
    """Defines how to recognize one technology from repository signals."""
    name: str
    kind: TechKind
    filename_signals: Tuple[str, ...] = field(default_factory=tuple) # Substrings matched against each path
    manifest_keys: Tuple[str, ...] = field(default_factory=tuple) # Keys looked up in merged dependencies
    path_patterns: Tuple[re.Pattern, ...] = field(default_factory=tuple) # Compiled, searched against each path
    weight: int = 0 # Priority hint, not part of confidence
    icon: Optional[str] = None

    def has_signals(self) -> bool:
        return bool(self.filename_signals or self.manifest_keys or self.path_patterns)
