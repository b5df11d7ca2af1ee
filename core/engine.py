"""Rule-based technology detection over a repository snapshot."""
import logging
from typing import Any, Dict, List, Optional, Sequence

from core.context import RepositorySnapshot
from core.version_utils import clean_version_spec
from models.detection import (
    DetectedTech,
    Evidence,
    FILENAME_SIGNAL,
    MANIFEST_SIGNAL,
    PATTERN_SIGNAL,
)
from models.technology import DetectionRule, TechKind
from rules.rules_loader import load_rules

logger = logging.getLogger(__name__)

# Fixed contribution of each signal type; rule weight is not part of the score
FILENAME_CONFIDENCE = 40
MANIFEST_CONFIDENCE = 50
PATTERN_CONFIDENCE = 30
MAX_CONFIDENCE = 100


class DetectionResult:
    """Confidence-sorted detections for one snapshot plus filtered views.

    Views filter the stored list and keep its relative order, so the first
    framework is always the highest-confidence one.
    """

    def __init__(self, technologies: Sequence[DetectedTech]):
        self.technologies: List[DetectedTech] = list(technologies)

    def __iter__(self):
        return iter(self.technologies)

    def __len__(self) -> int:
        return len(self.technologies)

    def by_kind(self, kind: TechKind) -> List[DetectedTech]:
        return [tech for tech in self.technologies if tech.kind is kind]

    def get_frameworks(self) -> List[DetectedTech]:
        return self.by_kind(TechKind.FRAMEWORK)

    def get_languages(self) -> List[DetectedTech]:
        return self.by_kind(TechKind.LANGUAGE)

    def get_libraries(self) -> List[DetectedTech]:
        return self.by_kind(TechKind.LIBRARY)

    def get_tools(self) -> List[DetectedTech]:
        return self.by_kind(TechKind.TOOL)

    def get_primary_framework(self) -> Optional[DetectedTech]:
        frameworks = self.get_frameworks()
        return frameworks[0] if frameworks else None

    def to_dict(self) -> Dict[str, Any]:
        primary = self.get_primary_framework()
        return {
            "detectedTechnologies": [t.to_dict() for t in self.technologies],
            "primaryFramework": primary.to_dict() if primary else None,
            "languages": [t.to_dict() for t in self.get_languages()],
            "frameworks": [t.to_dict() for t in self.get_frameworks()],
            "libraries": [t.to_dict() for t in self.get_libraries()],
            "tools": [t.to_dict() for t in self.get_tools()],
        }


class DetectionEngine:
    def __init__(self, rules: Optional[Sequence[DetectionRule]] = None):
        """Initialize the engine with a read-only rule catalog.

        Args:
            rules: Detection rules in tie-break order (default: bundled YAML catalog)
        """
        self.rules = tuple(rules if rules is not None else load_rules())
        logger.debug(f"Engine initialized with {len(self.rules)} technology rules")

    def detect_all(self, snapshot: RepositorySnapshot) -> List[DetectedTech]:
        """Evaluate every rule against the snapshot.

        Returns detections sorted by confidence, highest first. Equal
        confidences keep catalog order.
        """
        dependencies = snapshot.merged_dependencies() if snapshot.manifest is not None else None

        detected: List[DetectedTech] = []
        for rule in self.rules:
            tech = self._check_rule(rule, snapshot.file_paths, dependencies)
            if tech:
                detected.append(tech)

        # list.sort is stable, so ties stay in declaration order
        detected.sort(key=lambda t: t.confidence, reverse=True)
        logger.debug(f"Detected {len(detected)} technologies across {len(snapshot.file_paths)} paths")
        return detected

    def analyze(self, snapshot: RepositorySnapshot) -> DetectionResult:
        return DetectionResult(self.detect_all(snapshot))

    def _check_rule(
        self,
        rule: DetectionRule,
        file_paths: Sequence[str],
        dependencies: Optional[Dict[str, Any]],
    ) -> Optional[DetectedTech]:
        evidence: List[Evidence] = []
        confidence = 0
        version = None

        if rule.filename_signals:
            found_files = tuple(
                signal for signal in rule.filename_signals
                if any(signal in path for path in file_paths)
            )
            if found_files:
                confidence += FILENAME_CONFIDENCE
                evidence.append(Evidence(signal=FILENAME_SIGNAL, matches=found_files))

        if rule.manifest_keys and dependencies is not None:
            found_keys = tuple(key for key in rule.manifest_keys if dependencies.get(key))
            if found_keys:
                confidence += MANIFEST_CONFIDENCE
                raw_version = dependencies[found_keys[0]]
                raw_version = raw_version if isinstance(raw_version, str) else None
                evidence.append(Evidence(signal=MANIFEST_SIGNAL, matches=found_keys, version=raw_version))
                version = clean_version_spec(raw_version)

        if rule.path_patterns:
            matching = sum(
                1 for path in file_paths
                if any(pattern.search(path) for pattern in rule.path_patterns)
            )
            if matching:
                confidence += PATTERN_CONFIDENCE
                evidence.append(Evidence(signal=PATTERN_SIGNAL, count=matching))

        if confidence == 0:
            return None

        logger.debug(f"Matched {rule.name} with confidence {confidence} ({len(evidence)} signals)")
        return DetectedTech(
            name=rule.name,
            kind=rule.kind,
            confidence=min(confidence, MAX_CONFIDENCE),
            evidence=tuple(evidence),
            version=version,
            weight=rule.weight,
            icon=rule.icon,
        )
