import os
import re
import logging
import yaml
from typing import List, Optional
from models.technology import DetectionRule, TechKind
from core.errors import RuleCatalogError

logger = logging.getLogger(__name__)

RULES_DIR = os.path.dirname(os.path.abspath(__file__))


def _as_tuple(value) -> tuple:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _compile_patterns(name: str, patterns: tuple) -> tuple:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise RuleCatalogError(f"Invalid pattern {pattern!r} in rule {name!r}: {e}") from e
    return tuple(compiled)


def load_rules(rules_dir: Optional[str] = None) -> List[DetectionRule]:
    """
    Loads technology detection rules from all .yaml files in a directory.

    Files are read in sorted order and rules keep their declaration order,
    which the engine uses to break confidence ties.

    Args:
        rules_dir: Directory containing the YAML catalog (default: this package)

    Returns:
        List of DetectionRule objects

    Raises:
        RuleCatalogError: If a rule has an unknown kind or an invalid pattern
    """
    rules_dir = rules_dir or RULES_DIR
    rules: List[DetectionRule] = []
    for filename in sorted(os.listdir(rules_dir)):
        if not (filename.endswith(".yaml") or filename.endswith(".yml")):
            continue
        filepath = os.path.join(rules_dir, filename)
        with open(filepath, "r", encoding="utf-8") as f:
            rules_data = yaml.safe_load(f)
        if not rules_data:
            continue

        for rule_data in rules_data:
            # Basic validation
            if not isinstance(rule_data, dict) or not all(k in rule_data for k in ["name", "kind"]):
                logger.warning(f"Skipping invalid rule in {filename}: {rule_data}")
                continue

            name = rule_data["name"]
            try:
                kind = TechKind(rule_data["kind"])
            except ValueError as e:
                raise RuleCatalogError(f"Unknown kind {rule_data['kind']!r} in rule {name!r}") from e

            rules.append(
                DetectionRule(
                    name=name,
                    kind=kind,
                    filename_signals=_as_tuple(rule_data.get("files")),
                    manifest_keys=_as_tuple(rule_data.get("manifest_keys")),
                    path_patterns=_compile_patterns(name, _as_tuple(rule_data.get("patterns"))),
                    weight=int(rule_data.get("priority", 0)),
                    icon=rule_data.get("icon"),
                )
            )
        logger.debug(f"Loaded rules from {filename}")
    return rules


# Example usage (for testing)
if __name__ == "__main__":
    loaded_rules = load_rules()
    print(f"Loaded {len(loaded_rules)} technologies.")
    for rule in loaded_rules:
        print(f"  - {rule.name} ({rule.kind.value})")
        print(f"    files={list(rule.filename_signals)} keys={list(rule.manifest_keys)} "
              f"patterns={[p.pattern for p in rule.path_patterns]} priority={rule.weight}")
