"""
Utility functions to validate the technology catalog for duplications and overlaps.
"""

from collections import defaultdict
from typing import Dict, List, Optional

from models.technology import DetectionRule
from rules.rules_loader import load_rules


def find_duplicate_names(rules: List[DetectionRule]) -> Dict[str, int]:
    """
    Detect technology names declared more than once.

    Args:
        rules: Loaded detection rules

    Returns:
        Dictionary mapping duplicated names to their number of declarations
    """
    counts: Dict[str, int] = defaultdict(int)
    for rule in rules:
        counts[rule.name] += 1
    return {name: count for name, count in counts.items() if count > 1}


def find_filename_overlaps(rules: List[DetectionRule]) -> Dict[str, List[str]]:
    """
    Detect filename signals used by multiple technologies.

    Also reports signals that are substrings of another technology's signal,
    since filename matching is substring containment.

    Returns:
        Dictionary with filename signals as keys and list of technologies as values
    """
    signals_map = defaultdict(list)
    for rule in rules:
        for signal in rule.filename_signals:
            signals_map[signal].append(rule.name)

    overlaps: Dict[str, List[str]] = {}
    for signal, names in signals_map.items():
        owners = list(names)
        for other, other_names in signals_map.items():
            if other != signal and signal in other:
                owners.extend(n for n in other_names if n not in owners)
        if len(set(owners)) > 1:
            overlaps[signal] = owners
    return overlaps


def find_manifest_key_overlaps(rules: List[DetectionRule]) -> Dict[str, List[str]]:
    """
    Detect manifest keys claimed by multiple technologies.

    Returns:
        Dictionary with dependency names as keys and list of technologies as values
    """
    keys_map = defaultdict(list)
    for rule in rules:
        for key in rule.manifest_keys:
            keys_map[key].append(rule.name)
    return {key: names for key, names in keys_map.items() if len(names) > 1}


def find_signalless_rules(rules: List[DetectionRule]) -> List[str]:
    """Names of rules that declare no signal and can never be detected."""
    return [rule.name for rule in rules if not rule.has_signals()]


def print_validation_report(rules: List[DetectionRule], verbose: bool = True) -> None:
    """
    Print a validation report of the catalog.

    Args:
        rules: Loaded detection rules
        verbose: Whether to print each overlap
    """
    print("\n" + "="*70)
    print("CATALOG VALIDATION REPORT")
    print("="*70)
    print(f"\nTotal Rules: {len(rules)}")

    duplicates = find_duplicate_names(rules)
    if duplicates:
        print(f"\nDUPLICATE NAMES: {len(duplicates)}")
        for name, count in sorted(duplicates.items()):
            print(f"  '{name}' declared {count} times")
    else:
        print("\n✓ No duplicate names")

    filename_overlaps = find_filename_overlaps(rules)
    if filename_overlaps:
        print(f"\n⚠ FILENAME OVERLAPS: {len(filename_overlaps)}")
        if verbose:
            for signal, names in sorted(filename_overlaps.items()):
                print(f"  '{signal}' -> {', '.join(names)}")
    else:
        print("\n✓ No filename overlaps")

    key_overlaps = find_manifest_key_overlaps(rules)
    if key_overlaps:
        print(f"\n⚠ MANIFEST KEY OVERLAPS: {len(key_overlaps)}")
        if verbose:
            for key, names in sorted(key_overlaps.items()):
                print(f"  '{key}' -> {', '.join(names)}")
    else:
        print("\n✓ No manifest key overlaps")

    signalless = find_signalless_rules(rules)
    if signalless:
        print(f"\n⚠ RULES WITHOUT SIGNALS: {', '.join(signalless)}")

    by_kind: Dict[str, int] = defaultdict(int)
    for rule in rules:
        by_kind[rule.kind.value] += 1

    print("\nStatistics:")
    for kind, count in sorted(by_kind.items()):
        print(f"  - {kind}: {count}")
    print(f"  - Filename signals: {sum(len(r.filename_signals) for r in rules)}")
    print(f"  - Manifest keys: {sum(len(r.manifest_keys) for r in rules)}")
    print(f"  - Path patterns: {sum(len(r.path_patterns) for r in rules)}")

    print("\n" + "="*70)


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        description="Validate the technology catalog for duplications and overlaps",
    )
    parser.add_argument('--rules-dir', default=None, help='Directory containing the YAML catalog')
    parser.add_argument(
        '--no-verbose',
        action='store_false',
        dest='verbose',
        default=True,
        help='Do not list individual overlaps'
    )
    args = parser.parse_args(argv)

    rules = load_rules(args.rules_dir)
    print_validation_report(rules, verbose=args.verbose)
    return 1 if find_duplicate_names(rules) or find_signalless_rules(rules) else 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
