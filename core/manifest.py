"""Helpers for dependency manifests fetched alongside the file tree."""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
REQUIREMENTS_TXT = "requirements.txt"


def parse_package_json(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse package.json content.

    Args:
        text: Raw file content

    Returns:
        The decoded object, or None if the content is not a JSON object
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid JSON in {PACKAGE_JSON}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"{PACKAGE_JSON} is not a JSON object, ignoring")
        return None
    return data


def _dependency_names(section: Any) -> List[str]:
    return list(section.keys()) if isinstance(section, Mapping) else []


def summarize_package_json(manifest: Mapping[str, Any]) -> Dict[str, Any]:
    """Name, version, scripts and dependency names (versions dropped)."""
    return {
        "name": manifest.get("name"),
        "version": manifest.get("version"),
        "scripts": manifest.get("scripts"),
        "dependencies": _dependency_names(manifest.get("dependencies")),
        "devDependencies": _dependency_names(manifest.get("devDependencies")),
    }


def split_requirements(text: str) -> List[str]:
    """Non-blank lines of a requirements file."""
    return [line for line in text.split("\n") if line.strip()]
