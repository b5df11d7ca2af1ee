"""Build a snapshot from a checked-out repository on disk."""
import logging
import os
from typing import List

from core.context import RepositorySnapshot
from core.manifest import PACKAGE_JSON, parse_package_json

logger = logging.getLogger(__name__)

# Directories that never appear in a hosted tree listing
SKIP_DIRS = {".git", "node_modules", "__pycache__", ".venv", "venv"}


def list_files(root: str) -> List[str]:
    """Repository-relative file paths with '/' separators, sorted."""
    paths: List[str] = []
    for current, dirs, files in os.walk(root):
        dirs[:] = [d for d in dirs if d not in SKIP_DIRS]
        rel_dir = os.path.relpath(current, root)
        for name in files:
            rel = name if rel_dir == os.curdir else os.path.join(rel_dir, name)
            paths.append(rel.replace(os.sep, "/"))
    return sorted(paths)


def snapshot_from_directory(root: str) -> RepositorySnapshot:
    files = list_files(root)
    manifest = None
    if PACKAGE_JSON in files:
        try:
            with open(os.path.join(root, PACKAGE_JSON), "r", encoding="utf-8") as f:
                manifest = parse_package_json(f.read())
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {PACKAGE_JSON} in {root}: {e}")
    logger.debug(f"Collected {len(files)} files from {root}")
    return RepositorySnapshot(file_paths=files, manifest=manifest)
