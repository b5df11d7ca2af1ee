"""
Utility functions for extracting technology versions from manifest values.
"""
import re
from typing import Optional


# Common version patterns (order matters - most specific first)
VERSION_PATTERNS = [
    # Semantic versioning with pre-release (1.2.3-beta2, 1.2.3-rc.1)
    r'v?(\d+\.\d+\.\d+-[0-9a-z.]+)',
    # Semantic versioning (1.2.3, v1.2.3)
    r'v?(\d+\.\d+\.\d+)',
    # Two-part versions (1.2, 1.2.x)
    r'v?(\d+\.\d+(?:\.x)?)',
    # Single version with suffix (5.x, 8.x)
    r'v?(\d+\.x)',
    # Bare major version (18)
    r'v?(\d+)',
]

# Dependency specs that do not name a concrete release
NON_VERSION_SPEC = re.compile(r'^(?:\*|x|latest|next|canary|beta|alpha)$|^(?:git|github|file|link|workspace|npm|https?)[:+]', re.IGNORECASE)


def extract_version_from_string(text: str, technology: str = None) -> Optional[str]:
    """
    Extract version from a generic string.

    Examples:
        - "React v18.2.0" -> 18.2.0
        - "^14.0.0" -> 14.0.0
        - ">=1.2 <2" -> 1.2

    Args:
        text: The text to search for version
        technology: Optional technology name to look for context

    Returns:
        Extracted version string or None
    """
    if not text:
        return None

    # If technology name is provided, look for it followed by version
    if technology:
        tech_pattern = rf'{re.escape(technology)}\s+v?(\d+(?:\.\d+)*(?:-[a-z0-9.]+)?)'
        match = re.search(tech_pattern, text, re.IGNORECASE)
        if match:
            return match.group(1)

    for pattern in VERSION_PATTERNS:
        match = re.search(pattern, text)
        if match:
            return match.group(1)

    return None


def normalize_version(version: Optional[str]) -> Optional[str]:
    """
    Normalize version string for consistency.

    Examples:
        - "v1.2.3" -> "1.2.3"
        - "1.2.x" -> "1.2"
        - "1.2.3-beta" -> "1.2.3-beta"
    """
    if not version:
        return None

    version = version.strip().lstrip('v')
    version = re.sub(r'\.x$', '', version)

    return version if version else None


def clean_version_spec(spec) -> Optional[str]:
    """
    Turn an npm-style dependency spec into its first concrete version.

    Examples:
        - "^18.2.0" -> "18.2.0"
        - "~1.2" -> "1.2"
        - ">=1.0.0 <2.0.0" -> "1.0.0"
        - "latest", "*", "git+https://..." -> None

    Args:
        spec: The raw value from a dependencies section

    Returns:
        Normalized version string or None
    """
    if not isinstance(spec, str):
        return None
    spec = spec.strip()
    if not spec or NON_VERSION_SPEC.search(spec):
        return None
    # Drop leading range operators
    spec = re.sub(r'^[\^~=<>\s]+', '', spec)
    return normalize_version(extract_version_from_string(spec))
