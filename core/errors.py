"""Error taxonomy for the repository analysis layer.

The detection engine itself never raises; these exceptions describe failures
around it (credentials, request validation, upstream fetches, catalog loading).
"""
from typing import Optional


class AnalysisError(Exception):
    """Base class for failures reported to the caller of an analysis."""
    status = 500

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class UnauthorizedError(AnalysisError):
    status = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class BadRequestError(AnalysisError):
    status = 400


class UpstreamFetchError(AnalysisError):
    """Raised when the repository tree could not be fetched on any branch."""
    status = 502


class GitHubAPIError(Exception):
    """Non-success response from the GitHub API."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"GitHub API returned {status_code} for {url}")
        self.url = url
        self.status_code = status_code


class RuleCatalogError(Exception):
    """Raised when the technology catalog cannot be built."""
