"""Thin async wrapper over the GitHub REST endpoints the analyser needs."""
import base64
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from core.errors import GitHubAPIError, UnauthorizedError
from fetch.http_client import fetch_url
from models.repository import RepositoryInfo

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


class GitHubClient:
    def __init__(self, token: str, api_url: str = DEFAULT_API_URL):
        """
        Args:
            token: Bearer token from the user's session
            api_url: Base URL of the GitHub API
        """
        if not token:
            raise UnauthorizedError()
        self.token = token
        self.api_url = api_url.rstrip("/")

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": GITHUB_ACCEPT,
        }

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.api_url}{path}"
        response = await fetch_url(url, headers=self.headers, params=params)
        if response.status_code < 200 or response.status_code >= 300:
            logger.debug(f"GitHub API {response.status_code} for {url}")
            raise GitHubAPIError(url, response.status_code)
        return response.json()

    async def fetch_tree(self, owner: str, repo: str, branch: str) -> List[str]:
        """
        Fetch the recursive file listing of a branch.

        Returns:
            Paths of all blobs (files) in the tree, in API order
        """
        path = f"/repos/{quote(owner)}/{quote(repo)}/git/trees/{quote(branch, safe='')}"
        tree = await self._get_json(path, params={"recursive": "1"})
        if tree.get("truncated"):
            logger.warning(f"Tree for {owner}/{repo}@{branch} was truncated by GitHub")
        return [item["path"] for item in tree.get("tree", []) if item.get("type") == "blob"]

    async def fetch_file(self, owner: str, repo: str, path: str, ref: str) -> str:
        """
        Fetch a file through the contents API and decode it as UTF-8.
        """
        api_path = f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path)}"
        data = await self._get_json(api_path, params={"ref": ref})
        return base64.b64decode(data.get("content", "")).decode("utf-8")

    async def list_repositories(self, per_page: int = 100, sort: str = "updated") -> List[RepositoryInfo]:
        """List repositories of the authenticated user."""
        data = await self._get_json("/user/repos", params={"per_page": str(per_page), "sort": sort})
        repos = [RepositoryInfo.from_api(item) for item in data]
        logger.info(f"Fetched {len(repos)} repositories")
        return repos


def filter_repositories(repos: Iterable[RepositoryInfo], query: str) -> List[RepositoryInfo]:
    """Case-insensitive search on repository name or description."""
    query = (query or "").lower()
    return [
        repo for repo in repos
        if query in repo.name.lower() or query in (repo.description or "").lower()
    ]
