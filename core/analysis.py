"""Repository analysis: fetch the tree and manifests, run the engine, build the report."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from core.context import RepositorySnapshot
from core.engine import DetectionEngine, DetectionResult
from core.errors import AnalysisError, BadRequestError, GitHubAPIError, UnauthorizedError, UpstreamFetchError
from core.manifest import PACKAGE_JSON, REQUIREMENTS_TXT, parse_package_json, split_requirements, summarize_package_json
from core.structure import StructureSummary, analyze_structure
from fetch.github_client import GitHubClient

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
FALLBACK_BRANCH = "master"


@dataclass(frozen=True)
class AnalysisReport:
    owner: str
    repo: str
    branch: str
    files: Tuple[str, ...]
    result: DetectionResult
    structure: StructureSummary
    package_json: Optional[Dict[str, Any]] = None
    requirements: Optional[List[str]] = None

    @property
    def total_files(self) -> int:
        return len(self.files)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "repository": {
                "owner": self.owner,
                "repo": self.repo,
                "branch": self.branch,
                "totalFiles": self.total_files,
            },
        }
        data.update(self.result.to_dict())
        data["structure"] = self.structure.to_dict()
        data["packageJson"] = summarize_package_json(self.package_json) if self.package_json else None
        data["requirementsTxt"] = self.requirements
        return data


class RepositoryAnalyzer:
    def __init__(
        self,
        client_factory: Callable[[str], GitHubClient] = GitHubClient,
        engine: Optional[DetectionEngine] = None,
    ):
        """
        Args:
            client_factory: Builds an API client from a bearer token
            engine: Detection engine to share across analyses (default: bundled catalog)
        """
        self.client_factory = client_factory
        self.engine = engine or DetectionEngine()

    async def analyze(self, token: Optional[str], owner: str, repo: str, branch: Optional[str] = None) -> AnalysisReport:
        """
        Analyze one repository.

        Raises:
            UnauthorizedError: No token was supplied
            BadRequestError: Owner or repository name is missing
            UpstreamFetchError: The tree could not be fetched on either branch
        """
        if not token:
            raise UnauthorizedError()
        if not owner or not repo:
            raise BadRequestError("Owner and repo are required")

        client = self.client_factory(token)
        files, branch_used = await self._fetch_tree_with_fallback(client, owner, repo, branch or DEFAULT_BRANCH)
        logger.info(f"Fetched {len(files)} files from {owner}/{repo}@{branch_used}")

        package_json = None
        if PACKAGE_JSON in files:
            text = await self._fetch_optional(client, owner, repo, PACKAGE_JSON, branch_used)
            if text is not None:
                package_json = parse_package_json(text)

        requirements = None
        if REQUIREMENTS_TXT in files:
            text = await self._fetch_optional(client, owner, repo, REQUIREMENTS_TXT, branch_used)
            if text is not None:
                requirements = split_requirements(text)

        snapshot = RepositorySnapshot(file_paths=files, manifest=package_json)
        result = self.engine.analyze(snapshot)
        logger.info(f"Detected {len(result)} technologies in {owner}/{repo}")

        return AnalysisReport(
            owner=owner,
            repo=repo,
            branch=branch_used,
            files=snapshot.file_paths,
            result=result,
            structure=analyze_structure(list(snapshot.file_paths)),
            package_json=package_json,
            requirements=requirements,
        )

    async def _fetch_tree_with_fallback(
        self, client: GitHubClient, owner: str, repo: str, branch: str
    ) -> Tuple[List[str], str]:
        try:
            return await client.fetch_tree(owner, repo, branch), branch
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Tree fetch failed for {owner}/{repo}@{branch}: {e}")

        try:
            return await client.fetch_tree(owner, repo, FALLBACK_BRANCH), FALLBACK_BRANCH
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Tree fetch failed for {owner}/{repo}@{FALLBACK_BRANCH}: {e}")
            raise UpstreamFetchError("Failed to fetch repository tree") from e

    async def _fetch_optional(self, client: GitHubClient, owner: str, repo: str, path: str, ref: str) -> Optional[str]:
        """Fetch a file whose absence must not abort the analysis."""
        try:
            return await client.fetch_file(owner, repo, path, ref)
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching {path} for {owner}/{repo}: {e}")
            return None


def analysis_response(outcome) -> Dict[str, Any]:
    """Translate a report or a raised exception into the response envelope."""
    if isinstance(outcome, AnalysisReport):
        return {"success": True, "data": outcome.to_dict()}
    if isinstance(outcome, AnalysisError):
        return {"success": False, "error": outcome.message, "status": outcome.status}
    logger.error(f"Error analyzing repository: {outcome}")
    return {"success": False, "error": "Failed to analyze repository", "status": 500}


async def analyze_repository(
    token: Optional[str],
    owner: str,
    repo: str,
    branch: Optional[str] = None,
    analyzer: Optional[RepositoryAnalyzer] = None,
) -> Dict[str, Any]:
    """Run an analysis and always return the uniform response envelope."""
    analyzer = analyzer or RepositoryAnalyzer()
    try:
        report = await analyzer.analyze(token, owner, repo, branch)
    except Exception as e:
        return analysis_response(e)
    return analysis_response(report)
