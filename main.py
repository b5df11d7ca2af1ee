import asyncio
import argparse
import json
import logging
import os
import sys
from core.analysis import RepositoryAnalyzer, analyze_repository
from core.engine import DetectionEngine
from core.errors import AnalysisError
from core.local_snapshot import snapshot_from_directory
from fetch.github_client import GitHubClient, filter_repositories

TOKEN_ENV = "GITHUB_TOKEN"


def _filter_by_confidence(items, threshold: int):
    return [t for t in items if t["confidence"] >= threshold]


def _apply_threshold(data: dict, threshold: int) -> dict:
    """Drop detections below threshold from every technology list."""
    if threshold <= 0:
        return data
    for key in ("detectedTechnologies", "languages", "frameworks", "libraries", "tools"):
        if key in data:
            data[key] = _filter_by_confidence(data[key], threshold)
    primary = data.get("primaryFramework")
    if primary and primary["confidence"] < threshold:
        data["primaryFramework"] = data["frameworks"][0] if data.get("frameworks") else None
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Repository technology stack analyser")
    parser.add_argument("--token", type=str, default=os.environ.get(TOKEN_ENV), help=f"GitHub bearer token (default: ${TOKEN_ENV})")
    parser.add_argument("--confidence-threshold", type=int, default=0, help="Minimum confidence (0-100) to include")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity level (default: INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a GitHub repository")
    analyze.add_argument("owner", help="Repository owner")
    analyze.add_argument("repo", help="Repository name")
    analyze.add_argument("--branch", type=str, default=None, help="Branch to analyze (default: main, falling back to master)")

    repos = subparsers.add_parser("repos", help="List repositories of the authenticated user")
    repos.add_argument("--search", type=str, default="", help="Filter by name or description")

    scan = subparsers.add_parser("scan", help="Analyze a local checkout without network access")
    scan.add_argument("path", help="Path to the repository root")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, args.log_level),
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    if args.command == "scan":
        if not os.path.isdir(args.path):
            logger.error(f"Not a directory: {args.path}")
            return 2
        engine = DetectionEngine()
        snapshot = snapshot_from_directory(args.path)
        logger.info(f"Scanning {len(snapshot.file_paths)} files in {args.path}")
        data = engine.analyze(snapshot).to_dict()
        print(json.dumps(_apply_threshold(data, args.confidence_threshold), indent=2, ensure_ascii=False))
        return 0

    if args.command == "repos":
        async def run_repos():
            client = GitHubClient(args.token)
            return await client.list_repositories()

        try:
            repos = asyncio.run(run_repos())
        except AnalysisError as e:
            logger.error(e.message)
            return 1
        except Exception as e:
            logger.error(f"Failed to fetch repositories: {e}")
            return 1
        if args.search:
            repos = filter_repositories(repos, args.search)
        print(json.dumps([r.to_dict() for r in repos], indent=2, ensure_ascii=False))
        return 0

    logger.info(f"Analyzing {args.owner}/{args.repo}")
    response = asyncio.run(
        analyze_repository(args.token, args.owner, args.repo, args.branch, analyzer=RepositoryAnalyzer())
    )
    if response["success"]:
        _apply_threshold(response["data"], args.confidence_threshold)
    else:
        logger.error(f"Analysis failed ({response['status']}): {response['error']}")
    print(json.dumps(response, indent=2, ensure_ascii=False))
    return 0 if response["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
