from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RepositoryInfo:
    """A repository as listed for the authenticated user."""
    id: int
    name: str
    full_name: str
    html_url: str
    default_branch: str
    private: bool = False
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    updated_at: Optional[str] = None

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepositoryInfo":
        return cls(
            id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            html_url=data.get("html_url", ""),
            default_branch=data.get("default_branch") or "main",
            private=bool(data.get("private", False)),
            description=data.get("description"),
            language=data.get("language"),
            stargazers_count=data.get("stargazers_count", 0),
            watchers_count=data.get("watchers_count", 0),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "full_name": self.full_name,
            "description": self.description,
            "html_url": self.html_url,
            "language": self.language,
            "stargazers_count": self.stargazers_count,
            "watchers_count": self.watchers_count,
            "default_branch": self.default_branch,
            "private": self.private,
            "updated_at": self.updated_at,
        }
