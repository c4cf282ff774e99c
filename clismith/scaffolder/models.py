"""Data models shared by the scaffolding pipeline.

``Defaults`` and ``Answers`` are Pydantic models; the manifest itself stays a
plain ``dict`` because a pre-existing ``package.json`` may carry any keys and
they must round-trip untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

Manifest = dict[str, Any]

BIN_ENTRY_POINT = "./bin/run"
DEFAULT_FILES = ["/lib"]
DEFAULT_NODE_ENGINE = ">=8.0.0"
DEFAULT_VERSION = "0.0.0"
DEFAULT_LICENSE = "MIT"


class PackageManager(str, Enum):
    """Package manager used to install the generated project's dependencies."""

    NPM = "npm"
    YARN = "yarn"

    @property
    def lockfile(self) -> str:
        """Lockfile this package manager writes."""
        return "/yarn.lock" if self is PackageManager.YARN else "/package-lock.json"

    @property
    def other(self) -> "PackageManager":
        return PackageManager.NPM if self is PackageManager.YARN else PackageManager.YARN


class RepositoryObject(BaseModel):
    """Structured ``repository`` field, e.g. ``{"type": "git", "url": "..."}``."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    url: str | None = None


RepositoryRef = Union[str, RepositoryObject]


def repository_slug(ref: RepositoryRef | None) -> str | None:
    """Collapse a repository reference to the single string form.

    A plain string is returned as-is.  For a structured reference the
    ``url`` field wins whenever it is set.
    """
    if ref is None:
        return None
    if isinstance(ref, RepositoryObject):
        return ref.url or None
    return ref or None


def coerce_repository(value: Any) -> RepositoryRef | None:
    """Turn a raw ``repository`` value from disk into a :data:`RepositoryRef`."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        url = value.get("url")
        return RepositoryObject(
            **{k: v for k, v in value.items() if k not in ("type", "url")},
            type=value.get("type") if isinstance(value.get("type"), str) else None,
            url=url if isinstance(url, str) else None,
        )
    return None


class Identity(BaseModel):
    """The user's identity as discovered from git and GitHub."""

    name: str = Field(default="", description="Full name from `git config user.name`")
    email: str | None = Field(default=None)
    handle: str | None = Field(default=None, description="GitHub username")


class Defaults(BaseModel):
    """Fallback values computed once per run. Never mutated."""

    model_config = ConfigDict(frozen=True)

    name: str
    bin: str
    version: str = DEFAULT_VERSION
    license: str = DEFAULT_LICENSE
    author: str | None = None
    description: str | None = None
    repository: RepositoryRef | None = None
    github_owner: str | None = Field(
        default=None, description="Owner segment of the slug computed from the destination"
    )
    files: list[str] | None = None
    engines: dict[str, Any] = Field(default_factory=lambda: {"node": DEFAULT_NODE_ENGINE})


class GithubAnswer(BaseModel):
    """Owner/name pair of the GitHub repository."""

    user: str
    repo: str


class Answers(BaseModel):
    """Resolved answer for every manifest-relevant question."""

    name: str
    bin: str
    description: str | None = None
    author: str | None = None
    version: str | None = None
    license: str | None = None
    files: list[str] | None = None
    github: GithubAnswer | None = None
    package_manager: PackageManager = PackageManager.NPM
    ci: dict[str, bool] = Field(default_factory=dict)
