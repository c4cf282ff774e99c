"""clismith configuration.

Typed configuration for a single scaffolding run. Settings use Pydantic v2
models so they are validated at construction time and can be built from
command-line flags or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field

from clismith.scaffolder.models import PackageManager

DEFAULT_TEMPLATE_REPO = "https://github.com/oclif/hello-world.git"
DEFAULT_GITHUB_API = "https://api.github.com"


class Config(BaseModel):
    """Configuration for one ``clismith`` invocation.

    Instances are created once by :func:`clismith.generator.main` (or by
    tests) and passed to :class:`clismith.generator.CliGenerator`.  The yarn
    presence probe is recorded here as ``has_yarn`` rather than computed
    behind the pipeline's back.
    """

    name: str = Field(..., min_length=1, description="Target directory name or path")
    output_dir: Path = Field(default=Path("."))
    template_repo: str = Field(default=DEFAULT_TEMPLATE_REPO)
    defaults: bool = Field(default=False, description="Apply defaults without prompting")
    package_manager: PackageManager | None = Field(
        default=None, description="Forced package manager, overrides detection"
    )
    has_yarn: bool = Field(default=False, description="Whether `yarn` was found on PATH")
    yarn_mutex: str | None = Field(default=None)
    github_api_url: str = Field(default=DEFAULT_GITHUB_API)
    clone_timeout: int = Field(default=300, ge=10, description="git clone timeout in seconds")
    install_timeout: int = Field(default=900, ge=30, description="Installer timeout in seconds")
    is_windows: bool = Field(default_factory=lambda: sys.platform == "win32")
    debug: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def destination(self) -> Path:
        """Absolute path of the project being created."""
        return (self.output_dir / self.name).resolve()

    @property
    def manifest_path(self) -> Path:
        """Path to the project's ``package.json``."""
        return self.destination / "package.json"

    @property
    def gitignore_path(self) -> Path:
        """Path to the project's ``.gitignore``."""
        return self.destination / ".gitignore"

    @property
    def readme_bin(self) -> Path:
        """Locally installed oclif binary used to generate the README."""
        return self.destination / "node_modules" / ".bin" / "oclif"

    # ------------------------------------------------------------------
    # Package manager resolution
    # ------------------------------------------------------------------

    @property
    def detected_package_manager(self) -> PackageManager:
        """Forced package manager if any, else yarn when it was detected."""
        if self.package_manager is not None:
            return self.package_manager
        return PackageManager.YARN if self.has_yarn else PackageManager.NPM

    @classmethod
    def from_env(cls, name: str, **overrides: object) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CLISMITH_TEMPLATE_REPO, CLISMITH_GITHUB_API, CLISMITH_DEBUG,
            YARN_MUTEX.

        Keyword *overrides* (typically parsed CLI flags) take precedence over
        the environment.
        """
        kwargs: dict[str, object] = {"name": name}
        if os.environ.get("CLISMITH_TEMPLATE_REPO"):
            kwargs["template_repo"] = os.environ["CLISMITH_TEMPLATE_REPO"]
        if os.environ.get("CLISMITH_GITHUB_API"):
            kwargs["github_api_url"] = os.environ["CLISMITH_GITHUB_API"]
        if os.environ.get("YARN_MUTEX"):
            kwargs["yarn_mutex"] = os.environ["YARN_MUTEX"]
        if os.environ.get("CLISMITH_DEBUG", "").lower() in ("1", "true", "yes"):
            kwargs["debug"] = True

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
