"""Shared pytest fixtures for the clismith test suite.

Provides reusable fixtures for:
- Destination directories laid out as ``<owner>/<project>``
- Identities with and without a GitHub handle
- Pre-existing ``package.json`` content from a cloned template
- A scripted prompter standing in for the terminal
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from clismith.scaffolder.answers import Question
from clismith.scaffolder.models import Identity


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Prompter that replays canned replies and records what it was asked.

    *replies* maps a question name to the reply; unlisted questions get an
    empty reply, i.e. the user presses enter and accepts the default.
    """

    def __init__(self, replies: dict[str, str] | None = None) -> None:
        self.replies = replies or {}
        self.asked: list[tuple[str, str | None]] = []

    def ask(self, question: Question, default: str | None) -> str | None:
        self.asked.append((question.name, default))
        return self.replies.get(question.name, "")

    @property
    def asked_names(self) -> list[str]:
        return [name for name, _ in self.asked]

    def default_for(self, name: str) -> str | None:
        return dict(self.asked)[name]


@pytest.fixture
def prompter() -> ScriptedPrompter:
    """A prompter that accepts every default."""
    return ScriptedPrompter()


@pytest.fixture
def make_prompter():
    """Factory for a :class:`ScriptedPrompter` with canned replies."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Paths & identities
# ---------------------------------------------------------------------------


@pytest.fixture
def widgets_dir(tmp_path: Path) -> Path:
    """``<tmp>/octocat-org/widgets``, created on disk."""
    destination = tmp_path / "octocat-org" / "widgets"
    destination.mkdir(parents=True)
    return destination


@pytest.fixture
def octocat() -> Identity:
    return Identity(name="Mona Lisa", email="mona@example.com", handle="octocat")


@pytest.fixture
def anonymous() -> Identity:
    """Identity with a git name but no GitHub handle."""
    return Identity(name="Mona Lisa", email=None, handle=None)


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------


@pytest.fixture
def template_manifest() -> dict[str, Any]:
    """A ``package.json`` as shipped by the hello-world template."""
    return {
        "name": "hello-world",
        "description": "oclif example Hello World CLI",
        "version": "0.0.0",
        "author": "Jeff Dickey @jdxcode",
        "bin": {"hello-world": "./bin/run"},
        "bugs": "https://github.com/oclif/hello-world/issues",
        "dependencies": {"@oclif/core": "^1", "@oclif/plugin-help": "^5"},
        "devDependencies": {"oclif": "^3", "@types/node": "^16"},
        "engines": {"node": ">=12.0.0"},
        "files": ["/bin", "/lib", "/bin", "/npm-shrinkwrap.json"],
        "homepage": "https://github.com/oclif/hello-world",
        "license": "MIT",
        "oclif": {
            "bin": "hello-world",
            "plugins": ["@oclif/plugin-plugins", "@oclif/plugin-help"],
        },
        "repository": "oclif/hello-world",
        "scripts": {"test": "mocha", "build": "tsc -b"},
    }


@pytest.fixture
def write_manifest():
    """Factory writing a ``package.json`` into a directory."""

    def _write(directory: Path, manifest: dict[str, Any]) -> Path:
        path = directory / "package.json"
        path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Subprocess helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_process():
    """Factory for a fake ``asyncio.subprocess.Process``."""

    def _make(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
        proc = MagicMock()
        proc.returncode = returncode
        proc.communicate = AsyncMock(return_value=(stdout, stderr))
        proc.wait = AsyncMock(return_value=returncode)
        proc.kill = MagicMock()
        return proc

    return _make
