"""Answer collection.

Interactive mode is an ordered list of :class:`Question` steps run by a small
interpreter (:func:`run_questions`).  Each step computes its default lazily
from the answers resolved before it, so e.g. the bin name defaults to the
package name the user just typed, not to the original default.

Terminal IO lives behind the :class:`Prompter` protocol; the shipped
:class:`RichPrompter` uses ``rich.prompt`` and tests pass a scripted one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from rich.console import Console
from rich.prompt import Prompt

from .defaults import existing_version
from .models import (
    Answers,
    Defaults,
    GithubAnswer,
    Manifest,
    PackageManager,
    coerce_repository,
    repository_slug,
)

Resolved = dict[str, Any]


@dataclass(frozen=True)
class Question:
    """One step of the interactive flow."""

    name: str
    message: str
    default: Callable[[Resolved], str | None] | None = None
    when: Callable[[Resolved], bool] | None = None
    choices: tuple[str, ...] | None = None


class Prompter(Protocol):
    def ask(self, question: Question, default: str | None) -> str | None:
        """Ask *question* and return the raw reply (empty means default)."""


class RichPrompter:
    """Prompter that reads answers from the terminal with ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console

    def ask(self, question: Question, default: str | None) -> str | None:
        kwargs: dict[str, Any] = {}
        if default is not None:
            kwargs["default"] = default
        if question.choices:
            kwargs["choices"] = list(question.choices)
        return Prompt.ask(question.message, console=self.console, **kwargs)


def run_questions(questions: list[Question], prompter: Prompter) -> Resolved:
    """Resolve *questions* in order and return ``{question.name: value}``.

    Skipped questions (``when`` returned false) are absent from the result.
    A blank reply resolves to the question's default.
    """
    resolved: Resolved = {}
    for question in questions:
        if question.when is not None and not question.when(resolved):
            continue
        default = question.default(resolved) if question.default else None
        reply = prompter.ask(question, default)
        if isinstance(reply, str):
            reply = reply.strip()
        resolved[question.name] = reply if reply else default
    return resolved


def build_questions(
    defaults: Defaults,
    existing: Manifest,
    package_manager: PackageManager,
) -> list[Question]:
    """The fixed question sequence for an interactive run."""
    existing_repository = repository_slug(coerce_repository(existing.get("repository")))
    existing_name = existing.get("name") if isinstance(existing.get("name"), str) else None

    def repo_default(resolved: Resolved) -> str | None:
        source = existing_repository or resolved.get("name") or existing_name
        return source.split("/")[-1] if source else None

    return [
        Question("name", "npm package name", default=lambda _: defaults.name),
        Question(
            "bin",
            "command bin name the CLI will export",
            default=lambda resolved: resolved.get("name") or defaults.name,
        ),
        Question("description", "description", default=lambda _: defaults.description),
        Question("author", "author", default=lambda _: defaults.author or None),
        Question(
            "version",
            "version",
            default=lambda _: defaults.version,
            when=lambda _: existing_version(existing) is None,
        ),
        Question("license", "license", default=lambda _: defaults.license),
        Question(
            "github_user",
            "Who is the GitHub owner of repository (https://github.com/OWNER/repo)",
            default=lambda _: defaults.github_owner,
        ),
        Question(
            "github_repo",
            "What is the GitHub name of repository (https://github.com/owner/REPO)",
            default=repo_default,
        ),
        Question(
            "package_manager",
            "Select a package manager",
            default=lambda _: package_manager.value,
            choices=tuple(pm.value for pm in PackageManager),
        ),
    ]


def answers_from_defaults(defaults: Defaults, package_manager: PackageManager) -> Answers:
    """Answers for a non-interactive run: the defaults, verbatim."""
    return Answers(
        name=defaults.name,
        bin=defaults.bin,
        description=defaults.description,
        author=defaults.author,
        version=defaults.version,
        license=defaults.license,
        files=defaults.files,
        package_manager=package_manager,
    )


def collect_answers(
    defaults: Defaults,
    existing: Manifest,
    prompter: Prompter | None = None,
    interactive: bool = True,
    package_manager: PackageManager = PackageManager.NPM,
) -> Answers:
    """Produce the :class:`Answers` for this run.

    Args:
        defaults: Values from :func:`~clismith.scaffolder.defaults.resolve_defaults`.
        existing: The manifest already on disk (possibly empty).
        prompter: Source of replies in interactive mode; defaults to
            :class:`RichPrompter`.
        interactive: ``False`` applies *defaults* without asking anything.
        package_manager: Forced or detected package manager, used as-is in
            non-interactive mode and as the preselected choice otherwise.
    """
    if not interactive:
        return answers_from_defaults(defaults, package_manager)

    prompter = prompter or RichPrompter()
    resolved = run_questions(build_questions(defaults, existing, package_manager), prompter)

    name = resolved.get("name") or defaults.name
    github = None
    if resolved.get("github_user") and resolved.get("github_repo"):
        github = GithubAnswer(user=resolved["github_user"], repo=resolved["github_repo"])

    return Answers(
        name=name,
        bin=resolved.get("bin") or name,
        description=resolved.get("description"),
        author=resolved.get("author"),
        version=resolved.get("version"),
        license=resolved.get("license"),
        github=github,
        package_manager=PackageManager(resolved.get("package_manager") or package_manager.value),
    )
