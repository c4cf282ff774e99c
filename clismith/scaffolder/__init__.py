"""clismith scaffolder -- answer resolution and manifest synthesis.

Turns the destination path, the user's identity and any ``package.json``
already in the cloned template into the final manifest and ``.gitignore``.

Quick usage::

    from clismith.scaffolder import collect_answers, resolve_defaults, synthesize, normalize

    defaults = resolve_defaults("/work/acme/my-cli", identity, existing)
    answers = collect_answers(defaults, existing, interactive=False)
    plan = synthesize(answers, defaults, existing)
    manifest = normalize(plan.manifest)
"""

from clismith.scaffolder.answers import (
    Question,
    RichPrompter,
    build_questions,
    collect_answers,
    run_questions,
)
from clismith.scaffolder.conventions import dump_manifest, fix_manifest_file, sort_manifest
from clismith.scaffolder.defaults import resolve_defaults
from clismith.scaffolder.ignore import merge_gitignore
from clismith.scaffolder.manifest import ScaffoldPlan, normalize, synthesize
from clismith.scaffolder.models import Answers, Defaults, Identity, PackageManager

__all__ = [
    "Answers",
    "Defaults",
    "Identity",
    "PackageManager",
    "Question",
    "RichPrompter",
    "ScaffoldPlan",
    "build_questions",
    "collect_answers",
    "dump_manifest",
    "fix_manifest_file",
    "merge_gitignore",
    "normalize",
    "resolve_defaults",
    "run_questions",
    "sort_manifest",
    "synthesize",
]
