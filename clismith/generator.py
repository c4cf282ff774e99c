"""clismith run orchestrator.

Drives one scaffolding run end to end:

1. Clone the template into the destination and drop its git history.
2. Discover the user's identity and read any ``package.json`` in the clone.
3. Resolve defaults, collect answers, synthesize and normalise the manifest.
4. Write ``package.json`` and ``.gitignore``.
5. Install dependencies, then generate the README.

Usage::

    python -m clismith.generator my-cli
    python -m clismith.generator my-cli --defaults --yarn
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from clismith import __version__
from clismith.config import Config
from clismith.errors import ScaffoldError
from clismith.identity import discover_identity
from clismith.installer import generate_readme, install_dependencies
from clismith.scaffolder.answers import Prompter, collect_answers
from clismith.scaffolder.conventions import dump_manifest, fix_manifest_file
from clismith.scaffolder.defaults import resolve_defaults
from clismith.scaffolder.ignore import merge_gitignore
from clismith.scaffolder.manifest import ScaffoldPlan, normalize, synthesize
from clismith.scaffolder.models import Manifest, PackageManager
from clismith.template import clone_template, detect_yarn
from clismith.utils import (
    load_json_object,
    print_banner,
    print_debug,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    read_text_if_exists,
    write_text,
)


class CliGenerator:
    """Creates a new CLI project from the template.

    Attributes:
        config: Settings for this run.
        prompter: Source of interactive replies; ``None`` uses the terminal.
    """

    def __init__(self, config: Config, prompter: Prompter | None = None) -> None:
        self.config = config
        self.prompter = prompter

    async def run(self) -> Manifest:
        """Execute the whole run and return the manifest that was written."""
        config = self.config
        destination = config.destination

        print_banner("Time to build an oclif CLI!", __version__)

        await clone_template(config.template_repo, destination, timeout=config.clone_timeout)

        identity = await discover_identity(config.github_api_url)
        print_debug(f"identity: {identity.model_dump()}", config.debug)

        existing = load_json_object(config.manifest_path)
        defaults = resolve_defaults(destination, identity, existing)

        # Prompting blocks on the terminal.
        answers = await asyncio.to_thread(
            collect_answers,
            defaults,
            existing,
            self.prompter,
            not config.defaults,
            config.detected_package_manager,
        )
        print_debug(f"answers: {answers.model_dump()}", config.debug)

        plan = synthesize(answers, defaults, existing)
        manifest = self.write_manifest(plan)
        self.write_gitignore(plan.package_manager)

        await install_dependencies(
            destination,
            plan.package_manager,
            dependencies=[],
            dev_dependencies=self.dev_dependencies(),
            mutex=config.yarn_mutex,
            timeout=config.install_timeout,
        )
        await generate_readme(destination, config.readme_bin)

        print_summary_table(
            {
                "name": manifest["name"],
                "bin": next(iter(manifest["bin"])),
                "repository": plan.repository,
                "package manager": plan.package_manager.value,
            },
            title="Project",
        )
        print_success(f"Created {manifest['name']} in {destination}")
        return manifest

    # -- Writing ------------------------------------------------------------

    def write_manifest(self, plan: ScaffoldPlan) -> Manifest:
        """Normalise the synthesized manifest and write ``package.json``."""
        manifest = normalize(plan.manifest, self.config.manifest_path, fixer=self._fix_manifest)
        write_text(self.config.manifest_path, dump_manifest(manifest))
        return manifest

    def write_gitignore(self, package_manager: PackageManager) -> Path:
        """Merge and write ``.gitignore``."""
        existing = read_text_if_exists(self.config.gitignore_path)
        return write_text(self.config.gitignore_path, merge_gitignore(package_manager, existing))

    def dev_dependencies(self) -> list[str]:
        return ["rimraf"] if self.config.is_windows else []

    def _fix_manifest(self, path: Path) -> None:
        missing = fix_manifest_file(path)
        if missing:
            print_warning(f"{path} is missing {', '.join(missing)}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``clismith`` / ``python -m clismith.generator``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="clismith",
        description="Generate a new oclif CLI project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  clismith my-cli\n"
            "  clismith my-cli --defaults --yarn\n"
        ),
    )
    parser.add_argument("name", help="Directory to create the project in")
    parser.add_argument(
        "--defaults",
        action="store_true",
        help="Use defaults for every question instead of prompting",
    )
    manager = parser.add_mutually_exclusive_group()
    manager.add_argument(
        "--yarn",
        dest="package_manager",
        action="store_const",
        const=PackageManager.YARN,
        help="Install with yarn",
    )
    manager.add_argument(
        "--npm",
        dest="package_manager",
        action="store_const",
        const=PackageManager.NPM,
        help="Install with npm",
    )
    parser.add_argument("--template", default=None, help="Template repository to clone")
    parser.add_argument("--output", "-o", default=None, help="Parent directory (default: .)")
    parser.add_argument("--debug", action="store_true", default=None, help="Print diagnostics")

    args = parser.parse_args(argv)

    has_yarn = False
    if args.package_manager is None:
        has_yarn = asyncio.run(detect_yarn())

    config = Config.from_env(
        args.name,
        defaults=args.defaults,
        package_manager=args.package_manager,
        has_yarn=has_yarn,
        template_repo=args.template,
        output_dir=Path(args.output) if args.output else None,
        debug=args.debug,
    )

    try:
        asyncio.run(CliGenerator(config).run())
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
