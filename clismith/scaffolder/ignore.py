"""``.gitignore`` merging."""

from __future__ import annotations

from .models import PackageManager

BASELINE_RULES: tuple[str, ...] = (
    "*-debug.log",
    "*-error.log",
    "node_modules",
    "/tmp",
    "/dist",
    "/lib",
)


def lockfile_rule(package_manager: PackageManager) -> str:
    """The lockfile the *other* package manager would write, which we ignore."""
    return package_manager.other.lockfile


def merge_gitignore(package_manager: PackageManager, existing: str | None = None) -> str:
    """Merge the baseline rules, one lockfile rule and *existing* content.

    The result is deduplicated, sorted and newline-terminated, and merging
    it again yields the same text.  A lockfile rule for the selected package
    manager's own lockfile is dropped from *existing*, so exactly one
    lockfile rule is ever present.
    """
    rules = set(BASELINE_RULES)
    rules.add(lockfile_rule(package_manager))
    if existing:
        own_lockfile = package_manager.lockfile
        rules.update(line for line in existing.splitlines() if line != own_lockfile)
    return "\n".join(sorted(rule for rule in rules if rule)) + "\n"
