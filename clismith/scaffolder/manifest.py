"""Manifest synthesis and normalisation.

:func:`synthesize` merges :class:`Answers` over :class:`Defaults` over the
manifest already on disk; :func:`normalize` produces the exact form that is
written back.  Both are pure apart from the optional convention fixer that
:func:`normalize` runs against the file on disk.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from .conventions import fix_manifest_file, sort_manifest
from .models import (
    BIN_ENTRY_POINT,
    DEFAULT_FILES,
    DEFAULT_LICENSE,
    DEFAULT_NODE_ENGINE,
    DEFAULT_VERSION,
    Answers,
    Defaults,
    Manifest,
    PackageManager,
    repository_slug,
)

GITHUB_URL = "https://github.com"

ManifestFixer = Callable[[Path], Any]


@dataclass
class ScaffoldPlan:
    """Result of :func:`synthesize`.

    ``package_manager`` drives install orchestration and the ignore file; it
    is never written into the manifest.
    """

    manifest: Manifest
    repository: str
    package_manager: PackageManager

    @property
    def yarn(self) -> bool:
        return self.package_manager is PackageManager.YARN


def base_manifest(existing: Manifest | None) -> Manifest:
    """Skeleton sections with the existing manifest layered on top."""
    manifest: Manifest = {
        "scripts": {},
        "engines": {},
        "devDependencies": {},
        "dependencies": {},
        "oclif": {},
        **copy.deepcopy(existing or {}),
    }
    for section in ("engines", "oclif"):
        if not isinstance(manifest.get(section), dict):
            manifest[section] = {}
    return manifest


def synthesize(answers: Answers, defaults: Defaults, existing: Manifest | None = None) -> ScaffoldPlan:
    """Merge *answers* and *defaults* into a manifest.

    Every scalar field resolves as answer, else default, else a fixed
    literal.  ``homepage`` and ``bugs`` are always recomputed from the final
    repository, and ``bin`` is rebuilt from scratch around the bin name.
    """
    manifest = base_manifest(existing)

    _assign(manifest, "name", answers.name or defaults.name)
    _assign(manifest, "description", answers.description or defaults.description)
    _assign(manifest, "version", answers.version or defaults.version or DEFAULT_VERSION)
    manifest["engines"]["node"] = defaults.engines.get("node", DEFAULT_NODE_ENGINE)
    _assign(manifest, "author", answers.author or defaults.author)
    manifest["files"] = list(answers.files or defaults.files or DEFAULT_FILES)
    _assign(manifest, "license", answers.license or defaults.license or DEFAULT_LICENSE)

    if answers.github is not None:
        repository = f"{answers.github.user}/{answers.github.repo}"
    else:
        repository = repository_slug(defaults.repository) or manifest["name"]
    manifest["repository"] = repository
    manifest["homepage"] = f"{GITHUB_URL}/{repository}"
    manifest["bugs"] = f"{GITHUB_URL}/{repository}/issues"

    bin_name = answers.bin or manifest["name"]
    manifest["oclif"]["bin"] = bin_name
    manifest["bin"] = {bin_name: BIN_ENTRY_POINT}

    return ScaffoldPlan(
        manifest=manifest,
        repository=repository,
        package_manager=answers.package_manager,
    )


def normalize(
    manifest: Manifest,
    manifest_path: str | Path | None = None,
    fixer: ManifestFixer | None = fix_manifest_file,
) -> Manifest:
    """Return the final, canonically ordered form of *manifest*.

    If a manifest file already exists at *manifest_path*, *fixer* is run
    against it first.  *manifest* itself is not modified.
    """
    manifest = copy.deepcopy(manifest)
    oclif = manifest.get("oclif")

    if isinstance(oclif, dict) and isinstance(oclif.get("plugins"), list):
        oclif["plugins"].sort(key=str)

    if manifest_path is not None and fixer is not None and Path(manifest_path).is_file():
        fixer(Path(manifest_path))

    if "oclif" in manifest and not oclif:
        del manifest["oclif"]

    manifest["files"] = sorted(set(manifest.get("files") or []))
    return sort_manifest(manifest)


def _assign(manifest: Manifest, key: str, value: Any) -> None:
    if value is None or value == "":
        manifest.pop(key, None)
    else:
        manifest[key] = value
