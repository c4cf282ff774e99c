"""House conventions for ``package.json``: canonical key order and sorted maps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from clismith.utils import load_json_object, write_text

from .models import Manifest

MANIFEST_KEY_ORDER: tuple[str, ...] = (
    "name",
    "description",
    "version",
    "author",
    "bin",
    "bugs",
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
    "engines",
    "files",
    "homepage",
    "keywords",
    "license",
    "main",
    "oclif",
    "repository",
    "scripts",
    "types",
)

# Sub-sections whose keys (or list items) carry no meaningful order.
SORTED_SUB_ITEMS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
    "engines",
    "keywords",
    "scripts",
)

REQUIRED_KEYS: tuple[str, ...] = ("name", "version")


def sort_manifest(manifest: Manifest) -> Manifest:
    """Return *manifest* with keys in canonical order.

    Known keys come first in :data:`MANIFEST_KEY_ORDER`; every other key
    follows alphabetically.  The sections in :data:`SORTED_SUB_ITEMS` are
    sorted as well.
    """
    rank = {key: index for index, key in enumerate(MANIFEST_KEY_ORDER)}
    ordered_keys = sorted(
        manifest,
        key=lambda key: (0, rank[key], "") if key in rank else (1, 0, key),
    )
    result: Manifest = {}
    for key in ordered_keys:
        value = manifest[key]
        if key in SORTED_SUB_ITEMS:
            value = _sorted_section(value)
        result[key] = value
    return result


def dump_manifest(manifest: Manifest) -> str:
    """Serialise *manifest* the way npm does: 2-space JSON plus a newline."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def fix_manifest_file(path: str | Path) -> list[str]:
    """Rewrite the manifest at *path* in house style.

    Returns the required keys the file is missing, so the caller can
    report them.  A file that cannot be parsed as an object is left alone.
    """
    manifest = load_json_object(path)
    if not manifest:
        return list(REQUIRED_KEYS)
    write_text(path, dump_manifest(sort_manifest(manifest)))
    return [key for key in REQUIRED_KEYS if key not in manifest]


def _sorted_section(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: value[key] for key in sorted(value)}
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return sorted(value)
    return value
