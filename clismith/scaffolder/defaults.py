"""Baseline manifest values derived from the destination and the user."""

from __future__ import annotations

from pathlib import PurePath
from typing import Any

from .models import (
    DEFAULT_LICENSE,
    DEFAULT_NODE_ENGINE,
    DEFAULT_VERSION,
    Defaults,
    Identity,
    Manifest,
    coerce_repository,
    repository_slug,
)


def derive_name(destination: str | PurePath) -> str:
    """Package name candidate: the leaf directory with spaces turned into hyphens."""
    return PurePath(destination).name.replace(" ", "-")


def derive_repository(destination: str | PurePath, handle: str | None = None) -> str:
    """``<parent>/<leaf>`` slug of *destination*; *handle* replaces the owner.

    A destination with no named parent (e.g. ``/my-cli``) has no owner
    segment unless *handle* supplies one.
    """
    path = PurePath(destination)
    owner = handle or path.parent.name
    return f"{owner}/{path.name}" if owner else path.name


def derive_author(identity: Identity | None) -> str | None:
    if identity is None or not identity.name:
        return None
    if identity.handle:
        return f"{identity.name} @{identity.handle}"
    return identity.name


def existing_version(existing: Manifest | None) -> str | None:
    """Version already recorded in *existing*, as a string, if there is one.

    Numeric versions (``"version": 1``) are kept as their string form.
    """
    value = (existing or {}).get("version")
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return _str_or(value, None)


def resolve_defaults(
    destination: str | PurePath,
    identity: Identity | None = None,
    existing: Manifest | None = None,
) -> Defaults:
    """Compute the :class:`Defaults` for a run.

    Values already present in the *existing* manifest win over everything
    computed here.  ``engines`` is the one merged field: the existing
    entries are layered over ``{"node": ">=8.0.0"}``.
    """
    existing = existing or {}
    handle = identity.handle if identity else None

    name = _str_or(existing.get("name"), derive_name(destination))
    oclif = existing.get("oclif")
    existing_bin = oclif.get("bin") if isinstance(oclif, dict) else None

    engines: dict[str, Any] = {"node": DEFAULT_NODE_ENGINE}
    if isinstance(existing.get("engines"), dict):
        engines.update(existing["engines"])

    computed = derive_repository(destination, handle)
    owner_segments = computed.split("/")[:-1]
    repository = coerce_repository(existing.get("repository"))
    if repository_slug(repository) is None:
        repository = computed

    return Defaults(
        name=name,
        bin=_str_or(existing_bin, name),
        version=existing_version(existing) or DEFAULT_VERSION,
        license=_str_or(existing.get("license"), DEFAULT_LICENSE),
        author=_str_or(existing.get("author"), derive_author(identity)),
        description=_str_or(existing.get("description"), None),
        repository=repository,
        github_owner=owner_segments[-1] if owner_segments else None,
        files=_files_or_none(existing.get("files")),
        engines=engines,
    )


def _str_or(value: Any, fallback: str | None) -> Any:
    if isinstance(value, str) and value:
        return value
    return fallback


def _files_or_none(value: Any) -> list[str] | None:
    if isinstance(value, str) and value:
        return [value]
    if isinstance(value, list):
        return [str(entry) for entry in value if entry]
    return None
