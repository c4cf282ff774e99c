"""Template checkout and environment probes."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from clismith.errors import CloneError
from clismith.utils import run_command


async def clone_template(repo: str, destination: Path, timeout: int = 300) -> Path:
    """Clone *repo* into *destination* and drop its git history.

    Raises:
        CloneError: If git is missing or the clone fails.
    """
    cmd = ["git", "clone", repo, str(destination)]
    cmd_str = " ".join(cmd)
    try:
        returncode, _, stderr = await run_command(cmd, timeout=timeout)
    except OSError as exc:
        raise CloneError(f"Cannot run git: {exc}", command=cmd_str) from exc

    if returncode != 0:
        raise CloneError(
            f"git clone failed (exit {returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    git_dir = destination / ".git"
    if git_dir.exists():
        await asyncio.to_thread(shutil.rmtree, git_dir)
    return destination


async def detect_yarn() -> bool:
    """Return ``True`` if ``yarn -v`` runs successfully."""
    try:
        returncode, _, _ = await run_command(["yarn", "-v"], timeout=30)
    except OSError:
        return False
    return returncode == 0
