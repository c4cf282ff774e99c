"""Dependency installation and README generation for the generated project.

The dev-dependency and runtime-dependency installs are independent and run
concurrently; :func:`install_dependencies` returns once both have finished.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from clismith.errors import InstallError, ReadmeError
from clismith.scaffolder.models import PackageManager
from clismith.utils import run_command


def install_command(
    package_manager: PackageManager,
    packages: list[str],
    dev: bool = False,
    ignore_scripts: bool = False,
    mutex: str | None = None,
) -> list[str]:
    """Build the install command line for *package_manager*.

    With no *packages* the command installs what the manifest already
    declares (``yarn install`` / ``npm install``).
    """
    program = shutil.which(package_manager.value) or package_manager.value

    if package_manager is PackageManager.YARN:
        cmd = [program, "add", *packages] if packages else [program, "install"]
        if dev:
            cmd.append("--dev")
        if mutex:
            cmd.append(f"--mutex={mutex}")
    else:
        cmd = [program, "install", *packages]
        cmd.append("--save-dev" if dev else "--save")

    if ignore_scripts:
        cmd.append("--ignore-scripts")
    return cmd


async def _install(cmd: list[str], cwd: Path, timeout: int) -> None:
    cmd_str = " ".join(cmd)
    try:
        returncode, _, stderr = await run_command(cmd, cwd=cwd, timeout=timeout, capture=False)
    except OSError as exc:
        raise InstallError(f"Cannot run installer: {exc}", command=cmd_str) from exc
    if returncode != 0:
        raise InstallError(
            f"Install failed (exit {returncode}): {cmd_str}",
            command=cmd_str,
            stderr=stderr,
        )


async def install_dependencies(
    cwd: Path,
    package_manager: PackageManager,
    dependencies: list[str] | None = None,
    dev_dependencies: list[str] | None = None,
    mutex: str | None = None,
    timeout: int = 900,
) -> None:
    """Install dev and runtime dependencies concurrently.

    Dev dependencies are installed with lifecycle scripts disabled.

    Raises:
        InstallError: If either install fails.
    """
    mutex = mutex if package_manager is PackageManager.YARN else None
    dev_cmd = install_command(
        package_manager, list(dev_dependencies or []), dev=True, ignore_scripts=True, mutex=mutex
    )
    runtime_cmd = install_command(package_manager, list(dependencies or []), mutex=mutex)

    await asyncio.gather(
        _install(dev_cmd, cwd, timeout),
        _install(runtime_cmd, cwd, timeout),
    )


async def generate_readme(cwd: Path, readme_bin: Path, timeout: int = 300) -> None:
    """Run ``oclif readme`` from the project's local ``node_modules``.

    Raises:
        ReadmeError: If the binary is missing or exits non-zero.
    """
    cmd = [str(readme_bin), "readme"]
    cmd_str = " ".join(cmd)
    try:
        returncode, _, stderr = await run_command(cmd, cwd=cwd, timeout=timeout, capture=False)
    except OSError as exc:
        raise ReadmeError(f"Cannot run README generator: {exc}", command=cmd_str) from exc
    if returncode != 0:
        raise ReadmeError(
            f"README generation failed (exit {returncode}): {cmd_str}",
            command=cmd_str,
            stderr=stderr,
        )
