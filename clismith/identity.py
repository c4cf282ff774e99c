"""Discovery of the user's name and GitHub handle.

The full name and email come from ``git config``; the handle is looked up
through the GitHub user-search API by email.  Every failure degrades to a
missing value -- identity is a nicety for defaults, never a reason to abort.
"""

from __future__ import annotations

import httpx

from clismith.scaffolder.models import Identity
from clismith.utils import run_command


async def git_config(key: str) -> str | None:
    """Return ``git config --get <key>``, or ``None`` if unset or git is missing."""
    try:
        returncode, stdout, _ = await run_command(["git", "config", "--get", key], timeout=10)
    except OSError:
        return None
    if returncode != 0 or not stdout:
        return None
    return stdout


async def github_username(
    email: str,
    api_url: str = "https://api.github.com",
    timeout: float = 10.0,
) -> str | None:
    """Find the GitHub login whose public email is *email*.

    Returns ``None`` on any HTTP failure or when nothing matches.
    """
    try:
        async with httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            timeout=httpx.Timeout(timeout, connect=5.0),
            headers={"Accept": "application/vnd.github+json"},
        ) as client:
            response = await client.get("/search/users", params={"q": f"{email} in:email"})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError):
        return None

    items = data.get("items") if isinstance(data, dict) else None
    if not items:
        return None
    login = items[0].get("login")
    return login if isinstance(login, str) and login else None


async def discover_identity(api_url: str = "https://api.github.com") -> Identity:
    """Collect name, email and GitHub handle for the current user."""
    name = await git_config("user.name") or ""
    email = await git_config("user.email")
    handle = await github_username(email, api_url=api_url) if email else None
    return Identity(name=name, email=email, handle=handle)
