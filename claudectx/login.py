"""
Login workflow: add a new Claude account as a profile.

1. back up the live config (if any)
2. run `claude /login`
3. ask for a profile name and save the new account under it
4. put the original live config back
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm, Prompt

from claudectx.errors import ClaudectxError, LoginFailed
from claudectx.launcher import Launcher
from claudectx.profiles import Profile
from claudectx.slug import require_slug
from claudectx.switcher import Switcher

logger = logging.getLogger(__name__)

console = Console()

LOGIN_ARGS = ("/login",)


def _ask_name(prompt: str) -> str:
    return Prompt.ask(prompt, console=console)


def _confirm(prompt: str, default: bool) -> bool:
    return Confirm.ask(prompt, default=default, console=console)


def _restore(switcher: Switcher, backup: Path | None) -> None:
    if backup is None:
        return
    switcher.manager.restore(backup)
    console.print("Restored original config.")


def run_login(
    switcher: Switcher,
    launcher: Launcher,
    ask: Callable[[str], str] = _ask_name,
    confirm: Callable[[str, bool], bool] = _confirm,
) -> Profile | None:
    """
    Log in to a new account and save it as a profile.

    Returns the saved profile, or None when the user declined to overwrite
    an existing one. The live config is back to its original content when
    this returns or raises. If there was no live config before, the one
    created by the login is kept.
    """
    console.print("[bold]Starting Claude login workflow...[/bold]\n")

    backup = switcher.manager.backup()
    if backup is not None:
        console.print(f"Backed up existing config to [dim]{backup}[/dim]")

    try:
        profile = _login_and_save(switcher, launcher, ask, confirm)
    except (ClaudectxError, KeyboardInterrupt):
        _restore(switcher, backup)
        raise

    _restore(switcher, backup)
    if backup is None and profile is not None:
        console.print("No previous config existed; keeping the new login as the live config.")
    return profile


def _login_and_save(
    switcher: Switcher,
    launcher: Launcher,
    ask: Callable[[str], str],
    confirm: Callable[[str, bool], bool],
) -> Profile | None:
    console.print("Launching Claude login...\n")
    code = launcher.launch(list(LOGIN_ARGS))
    if code != 0:
        console.print("\n[red]Claude login failed or was cancelled.[/red]")
        raise LoginFailed(f"Login process exited with status {code}")

    if not switcher.manager.exists():
        console.print("\n[red]No config file created after login.[/red]")
        raise LoginFailed("Login did not create a config file")

    account = switcher.current_account()
    who = account["display_name"] or account["email"] or "unknown account"
    org = f" @ {account['organization']}" if account["organization"] else ""
    console.print(f"\nLogged in as: [cyan]{who}{org}[/cyan]")

    name = ask("Enter a name for this profile")
    slug = require_slug(name)

    if switcher.exists(slug) and not confirm(
        f"Profile '{slug}' already exists. Overwrite?", False
    ):
        console.print("Cancelled. Cleaning up...")
        return None

    profile = switcher.save_current(slug)
    console.print(f"[green]Saved profile '{slug}'[/green]")
    logger.info("Login saved as profile '%s'", slug)
    return profile
