#!/usr/bin/env python3
"""claudectx CLI - switch Claude Code profiles, then launch Claude.

Usage:
    claudectx                       pick a profile interactively, then launch
    claudectx <profile> [-- args]   switch to <profile>, then launch
    claudectx list | save <name> | delete <name> | login | current

Arguments after a literal `--` are passed to `claude` verbatim.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
import typer

from claudectx import CLAUDECTX_VERSION
from claudectx.errors import ClaudectxError
from claudectx.launcher import Launcher, ProcessLauncher
from claudectx.login import run_login
from claudectx.picker import profile_prompt, select_profile
from claudectx.settings import ToolSettings, load_settings
from claudectx.slug import require_slug
from claudectx.switcher import Switcher

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

CANCELLED_EXIT_CODE = 130

app = typer.Typer(
    name="claudectx",
    help="Switch Claude Code profiles by swapping account fields in ~/.claude.json.",
    add_completion=False,
)

# Names that are never treated as a profile to switch to
COMMANDS = {"list", "save", "delete", "login", "switch", "current", "pick"}


def make_launcher(settings: ToolSettings) -> Launcher:
    return ProcessLauncher(settings.executable)


def _fail(error: ClaudectxError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    return typer.Exit(error.exit_code)


def _interactive() -> bool:
    return sys.stdin.isatty()


def _settings(ctx: typer.Context) -> ToolSettings:
    return ctx.find_root().obj


def _switcher(ctx: typer.Context) -> Switcher:
    return Switcher(_settings(ctx))


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"claudectx {CLAUDECTX_VERSION}", highlight=False)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging on stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Launch Claude Code with different profiles."""
    try:
        settings = load_settings()
    except ClaudectxError as e:
        raise _fail(e) from None
    _configure_logging("DEBUG" if verbose else settings.log_level)
    logger.debug("Settings: %s", settings)
    ctx.obj = settings


def _launch(ctx: typer.Context, claude_args: list[str]) -> None:
    """Run claude and exit with its status."""
    launcher = make_launcher(_settings(ctx))
    try:
        code = launcher.launch(claude_args)
    except ClaudectxError as e:
        raise _fail(e) from None
    if code != 0:
        raise typer.Exit(code)


def _switch(switcher: Switcher, name: str) -> str:
    """Switch to `name`, offering to create it from the live config on a TTY."""
    try:
        slug = require_slug(name)
        if not switcher.exists(slug) and _interactive():
            if Confirm.ask(
                f"Profile '{slug}' not found. Save current config as this profile?",
                console=console,
            ):
                switcher.save_current(slug)
                console.print(f"Profile '{slug}' saved.")
        switcher.switch(slug)
    except ClaudectxError as e:
        raise _fail(e) from None
    console.print(f"Switched to profile '{slug}'")
    return slug


@app.command("switch")
def switch(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
    claude_args: list[str] = typer.Argument(None, help="Arguments for claude (after --)"),
    no_launch: bool = typer.Option(False, "--no-launch", help="Switch only, do not start claude"),
):
    """Switch to a profile and launch Claude (also: claudectx <profile>)."""
    switcher = _switcher(ctx)
    _switch(switcher, name)
    if not no_launch:
        _launch(ctx, claude_args or [])


@app.command("pick")
def pick(
    ctx: typer.Context,
    claude_args: list[str] = typer.Argument(None, help="Arguments for claude (after --)"),
):
    """Pick a profile interactively and launch Claude (the default command)."""
    switcher = _switcher(ctx)
    try:
        profiles = switcher.list_profiles()
        if not profiles:
            account = switcher.current_account()
            console.print(
                f"Current account: {account['display_name'] or account['email']} "
                f"@ {account['organization']}",
                highlight=False,
                markup=False,
            )
            console.print(
                "\nNo profiles saved yet. Use 'claudectx save <name>' to save this profile."
            )
            return
        active = switcher.active_slug()
    except ClaudectxError as e:
        raise _fail(e) from None

    selected = select_profile(profiles, active)
    if selected is None:
        err_console.print("No profile selected.")
        raise typer.Exit(CANCELLED_EXIT_CODE)

    _switch(switcher, selected)
    _launch(ctx, claude_args or [])


@app.command("list")
def list_profiles(ctx: typer.Context):
    """List all saved profiles."""
    switcher = _switcher(ctx)
    profiles = switcher.list_profiles()
    if not profiles:
        console.print("No profiles found.")
        return

    active = switcher.active_slug()
    for profile in profiles:
        console.print(profile_prompt(profile, active), markup=False, highlight=False)


@app.command("save")
def save(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Overwrite without asking"),
):
    """Save current config as a new profile."""
    switcher = _switcher(ctx)
    try:
        slug = require_slug(name)
        if switcher.exists(slug) and not yes and _interactive():
            if not Confirm.ask(
                f"Profile '{slug}' already exists. Overwrite?", console=console
            ):
                console.print("Cancelled.")
                return
        switcher.save_current(slug)
    except ClaudectxError as e:
        raise _fail(e) from None
    console.print(f"Saved current config as '{slug}'")


@app.command("delete")
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
):
    """Delete a profile."""
    try:
        slug = _switcher(ctx).delete(name)
    except ClaudectxError as e:
        raise _fail(e) from None
    console.print(f"Deleted profile '{slug}'")


@app.command("current")
def current(ctx: typer.Context):
    """Show which saved profile is active."""
    switcher = _switcher(ctx)
    try:
        account = switcher.current_account()
    except ClaudectxError as e:
        raise _fail(e) from None

    who = account["display_name"] or account["email"] or "unknown account"
    org = f" @ {account['organization']}" if account["organization"] else ""
    active = switcher.active_slug()
    if active is None:
        console.print(f"No saved profile matches the current account ({who}{org})", markup=False)
        raise typer.Exit(1)
    console.print(f"{active} - {who}{org}", markup=False, highlight=False)


@app.command("login")
def login(ctx: typer.Context):
    """Login to a new Claude account and save it as a profile."""
    switcher = _switcher(ctx)
    try:
        profile = run_login(switcher, make_launcher(_settings(ctx)))
    except ClaudectxError as e:
        raise _fail(e) from None
    if profile is None:
        return

    if Confirm.ask(
        f"Launch Claude with profile '{profile.slug}'?", default=True, console=console
    ):
        _switch(switcher, profile.slug)
        _launch(ctx, [])
        return

    profiles = switcher.list_profiles()
    if profiles and Confirm.ask(
        "Select a different profile to launch?", default=False, console=console
    ):
        selected = select_profile(profiles, switcher.active_slug())
        if selected is not None:
            _switch(switcher, selected)
            _launch(ctx, [])
            return

    console.print("\nDone. Use 'claudectx' to launch with any profile.")


def route_args(argv: list[str]) -> list[str]:
    """
    Rewrite the argument list so bare forms reach a command.

    []                  -> ["pick"]
    ["work", "--", "x"] -> ["switch", "work", "--", "x"]
    ["help"]            -> ["--help"]
    Leading global options (-v, --verbose) are kept in front.
    """
    for idx, arg in enumerate(argv):
        if arg == "--":
            return [*argv[:idx], "pick", *argv[idx:]]
        if arg.startswith("-"):
            continue
        if arg == "help":
            return [*argv[:idx], "--help"]
        if arg in COMMANDS:
            return argv
        return [*argv[:idx], "switch", *argv[idx:]]
    return [*argv, "pick"]


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    args = route_args(list(sys.argv[1:] if argv is None else argv))
    app(args=args, prog_name="claudectx")


if __name__ == "__main__":
    main()
