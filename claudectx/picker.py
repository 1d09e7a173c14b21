"""
Interactive profile picker.

A single-screen Textual app listing saved profiles; the active one is
marked and pre-selected. Enter picks, Escape/q/Ctrl+C cancels.
"""

from __future__ import annotations

from collections.abc import Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, OptionList, Static
from textual.widgets.option_list import Option

from claudectx.profiles import Profile

ACTIVE_MARKER = " *"


def profile_prompt(profile: Profile, active: str | None) -> str:
    marker = ACTIVE_MARKER if profile.slug == active else ""
    return f"{profile.label}{marker}"


class ProfilePicker(App[str | None]):
    """Pick one profile; returns its slug, or None when cancelled."""

    CSS = """
    #picker-title {
        padding: 0 1;
        text-style: bold;
    }

    OptionList {
        height: auto;
        max-height: 100%;
        border: solid $accent;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("q", "cancel", "Cancel", show=False),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        profiles: Sequence[Profile],
        active: str | None = None,
        title: str = "Select Claude profile",
    ) -> None:
        super().__init__()
        self.profiles = list(profiles)
        self.active = active
        self.picker_title = title

    def compose(self) -> ComposeResult:
        yield Static(self.picker_title, id="picker-title")
        yield OptionList(
            *(
                Option(profile_prompt(p, self.active), id=p.slug)
                for p in self.profiles
            ),
            id="profiles",
        )
        yield Footer()

    def on_mount(self) -> None:
        options = self.query_one(OptionList)
        options.highlighted = self._initial_index()
        options.focus()

    def _initial_index(self) -> int:
        for idx, profile in enumerate(self.profiles):
            if profile.slug == self.active:
                return idx
        return 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(event.option.id)

    def action_cancel(self) -> None:
        self.exit(None)


def select_profile(profiles: Sequence[Profile], active: str | None = None) -> str | None:
    """Run the picker; the selected slug, or None if cancelled or empty."""
    if not profiles:
        return None
    return ProfilePicker(profiles, active).run()
