import pytest
from textual.widgets import OptionList

from claudectx.picker import ProfilePicker, profile_prompt, select_profile
from claudectx.profiles import Profile
from tests._utils.claude_home import sample_profile


@pytest.fixture
def profiles():
    return [Profile(slug, sample_profile(slug)) for slug in ("alpha", "beta", "gamma")]


def test_profile_prompt_marks_active(profiles):
    assert profile_prompt(profiles[0], "alpha") == "alpha - User alpha @ Org alpha *"
    assert profile_prompt(profiles[1], "alpha") == "beta - User beta @ Org beta"
    assert profile_prompt(profiles[2], None) == "gamma - User gamma @ Org gamma"


def test_select_profile_with_no_profiles_returns_none():
    assert select_profile([], None) is None


@pytest.mark.asyncio
async def test_active_profile_is_preselected(profiles):
    app = ProfilePicker(profiles, active="beta")
    async with app.run_test() as pilot:
        assert app.query_one(OptionList).highlighted == 1
        await pilot.press("enter")
    assert app.return_value == "beta"


@pytest.mark.asyncio
async def test_first_profile_is_preselected_without_active(profiles):
    app = ProfilePicker(profiles, active=None)
    async with app.run_test() as pilot:
        assert app.query_one(OptionList).highlighted == 0
        await pilot.press("enter")
    assert app.return_value == "alpha"


@pytest.mark.asyncio
async def test_arrow_keys_move_selection(profiles):
    app = ProfilePicker(profiles)
    async with app.run_test() as pilot:
        await pilot.press("down", "down", "enter")
    assert app.return_value == "gamma"


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["escape", "q"])
async def test_cancel_keys_return_none(profiles, key):
    app = ProfilePicker(profiles, active="alpha")
    async with app.run_test() as pilot:
        await pilot.press(key)
    assert app.return_value is None
