import copy

import pytest

from claudectx.config.patcher import (
    ACCOUNT_FIELDS,
    account_identity,
    account_summary,
    apply_in_place,
    changed_fields,
    extract,
    same_json,
)
from tests._utils.claude_home import sample_config


def test_extract_keeps_only_allow_listed_keys():
    config = sample_config("a")
    fields = extract(config)

    assert set(fields) == {"oauthAccount", "userID", "s1mAccessCache"}
    assert fields["oauthAccount"] == config["oauthAccount"]
    assert "mcpServers" not in fields
    assert "projects" not in fields


def test_extract_omits_absent_keys_instead_of_defaulting():
    fields = extract({"oauthAccount": {"email": "a@x.com"}, "extra": True})
    assert fields == {"oauthAccount": {"email": "a@x.com"}}


def test_extract_returns_independent_copy():
    config = sample_config("a")
    fields = extract(config)
    fields["oauthAccount"]["displayName"] = "changed"
    assert config["oauthAccount"]["displayName"] == "User a"


def test_scenario_switch_preserves_unrelated_fields():
    live = {"oauthAccount": {"email": "a@x.com"}, "mcpServers": {"foo": 1}, "extra": True}
    allow = ("oauthAccount", "userID")

    work = extract(live, allow)
    assert work == {"oauthAccount": {"email": "a@x.com"}}

    personal = {"oauthAccount": {"email": "b@y.com"}}
    result = apply_in_place(live, personal, allow)

    assert result is live
    assert live == {
        "oauthAccount": {"email": "b@y.com"},
        "mcpServers": {"foo": 1},
        "extra": True,
    }


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"theme": "dark"},
        sample_config("a"),
        sample_config("b", clientDataCache={"data": [1, 2]}, groveConfigCache={}),
    ],
)
def test_apply_of_own_extract_is_a_no_op(config):
    before = copy.deepcopy(config)
    apply_in_place(config, extract(config))
    assert config == before


def test_apply_never_removes_keys():
    live = sample_config("a")
    keys_before = set(live)

    apply_in_place(live, {"oauthAccount": {"accountUuid": "x"}})

    assert set(live) == keys_before
    # userID was not in the profile, so it keeps the old account's value
    assert live["userID"] == "user-id-a"


def test_apply_ignores_keys_outside_allow_list():
    live = sample_config("a")
    apply_in_place(live, {"theme": "light", "mcpServers": {}, "userID": "new"})

    assert live["theme"] == "dark"
    assert live["mcpServers"] == {"docs": {"command": "npx", "args": ["docs-mcp"]}}
    assert live["userID"] == "new"


def test_apply_replaces_nested_objects_wholesale():
    live = {"oauthAccount": {"accountUuid": "a", "workspaceRole": "owner"}}
    apply_in_place(live, {"oauthAccount": {"accountUuid": "b"}})
    assert live["oauthAccount"] == {"accountUuid": "b"}


def test_apply_copies_profile_values():
    profile = {"oauthAccount": {"accountUuid": "b"}}
    live: dict = {}
    apply_in_place(live, profile)
    live["oauthAccount"]["accountUuid"] = "mutated"
    assert profile["oauthAccount"]["accountUuid"] == "b"


def test_changed_fields_reports_only_differences():
    live = sample_config("a")
    assert changed_fields(live, extract(live)) == []

    profile = extract(sample_config("b"))
    assert changed_fields(live, profile) == ["oauthAccount", "userID", "s1mAccessCache"]

    assert changed_fields({}, {"userID": "x"}) == ["userID"]


def test_allow_list_is_static_tuple():
    assert isinstance(ACCOUNT_FIELDS, tuple)
    assert "oauthAccount" in ACCOUNT_FIELDS
    assert "userID" in ACCOUNT_FIELDS
    assert "mcpServers" not in ACCOUNT_FIELDS


def test_account_identity_preference_order():
    assert account_identity({"oauthAccount": {"accountUuid": "u", "emailAddress": "e"}}) == (
        "accountUuid:u"
    )
    assert account_identity({"oauthAccount": {"emailAddress": "e"}}) == "emailAddress:e"
    assert account_identity({"userID": "id"}) == "userID:id"
    assert account_identity({"oauthAccount": "not-an-object"}) is None
    assert account_identity({}) is None


def test_account_summary_tolerates_missing_fields():
    assert account_summary({}) == {"display_name": "", "email": "", "organization": ""}
    summary = account_summary(sample_config("a"))
    assert summary == {
        "display_name": "User a",
        "email": "user-a@example.com",
        "organization": "Org a",
    }


@pytest.mark.parametrize(
    "live_value, profile_value",
    [(1, True), (0, False), (1, 1.0), ({"a": 1}, {"a": True})],
)
def test_changed_fields_distinguishes_json_types(live_value, profile_value):
    assert changed_fields({"userID": live_value}, {"userID": profile_value}) == ["userID"]


def test_same_json_ignores_key_order():
    assert same_json({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})
    assert not same_json([1, 2], [2, 1])
