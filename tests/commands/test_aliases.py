import pytest

from rollcall.commands import CALL_ALIASES, CallAction, aliases_for, resolve_action
from rollcall.commands.handlers.help import format_help


@pytest.mark.parametrize(
    "alias, action",
    [
        ("call", CallAction.OPEN),
        ("callfor", CallAction.OPEN),
        ("calladd", CallAction.ADD),
        ("addtocall", CallAction.ADD),
        ("calldone", CallAction.CLOSE),
        ("endcall", CallAction.CLOSE),
        ("callend", CallAction.CLOSE),
        ("callrefresh", CallAction.REFRESH),
        ("refreshcall", CallAction.REFRESH),
        ("calllog", CallAction.LOG),
    ],
)
def test_resolve_action(alias, action):
    assert resolve_action(alias) is action
    assert resolve_action(alias.upper()) is action


def test_alias_table_is_complete_and_read_only():
    assert len(CALL_ALIASES) == 10
    assert resolve_action("roll") is None
    with pytest.raises(TypeError):
        CALL_ALIASES["roll"] = CallAction.OPEN


def test_aliases_for_lists_primary_first():
    assert aliases_for(CallAction.CLOSE) == ("calldone", "endcall", "callend")
    assert aliases_for(CallAction.LOG) == ("calllog",)


def test_format_help_mentions_every_alias():
    text = format_help("!")
    for alias in CALL_ALIASES:
        assert f"`!{alias}`" in text
