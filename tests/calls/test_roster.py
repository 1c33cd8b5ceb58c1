from types import SimpleNamespace

from rollcall.calls.model import Mention
from rollcall.calls.roster import (
    extract_npcs,
    flatten_mentions,
    merge_mentions,
    merge_npcs,
    split_tokens,
)


def _member(mid, name):
    return SimpleNamespace(id=mid, display_name=name)


def test_extract_npcs_strips_plus():
    assert extract_npcs(["Initiative!", "+Goblin", "attack"]) == ["Goblin"]


def test_extract_npcs_only_strips_opening_quote():
    assert extract_npcs(['+"Boss"']) == ['Boss"']


def test_extract_npcs_dedupes_case_sensitively_in_order():
    tokens = ["+Orc", "+Goblin", "+Orc", "+orc"]
    assert extract_npcs(tokens) == ["Orc", "Goblin", "orc"]


def test_extract_npcs_ignores_inner_plus():
    assert extract_npcs(["a+b", "<@123>"]) == []


def test_flatten_mentions_collapses_role_duplicates():
    al = _member(1, "Al")
    bo = _member(2, "Bo")
    party = SimpleNamespace(name="party", members=[_member(1, "Al (role)"), bo])

    result = flatten_mentions([al], [party])

    assert result == [Mention(1, "Al"), Mention(2, "Bo")]


def test_flatten_mentions_handles_empty_roles():
    empty = SimpleNamespace(name="nobody", members=[])
    assert flatten_mentions([], [empty]) == []


def test_merge_mentions_keeps_existing_name():
    existing = [Mention(1, "Al")]
    merged = merge_mentions(existing, [Mention(1, "Albert"), Mention(3, "Cy")])

    assert merged == [Mention(1, "Al"), Mention(3, "Cy")]
    assert existing == [Mention(1, "Al")]


def test_merge_npcs_is_a_union():
    assert merge_npcs(["Goblins"], ["Orc", "Goblins"]) == ["Goblins", "Orc"]


def test_split_tokens():
    assert split_tokens("  Initiative!   roll  now ") == ["Initiative!", "roll", "now"]
    assert split_tokens(None) == []
