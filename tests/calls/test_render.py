import discord

from rollcall.calls.model import Call, CallResults, Mention, Roll
from rollcall.calls.render import EMPTY_LOG, build_embed, format_log, format_results


def test_build_embed_lists_roster():
    call = Call(
        channel=1,
        name="Initiative!",
        text="Goblins attack",
        mentions=[Mention(11, "Al"), Mention(12, "Bo")],
        npcs=["Goblins"],
    )

    embed = build_embed(call)

    assert isinstance(embed, discord.Embed)
    assert embed.title == "Initiative!"
    assert embed.description == "Goblins attack"
    fields = {f.name: f.value for f in embed.fields}
    assert fields["Participants"] == "<@11>\n<@12>"
    assert fields["NPCs"] == "Goblins"
    assert "Rolls" not in fields


def test_build_embed_defaults_for_empty_call():
    embed = build_embed(Call(channel=1, rolls=[Roll("Al", 3)]))

    assert embed.title == "Roll call"
    fields = {f.name: f.value for f in embed.fields}
    assert fields["Participants"] == "None yet"
    assert fields["Rolls"] == "**Al**: `3`"


def test_format_results():
    results = CallResults(
        call=Call(channel=1, name="Initiative!"),
        standings=[Roll("Al", 15), Roll("Goblins", 15), Roll("Orc", 9)],
    )

    assert format_results(results) == (
        "**Initiative!** complete!\n\n"
        "**Al**: `15`\n"
        "**Goblins**: `15`\n"
        "**Orc**: `9`\n"
    )


def test_format_log():
    assert format_log(["Al rolled 15", "Orc rolled 9"]) == "Al rolled 15\nOrc rolled 9"
    assert format_log([]) == EMPTY_LOG
