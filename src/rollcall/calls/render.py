"""
Display payloads for calls: the live embed, the close-out results and the
roll log.
"""

from __future__ import annotations

from typing import Sequence

import discord

from .model import Call, CallResults

DEFAULT_TITLE = "Roll call"
EMBED_COLOUR = discord.Colour.gold()
EMPTY_FIELD = "None yet"
EMPTY_LOG = "No rolls have been logged for this call yet."

# Discord rejects embed field values longer than this
FIELD_LIMIT = 1024


def _clip(value: str) -> str:
    if len(value) <= FIELD_LIMIT:
        return value
    return value[: FIELD_LIMIT - 1] + "…"


def build_embed(call: Call) -> discord.Embed:
    """Render the active call as an embed for the channel."""

    embed = discord.Embed(
        title=call.name or DEFAULT_TITLE,
        description=call.text or None,
        colour=EMBED_COLOUR,
        timestamp=call.start,
    )

    participants = "\n".join(f"<@{m.id}>" for m in call.mentions)
    embed.add_field(name="Participants", value=_clip(participants or EMPTY_FIELD), inline=True)

    npcs = "\n".join(call.npcs)
    embed.add_field(name="NPCs", value=_clip(npcs or EMPTY_FIELD), inline=True)

    if call.rolls:
        rolls = "\n".join(f"**{r.name}**: `{r.roll}`" for r in call.rolls)
        embed.add_field(name="Rolls", value=_clip(rolls), inline=False)

    return embed


def format_results(results: CallResults) -> str:
    """Close-out message: title line followed by one line per roll, highest first."""

    lines = [f"**{results.call.name}** complete!", ""]
    lines.extend(f"**{r.name}**: `{r.roll}`" for r in results.standings)
    return "\n".join(lines) + "\n"


def format_log(lines: Sequence[str]) -> str:
    return "\n".join(lines) if lines else EMPTY_LOG


__all__ = ["build_embed", "format_results", "format_log"]
