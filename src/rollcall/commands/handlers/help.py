from __future__ import annotations

from discord.ext import commands

from .. import CallAction, aliases_for, register_cog
from rollcall.config import core as core_cfg


def format_help(prefix: str) -> str:
    """One line per call command: primary name, then its other aliases."""

    lines = ["Roll call commands:"]
    for action in CallAction:
        primary, *others = aliases_for(action)
        line = f"`{prefix}{primary}`"
        if others:
            line += " (also " + ", ".join(f"`{prefix}{alias}`" for alias in others) + ")"
        lines.append(line)
    return "\n".join(lines)


@register_cog
class Help(commands.Cog):
    """List the call commands and their aliases."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(name="callhelp")
    async def callhelp(self, ctx: commands.Context) -> None:
        """Send the call command listing to the channel."""

        await ctx.send(format_help(core_cfg.COMMAND_PREFIX))
