"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands as discord_commands

from rollcall import commands as rc_commands
from rollcall.calls import CallStore, open_store
from rollcall.config import core
from rollcall.event_hooks import ready_hook

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
# message_content for prefix commands, members for role expansion
intents = discord.Intents.default()
intents.message_content = True
intents.members = True


class RollCallBot(discord_commands.Bot):
    """Discord bot owning the per-channel call store."""

    def __init__(self) -> None:
        super().__init__(
            command_prefix=core.COMMAND_PREFIX,
            intents=intents,
            help_command=None,
        )
        self.call_store: CallStore | None = None

    async def setup_hook(self) -> None:
        """Open the call store, then register command cogs."""

        self.call_store = await open_store()
        await rc_commands.setup(self)

    async def close(self) -> None:
        if self.call_store is not None:
            await self.call_store.shutdown()
        await super().close()


bot = RollCallBot()


@bot.event
async def on_ready() -> None:
    await ready_hook.handle(bot)


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    try:
        bot.run(core.DISCORD_API_TOKEN)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
