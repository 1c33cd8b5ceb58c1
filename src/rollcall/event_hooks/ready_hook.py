import logging

from discord.ext import commands

logger = logging.getLogger(__name__)


async def handle(bot: commands.Bot) -> None:
    """Log the session and how many calls were restored on start-up."""
    logger.info(f"Logged in as {bot.user.name} (ID: {bot.user.id})")

    store = getattr(bot, "call_store", None)
    if store is None:
        logger.warning("Call store not initialised; call commands will not persist")
        return

    logger.info("Serving %d active call(s)", store.active_count())
