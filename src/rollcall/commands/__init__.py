"""
Auto-discovery & registry for command cogs, plus the call alias table.

Any module inside ``commands/handlers`` that defines::

    from rollcall.commands import register_cog

    @register_cog
    class MyCog(commands.Cog): ...

is picked up automatically at import-time. Invoking :func:`setup` attaches
every registered cog to the bot.

Call commands are addressed by alias. :data:`CALL_ALIASES` maps every alias
to the :class:`CallAction` it triggers; the first alias of each group is the
command's primary name.
"""

from __future__ import annotations

import enum
import logging
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Type

from discord.ext import commands as commands_ext

logger = logging.getLogger(__name__)


class CallAction(enum.Enum):
    OPEN = "open"
    ADD = "add"
    CLOSE = "close"
    REFRESH = "refresh"
    LOG = "log"


_ALIAS_GROUPS: Tuple[Tuple[CallAction, Tuple[str, ...]], ...] = (
    (CallAction.OPEN, ("call", "callfor")),
    (CallAction.ADD, ("calladd", "addtocall")),
    (CallAction.CLOSE, ("calldone", "endcall", "callend")),
    (CallAction.REFRESH, ("callrefresh", "refreshcall")),
    (CallAction.LOG, ("calllog",)),
)

CALL_ALIASES: Mapping[str, CallAction] = MappingProxyType(
    {alias: action for action, aliases in _ALIAS_GROUPS for alias in aliases}
)


def resolve_action(alias: str) -> Optional[CallAction]:
    """Return the action bound to ``alias`` (case-insensitive), or ``None``."""

    return CALL_ALIASES.get(alias.strip().lower())


def aliases_for(action: CallAction) -> Tuple[str, ...]:
    """Return every alias for ``action``; the first one is the primary name."""

    for group_action, aliases in _ALIAS_GROUPS:
        if group_action is action:
            return aliases
    raise KeyError(action)


_COG_CLASSES: List[Type[commands_ext.Cog]] = []


def register_cog(cls: Optional[Type[commands_ext.Cog]] = None):
    """Decorator registering a Cog class for later attachment to the bot."""

    def _register(cog_cls: Type[commands_ext.Cog]):
        if not issubclass(cog_cls, commands_ext.Cog):
            raise TypeError("register_cog expects a discord.ext.commands.Cog subclass")

        _COG_CLASSES.append(cog_cls)
        return cog_cls

    if cls is None:
        return _register
    return _register(cls)


async def setup(bot: commands_ext.Bot) -> None:
    """
    Attach registered cogs to ``bot``.

    This must be invoked during the bot setup phase (typically inside
    ``commands.Bot.setup_hook``).
    """

    for cog_cls in _COG_CLASSES:
        if bot.get_cog(cog_cls.__name__):
            continue
        await bot.add_cog(cog_cls(bot))

    if _COG_CLASSES:
        logger.info("Registered %d command cog(s)", len(_COG_CLASSES))
    else:
        logger.warning("No command cogs discovered; command set is empty")


_pkg_path = Path(__file__).resolve().parent / "handlers"
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname.startswith("_"):
        continue
    import_module(f"{__name__}.handlers.{modname}")


__all__ = [
    "CALL_ALIASES",
    "CallAction",
    "aliases_for",
    "register_cog",
    "resolve_action",
    "setup",
]
