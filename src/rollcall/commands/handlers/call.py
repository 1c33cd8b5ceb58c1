from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, List

import discord
from discord.ext import commands

from .. import CallAction, aliases_for, register_cog, resolve_action
from ..permissions import can_manage_calls
from ...calls import (
    AlreadyActive,
    CallError,
    CallStore,
    NoActiveCall,
    PermissionDenied,
    WrongContext,
)
from ...calls.render import build_embed, format_log, format_results
from ...calls.roster import extract_npcs, flatten_mentions, split_tokens
from rollcall.config import calls as calls_cfg
from rollcall.config import core as core_cfg

logger = logging.getLogger(__name__)

Handler = Callable[[commands.Context, List[str]], Awaitable[None]]


def _primary(action: CallAction) -> str:
    return aliases_for(action)[0]


def _extra(action: CallAction) -> List[str]:
    return list(aliases_for(action)[1:])


# ----------------------------- Command Definitions ----------------------------- #


@register_cog
class Calls(commands.Cog):
    """
    Prefix commands for initiative roll calls.

    Every alias funnels through :meth:`dispatch`, which resolves the action
    from the alias table, checks guild context, and runs the matching
    handler against the bot's :class:`CallStore`.
    """

    def __init__(self, bot: commands.Bot, store: CallStore | None = None):
        self.bot = bot
        if store is None:
            store = getattr(bot, "call_store", None)
        self.store: CallStore = store if store is not None else CallStore()
        self._handlers: Dict[CallAction, Handler] = {
            CallAction.OPEN: self._open,
            CallAction.ADD: self._add,
            CallAction.CLOSE: self._close,
            CallAction.REFRESH: self._refresh,
            CallAction.LOG: self._log,
        }

    # ----------------------------- Discord surface ----------------------------- #

    @commands.command(name=_primary(CallAction.OPEN), aliases=_extra(CallAction.OPEN))
    async def call_open(self, ctx: commands.Context, *, args: str = "") -> None:
        """Start a roll call: `call <title> <text...> @mentions +NPC`."""
        await self.dispatch(ctx, ctx.invoked_with or _primary(CallAction.OPEN), args)

    @commands.command(name=_primary(CallAction.ADD), aliases=_extra(CallAction.ADD))
    async def call_add(self, ctx: commands.Context, *, args: str = "") -> None:
        """Add mentioned users, role members and +NPCs to the active call."""
        await self.dispatch(ctx, ctx.invoked_with or _primary(CallAction.ADD), args)

    @commands.command(name=_primary(CallAction.CLOSE), aliases=_extra(CallAction.CLOSE))
    async def call_close(self, ctx: commands.Context, *, args: str = "") -> None:
        """End the active call and print the results."""
        await self.dispatch(ctx, ctx.invoked_with or _primary(CallAction.CLOSE), args)

    @commands.command(name=_primary(CallAction.REFRESH), aliases=_extra(CallAction.REFRESH))
    async def call_refresh(self, ctx: commands.Context, *, args: str = "") -> None:
        """Repost the active call at the bottom of the channel."""
        await self.dispatch(ctx, ctx.invoked_with or _primary(CallAction.REFRESH), args)

    @commands.command(name=_primary(CallAction.LOG), aliases=_extra(CallAction.LOG))
    async def call_log(self, ctx: commands.Context, *, args: str = "") -> None:
        """Print the roll history of the active call."""
        await self.dispatch(ctx, ctx.invoked_with or _primary(CallAction.LOG), args)

    async def cog_command_error(self, ctx: commands.Context, error: Exception) -> None:
        """Answer expected call failures with their fixed message."""

        original = getattr(error, "original", error)
        if not isinstance(original, CallError):
            logger.error(
                "Call command %s failed", getattr(ctx, "invoked_with", "?"), exc_info=original
            )
            return

        logger.info("Call command %s rejected: %s", ctx.invoked_with, original.message)
        content = original.message
        if original.hint:
            content = f"{content}\n{original.hint}"
        await ctx.send(content)

    # ----------------------------- Dispatch ----------------------------- #

    async def dispatch(self, ctx: commands.Context, alias: str, raw: str = "") -> None:
        """
        Run the call command bound to ``alias``.

        :raises WrongContext: Invoked outside a guild channel.
        :raises KeyError: ``alias`` is not a call alias.
        """
        action = resolve_action(alias)
        if action is None:
            raise KeyError(f"Unknown call alias: {alias}")

        if ctx.guild is None:
            raise WrongContext()

        await self._handlers[action](ctx, split_tokens(raw))

    def _require_permission(self, ctx: commands.Context, action: str) -> None:
        if not can_manage_calls(ctx.author, ctx.channel):
            raise PermissionDenied(action)

    def _require_active(self, ctx: commands.Context) -> None:
        if self.store.find_active(ctx.channel.id) is None:
            raise NoActiveCall()

    async def _delete_command(self, ctx: commands.Context) -> None:
        await ctx.message.delete(delay=calls_cfg.COMMAND_DELETE_DELAY)

    async def _record_display(self, ctx: commands.Context, sent: discord.Message) -> None:
        """
        Store ``sent`` as the call's display message.

        A close that lands while the embed was being sent leaves nothing to
        record; the orphaned embed is removed instead.
        """
        try:
            await self.store.set_message(ctx.channel.id, sent.id)
        except NoActiveCall:
            logger.info(
                "Call in channel %s closed before message %s was recorded; removing it",
                ctx.channel.id,
                sent.id,
            )
            await sent.delete(delay=calls_cfg.REPLACED_DELETE_DELAY)

    # ----------------------------- Handlers ----------------------------- #

    async def _open(self, ctx: commands.Context, tokens: List[str]) -> None:
        """
        Open a call, e.g.
        ``/callfor Initiative! You are attacked by Goblins @party +Goblins``.
        """
        self._require_permission(ctx, "start calls")

        if self.store.find_active(ctx.channel.id) is not None:
            raise AlreadyActive(
                hint=f"End calls with `{core_cfg.COMMAND_PREFIX}{_primary(CallAction.CLOSE)}`"
            )

        title = tokens[0] if tokens else ""
        text = " ".join(tokens[1:])
        mentions = flatten_mentions(ctx.message.mentions, ctx.message.role_mentions)
        npcs = extract_npcs(tokens)
        logger.info("Found in call: mentions=%s npcs=%s", mentions, npcs)

        call = await self.store.open(ctx.channel.id, title, text, mentions, npcs)

        # Plain message rather than a webhook so it can be edited later
        sent = await ctx.send(embed=build_embed(call))
        await self._record_display(ctx, sent)
        await self._delete_command(ctx)

    async def _add(self, ctx: commands.Context, tokens: List[str]) -> None:
        """Add participants, e.g. ``/calladd @Party +Goblin``."""
        self._require_active(ctx)
        self._require_permission(ctx, "add mentions to calls")

        mentions = flatten_mentions(ctx.message.mentions, ctx.message.role_mentions)
        npcs = extract_npcs(tokens)
        logger.info("Found in call add: mentions=%s npcs=%s", mentions, npcs)

        call = await self.store.add_roster(ctx.channel.id, mentions, npcs)
        if call.message is None:
            return

        try:
            display = await ctx.channel.fetch_message(call.message)
        except discord.NotFound:
            logger.warning(
                "Display message %s for call %r is gone; posting a new one",
                call.message,
                call.name,
            )
            sent = await ctx.send(embed=build_embed(call))
            await self._record_display(ctx, sent)
        else:
            await display.edit(embed=build_embed(call))
        await self._delete_command(ctx)

    async def _refresh(self, ctx: commands.Context, tokens: List[str]) -> None:
        """Repost the call and remove the old post, mostly to move it down the chat."""
        self._require_active(ctx)
        self._require_permission(ctx, "refresh calls")

        call = await self.store.refresh(ctx.channel.id)
        if call.message is not None:
            try:
                old = await ctx.channel.fetch_message(call.message)
            except discord.NotFound:
                logger.warning(
                    "Display message %s for call %r is gone; posting a new one",
                    call.message,
                    call.name,
                )
            else:
                await old.delete(delay=calls_cfg.REPLACED_DELETE_DELAY)

        sent = await ctx.send(embed=build_embed(call))
        await self._record_display(ctx, sent)
        await self._delete_command(ctx)

    async def _close(self, ctx: commands.Context, tokens: List[str]) -> None:
        """End the active call and print rolls, highest first."""
        self._require_active(ctx)
        self._require_permission(ctx, "end calls")

        results = await self.store.close(ctx.channel.id)
        await ctx.send(format_results(results))
        await self._delete_command(ctx)

    async def _log(self, ctx: commands.Context, tokens: List[str]) -> None:
        """Print the roll history of the active call."""
        lines = await self.store.log(ctx.channel.id)
        await ctx.send(format_log(lines))
        await self._delete_command(ctx)
