"""
Admin cog: commands that change the log channel and the event type list.

Every command checks the Administrator permission on each call and replies
ephemerally. Changes are written to the event config file before the reply
is sent.
"""

import discord
from discord.ext import commands

from eventlog.bot.autocomplete import event_type_autocomplete
from eventlog.configuration.event_config import EventConfigStore
from eventlog.util.constants import PERMISSION_DENIED_MESSAGE
from eventlog.util.discord_utils import has_permissions
from eventlog.util.logger import get_logger

logger = get_logger("admin_cog")

# Channel kinds the bot can post an embed into.
LOG_CHANNEL_TYPES = [
    discord.ChannelType.text,
    discord.ChannelType.news,
    discord.ChannelType.voice,
    discord.ChannelType.stage_voice,
    discord.ChannelType.public_thread,
    discord.ChannelType.private_thread,
    discord.ChannelType.news_thread,
]


class EventAdminCog(commands.Cog):
    """Administrator commands for the event logger configuration."""

    def __init__(self, discord_bot_instance, config_store: EventConfigStore):
        self.discord_bot_instance = discord_bot_instance
        self.config_store = config_store
        logger.info("Admin cog loaded")

    async def _ensure_admin(self, ctx: discord.ApplicationContext) -> bool:
        if has_permissions(ctx, administrator=True):
            return True
        logger.info(
            "Denied /%s to non-admin user %s",
            getattr(ctx.command, "name", "<unknown>"),
            getattr(ctx.author, "id", "<unknown>"),
        )
        await ctx.respond(PERMISSION_DENIED_MESSAGE, ephemeral=True)
        return False

    @commands.slash_command(name="setlogchannel", description="Sets the channel for event logs (Admin only).")
    async def setlogchannel(
        self,
        ctx: discord.ApplicationContext,
        channel: discord.Option(
            discord.SlashCommandOptionType.channel,
            "The channel to send logs to.",
            channel_types=LOG_CHANNEL_TYPES,
        ),
    ):
        """Store the channel that receives event log embeds."""
        if not await self._ensure_admin(ctx):
            return
        self.config_store.set_log_channel(channel.id)
        await ctx.respond(f"Log channel has been set to {channel.mention}", ephemeral=True)

    @commands.slash_command(name="addeventtype", description="Adds a new type to the event list (Admin only).")
    async def addeventtype(
        self,
        ctx: discord.ApplicationContext,
        type: discord.Option(str, "The new event type to add."),
    ):
        """Append an event type unless it is already listed."""
        if not await self._ensure_admin(ctx):
            return
        if not self.config_store.add_event_type(type):
            await ctx.respond(f"'{type}' is already in the event list.", ephemeral=True)
            return
        await ctx.respond(f"Event type '{type}' has been added.", ephemeral=True)

    @commands.slash_command(name="removeeventtype", description="Removes a type from the event list (Admin only).")
    async def removeeventtype(
        self,
        ctx: discord.ApplicationContext,
        type: discord.Option(
            str,
            "The event type to remove.",
            autocomplete=event_type_autocomplete,
        ),
    ):
        """Remove an event type; unknown names are accepted silently."""
        if not await self._ensure_admin(ctx):
            return
        self.config_store.remove_event_type(type)
        await ctx.respond(f"Event type '{type}' has been removed.", ephemeral=True)


def setup(discord_bot_instance, config_store):
    """Add the admin cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(EventAdminCog(discord_bot_instance, config_store))
