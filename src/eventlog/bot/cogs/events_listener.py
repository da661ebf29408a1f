"""Event listener Cog for the event logger bot.

Handles the ready event (login logging and the one-shot slash command sync)
and turns unexpected command errors into a logged traceback plus a generic
ephemeral reply.
"""

from typing import Optional

import discord
from discord.ext import commands

from eventlog.util.constants import COMMAND_ERROR_MESSAGE
from eventlog.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle and command error handlers."""

    def __init__(self, discord_bot_instance, expected_application_id: Optional[int] = None):
        """Initialize the events listener cog.

        Parameters
        ----------
        discord_bot_instance:
            The Discord bot instance to attach this cog to.
        expected_application_id:
            Application id from the environment, compared against the id
            Discord reports once logged in.
        """
        self.bot = discord_bot_instance
        self.expected_application_id = expected_application_id
        self.commands_synced = False
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self):
        """Log the connected identity and register slash commands once per process."""
        if self.bot.user:
            logger.info(f"Logged in as {self.bot.user} (ID: {self.bot.user.id})")
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        application_id = getattr(self.bot, "application_id", None)
        if self.expected_application_id and application_id and application_id != self.expected_application_id:
            logger.warning(
                "CLIENT_ID %s does not match the logged-in application %s",
                self.expected_application_id,
                application_id,
            )

        if self.commands_synced:
            return
        self.commands_synced = True
        await self.sync_application_commands()

    async def sync_application_commands(self) -> None:
        """Push the command catalog to Discord. Failures are logged and not retried."""
        try:
            logger.info("Started refreshing application (/) commands.")
            await self.bot.sync_commands()
            logger.info("Successfully reloaded application (/) commands.")
        except Exception as exc:
            logger.error("Failed to register application commands: %s", exc, exc_info=True)

    @commands.Cog.listener(name="on_application_command_error")
    async def on_application_command_error(self, application_context: discord.ApplicationContext, error: Exception):
        """Handle errors from application commands with logging and user feedback."""
        if isinstance(error, commands.CommandNotFound):
            return

        command_name = getattr(application_context.command, "name", "<unknown>")
        logger.error(f"Error in command '{command_name}': {error}", exc_info=error)

        try:
            await application_context.respond(COMMAND_ERROR_MESSAGE, ephemeral=True)
        except discord.InteractionResponded:
            await application_context.followup.send(COMMAND_ERROR_MESSAGE, ephemeral=True)


def setup(discord_bot_instance, expected_application_id: Optional[int] = None):
    """Register the EventsListenerCog with the bot."""
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance, expected_application_id))
