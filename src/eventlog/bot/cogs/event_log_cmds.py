"""
Event log cog: the member-facing submission flow.

``/logevent`` takes an event type and an image attachment, remembers both for
the invoking user and opens :class:`EventLogModal`. When the modal comes back
the pending entry is taken out of the table before anything else happens, so
a submission is posted at most once; if the log channel turns out to be
missing the user has to start again from ``/logevent``.

Modal submits that py-cord has no live modal for (the bot restarted while the
form was open) are picked up by ``on_interaction`` and answered the same way.

Quick usage example
    from eventlog.bot.cogs import event_log_cmds
    event_log_cmds.setup(bot, config_store, pending_submissions, app_config)
"""

from typing import Dict

import discord
from discord.ext import commands

from eventlog.bot.autocomplete import event_type_autocomplete
from eventlog.configuration.app_configuration import AppConfig
from eventlog.configuration.event_config import EventConfigStore
from eventlog.datatypes.submission_datatypes import EventLogEntry
from eventlog.submissions.pending_submissions import PendingSubmissionTable
from eventlog.ui.event_log_embed import build_event_log_embed
from eventlog.ui.event_log_modal import (
    EVENT_LOG_MODAL_ID,
    EVENT_TIME_FIELD_ID,
    HOST_USERNAME_FIELD_ID,
    EventLogModal,
    read_text_inputs,
)
from eventlog.util.constants import (
    INVALID_PROOF_MESSAGE,
    LOG_CHANNEL_MISSING_MESSAGE,
    SESSION_NOT_FOUND_MESSAGE,
    SUBMISSION_SUCCESS_MESSAGE,
)
from eventlog.util.discord_utils import is_image_attachment, resolve_channel
from eventlog.util.logger import get_logger

logger = get_logger("event_log_cog")


class EventLogCog(commands.Cog):
    """Cog owning ``/logevent`` and the modal submission that completes it."""

    def __init__(
        self,
        discord_bot_instance,
        config_store: EventConfigStore,
        pending_submissions: PendingSubmissionTable,
        app_config: AppConfig,
    ):
        self.discord_bot_instance = discord_bot_instance
        self.config_store = config_store
        self.pending_submissions = pending_submissions
        self.app_config = app_config
        # Users with an EventLogModal sent by this process that has not finished yet.
        self.open_modals: Dict[int, EventLogModal] = {}
        logger.info("Event log cog loaded")

    @commands.slash_command(name="logevent", description="Submit a log for an event.")
    async def logevent(
        self,
        ctx: discord.ApplicationContext,
        eventtype: discord.Option(
            str,
            "The type of event you are logging.",
            autocomplete=event_type_autocomplete,
        ),
        proof: discord.Option(discord.Attachment, "The image proof for the event."),
    ):
        """Validate the proof attachment and open the event log modal."""
        if not is_image_attachment(proof):
            await ctx.respond(INVALID_PROOF_MESSAGE, ephemeral=True)
            return

        self.pending_submissions.put(ctx.author.id, proof.url, eventtype)
        logger.debug(
            "User %s started an event log for %r (%d pending)",
            ctx.author.id,
            eventtype,
            len(self.pending_submissions),
        )
        modal = EventLogModal(self.submit_from_modal)
        self.open_modals[ctx.author.id] = modal
        await ctx.send_modal(modal)

    @commands.Cog.listener(name="on_interaction")
    async def on_interaction(self, interaction: discord.Interaction):
        """Answer event log modal submits that no live modal will handle."""
        if interaction.type != discord.InteractionType.modal_submit:
            return
        data = interaction.data or {}
        if data.get("custom_id") != EVENT_LOG_MODAL_ID:
            return
        if interaction.user.id in self.open_modals:
            return

        logger.info("Handling orphaned event log modal from user %s", interaction.user.id)
        values = read_text_inputs(data)
        await self.complete_submission(
            interaction,
            values.get(HOST_USERNAME_FIELD_ID, ""),
            values.get(EVENT_TIME_FIELD_ID, ""),
        )

    async def submit_from_modal(
        self,
        interaction: discord.Interaction,
        host_username: str,
        event_time: str,
    ) -> None:
        """Handle a submit routed to a live :class:`EventLogModal`.

        The user stays in ``open_modals`` until the submission is finished so
        ``on_interaction`` leaves the same submit alone.
        """
        try:
            await self.complete_submission(interaction, host_username, event_time)
        finally:
            self.open_modals.pop(interaction.user.id, None)

    async def complete_submission(
        self,
        interaction: discord.Interaction,
        host_username: str,
        event_time: str,
    ) -> None:
        """Post the event log for the submitting user and confirm it to them.

        Errors raised by ``channel.send`` propagate to the caller: the modal's
        error hook for live modals, the bot's event error handler otherwise.
        """
        user = interaction.user
        pending = self.pending_submissions.take_and_clear(user.id)
        if pending is None:
            await interaction.response.send_message(SESSION_NOT_FOUND_MESSAGE, ephemeral=True)
            return

        log_channel = await resolve_channel(self.discord_bot_instance, self.config_store.log_channel_id)
        if log_channel is None:
            logger.warning("Dropped event log from user %s: log channel is not available", user.id)
            await interaction.response.send_message(LOG_CHANNEL_MISSING_MESSAGE, ephemeral=True)
            return

        entry = EventLogEntry.from_pending(
            pending,
            submitter_mention=user.mention,
            submitter_name=str(user),
            host_username=host_username,
            event_time=event_time,
        )
        await log_channel.send(embed=build_event_log_embed(entry, self.app_config.embed))
        logger.info("Logged %r event from user %s", entry.event_type, user.id)
        await interaction.response.send_message(SUBMISSION_SUCCESS_MESSAGE, ephemeral=True)


def setup(discord_bot_instance, config_store, pending_submissions, app_config):
    """Add the event log cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(
        EventLogCog(discord_bot_instance, config_store, pending_submissions, app_config)
    )
