"""
Embed rendering for submitted event logs.
"""

import datetime

import discord

from eventlog.configuration.app_configuration import EmbedSettings
from eventlog.datatypes.submission_datatypes import EventLogEntry


def build_event_log_embed(entry: EventLogEntry, settings: EmbedSettings) -> discord.Embed:
    """
    Create the embed posted to the log channel for one submission.

    Args:
        entry: Completed submission data.
        settings: Operator-configured title, color and footer.

    Returns:
        discord.Embed: Embed with the submitter, host, event type and time as
        fields and the proof attachment as its image.
    """
    embed = discord.Embed(
        title=settings.title,
        color=discord.Color(settings.color),
        timestamp=datetime.datetime.now(datetime.timezone.utc),
    )
    embed.add_field(
        name="Submitted By",
        value=f"{entry.submitter_mention} ({entry.submitter_name})",
        inline=True,
    )
    embed.add_field(name="Host's Username", value=entry.host_username, inline=True)
    embed.add_field(name="Event Type", value=entry.event_type, inline=True)
    embed.add_field(name="Event Time", value=entry.event_time, inline=False)
    embed.set_image(url=entry.proof_url)
    embed.set_footer(text=settings.footer)
    return embed
