"""
discord_utils.py
================

Stateless Discord helpers used by the cogs: permission checks, attachment
validation and log channel resolution.
"""

from typing import Optional

import discord

from eventlog.util.logger import get_logger

logger = get_logger("discord_utils")


def has_permissions(application_context: discord.ApplicationContext, **required_permissions) -> bool:
    """
    Check if the command issuer has all specified permissions in the guild.

    Users invoking a command outside a guild carry no guild permissions and
    always fail the check.

    Args:
        application_context (discord.ApplicationContext): The command context.
        **required_permissions: Permission flags to check.

    Returns:
        bool: True if all permissions are present, False otherwise.
    """
    permissions = getattr(application_context.author, "guild_permissions", None)
    if permissions is None:
        return False
    return all(getattr(permissions, permission_name, False) for permission_name in required_permissions)


def is_image_attachment(attachment: Optional[discord.Attachment]) -> bool:
    """Return True when the attachment declares an ``image/*`` content type."""
    if attachment is None:
        return False
    content_type = getattr(attachment, "content_type", None) or ""
    return content_type.startswith("image/")


async def resolve_channel(bot: discord.Bot, channel_id: Optional[str]) -> Optional[discord.abc.Messageable]:
    """
    Look up a channel by its stored id, from cache first and then the API.

    Returns None when the id is unset, malformed, unknown, or not visible to
    the bot.
    """
    if not channel_id:
        return None

    try:
        snowflake = int(channel_id)
    except (TypeError, ValueError):
        logger.warning("Stored log channel id %r is not a valid snowflake", channel_id)
        return None

    channel = bot.get_channel(snowflake)
    if channel is not None:
        return channel

    try:
        return await bot.fetch_channel(snowflake)
    except discord.NotFound:
        logger.warning("Log channel %s no longer exists", snowflake)
    except discord.Forbidden:
        logger.warning("Missing access to log channel %s", snowflake)
    except discord.HTTPException as exc:
        logger.error("Failed to fetch log channel %s: %s", snowflake, exc)
    return None
