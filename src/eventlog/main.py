"""
Discord Event Logger Bot
========================

A Discord bot that lets members submit proof-backed event logs through
``/logevent`` and a short modal form, and posts each log as an embed to a
channel chosen by the server administrators.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. EVENTLOG_HOME environment variable, if set.
    2. If running in a frozen/compiled context (e.g., PyInstaller, Nuitka), use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("EVENTLOG_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from eventlog.configuration.app_configuration import CONFIG_PATH, AppConfig
from eventlog.configuration.event_config import EventConfigError, EventConfigStore
from eventlog.submissions.pending_submissions import PendingSubmissionTable
from eventlog.util.logger import get_logger, handle_exception


logger = get_logger("main")


@dataclass(frozen=True, slots=True)
class BotCredentials:
    """Values read from the process environment."""

    token: str
    application_id: Optional[int] = None
    guild_id: Optional[int] = None


def _optional_snowflake(variable: str) -> Optional[int]:
    raw = os.getenv(variable)
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not a numeric Discord id.", variable, raw)
        return None


def load_environment() -> BotCredentials:
    """Load environment variables and return the bot credentials.

    Returns
    -------
    BotCredentials
        Token plus the optional application and guild ids.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.critical("'DISCORD_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return BotCredentials(
        token=token,
        application_id=_optional_snowflake("CLIENT_ID"),
        guild_id=_optional_snowflake("GUILD_ID"),
    )


def build_intents() -> discord.Intents:
    """Slash commands, modals and channel lookups only need the guilds intent."""
    intents = discord.Intents.none()
    intents.guilds = True
    return intents


def load_cogs(
    discord_bot_instance: discord.Bot,
    credentials: BotCredentials,
    config_store: EventConfigStore,
    pending_submissions: PendingSubmissionTable,
    app_config: AppConfig,
) -> None:
    """Register all cogs with the provided Discord bot instance."""
    from eventlog.bot.cogs import admin_cmds, event_log_cmds, events_listener

    events_listener.setup(discord_bot_instance, credentials.application_id)
    event_log_cmds.setup(discord_bot_instance, config_store, pending_submissions, app_config)
    admin_cmds.setup(discord_bot_instance, config_store)

    logger.info("All cogs loaded successfully.")


def create_bot(
    credentials: BotCredentials,
    config_store: EventConfigStore,
    pending_submissions: PendingSubmissionTable,
    app_config: AppConfig,
) -> discord.Bot:
    """Instantiate the Discord bot and register all cogs.

    Commands are scoped to ``GUILD_ID`` when it is set and global otherwise.
    Syncing is left to the ready handler so a failed sync is only logged.
    """
    debug_guilds = [credentials.guild_id] if credentials.guild_id else None
    bot = discord.Bot(
        intents=build_intents(),
        debug_guilds=debug_guilds,
        auto_sync_commands=False,
    )
    load_cogs(bot, credentials, config_store, pending_submissions, app_config)
    return bot


async def start_bot(bot: discord.Bot, token: str) -> None:
    """Start the Discord bot and handle lifecycle logging around the connection."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None = None) -> None:
    """Close the Discord connection if it is still open."""
    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord bot: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Load configuration, build the bot and run it, returning an exit code."""
    credentials = load_environment()

    app_config = AppConfig(CONFIG_PATH)
    config_store = EventConfigStore(app_config.event_config_path)
    try:
        config_store.load()
    except EventConfigError as exc:
        logger.critical("Failed to load event configuration: %s", exc)
        return 1

    try:
        bot = create_bot(credentials, config_store, PendingSubmissionTable(), app_config)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        return 1

    exit_code = 0
    try:
        await start_bot(bot, credentials.token)
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the bot token: %s", exc)
        exit_code = 1
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot)

    return exit_code


def main() -> int:
    """Entrypoint that runs the async runtime and returns the process exit code."""
    logger.info("Starting Discord Event Logger Bot…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        if code is None:
            return 1
        try:
            return int(code)
        except (ValueError, TypeError):
            logger.warning("SystemExit.code is not an int (%r); defaulting to 1", code)
            return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
