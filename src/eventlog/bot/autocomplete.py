from typing import List

import discord


async def event_type_autocomplete(ctx: discord.AutocompleteContext) -> List[str]:
    """Suggest configured event types that start with what the user has typed.

    Works for any cog exposing a ``config_store`` attribute.
    """
    cog = getattr(ctx.command, "cog", None)
    config_store = getattr(cog, "config_store", None)
    if config_store is None:
        return []
    return config_store.matching_event_types(ctx.value or "")
