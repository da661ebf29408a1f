from typing import Any, Awaitable, Callable, Dict, Mapping

import discord

from eventlog.util.logger import get_logger

logger = get_logger("event_log_modal")

EVENT_LOG_MODAL_ID = "eventLogModal"
HOST_USERNAME_FIELD_ID = "hostUsername"
EVENT_TIME_FIELD_ID = "eventTime"

SubmitHandler = Callable[[discord.Interaction, str, str], Awaitable[None]]


class EventLogModal(discord.ui.Modal):
    """Two-field form shown after ``/logevent`` accepts a proof image.

    The modal only collects text; the submission itself is handed to
    ``on_submit`` together with the host username and event time.
    """

    def __init__(self, on_submit: SubmitHandler):
        super().__init__(title="Event Log Submission", custom_id=EVENT_LOG_MODAL_ID)
        self.on_submit = on_submit

        self.host_input = discord.ui.InputText(
            label="What is the host's username?",
            custom_id=HOST_USERNAME_FIELD_ID,
            style=discord.InputTextStyle.short,
            required=True,
        )
        self.time_input = discord.ui.InputText(
            label="Event Time (e.g., 8:30 PM EST)",
            custom_id=EVENT_TIME_FIELD_ID,
            style=discord.InputTextStyle.short,
            required=True,
        )
        self.add_item(self.host_input)
        self.add_item(self.time_input)

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.on_submit(interaction, self.host_input.value or "", self.time_input.value or "")

    async def on_error(self, error: Exception, interaction: discord.Interaction) -> None:
        user_id = getattr(interaction.user, "id", "<unknown>")
        logger.error("Event log modal failed for user %s: %s", user_id, error, exc_info=error)


def read_text_inputs(data: Mapping[str, Any]) -> Dict[str, str]:
    """Map each text input's ``custom_id`` to its value in a raw modal submit payload."""
    values: Dict[str, str] = {}
    for row in data.get("components") or []:
        for component in row.get("components") or []:
            custom_id = component.get("custom_id")
            if custom_id:
                values[custom_id] = component.get("value") or ""
    return values
