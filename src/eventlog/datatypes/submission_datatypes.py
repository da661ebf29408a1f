"""
Value types shared by the submission flow.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PendingSubmission:
    """Data captured by ``/logevent`` while the user fills in the modal."""

    proof_url: str
    event_type: str


@dataclass(frozen=True, slots=True)
class EventLogEntry:
    """A completed event log, ready to be rendered and posted."""

    submitter_mention: str
    submitter_name: str
    host_username: str
    event_type: str
    event_time: str
    proof_url: str

    @classmethod
    def from_pending(
        cls,
        pending: PendingSubmission,
        *,
        submitter_mention: str,
        submitter_name: str,
        host_username: str,
        event_time: str,
    ) -> "EventLogEntry":
        return cls(
            submitter_mention=submitter_mention,
            submitter_name=submitter_name,
            host_username=host_username,
            event_type=pending.event_type,
            event_time=event_time,
            proof_url=pending.proof_url,
        )
