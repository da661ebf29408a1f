"""
In-memory table pairing a ``/logevent`` invocation with the modal that follows it.

Entries are keyed by the submitting user's id. A user has at most one pending
submission; a newer ``/logevent`` replaces the older one. Entries are removed
only when the modal is submitted, so an abandoned modal leaves its entry
behind until the process exits.
"""

from __future__ import annotations

from typing import Dict, Optional

from eventlog.datatypes.submission_datatypes import PendingSubmission
from eventlog.util.logger import get_logger

logger = get_logger("pending_submissions")


class PendingSubmissionTable:
    """Mapping of user id to :class:`PendingSubmission`."""

    def __init__(self) -> None:
        self._entries: Dict[int, PendingSubmission] = {}

    def put(self, user_id: int, proof_url: str, event_type: str) -> PendingSubmission:
        """Record a submission for ``user_id``, replacing any earlier one."""
        submission = PendingSubmission(proof_url=proof_url, event_type=event_type)
        if user_id in self._entries:
            logger.debug("Replacing pending submission for user %s", user_id)
        self._entries[user_id] = submission
        return submission

    def take_and_clear(self, user_id: int) -> Optional[PendingSubmission]:
        """Remove and return the entry for ``user_id`` in one step.

        The entry is gone once this returns, whatever the caller does next.
        """
        return self._entries.pop(user_id, None)

    def peek(self, user_id: int) -> Optional[PendingSubmission]:
        return self._entries.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
