"""Outcome types returned by event handling."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .boards.base import BoardResult


class Outcome(Enum):
    """How the handling of a label event ended."""

    IGNORED_NO_CONFIG = "ignored_no_config"
    IGNORED_BOT = "ignored_bot"
    IGNORED_LABEL = "ignored_label"
    BOARD_NOT_FOUND = "board_not_found"
    COLUMN_NOT_FOUND = "column_not_found"
    REMOTE_FAILURE = "remote_failure"
    COMPLETED = "completed"

    @property
    def is_ignored(self) -> bool:
        return self.value.startswith("ignored_")


@dataclass
class HandlerResult:
    """Result of handling one label event.

    Attributes:
        outcome: Where handling stopped
        message: Notification text composed for the event, if any
        card_result: Result of the card create/delete, if attempted
        notified: Whether the notification was posted to Slack
        detail: Context for failed outcomes
    """

    outcome: Outcome
    message: Optional[str] = None
    card_result: Optional[BoardResult] = None
    notified: bool = False
    detail: Optional[str] = None
