"""Label filter - decides whether a label event concerns the bot."""

import logging

from .events import LabelEvent

logger = logging.getLogger(__name__)


def should_process(event: LabelEvent, watched_label_name: str) -> bool:
    """Check if a label event should be handled.

    Args:
        event: The incoming label event
        watched_label_name: Label configured as the approval trigger

    Returns:
        True if the event is user-originated and carries the watched label
    """
    # Make sure we don't react to our own writes
    if event.is_bot_originated:
        logger.debug(f"Ignoring bot-originated event on {event.repo_full_name}")
        return False

    if event.label_name != watched_label_name:
        logger.debug(
            f"{event.label_name} doesn't match watched {watched_label_name} label. Ignoring"
        )
        return False

    return True
