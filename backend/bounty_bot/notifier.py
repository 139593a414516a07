"""Slack notifications for bounty board changes.

Handles:
- Composing the assigned / unassigned / approved-as-bounty messages
- Posting them to the configured channel once Slack is connected
- Holding messages back until the connection is established
"""

import logging
from collections import deque
from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from .events import EventAction, Issue

logger = logging.getLogger(__name__)

# Messages held while Slack isn't connected yet
PENDING_LIMIT = 100


def is_official_bounty(issue: Issue, bounty_label_name: str) -> bool:
    """Check if the issue carries the bounty label at event time."""
    return bool(bounty_label_name) and issue.has_label(bounty_label_name)


def build_message(
    action: EventAction,
    issue_url: str,
    is_official_bounty: bool,
    column_name: str,
    board_name: str,
) -> str:
    """Compose the notification for a board change."""
    if action.is_assign:
        return f"Assigned issue to {column_name} in {board_name} project\n{issue_url}"
    if is_official_bounty:
        return f"{issue_url} has been approved as an official bounty!"
    return f"Unassigned issue from {column_name} in {board_name} project\n{issue_url}"


class SlackNotifier:
    """Send notifications via Slack."""

    def __init__(self, token: str, client: Optional[WebClient] = None):
        self.token = token
        self.client = client or WebClient(token=token)
        self.connected = False
        self._pending: deque = deque(maxlen=PENDING_LIMIT)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def connect(self) -> bool:
        """Verify the bot token and flush messages queued meanwhile.

        Returns:
            True if Slack accepted the token
        """
        if not self.token:
            logger.warning("SLACK_BOT_TOKEN not set - notifications disabled")
            return False

        if not self._authenticate():
            return False

        await self.flush()
        return True

    def _authenticate(self) -> bool:
        try:
            response = self.client.auth_test()
        except SlackApiError as e:
            logger.error(f"Failed to connect to Slack: {e}")
            return False

        self.connected = True
        logger.info(f"Connected to Slack as {response.get('user')}")
        return True

    async def flush(self) -> int:
        """Post queued messages in the order they were sent.

        Returns:
            Number of messages posted
        """
        sent = 0
        while self._pending:
            channel, text = self._pending.popleft()
            if self._post(channel, text):
                sent += 1
        if sent:
            logger.info(f"Flushed {sent} queued Slack messages")
        return sent

    async def send_message(self, channel: str, text: str) -> bool:
        """Send a message to a channel.

        While Slack isn't connected, every send retries the connection
        first. Messages that still can't go out are queued rather than
        dropped and are posted ahead of the next message once connected.

        Returns:
            True if the message was posted now
        """
        if not self.token:
            logger.debug("Skipping Slack message - no bot token configured")
            return False

        if not self.connected and not self._authenticate():
            if len(self._pending) == self._pending.maxlen:
                logger.warning("Slack queue full, dropping oldest queued message")
            self._pending.append((channel, text))
            logger.info(f"Slack not connected yet, queued message for {channel}")
            return False

        await self.flush()
        return self._post(channel, text)

    def _post(self, channel: str, text: str) -> bool:
        try:
            self.client.chat_postMessage(channel=channel, text=text)
            logger.info(f"Sent Slack message to {channel}")
            return True
        except SlackApiError as e:
            logger.error(f"Failed to send Slack message to {channel}: {e}")
            return False
