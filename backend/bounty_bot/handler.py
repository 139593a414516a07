"""Bounty approval handler.

Reacts to the awaiting-approval label being added to or removed from an
issue: the issue's card is added to (or removed from) the approval column
of the configured project board, and a Slack message announces the change.
"""

import logging

from .boards.base import ProjectBoardClient
from .bot_config import BotConfigLoader, board_config_from
from .card_sync import sync_card
from .config import Settings
from .events import LabelEvent
from .label_filter import should_process
from .notifier import SlackNotifier, build_message, is_official_bounty
from .outcomes import HandlerResult, Outcome
from .resolver import resolve_column

logger = logging.getLogger(__name__)


class BountyApprovalHandler:
    """Handles awaiting-approval label changes."""

    def __init__(
        self,
        settings: Settings,
        board_client: ProjectBoardClient,
        notifier: SlackNotifier,
        config_loader: BotConfigLoader,
    ):
        self.settings = settings
        self.board_client = board_client
        self.notifier = notifier
        self.config_loader = config_loader

    async def handle(self, event: LabelEvent) -> HandlerResult:
        """Handle one label event.

        Nothing is raised back to the caller; the returned result says
        where handling stopped.
        """
        # Make sure we don't listen to our own writes
        if event.is_bot_originated:
            logger.debug(f"Ignoring bot-originated event on {event.repo_full_name}")
            return HandlerResult(Outcome.IGNORED_BOT)

        config = await self.config_loader.load(
            event.repository_owner, event.repository_name
        )
        board_config = board_config_from(config)
        if board_config is None:
            return HandlerResult(Outcome.IGNORED_NO_CONFIG)

        if not should_process(event, board_config.watched_label_name):
            return HandlerResult(Outcome.IGNORED_LABEL)

        verb = "labeling" if event.action.is_assign else "unlabeling"
        logger.info(
            f"Handling {verb} of #{event.issue.number} with {event.label_name} "
            f"on repo {event.repo_full_name}"
        )

        # TODO: cache the org project and column ids to save two roundtrips per event
        resolved = await resolve_column(
            self.board_client,
            event.repository_owner,
            board_config.board_name,
            board_config.approval_column_name,
        )
        if not resolved.resolved:
            return HandlerResult(resolved.outcome, detail=resolved.message)

        official = is_official_bounty(event.issue, board_config.bounty_label_name)

        card_result = await sync_card(
            self.board_client,
            event.action,
            resolved.column,
            event.issue,
            dry_run=self.settings.dry_run,
        )

        # A failed card write still gets announced
        message = build_message(
            event.action,
            event.issue.link,
            official,
            board_config.approval_column_name,
            board_config.board_name,
        )

        notified = False
        if self.settings.dry_run_bounty_approval:
            logger.info(f"Would have sent Slack message: {message!r}")
        elif not board_config.notification_channel:
            logger.warning(
                f"No slack.notification.room configured for {event.repo_full_name}"
            )
        else:
            notified = await self.notifier.send_message(
                board_config.notification_channel, message
            )

        return HandlerResult(
            Outcome.COMPLETED,
            message=message,
            card_result=card_result,
            notified=notified,
            detail=None if card_result.success else card_result.message,
        )
