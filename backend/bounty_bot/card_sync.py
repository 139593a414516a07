"""Create or remove the board card tracking an issue."""

import logging

from .boards.base import BoardResult, Column, ProjectBoardClient
from .events import EventAction, Issue

logger = logging.getLogger(__name__)

CONTENT_TYPE_ISSUE = "Issue"


async def sync_card(
    client: ProjectBoardClient,
    action: EventAction,
    column: Column,
    issue: Issue,
    dry_run: bool = False,
) -> BoardResult:
    """Put the issue's card in ``column`` on assign, remove it on unassign.

    Failures are logged with the column and issue ids and returned, never
    raised or retried. On dry-run no board call is made at all.
    """
    if dry_run:
        verb = "created" if action.is_assign else "deleted"
        logger.info(
            f"Would have {verb} card for issue (column {column.id}, issue {issue.id})"
        )
        return BoardResult(success=True, message=f"Dry run: card not {verb}")

    if action.is_assign:
        return await _create_card(client, column, issue)
    return await _delete_card(client, column, issue)


async def _create_card(
    client: ProjectBoardClient, column: Column, issue: Issue
) -> BoardResult:
    result = await client.create_card(column.id, CONTENT_TYPE_ISSUE, issue.id)
    if result.success:
        card = result.data
        logger.info(f"Created card: {card.url} ({card.id})")
    else:
        logger.error(
            f"Couldn't create project card for the issue: {result.message} "
            f"(column {column.id}, issue {issue.id})"
        )
    return result


async def _delete_card(
    client: ProjectBoardClient, column: Column, issue: Issue
) -> BoardResult:
    lookup = await client.find_card_for_issue(column.id, issue.url)
    if not lookup.success:
        logger.error(
            f"Couldn't delete project card for the issue: {lookup.message} "
            f"(column {column.id}, issue {issue.id})"
        )
        return lookup

    card = lookup.data
    if card is None:
        # Already gone, e.g. removed by hand
        logger.debug(f"No card for {issue.url} in column {column.id}")
        return lookup

    result = await client.delete_card(card.id)
    if result.success:
        logger.info(f"Deleted card: {card.url} ({card.id})")
        result.data = card
    else:
        logger.error(
            f"Couldn't delete project card for the issue: {result.message} "
            f"(column {column.id}, issue {issue.id})"
        )
    return result
