"""Resolve the configured project board and column for an organization."""

import logging
from dataclasses import dataclass
from typing import Optional

from .boards.base import Board, Column, ProjectBoardClient
from .outcomes import Outcome

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    outcome: Outcome
    board: Optional[Board] = None
    column: Optional[Column] = None
    message: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.column is not None


def _first_named(items: list, name: str):
    """First item with a matching name, in the order the API returned them."""
    return next((item for item in items if item.name == name), None)


async def resolve_column(
    client: ProjectBoardClient, org_name: str, board_name: str, column_name: str
) -> ResolveResult:
    """Find ``column_name`` in the open board ``board_name`` of ``org_name``.

    Board and column are fetched fresh on every call. Any failure stops
    resolution before further remote calls are made.
    """
    boards = await client.list_open_boards(org_name)
    if not boards.success:
        logger.error(f"Couldn't fetch the github projects for {org_name}: {boards.message}")
        return ResolveResult(Outcome.REMOTE_FAILURE, message=boards.message)

    board = _first_named(boards.data, board_name)
    if board is None:
        message = f"Couldn't find project {board_name} in {org_name} org"
        logger.error(message)
        return ResolveResult(Outcome.BOARD_NOT_FOUND, message=message)

    logger.debug(f"Fetched {board.name} project ({board.id})")

    columns = await client.list_columns(board.id)
    if not columns.success:
        logger.error(
            f"Couldn't fetch the github columns for project {board.id}: {columns.message}"
        )
        return ResolveResult(Outcome.REMOTE_FAILURE, board=board, message=columns.message)

    column = _first_named(columns.data, column_name)
    if column is None:
        message = f"Couldn't find {column_name} column in project {board.name}"
        logger.error(message)
        return ResolveResult(Outcome.COLUMN_NOT_FOUND, board=board, message=message)

    logger.debug(f"Fetched {column.name} column ({column.id})")
    return ResolveResult(Outcome.COMPLETED, board=board, column=column)
