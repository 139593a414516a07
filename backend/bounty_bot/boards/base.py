"""Base classes for project board clients."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Board:
    id: int
    name: str


@dataclass(frozen=True)
class Column:
    id: int
    name: str


@dataclass(frozen=True)
class Card:
    """A board card.

    Attributes:
        id: Card id
        url: API URL of the card
        column_id: Column holding the card
        content_url: API URL of the referenced issue (empty for notes)
    """

    id: int
    url: str
    column_id: Optional[int] = None
    content_url: str = ""


@dataclass
class BoardResult:
    """Result of an operation against the board API.

    Attributes:
        success: Whether the operation completed successfully
        message: Human-readable result message
        data: Payload of the operation (boards, columns, cards or a card)
    """

    success: bool
    message: str
    data: Any = None


class ProjectBoardClient(ABC):
    """Abstract base class for project board APIs."""

    @abstractmethod
    async def list_open_boards(self, org: str) -> BoardResult:
        """List open boards of an organization.

        Returns:
            BoardResult with a list of Board in remote order
        """
        pass

    @abstractmethod
    async def list_columns(self, board_id: int) -> BoardResult:
        """List columns of a board.

        Returns:
            BoardResult with a list of Column in remote order
        """
        pass

    @abstractmethod
    async def create_card(
        self, column_id: int, content_type: str, content_id: int
    ) -> BoardResult:
        """Create a card referencing some content in a column.

        Returns:
            BoardResult with the created Card
        """
        pass

    @abstractmethod
    async def list_cards(self, column_id: int) -> BoardResult:
        """List all cards in a column.

        Returns:
            BoardResult with a list of Card
        """
        pass

    @abstractmethod
    async def delete_card(self, card_id: int) -> BoardResult:
        """Delete a card."""
        pass

    async def find_card_for_issue(self, column_id: int, issue_url: str) -> BoardResult:
        """Find the card in a column that references an issue.

        Returns:
            BoardResult whose data is the matching Card, or None if the
            column holds no card for the issue
        """
        result = await self.list_cards(column_id)
        if not result.success:
            return result

        card = next((c for c in result.data if c.content_url == issue_url), None)
        message = "Card found" if card else "No card for issue"
        return BoardResult(success=True, message=message, data=card)
