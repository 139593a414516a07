"""Clients for project board APIs."""

from .base import Board, BoardResult, Card, Column, ProjectBoardClient
from .github import GitHubBoardClient

__all__ = [
    "Board",
    "BoardResult",
    "Card",
    "Column",
    "ProjectBoardClient",
    "GitHubBoardClient",
]
