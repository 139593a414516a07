"""Pytest configuration and fixtures."""

import pytest
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

from bounty_bot.boards.base import Board, BoardResult, Card, Column, ProjectBoardClient
from bounty_bot.bot_config import BotConfigLoader
from bounty_bot.config import Settings
from bounty_bot.handler import BountyApprovalHandler

ORG = "status-im"
REPO = "open-bounty"
ISSUE_ID = 281467
ISSUE_NUMBER = 42
ISSUE_URL = f"https://api.github.com/repos/{ORG}/{REPO}/issues/{ISSUE_NUMBER}"
ISSUE_HTML_URL = f"https://github.com/{ORG}/{REPO}/issues/{ISSUE_NUMBER}"

BOARD_NAME = "Status SOB Swarm"
WATCHED_LABEL = "bounty-awaiting-approval"
COLUMN_NAME = "bounty-awaiting-approval"
BOUNTY_LABEL = "bounty"
ROOM = "status-probot"


class FakeBoardClient(ProjectBoardClient):
    """In-memory board API recording every call."""

    def __init__(self, boards=None, columns=None, cards=None):
        self.boards: list[Board] = boards or []
        self.columns: dict[int, list[Column]] = columns or {}
        self.cards: dict[int, list[Card]] = cards or {}
        self.issue_urls: dict[int, str] = {}
        self.repo_files: dict[str, str] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple] = []
        self._next_card_id = 9000

    def _fail(self, operation: str) -> Optional[BoardResult]:
        if operation in self.failing:
            return BoardResult(success=False, message=f"GitHub error in {operation}: 500")
        return None

    async def list_open_boards(self, org):
        self.calls.append(("list_open_boards", org))
        return self._fail("list_open_boards") or BoardResult(
            True, "ok", list(self.boards)
        )

    async def list_columns(self, board_id):
        self.calls.append(("list_columns", board_id))
        return self._fail("list_columns") or BoardResult(
            True, "ok", list(self.columns.get(board_id, []))
        )

    async def create_card(self, column_id, content_type, content_id):
        self.calls.append(("create_card", column_id, content_type, content_id))
        failure = self._fail("create_card")
        if failure:
            return failure
        self._next_card_id += 1
        card = Card(
            id=self._next_card_id,
            url=f"https://api.github.com/projects/columns/cards/{self._next_card_id}",
            column_id=column_id,
            content_url=self.issue_urls.get(content_id, ""),
        )
        self.cards.setdefault(column_id, []).append(card)
        return BoardResult(True, "Card created", card)

    async def list_cards(self, column_id):
        self.calls.append(("list_cards", column_id))
        return self._fail("list_cards") or BoardResult(
            True, "ok", list(self.cards.get(column_id, []))
        )

    async def delete_card(self, card_id):
        self.calls.append(("delete_card", card_id))
        failure = self._fail("delete_card")
        if failure:
            return failure
        for column_id, cards in self.cards.items():
            self.cards[column_id] = [c for c in cards if c.id != card_id]
        return BoardResult(True, "Card deleted")

    async def get_repo_file(self, owner, repo, path):
        self.calls.append(("get_repo_file", owner, repo, path))
        return self.repo_files.get(f"{owner}/{repo}:{path}")

    @property
    def board_calls(self) -> list[tuple]:
        """Calls against the board API (config fetches excluded)."""
        return [c for c in self.calls if c[0] != "get_repo_file"]

    def call_names(self) -> list[str]:
        return [c[0] for c in self.board_calls]


@pytest.fixture
def default_config():
    """Bot config equivalent to the bundled defaults."""
    return {
        "bounty-project-board": {
            "name": BOARD_NAME,
            "awaiting-approval-label-name": WATCHED_LABEL,
            "awaiting-approval-column-name": COLUMN_NAME,
            "bounty-label-name": BOUNTY_LABEL,
        },
        "slack": {"notification": {"room": ROOM}},
    }


@pytest.fixture
def board_client():
    """Fake board API holding the swarm board and its columns."""
    client = FakeBoardClient(
        boards=[Board(id=1, name="Roadmap"), Board(id=2, name=BOARD_NAME)],
        columns={
            2: [
                Column(id=20, name="open"),
                Column(id=21, name=COLUMN_NAME),
                Column(id=22, name="done"),
            ]
        },
    )
    client.issue_urls[ISSUE_ID] = ISSUE_URL
    return client


@pytest.fixture
def settings():
    """Settings with dry-run flags off."""
    return Settings(
        github_token="test-token",
        slack_bot_token="xoxb-test",
        dry_run=False,
        dry_run_bounty_approval=False,
    )


@pytest.fixture
def notifier():
    """Notifier double that records sent messages."""
    mock = MagicMock()
    mock.send_message = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def make_handler(settings, board_client, notifier, default_config):
    """Build a handler; keyword overrides replace the default collaborators."""

    def _make(**overrides):
        client = overrides.get("board_client", board_client)
        loader = BotConfigLoader(
            client, "github-bot.yml", overrides.get("config", default_config)
        )
        return BountyApprovalHandler(
            overrides.get("settings", settings),
            client,
            overrides.get("notifier", notifier),
            loader,
        )

    return _make


@pytest.fixture
def make_payload():
    """Build an ``issues.labeled`` / ``issues.unlabeled`` webhook payload."""

    def _make(
        action="labeled",
        label=WATCHED_LABEL,
        labels=None,
        sender_type="User",
    ):
        if labels is None:
            labels = [label] if action == "labeled" else []
        return {
            "action": action,
            "issue": {
                "id": ISSUE_ID,
                "number": ISSUE_NUMBER,
                "url": ISSUE_URL,
                "html_url": ISSUE_HTML_URL,
                "title": "Add bounty widget",
                "labels": [{"name": name} for name in labels],
            },
            "label": {"name": label},
            "repository": {
                "name": REPO,
                "full_name": f"{ORG}/{REPO}",
                "owner": {"login": ORG},
            },
            "sender": {"login": "alice", "type": sender_type},
        }

    return _make
