"""GitHub client for classic project boards and repository files."""

import base64
import binascii
import logging
from typing import Optional

import httpx

from .base import Board, BoardResult, Card, Column, ProjectBoardClient

logger = logging.getLogger(__name__)


def _failure(operation: str, error: Exception) -> BoardResult:
    if isinstance(error, httpx.HTTPStatusError):
        return BoardResult(
            success=False,
            message=f"GitHub error while trying to {operation}: {error.response.status_code}",
        )
    return BoardResult(
        success=False, message=f"Connection error while trying to {operation}: {error}"
    )


class GitHubBoardClient(ProjectBoardClient):
    """Board client backed by the GitHub REST API."""

    # Classic projects are still behind the inertia preview media type
    ACCEPT = "application/vnd.github.inertia-preview+json"
    PER_PAGE = 100

    def __init__(self, token: str, api_base: str = "https://api.github.com"):
        self.token = token
        self.api_base = api_base.rstrip("/")
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Accept": self.ACCEPT}
            if self.token:
                headers["Authorization"] = f"token {self.token}"
            self._client = httpx.AsyncClient(headers=headers, timeout=30.0)
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get_all(self, url: str, params: Optional[dict] = None) -> list[dict]:
        """GET a list endpoint, following ``Link: rel="next"`` pages."""
        client = await self._get_client()
        items: list[dict] = []
        params = {**(params or {}), "per_page": self.PER_PAGE}
        next_url: Optional[str] = url
        while next_url:
            response = await client.get(next_url, params=params)
            response.raise_for_status()
            items.extend(response.json())
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None
        return items

    async def list_open_boards(self, org: str) -> BoardResult:
        """List open projects of an organization."""
        try:
            items = await self._get_all(
                f"{self.api_base}/orgs/{org}/projects", params={"state": "open"}
            )
            boards = [Board(id=p["id"], name=p["name"]) for p in items]
            return BoardResult(
                success=True, message=f"Fetched {len(boards)} projects", data=boards
            )

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            return _failure(f"fetch projects for {org}", e)

    async def list_columns(self, board_id: int) -> BoardResult:
        """List columns of a project."""
        try:
            items = await self._get_all(f"{self.api_base}/projects/{board_id}/columns")
            columns = [Column(id=c["id"], name=c["name"]) for c in items]
            return BoardResult(
                success=True, message=f"Fetched {len(columns)} columns", data=columns
            )

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            return _failure(f"fetch columns for project {board_id}", e)

    async def create_card(
        self, column_id: int, content_type: str, content_id: int
    ) -> BoardResult:
        """Create a project card in a column."""
        try:
            client = await self._get_client()
            response = await client.post(
                f"{self.api_base}/projects/columns/{column_id}/cards",
                json={"content_type": content_type, "content_id": content_id},
            )
            response.raise_for_status()
            return BoardResult(
                success=True,
                message="Card created in GitHub",
                data=self._convert_card(response.json(), column_id),
            )

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            return _failure(f"create card in column {column_id}", e)

    async def list_cards(self, column_id: int) -> BoardResult:
        """List all cards of a column."""
        try:
            items = await self._get_all(
                f"{self.api_base}/projects/columns/{column_id}/cards"
            )
            cards = [self._convert_card(item, column_id) for item in items]
            return BoardResult(
                success=True, message=f"Fetched {len(cards)} cards", data=cards
            )

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            return _failure(f"fetch cards for column {column_id}", e)

    async def delete_card(self, card_id: int) -> BoardResult:
        """Delete a project card."""
        try:
            client = await self._get_client()
            response = await client.delete(
                f"{self.api_base}/projects/columns/cards/{card_id}"
            )
            response.raise_for_status()
            return BoardResult(success=True, message="Card deleted in GitHub")

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            return _failure(f"delete card {card_id}", e)

    async def get_repo_file(self, owner: str, repo: str, path: str) -> Optional[str]:
        """Fetch a text file from a repository's default branch.

        Returns:
            The decoded file content, or None if it doesn't exist or
            can't be fetched
        """
        try:
            client = await self._get_client()
            response = await client.get(
                f"{self.api_base}/repos/{owner}/{repo}/contents/{path}"
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                f"GitHub error fetching {path} from {owner}/{repo}: {e.response.status_code}"
            )
            return None
        except httpx.RequestError as e:
            logger.error(f"Connection error fetching {path} from {owner}/{repo}: {e}")
            return None

        if not isinstance(data, dict):
            # Directories come back as a listing
            logger.error(f"{path} in {owner}/{repo} is not a file")
            return None

        if data.get("encoding") != "base64":
            return data.get("content")
        try:
            return base64.b64decode(data.get("content") or "").decode("utf-8")
        except (binascii.Error, ValueError) as e:
            logger.error(f"Couldn't decode {path} from {owner}/{repo}: {e}")
            return None

    def _convert_card(self, item: dict, column_id: Optional[int] = None) -> Card:
        """Convert a GitHub card payload to a Card."""
        return Card(
            id=item["id"],
            url=item.get("url", ""),
            column_id=column_id,
            content_url=item.get("content_url") or "",
        )
