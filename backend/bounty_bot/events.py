"""Event data classes for label webhooks."""

from dataclasses import dataclass, field
from enum import Enum


class EventAction(Enum):
    """Label changes the bot reacts to."""

    LABELED = "labeled"
    UNLABELED = "unlabeled"

    @property
    def is_assign(self) -> bool:
        return self is EventAction.LABELED


@dataclass(frozen=True)
class Issue:
    """The issue carried by a label event.

    Attributes:
        id: GitHub's global issue id (used as card content id)
        number: Issue number within the repository
        url: API URL of the issue, matched against card content URLs
        html_url: Browser URL of the issue, used in notifications
        labels: Label names on the issue at event time
    """

    id: int
    number: int
    url: str
    html_url: str = ""
    labels: frozenset = field(default_factory=frozenset)

    @property
    def link(self) -> str:
        return self.html_url or self.url

    def has_label(self, name: str) -> bool:
        return name in self.labels


@dataclass(frozen=True)
class LabelEvent:
    """An ``issues.labeled`` / ``issues.unlabeled`` delivery."""

    action: EventAction
    repository_owner: str
    repository_name: str
    issue: Issue
    label_name: str
    is_bot_originated: bool = False

    @property
    def repo_full_name(self) -> str:
        return f"{self.repository_owner}/{self.repository_name}"

    @classmethod
    def from_webhook(cls, action: str, payload: dict) -> "LabelEvent":
        """Build an event from a GitHub ``issues`` webhook payload.

        Raises:
            ValueError: If the action is not a label change
            KeyError: If the payload lacks a required field
        """
        event_action = EventAction(action)
        repository = payload["repository"]
        raw_issue = payload["issue"]
        sender = payload.get("sender") or {}

        issue = Issue(
            id=raw_issue["id"],
            number=raw_issue["number"],
            url=raw_issue["url"],
            html_url=raw_issue.get("html_url", ""),
            labels=frozenset(
                label["name"] for label in raw_issue.get("labels") or []
            ),
        )
        return cls(
            action=event_action,
            repository_owner=repository["owner"]["login"],
            repository_name=repository["name"],
            issue=issue,
            label_name=payload["label"]["name"],
            is_bot_originated=sender.get("type") == "Bot",
        )
