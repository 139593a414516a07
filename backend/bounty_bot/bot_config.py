"""Per-repository bot configuration loader.

The effective config for a repository is the bundled default file
shallow-merged with the repository's own ``.github/<bot_config_file>``.
Only the ``bounty-project-board`` and ``slack`` sections are read.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import yaml

logger = logging.getLogger(__name__)

BOARD_SECTION = "bounty-project-board"

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "github-bot.yml"


@dataclass(frozen=True)
class BoardConfig:
    """The ``bounty-project-board`` section plus the notification room."""

    board_name: str
    watched_label_name: str
    approval_column_name: str
    bounty_label_name: str
    notification_channel: Optional[str] = None


def parse_config_text(text: str, source: str = "<string>") -> dict:
    """Parse YAML config text, returning an empty dict when unusable."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse bot config from {source}: {e}")
        return {}

    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Ignoring bot config from {source}: not a mapping")
        return {}
    return data


def load_default_config(config_path: Optional[Path] = None) -> dict:
    """Load the bundled (or overridden) default bot config from YAML.

    Args:
        config_path: Path to config file. If None, uses the bundled default.

    Returns:
        The parsed mapping, or an empty dict if the file is missing.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.info(f"Default bot config not found at {config_path}")
        return {}

    data = parse_config_text(config_path.read_text(), str(config_path))
    logger.info(f"Loaded default bot config from {config_path}")
    return data


def merge_config(default: dict, override: dict) -> dict:
    """Shallow merge: top-level keys in ``override`` replace the defaults."""
    merged = dict(default)
    merged.update(override)
    return merged


def get_notification_channel(config: dict) -> Optional[str]:
    """Read ``slack.notification.room`` from a config mapping."""
    slack = config.get("slack")
    if not isinstance(slack, dict):
        return None
    notification = slack.get("notification")
    if not isinstance(notification, dict):
        return None
    return notification.get("room")


def board_config_from(config: Optional[dict]) -> Optional[BoardConfig]:
    """Extract the board config, or None when the section is absent."""
    if not config:
        return None

    section = config.get(BOARD_SECTION)
    if not isinstance(section, dict):
        return None

    return BoardConfig(
        board_name=section.get("name", ""),
        watched_label_name=section.get("awaiting-approval-label-name", ""),
        approval_column_name=section.get("awaiting-approval-column-name", ""),
        bounty_label_name=section.get("bounty-label-name", ""),
        notification_channel=get_notification_channel(config),
    )


class RepoFileSource(Protocol):
    async def get_repo_file(
        self, owner: str, repo: str, path: str
    ) -> Optional[str]: ...


class BotConfigLoader:
    """Loads the effective bot config for a repository on every event."""

    def __init__(
        self,
        source: RepoFileSource,
        file_name: str = "github-bot.yml",
        default_config: Optional[dict] = None,
    ):
        self.source = source
        self.file_name = file_name
        self.default_config = default_config or {}

    async def load(self, owner: str, repo: str) -> dict:
        """Fetch ``.github/<file_name>`` and merge it over the defaults."""
        path = f".github/{self.file_name}"
        text = await self.source.get_repo_file(owner, repo, path)
        if text is None:
            logger.debug(f"No {path} in {owner}/{repo}, using defaults")
            return dict(self.default_config)

        repo_config = parse_config_text(text, f"{owner}/{repo}:{path}")
        return merge_config(self.default_config, repo_config)
