"""Status Bounty Bot - FastAPI Application.

Receives GitHub issue label webhooks, keeps the bounty approval column of
the organization's project board in sync and announces changes on Slack.
"""

import hashlib
import hmac
import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, HTTPException, Depends, Request

from .boards import GitHubBoardClient
from .bot_config import BotConfigLoader, load_default_config
from .config import Settings, get_settings
from .events import EventAction, LabelEvent
from .handler import BountyApprovalHandler
from .notifier import SlackNotifier

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

LABEL_ACTIONS = {action.value for action in EventAction}


def build_handler(settings: Settings) -> BountyApprovalHandler:
    """Wire the handler and its collaborators from settings."""
    board_client = GitHubBoardClient(settings.github_token, settings.github_api_base)
    default_path = (
        Path(settings.default_bot_config_path)
        if settings.default_bot_config_path
        else None
    )
    config_loader = BotConfigLoader(
        board_client, settings.bot_config_file, load_default_config(default_path)
    )
    notifier = SlackNotifier(settings.slack_bot_token)
    return BountyApprovalHandler(settings, board_client, notifier, config_loader)


# =============================================================================
# App Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Status Bounty Bot...")
    if settings.dry_run:
        logger.info("DRY_RUN set - board changes will only be logged")

    handler = build_handler(settings)
    app.state.handler = handler

    # Connect before the first delivery is dispatched
    await handler.notifier.connect()

    yield

    # Shutdown
    await handler.board_client.close()
    logger.info("Status Bounty Bot stopped")


app = FastAPI(
    title="Status Bounty Bot",
    description="Moves bounty issues awaiting approval onto the project board",
    version="0.1.0",
    lifespan=lifespan,
)


def get_handler(request: Request) -> BountyApprovalHandler:
    """Handler built at startup."""
    return request.app.state.handler


# =============================================================================
# Health
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


# =============================================================================
# Webhook Receivers
# =============================================================================


def verify_github_signature(payload: bytes, signature: str, secret: str) -> bool:
    """Verify GitHub webhook signature."""
    if not secret:
        return True  # Skip verification if no secret configured
    expected = (
        "sha256=" + hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
    )
    return hmac.compare_digest(expected, signature)


@app.post("/webhooks/github")
async def github_webhook(
    request: Request, handler: BountyApprovalHandler = Depends(get_handler)
):
    """Handle GitHub webhook events."""
    # Read body before parsing (for signature verification)
    body = await request.body()

    # Verify signature
    signature = request.headers.get("X-Hub-Signature-256", "")
    if not verify_github_signature(body, signature, settings.github_webhook_secret):
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Payload must be a JSON object")

    event = request.headers.get("X-GitHub-Event", "")
    action = payload.get("action", "")
    outcome = None

    if event == "issues" and action in LABEL_ACTIONS:
        try:
            label_event = LabelEvent.from_webhook(action, payload)
        except (KeyError, TypeError) as e:
            logger.warning(f"GitHub webhook: malformed issues.{action} payload ({e})")
            raise HTTPException(status_code=400, detail="Malformed label event")

        result = await handler.handle(label_event)
        outcome = result.outcome.value
        logger.info(
            f"GitHub webhook: issues.{action} #{label_event.issue.number} -> {outcome}"
        )

    return {"status": "ok", "event": event, "action": action, "outcome": outcome}
