"""Run the webhook server: ``python -m bounty_bot``."""

import uvicorn

from .config import get_settings


def main():
    """Run the server (blocking)."""
    settings = get_settings()
    uvicorn.run(
        "bounty_bot.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
