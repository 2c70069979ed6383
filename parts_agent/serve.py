"""Launch the parts assistant with Uvicorn."""

from __future__ import annotations

import logging
import os

import uvicorn

from parts_agent.core.config import get_settings

logger = logging.getLogger("parts_agent.launcher")


def main() -> None:
    settings = get_settings()
    # Hosting platforms inject PORT; it wins over the configured port.
    port = int(os.environ.get("PORT", settings.port))
    logger.debug("Starting %s on %s:%s", settings.app_name, settings.host, port)
    uvicorn.run("parts_agent.main:app", host=settings.host, port=port)


if __name__ == "__main__":
    main()
