"""Run the API server.

Usage:
    python -m exercise_tracker

Listens on $HOST:$PORT (default 0.0.0.0:3000).
"""

import logging

import uvicorn

from .config import Settings

logger = logging.getLogger("exercise_tracker")


def main():
    settings = Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info("Your app is listening on port %s", settings.PORT)
    uvicorn.run(
        "exercise_tracker.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
