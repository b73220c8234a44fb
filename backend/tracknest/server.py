"""
Console entrypoint: validate configuration, then serve the app with uvicorn.
"""
import logging
import sys

import uvicorn
from pydantic import ValidationError

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        from tracknest.core.config import Settings
        settings = Settings()
    except ValidationError as exc:
        logger.error(f"Invalid configuration: {exc}")
        sys.exit(2)

    logging.getLogger().setLevel(settings.LOG_LEVEL)
    logger.info(f"Starting {settings.APP_NAME} on {settings.HOST}:{settings.PORT}")
    uvicorn.run("tracknest.main:app", host=settings.HOST, port=settings.PORT, reload=False)


if __name__ == "__main__":
    main()
