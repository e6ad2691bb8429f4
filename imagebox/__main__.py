import sys

import pytz
import structlog
import uvicorn
from pydantic import ValidationError

from .config import Settings
from .logging import setup_logging
from .main import create_app


logger = structlog.get_logger(__name__)


def main() -> None:
    try:
        settings = Settings()
    except ValidationError as e:
        setup_logging()
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors())
        logger.error("Invalid configuration", fields=missing, error=str(e))
        sys.exit(1)

    try:
        app = create_app(settings)
    except pytz.UnknownTimeZoneError as e:
        logger.error("Invalid configuration", fields="TZ_DEFAULT", error=f"unknown time zone {e}")
        sys.exit(1)
    except OSError as e:
        logger.error("Storage root unusable", storage=settings.storage, error=str(e))
        sys.exit(1)

    logger.info("listening", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
