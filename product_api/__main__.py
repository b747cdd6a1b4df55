"""Run the product API: python -m product_api"""

import uvicorn

from .config import get_settings
from .logger import get_logger
from .main import create_app

logger = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="warning")


if __name__ == "__main__":
    main()
