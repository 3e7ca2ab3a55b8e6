"""Process entry point: ``python -m bunny_webhook``."""

from __future__ import annotations

import logging
import sys

import uvicorn

from bunny_webhook.config import load_config
from bunny_webhook.dns import get_solver
from bunny_webhook.server import create_app

logger = logging.getLogger("bunny_webhook")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = load_config()
    except ValueError as exc:
        logger.critical("Invalid configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(config.log_level)

    app = create_app(config, get_solver(config))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=config.port,
        ssl_certfile=config.tls_cert_file,
        ssl_keyfile=config.tls_key_file,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
