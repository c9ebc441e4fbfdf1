from __future__ import annotations

import json
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def log_json(logger: logging.Logger, payload: dict) -> None:
    logger.info(json.dumps(payload, sort_keys=True, default=str))
