from __future__ import annotations

import logging

from .config import Config, load_config
from .server import run_server

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("treeserve")


def configure_logging(config: Config) -> int:
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level


def main(argv: list[str] | None = None) -> None:
    config = load_config(argv)
    configure_logging(config)
    try:
        run_server(config)
    except KeyboardInterrupt:
        logger.info("Stopped serving %s", config.root_dir)


if __name__ == "__main__":
    main()
