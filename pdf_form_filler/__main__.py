import logging
import sys

from . import config
from .server import create_server

log = logging.getLogger(config.LOGGER_NAME)


def main() -> None:
    # stdout carries the MCP stdio transport, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )
    log.info(f"Starting {config.SERVER_NAME} MCP server v{config.VERSION}...")
    create_server().run(transport="stdio")


if __name__ == "__main__":
    main()
