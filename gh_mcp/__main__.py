import asyncio
import logging
import sys

from gh_mcp.config import StartupError, configure_logging, load_settings
from gh_mcp.server import serve


def main() -> None:
    try:
        settings = load_settings()
    except StartupError as e:
        logging.basicConfig(level=logging.ERROR, format="%(levelname)s - %(message)s")
        logging.error("Cannot start GitHub MCP server: %s", e)
        sys.exit(1)

    configure_logging(settings)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
