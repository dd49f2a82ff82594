# __main__.py
import logging
import sys

# Configure logging right away; stdout belongs to the stdio transport
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point for the Sports MCP application."""
    try:
        from sports_mcp.sports_server import main as server_main

        logger.info("Starting Sports MCP server...")
        server_main()
    except ModuleNotFoundError as e:
        logger.error("ModuleNotFoundError in __main__: %s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Unhandled exception in __main__")
        sys.exit(1)


if __name__ == "__main__":
    main()
