"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface, on PORT (default 3000).
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the /api routes, NiceGUI serves the chat page at /.
    """
    import uvicorn
    from nicegui import ui

    from gemini_relay.api.app import create_app
    from gemini_relay.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Gemini Assistant",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "gemini-relay-secret"),
    )

    logger.info(f"Server listening on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
