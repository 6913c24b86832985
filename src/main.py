"""Main application entry point.

Runs FastAPI with the NiceGUI chat page mounted on the same server.
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


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the local API routes, NiceGUI serves the page at /.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.client.config import get_client_config
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_client_config()
    logger.info(
        f"Remote API at {config.api_base}, chunks of {config.chunk_size} words "
        f"(overlap {config.chunk_overlap}), {config.batch_size} chunks per batch"
    )

    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Classory AI Assistant",
        favicon="📚",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "classory-assistant-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
