"""Process entry point for the inquiry analyst.

``RUN_MODE=integrated`` (default) serves the API and the analysis page from
one uvicorn server. ``RUN_MODE=separate`` starts the API and the NiceGUI
page as two child processes; the page then talks to the API over HTTP.
Settings come from the environment and an optional .env file.
"""

import logging
import os
import subprocess
import sys
import time

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

APP_TITLE = "Gerador de Análise de Inquéritos"


def _host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def _api_port() -> int:
    return int(os.getenv("PORT", "8000"))


def run_integrated() -> None:
    """Serve the API and the analysis page on the same port."""
    import uvicorn
    from nicegui import ui

    from inquiry_analyst.api.app import create_app
    from inquiry_analyst.ui.chat_page import chat_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title=APP_TITLE,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "inquiry-analyst-secret"),
    )

    port = _api_port()
    logger.info(f"Analysis page and API on http://localhost:{port} (docs at /docs)")
    uvicorn.run(
        app,
        host=_host(),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def child_environment() -> dict[str, str]:
    """Environment for the page process, pointing it at the API process."""
    env = dict(os.environ)
    env.setdefault("API_BASE_URL", f"http://localhost:{_api_port()}")
    return env


def run_separate() -> None:
    """Run the API and the page as two processes until either one exits."""
    api = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "inquiry_analyst.api.app:app",
            "--host",
            _host(),
            "--port",
            str(_api_port()),
        ]
    )
    page = subprocess.Popen(
        [sys.executable, "-m", "inquiry_analyst.ui.chat_page"],
        env=child_environment(),
    )
    logger.info(f"API process {api.pid}, page process {page.pid}")

    try:
        while api.poll() is None and page.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Stopping...")
    finally:
        for process in (api, page):
            process.terminate()
            process.wait()


def main() -> None:
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting Inquiry Analyst ({mode})")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
