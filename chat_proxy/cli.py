# chat_proxy/cli.py
"""Console entry point that serves the proxy with uvicorn."""

import os

import click
import uvicorn

from chat_proxy.config import Settings
from chat_proxy.logging_setup import setup_logging
from chat_proxy.main import create_app


@click.command()
@click.option("--host", default=lambda: os.getenv("HOST", "0.0.0.0"), show_default="0.0.0.0", help="Interface to bind.")
@click.option("--port", default=lambda: int(os.getenv("PORT", "8000")), show_default="8000", type=int, help="Port to listen on.")
def main(host: str, port: int) -> None:
    """Run the chat proxy. All other settings come from the environment."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
