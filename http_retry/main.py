"""Main entry point for http-retry.

Initializes the FastAPI app and makes it runnable standalone.

Usage:
    Development: uvicorn http_retry.main:app --reload --port 8000
    Production: uvicorn http_retry.main:app --host 0.0.0.0 --port 8000
"""

from http_retry.api import create_app
from http_retry.config import config

app = create_app()


def run() -> None:
    """Run the API with uvicorn using environment configuration."""
    import uvicorn

    uvicorn.run(
        "http_retry.main:app",
        host=config.host(),
        port=config.port(),
        log_level=config.log_level().lower(),
    )


if __name__ == "__main__":
    run()
