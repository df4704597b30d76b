"""Run the confhub API server with uvicorn."""

import uvicorn

from confhub.app import create_app
from confhub.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
