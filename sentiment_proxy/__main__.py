"""Run the proxy with uvicorn: ``python -m sentiment_proxy``."""

import uvicorn

from sentiment_proxy.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "sentiment_proxy.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
