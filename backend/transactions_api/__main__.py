"""Process bootstrap: python -m transactions_api serves the app with uvicorn."""

import uvicorn

from transactions_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "transactions_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
