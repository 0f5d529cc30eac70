"""Run the API with uvicorn on HOST:PORT (python -m storefront_api)."""

import uvicorn

from storefront_api.config import settings


def main() -> None:
    uvicorn.run(
        "storefront_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
