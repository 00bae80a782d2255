"""
Console entry point: `python -m social_api` or `social-api`.

Runs uvicorn with the host and port from settings (PORT defaults to 9999).
"""

import uvicorn

from social_api.config import settings


def main() -> None:
    uvicorn.run(
        "social_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
