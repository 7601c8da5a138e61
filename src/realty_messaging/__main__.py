"""Entrypoint: python -m realty_messaging"""
from __future__ import annotations

import uvicorn

from realty_messaging.config import settings


def main() -> None:
    uvicorn.run(
        "realty_messaging.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
