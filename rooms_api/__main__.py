"""Serve the API with uvicorn: ``python -m rooms_api``."""
from __future__ import annotations

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run("rooms_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
