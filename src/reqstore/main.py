#!/usr/bin/env python3
"""Run the reqstore HTTP host with uvicorn."""

from __future__ import annotations

import uvicorn

from reqstore.config import Settings
from reqstore.runtime import app_from_settings


def main() -> None:
    settings = Settings()
    app = app_from_settings(settings, title="reqstore")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
