"""Run the TradeLog API with uvicorn: ``python -m tradelog``."""

from __future__ import annotations

import sys

import uvicorn

from tradelog.api.main import create_app
from tradelog.config import load_settings
from tradelog.core.errors import ConfigurationError


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"TradeLog refused to start: {exc.message}", file=sys.stderr)
        return 1
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
