#!/usr/bin/env python3
"""Start the MemeX API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from memex.config import Settings
from memex.util.observability import configure_logfire


def main() -> int:
    """Serve the API on the configured port."""
    settings = Settings()

    # Before the app import, so import-time failures are captured too
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting MemeX API",
            environment=settings.environment,
            port=settings.api.port,
        )
        uvicorn.run(
            "memex.interface.api.app:app",
            host="0.0.0.0",
            port=settings.api.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )
        return 0

    except Exception as e:
        logfire.error(
            "MemeX API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
