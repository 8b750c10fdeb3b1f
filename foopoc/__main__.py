"""Run the API under uvicorn: `python -m foopoc` or the `foopoc` script.

uvicorn stops accepting connections on SIGINT/SIGTERM and waits up to
SHUTDOWN_GRACE_SECONDS for in-flight requests before forcing shutdown.
"""

import sys

import uvicorn

from foopoc.config import get_settings
from foopoc.core.errors import ConfigError


def main() -> None:
    try:
        settings = get_settings()
    except ConfigError as exc:
        # Logging is configured from settings, so it is not available yet.
        print(f"{exc}", file=sys.stderr)
        raise SystemExit(1)

    uvicorn.run(
        "foopoc.main:app",
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    main()
