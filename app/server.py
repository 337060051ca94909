"""
CLI entrypoint that serves the API, e.g.:

  python -m app.server

Binds LISTEN_HOST:LISTEN_PORT; if that port is taken, the next free port up
to 65535 is used instead.
"""

import logging
import socket
import sys

import uvicorn

from app.core.config import get_settings

MAX_PORT = 65535

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


class NoFreePortError(RuntimeError):
    pass


def port_is_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_free_port(host: str, start: int, end: int = MAX_PORT) -> int:
    """Return the first port in [start, end] that can be bound on ``host``."""
    for port in range(start, end + 1):
        if port_is_free(host, port):
            if port != start:
                logger.warning("Port %s is in use, using next free port %s", start, port)
            return port
    raise NoFreePortError(f"No free available ports in {start}-{end}")


def main() -> int:
    """Probe for a free port and serve until terminated."""
    settings = get_settings()
    try:
        port = find_free_port(settings.LISTEN_HOST, settings.LISTEN_PORT)
    except NoFreePortError as e:
        logger.error("Failed to start HTTP server: %s", e)
        return 1
    logger.info("Starting API server on %s:%s", settings.LISTEN_HOST, port)
    uvicorn.run("app.main:app", host=settings.LISTEN_HOST, port=port, reload=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
