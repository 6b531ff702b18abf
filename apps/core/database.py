"""
Database connection lifecycle.

Django opens connections lazily per request. The server entry point calls
`connect_db()` so a bad DATABASE_URL fails at startup instead of on the
first request, and `install_shutdown_handlers()` so SIGINT/SIGTERM close
the process's connections before it exits.
"""
import logging
import signal
import sys

from django.db import DatabaseError, connections

logger = logging.getLogger(__name__)


class DatabaseUnavailable(RuntimeError):
    pass


def connect_db(alias: str = 'default') -> None:
    """Open (or verify) the connection for `alias`."""
    try:
        connections[alias].ensure_connection()
    except DatabaseError as exc:
        logger.error("Database connection failed: %s", exc)
        raise DatabaseUnavailable(str(exc)) from exc
    logger.info("Database connected successfully (%s)", connections[alias].vendor)


def disconnect_db() -> None:
    """
    Close the connections owned by the calling thread.

    Sync views under ASGI query on asgiref's worker thread, whose
    connections this cannot reach. Django closes those itself when each
    request finishes, unless CONN_MAX_AGE keeps them open; a persistent
    connection left there is dropped with the process.
    """
    connections.close_all()
    logger.info("Database disconnected")


def _handle_shutdown(signum, frame):
    logger.info("Received %s, shutting down", signal.Signals(signum).name)
    disconnect_db()
    sys.exit(0)


def install_shutdown_handlers() -> None:
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handle_shutdown)
