#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Concurrency: request handlers are synchronous, so each in-flight request runs
on a worker thread from the server's thread pool. A single daemon thread
sweeps expired links. All of them share one in-memory registry, so the server
always runs as a single process.

Timeouts: uvicorn has no per-request read or write deadline, so there is no
equivalent of a 5s read / 10s write limit. TIMEOUT_KEEP_ALIVE closes idle
keep-alive connections and TIMEOUT_GRACEFUL_SHUTDOWN bounds how long in-flight
requests may run after a shutdown signal. Neither limits a slow client or a
slow response during normal operation.

Usage:
    python app.py

Environment variables:
    HOST - Host to bind to
    PORT - Port to listen on (default 8080)
    BASE_URL - Public domain prefix for short links
    DEFAULT_VALIDITY_MINUTES - Link lifetime when a request omits it
    SHORT_CODE_LENGTH - Length of generated codes
    SWEEP_INTERVAL_SECONDS - Seconds between expiry sweeps
    TIMEOUT_KEEP_ALIVE - Seconds before an idle keep-alive connection is closed
    TIMEOUT_GRACEFUL_SHUTDOWN - Seconds in-flight requests get after a shutdown signal
    LOG_LEVEL - Logging level
"""

import signal
import sys

import uvicorn

from shortlink.config import load_config
from shortlink.common.logging_config import setup_logging
from shortlink_web import create_app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlink URL shortener")
    logger.info(f"Configuration: {config.model_dump()}")

    # Registry and sweeper are created in the app lifespan
    app = create_app(config=config, logger=logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware writes one line per request
        timeout_keep_alive=config.timeout_keep_alive,
        timeout_graceful_shutdown=config.timeout_graceful_shutdown,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except (OSError, SystemExit) as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)

    # Lifespan startup failures return without the server ever starting
    if not server.started:
        logger.error("Server exited before startup completed")
        sys.exit(1)


if __name__ == "__main__":
    main()
