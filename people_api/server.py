"""Wiring of the application and the command that runs it."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from sqlalchemy.engine import Engine

from people_api.api import create_app
from people_api.config import Config, ConfigError, load
from people_api.db import MigrationError, connect, run_migrations
from people_api.enrichment import ExternalDataClient
from people_api.repository import PersonRepository
from people_api.service import PersonService

logger = logging.getLogger(__name__)

MIGRATIONS_PATH = "/app/migrations"
LISTEN_HOST = "0.0.0.0"


class Server:
    """The people API bound to a database engine and configuration."""

    def __init__(self, config: Config, engine: Engine, *, enricher: Any = None) -> None:
        self.config = config
        self.engine = engine
        repository = PersonRepository(engine)
        service = PersonService(repository, enricher or ExternalDataClient())
        self.app = create_app(service)

    def start(self) -> None:
        """Serve HTTP on every interface at the configured port until stopped."""
        self.app.run(host=LISTEN_HOST, port=int(self.config.port))


def main(argv: list[str] | None = None) -> int:
    """Load configuration, migrate the database and serve the API."""
    parser = argparse.ArgumentParser(
        prog="people-api", description="Serve the people API."
    )
    parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = load()
    except ConfigError as exc:
        logger.error("couldn't load configuration: %s", exc)
        return 1
    logger.info("configuration loaded")

    try:
        engine = connect(config)
    except Exception as exc:
        logger.error("failed to connect to database: %s", exc)
        return 1
    logger.info("connected to database")

    try:
        try:
            run_migrations(engine, MIGRATIONS_PATH)
        except MigrationError as exc:
            logger.error("migration error: %s", exc)
            return 1
        logger.info("migrations applied")

        logger.info("starting server on port %s", config.port)
        try:
            Server(config, engine).start()
        except (OSError, ValueError) as exc:
            logger.error("failed to start server: %s", exc)
            return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())