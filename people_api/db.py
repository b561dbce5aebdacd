"""Database connection and schema migrations."""

from __future__ import annotations

import math
import re
import sqlite3
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from people_api.config import Config

DEFAULT_TIMEOUT = 5.0

_MIGRATION_FILE = re.compile(r"^(\d+)_(.*)\.(down|up)\.(.*)$")
_CREATE_VERSION_TABLE = (
    "CREATE TABLE IF NOT EXISTS schema_migrations "
    "(version BIGINT NOT NULL PRIMARY KEY, dirty BOOLEAN NOT NULL)"
)


class MigrationError(Exception):
    """Raised when migrations cannot be loaded or applied."""


def to_sqlalchemy_url(dsn: str) -> str:
    """Turn a ``postgres://`` connection string into one SQLAlchemy accepts."""
    scheme, sep, rest = dsn.partition("://")
    if sep and scheme == "postgres":
        return f"postgresql://{rest}"
    return dsn


def connect(config: Config, timeout: float = DEFAULT_TIMEOUT) -> Engine:
    """Create an engine for the configured database and check it answers."""
    url = make_url(to_sqlalchemy_url(config.postgres))
    connect_args = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = max(1, math.ceil(timeout))
    engine = create_engine(url, connect_args=connect_args)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return engine


def _discover(directory: Path) -> list[tuple[int, Path]]:
    if not directory.is_dir():
        raise MigrationError(f"create migrate: no migrations directory {directory}")
    found: dict[int, Path] = {}
    for entry in directory.iterdir():
        match = _MIGRATION_FILE.match(entry.name)
        if not match or match.group(3) != "up" or not entry.is_file():
            continue
        version = int(match.group(1))
        if version in found:
            raise MigrationError(
                f"create migrate: duplicate migration version {version}"
            )
        found[version] = entry
    return sorted(found.items())


def _statements(dialect: str, script: str) -> list[str]:
    if not script.strip():
        return []
    if dialect != "sqlite":
        return [script]
    statements = []
    buffer = ""
    for part in script.split(";"):
        buffer += part + ";"
        if sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            if statement.rstrip(";").strip():
                statements.append(statement)
            buffer = ""
    if buffer.strip().rstrip(";").strip():
        statements.append(buffer.strip())
    return statements


def _read_version(conn: Connection) -> tuple[int | None, bool]:
    row = conn.execute(text("SELECT version, dirty FROM schema_migrations LIMIT 1")).first()
    if row is None:
        return None, False
    return int(row[0]), bool(row[1])


def _write_version(conn: Connection, version: int, dirty: bool) -> None:
    conn.execute(text("DELETE FROM schema_migrations"))
    conn.execute(
        text("INSERT INTO schema_migrations (version, dirty) VALUES (:version, :dirty)"),
        {"version": version, "dirty": dirty},
    )


def run_migrations(engine: Engine, migrations_path: str | Path) -> list[int]:
    """Apply pending ``<version>_<title>.up.sql`` files in version order.

    Returns the versions applied; an up-to-date database yields an empty
    list. A failed migration leaves the database marked dirty.
    """
    migrations = _discover(Path(migrations_path))
    try:
        with engine.begin() as conn:
            conn.execute(text(_CREATE_VERSION_TABLE))
            current, dirty = _read_version(conn)
    except SQLAlchemyError as exc:
        raise MigrationError(f"create migrate: {exc}") from exc
    if dirty:
        raise MigrationError(
            f"run migrate up: Dirty database version {current}. Fix and force version."
        )

    applied = []
    for version, path in migrations:
        if current is not None and version <= current:
            continue
        script = path.read_text(encoding="utf-8")
        try:
            with engine.begin() as conn:
                _write_version(conn, version, True)
            with engine.begin() as conn:
                for statement in _statements(conn.dialect.name, script):
                    conn.exec_driver_sql(
                        statement, execution_options={"no_parameters": True}
                    )
            with engine.begin() as conn:
                _write_version(conn, version, False)
        except SQLAlchemyError as exc:
            raise MigrationError(
                f"run migrate up: migration failed in {path.name}: {exc}"
            ) from exc
        applied.append(version)
    return applied