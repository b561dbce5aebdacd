"""Storage of people in a relational database."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection, Engine

from people_api.domain import Person, PersonFilter

logger = logging.getLogger(__name__)

_metadata = MetaData()

_genders = Table(
    "genders",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
)

_nationalities = Table(
    "nationalities",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
)

_persons = Table(
    "persons",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("surname", String, nullable=False),
    Column("patronymic", String),
    Column("age", Integer),
    Column("gender_id", Integer),
    Column("nationality_id", Integer),
    Column("created_at"),
)


class PersonNotFoundError(LookupError):
    """Raised when no person has the requested id."""

    def __init__(self, person_id: int) -> None:
        super().__init__(f"person {person_id} not found")
        self.person_id = person_id


def _person_query():
    gender = _genders.alias("g")
    nationality = _nationalities.alias("n")
    people = _persons
    return (
        select(
            people.c.id,
            people.c.name,
            people.c.surname,
            people.c.patronymic,
            people.c.age,
            gender.c.name.label("gender"),
            nationality.c.name.label("nationality"),
            people.c.created_at,
        )
        .select_from(
            people.outerjoin(gender, gender.c.id == people.c.gender_id).outerjoin(
                nationality, nationality.c.id == people.c.nationality_id
            )
        )
        .order_by(people.c.id)
    )


def _to_person(row: Any) -> Person:
    person = Person(
        id=row.id,
        name=row.name,
        surname=row.surname,
        patronymic=row.patronymic,
        age=row.age,
        gender=row.gender,
        nationality=row.nationality,
    )
    if isinstance(row.created_at, datetime):
        person.created_at = row.created_at
    return person


def _get_or_create_id(conn: Connection, table: Table, value: str | None) -> int | None:
    if value is None:
        return None
    found = conn.execute(select(table.c.id).where(table.c.name == value)).scalar()
    if found is not None:
        return int(found)
    result = conn.execute(insert(table).values(name=value))
    new_id = int(result.inserted_primary_key[0])
    logger.debug("created %s entry %r with id %d", table.name, value, new_id)
    return new_id


class PersonRepository:
    """Reads and writes people, resolving genders and nationalities to ids."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_id(self, person_id: int) -> Person:
        """Return the person with ``person_id``; raise PersonNotFoundError if absent."""
        logger.info("find_by_id called, id=%s", person_id)
        query = _person_query().where(_persons.c.id == person_id)
        with self._engine.connect() as conn:
            row = conn.execute(query).first()
        if row is None:
            raise PersonNotFoundError(person_id)
        return _to_person(row)

    def _columns(self, conn: Connection, person: Person) -> dict[str, Any]:
        return {
            "name": person.name,
            "surname": person.surname,
            "patronymic": person.patronymic,
            "age": person.age,
            "gender_id": _get_or_create_id(conn, _genders, person.gender),
            "nationality_id": _get_or_create_id(
                conn, _nationalities, person.nationality
            ),
        }

    def save(self, person: Person) -> None:
        """Insert ``person`` as a new row in one transaction."""
        logger.info("save called, name=%s surname=%s", person.name, person.surname)
        with self._engine.begin() as conn:
            conn.execute(insert(_persons).values(**self._columns(conn, person)))
        logger.info("save successful, name=%s", person.name)

    def update(self, person: Person) -> None:
        """Overwrite the stored row that has ``person.id``."""
        logger.info("update called, id=%s", person.id)
        with self._engine.begin() as conn:
            conn.execute(
                update(_persons)
                .where(_persons.c.id == person.id)
                .values(**self._columns(conn, person))
            )
        logger.info("update successful, id=%s", person.id)

    def delete(self, person_id: int) -> None:
        """Remove the person with ``person_id``; a missing id is not an error."""
        logger.info("delete called, id=%s", person_id)
        with self._engine.begin() as conn:
            conn.execute(delete(_persons).where(_persons.c.id == person_id))

    def get_by_filter(self, person_filter: PersonFilter) -> list[Person]:
        """Return every person matching the filter.

        Name, surname and patronymic match case-insensitive substrings;
        gender, nationality and age must match exactly.
        """
        logger.info("get_by_filter called, filter=%s", person_filter)
        query = _person_query()
        people = _persons
        for column, value in (
            (people.c.name, person_filter.name),
            (people.c.surname, person_filter.surname),
            (people.c.patronymic, person_filter.patronymic),
        ):
            if value:
                query = query.where(column.ilike(f"%{value}%"))
        if person_filter.gender:
            query = query.where(
                people.c.gender_id
                == select(_genders.c.id)
                .where(_genders.c.name == person_filter.gender)
                .scalar_subquery()
            )
        if person_filter.nationality:
            query = query.where(
                people.c.nationality_id
                == select(_nationalities.c.id)
                .where(_nationalities.c.name == person_filter.nationality)
                .scalar_subquery()
            )
        if person_filter.age is not None:
            query = query.where(people.c.age == person_filter.age)

        with self._engine.connect() as conn:
            rows = conn.execute(query).all()
        return [_to_person(row) for row in rows]