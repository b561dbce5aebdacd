"""Use cases for managing people."""

from __future__ import annotations

import logging
from typing import Protocol

from people_api.domain import Person, PersonFilter
from people_api.enrichment import EnrichmentError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised when a use case cannot be completed."""


class _Repository(Protocol):
    def find_by_id(self, person_id: int) -> Person: ...

    def save(self, person: Person) -> None: ...

    def update(self, person: Person) -> None: ...

    def delete(self, person_id: int) -> None: ...

    def get_by_filter(self, person_filter: PersonFilter) -> list[Person]: ...


class _Enricher(Protocol):
    def get_age(self, name: str) -> int: ...

    def get_gender(self, name: str) -> str: ...

    def get_nationality(self, name: str) -> str: ...


class PersonService:
    """Adds, changes, removes and finds people."""

    def __init__(self, repository: _Repository, enricher: _Enricher) -> None:
        self._repository = repository
        self._enricher = enricher

    def add_person(self, name: str, surname: str, patronymic: str | None = None) -> None:
        """Enrich a new person by name and store it."""
        logger.info("adding person name=%s surname=%s", name, surname)
        try:
            age = self._enricher.get_age(name)
        except EnrichmentError as exc:
            raise ServiceError(f"failed to get age: {exc}") from exc
        try:
            gender = self._enricher.get_gender(name)
        except EnrichmentError as exc:
            raise ServiceError(f"failed to get gender: {exc}") from exc
        try:
            nationality = self._enricher.get_nationality(name)
        except EnrichmentError as exc:
            raise ServiceError(f"failed to get nationality: {exc}") from exc

        person = Person(
            id=0,
            name=name,
            surname=surname,
            patronymic=patronymic,
            age=age,
            gender=gender,
            nationality=nationality,
        )
        try:
            self._repository.save(person)
        except Exception as exc:
            logger.error("failed to save person %s: %s", name, exc)
            raise ServiceError(f"failed to save person: {exc}") from exc
        logger.info("person %s saved", name)

    def update_person(self, person_id: int, person: Person) -> None:
        """Merge the acceptable fields of ``person`` into the stored one."""
        logger.info("updating person id=%s", person_id)
        try:
            stored = self._repository.find_by_id(person_id)
        except LookupError as exc:
            raise ServiceError(f"person not found: {exc}") from exc
        stored.update_from(person)
        self._repository.update(stored)
        logger.info("person id=%s updated", person_id)

    def delete_person(self, person_id: int) -> None:
        logger.info("deleting person id=%s", person_id)
        self._repository.delete(person_id)

    def get_person_by_id(self, person_id: int) -> Person:
        logger.info("getting person id=%s", person_id)
        return self._repository.find_by_id(person_id)

    def get_by_filter(self, person_filter: PersonFilter) -> list[Person]:
        logger.info("getting persons by filter")
        return self._repository.get_by_filter(person_filter)