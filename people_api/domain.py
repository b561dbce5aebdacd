"""Domain objects: people and the filters used to search for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

GENDERS = frozenset({"male", "female"})
MAX_AGE = 150


def _trimmed(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class Person:
    """A stored person with the data obtained by enrichment."""

    id: int
    name: str
    surname: str
    patronymic: str | None = None
    age: int | None = None
    gender: str | None = None
    nationality: str | None = None
    created_at: datetime = field(default_factory=datetime.now)

    def update_from(self, other: Person) -> None:
        """Copy over the fields of ``other`` that hold acceptable values.

        Blank text, ages outside 1..149 and genders other than male or
        female leave the current value untouched.
        """
        if name := _trimmed(other.name):
            self.name = name
        if surname := _trimmed(other.surname):
            self.surname = surname
        if other.age is not None and 0 < other.age < MAX_AGE:
            self.age = other.age
        if patronymic := _trimmed(other.patronymic):
            self.patronymic = patronymic
        if other.gender is not None:
            gender = other.gender.strip().lower()
            if gender in GENDERS:
                self.gender = gender
        if nationality := _trimmed(other.nationality):
            self.nationality = nationality


@dataclass(frozen=True)
class PersonFilter:
    """Search criteria; empty strings and a missing age match anything."""

    name: str = ""
    surname: str = ""
    patronymic: str = ""
    gender: str = ""
    nationality: str = ""
    age: int | None = None