"""JSON representation of a person exchanged over HTTP."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from people_api.domain import Person


def _field(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        expected = "an integer" if kind is int else "a string"
        raise ValueError(f"field {key!r} must be {expected}")
    return value


@dataclass
class PersonDTO:
    """A person as sent and received by the API."""

    id: int = 0
    name: str = ""
    surname: str = ""
    patronymic: str = ""
    age: int | None = None
    gender: str | None = None
    nationality: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> PersonDTO:
        """Build from a decoded JSON object; raises ValueError on bad types."""
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        return cls(
            id=_field(data, "id", int, 0),
            name=_field(data, "name", str, ""),
            surname=_field(data, "surname", str, ""),
            patronymic=_field(data, "patronymic", str, ""),
            age=_field(data, "age", int, None),
            gender=_field(data, "gender", str, None),
            nationality=_field(data, "nationality", str, None),
        )

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-ready dict; unset optional fields are left out."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "surname": self.surname,
            "patronymic": self.patronymic,
        }
        for key in ("age", "gender", "nationality"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result

    def to_domain(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            surname=self.surname,
            patronymic=self.patronymic,
            age=self.age,
            gender=self.gender,
            nationality=self.nationality,
        )

    @classmethod
    def from_domain(cls, person: Person) -> PersonDTO:
        return cls(
            id=person.id,
            name=person.name,
            surname=person.surname,
            patronymic=person.patronymic or "",
            age=person.age,
            gender=person.gender,
            nationality=person.nationality,
        )