"""HTTP interface: request parsing, handlers and routing."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from flask import Flask, Response, redirect, request

from people_api.docs import build_spec
from people_api.domain import PersonFilter
from people_api.dto import PersonDTO

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_SWAGGER_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>People API</title></head>
<body>
<h1>People API</h1>
<p>The API description is available as <a href="doc.json">doc.json</a>.</p>
</body>
</html>
"""


class MissingIDError(ValueError):
    """Raised when the ``id`` query parameter is absent or empty."""

    def __init__(self) -> None:
        super().__init__("missing id parameter")


class InvalidIDError(ValueError):
    """Raised when the ``id`` query parameter is not an integer."""

    def __init__(self) -> None:
        super().__init__("invalid id")


def _parse_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid integer syntax: {value!r}")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def parse_id(args: Mapping[str, str]) -> int:
    """Read the integer ``id`` parameter from query arguments."""
    id_text = args.get("id") or ""
    if not id_text:
        raise MissingIDError()
    try:
        return _parse_int(id_text)
    except ValueError:
        raise InvalidIDError() from None


def parse_person_filter(args: Mapping[str, str]) -> PersonFilter:
    """Build a PersonFilter from query arguments; a bad age raises ValueError."""
    age_text = args.get("age") or ""
    age = _parse_int(age_text) if age_text else None
    return PersonFilter(
        name=args.get("name") or "",
        surname=args.get("surname") or "",
        patronymic=args.get("patronymic") or "",
        gender=args.get("gender") or "",
        nationality=args.get("nationality") or "",
        age=age,
    )


def _error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _json(payload: Any, status: int = 200) -> Response:
    body = json.dumps(payload, ensure_ascii=False) + "\n"
    return Response(body, status=status, mimetype="application/json")


def _read_dto() -> PersonDTO:
    value = json.loads(request.get_data())
    if value is None:
        value = {}
    return PersonDTO.from_json(value)


def create_app(service: Any) -> Flask:
    """Create the web application serving the people API over ``service``."""
    app = Flask(__name__)

    @app.post("/person")
    def create_person() -> Response:
        try:
            dto = _read_dto()
        except ValueError as exc:
            logger.warning("invalid request body: %s", exc)
            return _error("invalid request body", 400)
        logger.info("creating person name=%s surname=%s", dto.name, dto.surname)
        try:
            service.add_person(dto.name, dto.surname, dto.patronymic)
        except Exception as exc:
            logger.error("failed to add person: %s", exc)
            return _error(str(exc), 500)
        logger.info("person created")
        return Response(status=201)

    @app.put("/person")
    def update_person() -> Response:
        try:
            person_id = parse_id(request.args)
        except ValueError as exc:
            logger.warning("invalid id in query: %s", exc)
            return _error(str(exc), 400)
        try:
            dto = _read_dto()
        except ValueError as exc:
            logger.warning("invalid body: %s", exc)
            return _error("invalid body", 400)
        try:
            service.update_person(person_id, dto.to_domain())
        except Exception as exc:
            logger.error("failed to update person id=%s: %s", person_id, exc)
            return _error("failed to update person", 500)
        logger.info("person id=%s updated", person_id)
        return Response(status=200)

    @app.delete("/person")
    def delete_person() -> Response:
        try:
            person_id = parse_id(request.args)
        except ValueError as exc:
            logger.warning("invalid id in query: %s", exc)
            return _error(str(exc), 400)
        try:
            service.delete_person(person_id)
        except Exception as exc:
            logger.error("failed to delete person id=%s: %s", person_id, exc)
            return _error("failed to delete person", 500)
        logger.info("person id=%s deleted", person_id)
        return Response(status=204)

    @app.get("/person")
    def get_persons() -> Response:
        try:
            person_filter = parse_person_filter(request.args)
        except ValueError as exc:
            logger.warning("invalid query parameters: %s", exc)
            return _error("invalid query parameters", 400)
        try:
            persons = service.get_by_filter(person_filter)
        except Exception as exc:
            logger.error("failed to get persons: %s", exc)
            return _error("failed to get persons", 500)
        result = [PersonDTO.from_domain(person).to_json() for person in persons]
        logger.info("found %d persons", len(result))
        return _json(result or None)

    @app.get("/swagger/")
    def swagger_root() -> Response:
        return redirect("/swagger/index.html", code=301)

    @app.get("/swagger/index.html")
    def swagger_index() -> Response:
        return Response(_SWAGGER_PAGE, mimetype="text/html")

    @app.get("/swagger/doc.json")
    def swagger_doc() -> Response:
        return _json(build_spec())

    return app