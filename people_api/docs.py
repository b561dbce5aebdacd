"""OpenAPI (Swagger 2.0) description of the people API."""

from __future__ import annotations

from typing import Any

TITLE = "People API"
VERSION = "1.0"
DESCRIPTION = "This is a sample server for managing people."
DEFAULT_HOST = "localhost:8080"
DEFAULT_BASE_PATH = "/"

_PERSON_REF = {"$ref": "#/definitions/transport.PersonDTO"}
_JSON = ["application/json"]


def _text_response(description: str) -> dict[str, Any]:
    return {"description": description, "schema": {"type": "string"}}


def _id_parameter() -> dict[str, Any]:
    return {
        "type": "integer",
        "description": "ID пользователя",
        "name": "id",
        "in": "query",
        "required": True,
    }


def _body_parameter(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "name": "person",
        "in": "body",
        "required": True,
        "schema": dict(_PERSON_REF),
    }


def _query_parameter(name: str, description: str) -> dict[str, Any]:
    return {"type": "string", "description": description, "name": name, "in": "query"}


def _person_definition() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "age": {"type": "integer", "example": 30},
            "gender": {"type": "string", "example": "male"},
            "id": {"type": "integer", "example": 1},
            "name": {"type": "string", "example": "Ivan"},
            "nationality": {"type": "string", "example": "Russian"},
            "patronymic": {"type": "string", "example": "Ivanovich"},
            "surname": {"type": "string", "example": "Petrov"},
        },
    }


def build_spec(
    host: str = DEFAULT_HOST, base_path: str = DEFAULT_BASE_PATH
) -> dict[str, Any]:
    """Return the API description as a JSON-ready dict."""
    person_path = {
        "get": {
            "description": "Возвращает список пользователей, подходящих под фильтр",
            "produces": list(_JSON),
            "tags": ["person"],
            "summary": "Получить пользователей по фильтру",
            "parameters": [
                _query_parameter("name", "Имя"),
                _query_parameter("surname", "Фамилия"),
                _query_parameter("patronymic", "Отчество"),
            ],
            "responses": {
                "200": {
                    "description": "OK",
                    "schema": {"type": "array", "items": dict(_PERSON_REF)},
                },
                "400": _text_response("Invalid query parameters"),
                "500": _text_response("Internal error"),
            },
        },
        "put": {
            "description": "Обновляет данные пользователя по ID",
            "consumes": list(_JSON),
            "produces": list(_JSON),
            "tags": ["person"],
            "summary": "Обновить пользователя",
            "parameters": [_id_parameter(), _body_parameter("Обновлённые данные")],
            "responses": {
                "200": {"description": "OK"},
                "400": _text_response("Invalid input"),
                "500": _text_response("Internal error"),
            },
        },
        "post": {
            "description": "Добавляет нового пользователя",
            "consumes": list(_JSON),
            "produces": list(_JSON),
            "tags": ["person"],
            "summary": "Создать пользователя",
            "parameters": [_body_parameter("Новый пользователь")],
            "responses": {
                "201": {"description": "Created"},
                "400": _text_response("Invalid request"),
                "500": _text_response("Internal error"),
            },
        },
        "delete": {
            "description": "Удаляет пользователя по ID",
            "produces": list(_JSON),
            "tags": ["person"],
            "summary": "Удалить пользователя",
            "parameters": [_id_parameter()],
            "responses": {
                "204": {"description": "No Content"},
                "400": _text_response("Invalid ID"),
                "500": _text_response("Internal error"),
            },
        },
    }
    return {
        "schemes": [],
        "swagger": "2.0",
        "info": {
            "description": DESCRIPTION,
            "title": TITLE,
            "contact": {},
            "version": VERSION,
        },
        "host": host,
        "basePath": base_path,
        "paths": {"/person": person_path},
        "definitions": {"transport.PersonDTO": _person_definition()},
    }