"""Lookup of age, gender and nationality from public name statistics services."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

logger = logging.getLogger(__name__)

AGE_URL = "https://api.agify.io/"
GENDER_URL = "https://api.genderize.io/"
NATIONALITY_URL = "https://api.nationalize.io/"
DEFAULT_TIMEOUT = 10.0


class EnrichmentError(Exception):
    """Raised when an external lookup fails or answers with bad data."""


class ExternalDataClient:
    """Guesses a person's age, gender and nationality from a first name."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        age_url: str = AGE_URL,
        gender_url: str = GENDER_URL,
        nationality_url: str = NATIONALITY_URL,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout
        self._age_url = age_url
        self._gender_url = gender_url
        self._nationality_url = nationality_url

    def _fetch(self, what: str, url: str, name: str) -> Mapping[str, Any]:
        logger.info("requesting %s for name %r from %s", what, name, url)
        try:
            response = self._session.get(
                url, params={"name": name}, timeout=self._timeout
            )
        except requests.RequestException as exc:
            logger.error("failed to get %s: %s", what, exc)
            raise EnrichmentError(f"failed to get {what}: {exc}") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise EnrichmentError(f"failed to decode {what} response: {exc}") from exc
        if not isinstance(data, Mapping):
            raise EnrichmentError(
                f"failed to decode {what} response: expected a JSON object"
            )
        return data

    def get_age(self, name: str) -> int:
        """Return the estimated age; a missing estimate gives 0."""
        age = self._fetch("age", self._age_url, name).get("age")
        if age is None:
            return 0
        if not isinstance(age, int) or isinstance(age, bool):
            raise EnrichmentError("failed to decode age response: age is not an integer")
        logger.info("retrieved age %d", age)
        return age

    def get_gender(self, name: str) -> str:
        """Return the estimated gender; a missing estimate gives ''."""
        gender = self._fetch("gender", self._gender_url, name).get("gender")
        if gender is None:
            return ""
        if not isinstance(gender, str):
            raise EnrichmentError(
                "failed to decode gender response: gender is not a string"
            )
        logger.info("retrieved gender %r", gender)
        return gender

    def get_nationality(self, name: str) -> str:
        """Return the most likely country; a missing estimate gives ''.

        The service may answer with a plain string or with a list of
        candidates, in which case the first candidate's country_id is used.
        """
        country = self._fetch("nationality", self._nationality_url, name).get("country")
        if country is None:
            return ""
        if isinstance(country, list):
            if not country:
                return ""
            first = country[0]
            country = first.get("country_id") if isinstance(first, Mapping) else None
        if not isinstance(country, str):
            raise EnrichmentError(
                "failed to decode nationality response: country is not a string"
            )
        logger.info("retrieved nationality %r", country)
        return country