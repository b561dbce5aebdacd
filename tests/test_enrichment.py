import pytest
import requests
import responses
from responses import matchers

from people_api.enrichment import EnrichmentError, ExternalDataClient

AGE = "https://age.example.com/"
GENDER = "https://gender.example.com/"
NATION = "https://nation.example.com/"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    return ExternalDataClient(age_url=AGE, gender_url=GENDER, nationality_url=NATION)


def test_get_age_sends_name_and_returns_age(mocked, client):
    mocked.add(
        responses.GET,
        AGE,
        json={"count": 10, "name": "Ivan", "age": 42},
        match=[matchers.query_param_matcher({"name": "Ivan"})],
    )
    assert client.get_age("Ivan") == 42


def test_null_age_becomes_zero(mocked, client):
    mocked.add(responses.GET, AGE, json={"name": "Zzz", "age": None})
    assert client.get_age("Zzz") == 0


def test_non_integer_age_is_rejected(mocked, client):
    mocked.add(responses.GET, AGE, json={"age": "old"})
    with pytest.raises(EnrichmentError, match="failed to decode age response"):
        client.get_age("Ivan")


def test_invalid_json_is_rejected(mocked, client):
    mocked.add(responses.GET, AGE, body="not json")
    with pytest.raises(EnrichmentError, match="failed to decode age response"):
        client.get_age("Ivan")


def test_non_object_json_is_rejected(mocked, client):
    mocked.add(responses.GET, GENDER, json=["male"])
    with pytest.raises(EnrichmentError, match="failed to decode gender response"):
        client.get_gender("Ivan")


def test_connection_failure_is_wrapped(mocked, client):
    mocked.add(responses.GET, AGE, body=requests.ConnectionError("refused"))
    with pytest.raises(EnrichmentError, match="failed to get age") as info:
        client.get_age("Ivan")
    assert isinstance(info.value.__cause__, requests.ConnectionError)


def test_get_gender(mocked, client):
    mocked.add(
        responses.GET,
        GENDER,
        json={"name": "Anna", "gender": "female", "probability": 0.98},
        match=[matchers.query_param_matcher({"name": "Anna"})],
    )
    assert client.get_gender("Anna") == "female"


def test_null_gender_becomes_empty(mocked, client):
    mocked.add(responses.GET, GENDER, json={"gender": None})
    assert client.get_gender("Zzz") == ""


def test_nationality_as_string(mocked, client):
    mocked.add(responses.GET, NATION, json={"country": "RU"})
    assert client.get_nationality("Ivan") == "RU"


def test_nationality_from_candidate_list(mocked, client):
    mocked.add(
        responses.GET,
        NATION,
        json={
            "name": "Ivan",
            "country": [
                {"country_id": "UA", "probability": 0.4},
                {"country_id": "RU", "probability": 0.3},
            ],
        },
        match=[matchers.query_param_matcher({"name": "Ivan"})],
    )
    assert client.get_nationality("Ivan") == "UA"


def test_empty_candidate_list_gives_empty(mocked, client):
    mocked.add(responses.GET, NATION, json={"country": []})
    assert client.get_nationality("Zzz") == ""


def test_bad_nationality_type_rejected(mocked, client):
    mocked.add(responses.GET, NATION, json={"country": 7})
    with pytest.raises(EnrichmentError, match="nationality"):
        client.get_nationality("Ivan")