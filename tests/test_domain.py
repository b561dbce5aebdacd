import dataclasses
from datetime import datetime

import pytest

from people_api.domain import Person, PersonFilter


def _stored():
    return Person(
        id=7,
        name="Ivan",
        surname="Petrov",
        patronymic="Ivanovich",
        age=30,
        gender="male",
        nationality="RU",
    )


def test_created_at_defaults_to_now():
    before = datetime.now()
    person = Person(id=1, name="Anna", surname="Smirnova")
    after = datetime.now()
    assert before <= person.created_at <= after
    assert person.patronymic is None and person.age is None


def test_update_copies_trimmed_values():
    person = _stored()
    person.update_from(
        Person(
            id=0,
            name="  Oleg ",
            surname=" Sidorov",
            patronymic=" Olegovich ",
            age=41,
            gender=" FeMale ",
            nationality=" UA ",
        )
    )
    assert person.name == "Oleg"
    assert person.surname == "Sidorov"
    assert person.patronymic == "Olegovich"
    assert person.age == 41
    assert person.gender == "female"
    assert person.nationality == "UA"
    assert person.id == 7


def test_update_ignores_blank_and_missing_values():
    person = _stored()
    original = dataclasses.replace(person)
    person.update_from(
        Person(
            id=0,
            name="   ",
            surname="",
            patronymic="  ",
            age=None,
            gender=None,
            nationality="",
        )
    )
    assert person == original


@pytest.mark.parametrize("age", [0, -5, 150, 200])
def test_update_rejects_ages_out_of_range(age):
    person = _stored()
    person.update_from(Person(id=0, name="", surname="", age=age))
    assert person.age == 30


@pytest.mark.parametrize("age", [1, 149])
def test_update_accepts_ages_at_bounds(age):
    person = _stored()
    person.update_from(Person(id=0, name="", surname="", age=age))
    assert person.age == age


@pytest.mark.parametrize("gender", ["other", "", "  ", "m"])
def test_update_rejects_unknown_gender(gender):
    person = _stored()
    person.update_from(Person(id=0, name="", surname="", gender=gender))
    assert person.gender == "male"


def test_update_sets_gender_on_empty_person():
    person = Person(id=3, name="Kim", surname="Lee")
    person.update_from(Person(id=0, name="", surname="", gender="MALE"))
    assert person.gender == "male"


def test_filter_defaults_match_everything():
    flt = PersonFilter()
    assert (flt.name, flt.surname, flt.patronymic, flt.gender, flt.nationality) == (
        "",
        "",
        "",
        "",
        "",
    )
    assert flt.age is None


def test_filter_is_immutable():
    flt = PersonFilter(name="Ivan", age=30)
    with pytest.raises(dataclasses.FrozenInstanceError):
        flt.name = "Oleg"
    assert flt.name == "Ivan" and flt.age == 30