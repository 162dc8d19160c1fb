from dataclasses import InitVar, dataclass, field
from typing import NamedTuple

import pytest

from keyfit import (
    RECORD_KEY,
    RESIDUAL_FIELD,
    ConversionFailed,
    Identifier,
    RecordRegistry,
    load_record,
    load_record_or_raise,
    map_to_record,
    map_to_record_or_raise,
    normalize_keys_to_text,
    residual_or_raise,
)
from keyfit.errors import (
    NonTextNonIdentifierKey,
    NotARecordType,
    ResidualFieldUnavailable,
    TextKeyRequired,
    UnknownIdentifierText,
    UnknownRecordField,
    UnknownType,
)


@dataclass
class User:
    first_name: str | None = None
    username: str | None = None
    password: str | None = None


@dataclass(slots=True)
class SlottedUser:
    username: str | None = None


class UserTuple(NamedTuple):
    username: str | None = None
    keyfit: dict[str, object] | None = None


EXPECTED = User(first_name="John", username="john", password="pass")


def test_matching_keys() -> None:
    conversion = map_to_record({"first_name": "John", "username": "john", "password": "pass"}, User)
    assert conversion.ok
    assert conversion.record == EXPECTED
    assert conversion.residual is None


def test_snake_case_transformation_matches_camel_case_keys() -> None:
    source = {"FirstName": "John", "Username": "john", "password": "pass"}
    conversion = map_to_record(source, User, transformations=["snake_case"])
    assert conversion.record == EXPECTED


def test_no_transformations_only_exact_matches() -> None:
    source = {"FirstName": "John", "Username": "john", "password": "pass"}
    conversion = map_to_record(source, User)
    assert conversion.record == User(first_name=None, username=None, password="pass")


def test_unmatched_pairs_discarded_by_default() -> None:
    conversion = map_to_record({"first_name": "John", "username": "john", "password": "pass", "age": 33}, User)
    assert conversion.record == EXPECTED
    assert conversion.residual is None
    assert not hasattr(conversion.record, RESIDUAL_FIELD)


def test_rest_separate_returns_residual() -> None:
    source = {"first_name": "John", "username": "john", "password": "pass", "age": 33}
    conversion = map_to_record(source, User, rest="separate")
    assert conversion.record == EXPECTED
    assert conversion.residual == {"age": 33}


def test_rest_separate_without_transformations_keeps_non_matching_keys() -> None:
    source = {"FirstName": "John", "Username": "john", "password": "pass", "age": 33}
    conversion = map_to_record(source, User, rest="separate", transformations=[])
    assert conversion.record == User(password="pass")
    assert conversion.residual == {"FirstName": "John", "Username": "john", "age": 33}


def test_rest_separate_with_transformations_reports_original_keys() -> None:
    source = {"FirstName": "John", "Username": "john", "password": "pass", "HomeTown": "Regina"}
    conversion = map_to_record(source, User, rest="separate", transformations=["snake_case"])
    assert conversion.record == EXPECTED
    assert conversion.residual == {"HomeTown": "Regina"}


def test_rest_merge_stores_residual_on_record() -> None:
    source = {"first_name": "John", "username": "john", "password": "pass", "age": 33}
    conversion = map_to_record(source, User, rest="merge")
    assert conversion.record == EXPECTED
    assert conversion.residual is None
    assert getattr(conversion.record, RESIDUAL_FIELD) == {"age": 33}


def test_rest_merge_overwrites_declared_residual_field() -> None:
    conversion = map_to_record({"username": "john", "keyfit": "mine", "age": 33}, UserTuple, rest="merge")
    assert conversion.record == UserTuple(username="john", keyfit={"age": 33})


def test_rest_merge_fails_when_type_cannot_hold_residual() -> None:
    conversion = map_to_record({"username": "john"}, SlottedUser, rest="merge")
    assert conversion.error == ResidualFieldUnavailable(SlottedUser, RESIDUAL_FIELD)
    assert conversion.record is None


def test_mixed_key_kinds_rejected() -> None:
    source = {"first_name": "John", "username": "john", "password": "pass", Identifier("age"): 33}
    conversion = map_to_record(source, User)
    assert conversion.error == TextKeyRequired(Identifier("age"))
    assert conversion.record is None


def test_non_text_key_rejected_even_when_other_keys_match() -> None:
    conversion = map_to_record({"first_name": "John", 1: "one"}, User, transformations=["snake_case"])
    assert conversion.error == TextKeyRequired(1)


def test_never_seen_identifier_text_goes_to_residual() -> None:
    key = "zq_identifier_nobody_declared"
    registry = RecordRegistry()
    conversion = map_to_record({key: 1, "username": "john"}, User, rest="separate", registry=registry)
    assert conversion.record == User(username="john")
    assert conversion.residual == {key: 1}
    assert key not in registry.identifiers


def test_transformed_key_collision_keeps_displaced_entry_in_residual() -> None:
    source = {"first_name": "Jack", "FirstName": "John", "first-name": "Jon"}
    conversion = map_to_record(source, User, transformations=["snake_case"], rest="separate")
    # "first-name" sorts after "FirstName", so it is applied last
    assert conversion.record == User(first_name="Jon")
    assert conversion.residual == {"first_name": "Jack", "FirstName": "John"}


def test_transformed_key_replacing_untouched_non_matching_key() -> None:
    source = {"age": 1, "Age": 2}
    conversion = map_to_record(source, User, transformations=["snake_case"], rest="separate")
    assert conversion.record == User()
    assert conversion.residual == {"age": 1, "Age": 2}


def test_record_type_by_name() -> None:
    conversion = map_to_record({"username": "john"}, f"{__name__}.User")
    assert conversion.record == User(username="john")


def test_record_type_errors_are_returned() -> None:
    assert map_to_record({}, "nowhere.User").error == UnknownType("nowhere.User")
    assert map_to_record({}, dict).error == NotARecordType(dict)


def test_unknown_transformation_fails_before_looking_at_data() -> None:
    with pytest.raises(ConversionFailed, match="unknown transformation"):
        _ = map_to_record({1: "not even text"}, "not a type", transformations=["kebab_case"])


def test_or_raise_returns_record() -> None:
    source = {"FirstName": "John", "Username": "john", "password": "pass"}
    assert map_to_record_or_raise(source, User, transformations=["snake_case"]) == EXPECTED


def test_or_raise_returns_record_and_residual_for_separate() -> None:
    user, residual = map_to_record_or_raise({"username": "john", "age": 33}, User, rest="separate")
    assert user == User(username="john")
    assert residual == {"age": 33}


def test_or_raise_raises_formatted_message() -> None:
    with pytest.raises(ConversionFailed, match="the map contains a non-text key which is not expected: 1") as excinfo:
        _ = map_to_record_or_raise({1: "one"}, User)
    assert excinfo.value.error == TextKeyRequired(1)

    with pytest.raises(ConversionFailed, match="type doesn't exist: 'nowhere.User'"):
        _ = map_to_record_or_raise({}, "nowhere.User")


def test_residual_or_raise() -> None:
    assert residual_or_raise(User, {"username": "john", "age": 33}) == {"age": 33}
    assert residual_or_raise(User, {"username": "john"}) == {}
    with pytest.raises(ConversionFailed, match="type is not a record type"):
        _ = residual_or_raise(dict, {})


def test_normalize_keys_to_text() -> None:
    conversion = normalize_keys_to_text({Identifier("first_name"): "John", "username": "john"})
    assert conversion.record == {"first_name": "John", "username": "john"}
    assert map_to_record(conversion.record, User).record == User(first_name="John", username="john")


def test_normalize_keys_to_text_rejects_other_keys() -> None:
    conversion = normalize_keys_to_text({"username": "john", 3.5: "x"})
    assert conversion.error == NonTextNonIdentifierKey(3.5)
    assert conversion.error.message() == "the key is neither an identifier nor text: 3.5"


def test_load_record() -> None:
    conversion = load_record({RECORD_KEY: f"{__name__}.User", "username": "john", "age": 33})
    assert conversion.record == User(username="john")
    assert conversion.residual == {"age": 33}


def test_load_record_strict() -> None:
    registry = RecordRegistry()
    _ = registry.register(User)
    dump = {RECORD_KEY: f"{__name__}.User", "username": "john"}
    assert load_record_or_raise(dump, strict=True, registry=registry) == User(username="john")

    conversion = load_record({**dump, "zq_unheard_of": 1}, strict=True, registry=registry)
    assert conversion.error == UnknownIdentifierText("zq_unheard_of")

    _ = registry.register(SlottedUser)
    conversion = load_record({RECORD_KEY: f"{__name__}.SlottedUser", "password": "x"}, strict=True, registry=registry)
    assert conversion.error == UnknownRecordField(SlottedUser, "password")


def test_load_record_rejects_non_text_keys() -> None:
    dump = {RECORD_KEY: f"{__name__}.User", "username": "john", 7: "seven"}
    assert load_record(dump).error == TextKeyRequired(7)
    assert load_record(dump, strict=True).error == TextKeyRequired(7)


def test_load_record_or_raise_missing_type_key() -> None:
    with pytest.raises(ConversionFailed, match="the given map doesn't contain a '__record__' key"):
        _ = load_record_or_raise({"username": "john"})


def test_default_factories_run_once_per_conversion() -> None:
    calls: list[int] = []

    def make_tags() -> list[str]:
        calls.append(1)
        return []

    @dataclass
    class Tagged:
        user_name: str | None = None
        tags: list[str] = field(default_factory=make_tags)

    source = {f"Extra{index}": index for index in range(20)}
    source["UserName"] = "john"
    record, residual = map_to_record_or_raise(source, Tagged, transformations=["snake_case"], rest="separate")
    assert record.user_name == "john"
    assert len(residual) == 20
    assert calls == [1]


@dataclass
class Signup:
    password: InitVar[str | None]
    username: str | None = None


def test_required_init_only_variable_does_not_break_conversion() -> None:
    conversion = map_to_record({"username": "john", "password": "secret"}, Signup, rest="separate")
    assert conversion.ok
    assert conversion.record.username == "john"
    assert conversion.residual == {"password": "secret"}
