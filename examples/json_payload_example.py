"""Minimal example converting a camel-cased JSON payload into a dataclass."""

import json
from dataclasses import dataclass

from keyfit import map_to_record_or_raise, record


@record
@dataclass
class User:
    first_name: str | None = None
    username: str | None = None
    password: str | None = None


PAYLOAD = '{"FirstName": "John", "Username": "john", "password": "pass", "age": 30}'


def main() -> None:
    """Convert the payload with and without key transformations."""
    source = json.loads(PAYLOAD)

    exact = map_to_record_or_raise(source, User)
    print("exact keys only:", exact)

    user, rest = map_to_record_or_raise(source, User, transformations=["snake_case"], rest="separate")
    print("with snake_case:", user)
    print("leftover:", rest)

    merged = map_to_record_or_raise(source, "__main__.User", transformations=["snake_case"], rest="merge")
    print("merged leftover:", merged.keyfit)


if __name__ == "__main__":
    main()
