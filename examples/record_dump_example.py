"""Minimal example converting between record types and loading record dumps."""

from dataclasses import dataclass
from typing import NamedTuple

from keyfit import RECORD_KEY, load_record_or_raise, record, record_to_record_or_raise


@record
@dataclass
class NotificationEmail:
    address: str | None = None
    verified: bool = False
    sent_count: int = 0


class UserEmail(NamedTuple):
    address: str | None = None
    verified: bool = False


def main() -> None:
    """Convert a record to another type, then rebuild one from a dump."""
    notification = NotificationEmail("john@example.com", verified=True, sent_count=3)
    email, rest = record_to_record_or_raise(notification, UserEmail, rest="separate")
    print("converted:", email)
    print("leftover:", rest)

    dump = {RECORD_KEY: "__main__.NotificationEmail", "address": "jane@example.com", "opened": True}
    loaded, extra = load_record_or_raise(dump)
    print("loaded:", loaded)
    print("not a field:", extra)


if __name__ == "__main__":
    main()
