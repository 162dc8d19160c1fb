"""Safe resolution of text keys to record types and fields."""

from .resolver import RECORD_KEY, FieldResolver


__all__ = ["RECORD_KEY", "FieldResolver"]
