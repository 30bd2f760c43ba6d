from enum import Enum


class Verb(str, Enum):
    """Recognized request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    MERGE = "MERGE"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    COPY = "COPY"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def contains(cls, value) -> bool:
        try:
            cls(value)
        except (ValueError, TypeError):
            return False
        return True


class DataFormat(str, Enum):
    """
    Content type tags.

    Only RAW_ARRAY and JSON derive a payload from content; the remaining
    tags are recognized but leave the payload untouched.
    """

    RAW_ARRAY = "raw_array"  # already-structured mapping
    JSON = "json"
    RAW = "raw"
    TEXT = "text"
    XML = "xml"
    CSV = "csv"

    @classmethod
    def coerce(cls, value):
        """Return the matching member, or ``value`` unchanged for custom tags."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            pass
        if isinstance(value, str) and value.lower() in cls._value2member_map_:
            return cls(value.lower())
        return value
