from datetime import datetime
from typing import Any, Iterable, List, Optional
import re

from vizschema.canonical.field import TypeTag


URL_PREFIXES = ("http://", "https://")

# Date-like strings must be longer than a bare YYYY-MM-DD
MIN_DATE_LENGTH = 10

NUMERIC_STRING_PATTERN = re.compile(r"^[+-]?\d+(\.\d+)?$")

DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
)


def _is_url(value: str) -> bool:
    return value.startswith(URL_PREFIXES)


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        if value.endswith("Z"):
            return datetime.fromisoformat(value[:-1] + "+00:00")
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _is_date(value: str) -> bool:
    """
    Heuristic calendar date/time detection.

    Digit-only strings (ids, epoch values, phone numbers) are never dates.
    """
    if len(value) <= MIN_DATE_LENGTH:
        return False
    v = value.strip()
    if NUMERIC_STRING_PATTERN.fullmatch(v):
        return False

    if _parse_iso(v) is not None:
        return True

    for fmt in DATETIME_FORMATS:
        try:
            datetime.strptime(v, fmt)
            return True
        except ValueError:
            continue
    return False


def _classify_string(value: str) -> TypeTag:
    if _is_url(value):
        return TypeTag.URL
    if _is_date(value):
        return TypeTag.DATE
    return TypeTag.STRING


def classify(value: Any) -> TypeTag:
    """
    Map one raw JSON value to a TypeTag.

    Checks run in a fixed order and the first match wins:
    null -> number -> boolean -> url -> date -> string -> array -> object.
    Anything else is treated as a string.
    """
    if value is None:
        return TypeTag.NULL

    # bool is a subclass of int
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return TypeTag.NUMBER

    if isinstance(value, bool):
        return TypeTag.BOOLEAN

    if isinstance(value, str):
        return _classify_string(value)

    if isinstance(value, (list, tuple)):
        return TypeTag.ARRAY

    if isinstance(value, dict):
        return TypeTag.OBJECT

    return TypeTag.STRING


def _first_string_sample(samples: Optional[Iterable[Any]]) -> Optional[str]:
    for sample in samples or []:
        if isinstance(sample, str):
            return sample
    return None


def classify_declared(
    declared_types,
    samples: Optional[Iterable[Any]] = None,
) -> List[TypeTag]:
    """
    Map a declared type name (or list of names) from a structural
    description to TypeTags, one per declared name.

    Only the URL heuristic is applied to string samples; declared
    strings are otherwise plain strings.
    """
    if isinstance(declared_types, str):
        declared_types = [declared_types]

    tags: List[TypeTag] = []
    for type_name in declared_types or []:
        name = str(type_name).strip().lower()

        if name in ("number", "integer"):
            tag = TypeTag.NUMBER
        elif name == "boolean":
            tag = TypeTag.BOOLEAN
        elif name == "string":
            sample = _first_string_sample(samples)
            tag = TypeTag.URL if sample is not None and _is_url(sample) else TypeTag.STRING
        elif name == "object":
            tag = TypeTag.OBJECT
        elif name == "array":
            tag = TypeTag.ARRAY
        elif name == "null":
            tag = TypeTag.NULL
        else:
            tag = TypeTag.STRING

        if tag not in tags:
            tags.append(tag)

    return tags
