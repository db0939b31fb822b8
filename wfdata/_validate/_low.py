"""
Low-level functions that validate scalar inputs
----------
Types:
    type            - Checks an input has an allowed type
    string          - Checks an input is a string
    option          - Checks a string is a recognized option (case-insensitive)

Numbers:
    integer         - Checks an input is an integer (and not a bool)
    real            - Checks an input is a finite real number (and not a bool)
    inrange         - Checks a number is within an allowed interval
    positive        - Checks an input is a positive integer
    nonnegative     - Checks an input is a non-negative integer
    timeout         - Checks an input represents an HTTP timeout

Query inputs:
    bbox            - Checks an input is a west, south, east, north bounding box
    date            - Converts a date or ISO date string to a datetime.date
    identifier      - Checks a SQL identifier only contains letters and underscores
"""

from __future__ import annotations

import datetime
import re
import typing
from math import isfinite

from wfdata._utils import aslist
from wfdata.errors import ConfigurationMissingError

if typing.TYPE_CHECKING:
    from typing import Any, Optional, Sequence

    from wfdata.typing import BBox, timeout as Timeout


#####
# Types
#####


def type(input: Any, name: str, type: Any, type_name: str) -> None:
    "Checks an input has an allowed type"
    if not isinstance(input, type):
        raise TypeError(f"{name} must be a {type_name}")


def string(input: Any, name: str) -> str:
    "Checks an input is a string"
    type(input, name, str, "string")
    return input


def option(input: Any, name: str, allowed: Sequence[str]) -> str:
    "Checks that a string is a recognized option (case-insensitive)"

    string(input, name)
    lowered = input.lower()
    for value in allowed:
        if lowered == value.lower():
            return value
    allowed = ", ".join(allowed)
    raise ValueError(
        f"{name} ({input}) is not a recognized option. Supported options are: {allowed}"
    )


#####
# Numbers
#####


def integer(input: Any, name: str) -> int:
    "Checks an input is an integer. Booleans are not permitted"
    if isinstance(input, bool) or not isinstance(input, int):
        raise TypeError(f"{name} must be an integer")
    return input


def real(input: Any, name: str) -> float:
    "Checks an input is a finite real number. Booleans are not permitted"
    if isinstance(input, bool) or not isinstance(input, (int, float)):
        raise TypeError(f"{name} must be a real number")
    if not isfinite(input):
        raise ValueError(f"{name} must be finite")
    return input


def inrange(
    input: float, name: str, min: Optional[float] = None, max: Optional[float] = None
) -> None:
    "Checks that a number is within an allowed interval"
    if min is not None and input < min:
        raise ValueError(f"{name} must be greater than or equal to {min}")
    if max is not None and input > max:
        raise ValueError(f"{name} must be less than or equal to {max}")


def positive(input: Any, name: str) -> int:
    "Checks an input is a positive integer"
    integer(input, name)
    if input <= 0:
        raise ValueError(f"{name} must be a positive integer, but it is {input}")
    return input


def nonnegative(input: Any, name: str) -> int:
    "Checks an input is a non-negative integer"
    integer(input, name)
    if input < 0:
        raise ValueError(f"{name} must not be negative, but it is {input}")
    return input


def timeout(timeout: Any) -> Timeout:
    """Checks an input represents an HTTP timeout. Returns None, a float, or a
    (connect, read) pair of floats"""

    if timeout is None:
        return None
    values = aslist(timeout)
    if len(values) not in (1, 2):
        raise ValueError("timeout must have either 1 or 2 elements")
    for v, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"The dtype of timeout[{v}] must be a real number")
        if value <= 0:
            raise ValueError(
                f"The data elements of timeout must be greater than 0, "
                f"but element [{v}] (value={value}) is not"
            )
    values = [float(value) for value in values]
    if len(values) == 1:
        return values[0]
    return tuple(values)


#####
# Query inputs
#####


def bbox(bbox: Any, name: str = "bbox") -> BBox:
    """Checks an input is a (west, south, east, north) bounding box in decimal
    degrees. Also accepts a comma-delimited string"""

    if isinstance(bbox, str):
        parts = bbox.split(",")
        try:
            bbox = [float(part) for part in parts]
        except ValueError as error:
            raise ValueError(
                f'{name} must be a "west,south,east,north" string of numbers'
            ) from error

    bbox = aslist(bbox)
    if len(bbox) != 4:
        raise ValueError(
            f"{name} must have exactly 4 elements (west, south, east, north), "
            f"but it has {len(bbox)}"
        )
    for value in bbox:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"The elements of {name} must be real numbers")
        if not isfinite(value):
            raise ValueError(f"The elements of {name} must be finite")

    west, south, east, north = [float(value) for value in bbox]
    inrange(west, f"The west edge of {name}", min=-180, max=180)
    inrange(east, f"The east edge of {name}", min=-180, max=180)
    inrange(south, f"The south edge of {name}", min=-90, max=90)
    inrange(north, f"The north edge of {name}", min=-90, max=90)
    if west >= east:
        raise ValueError(f"The west edge of {name} must be less than the east edge")
    if south >= north:
        raise ValueError(f"The south edge of {name} must be less than the north edge")
    return (west, south, east, north)


def date(input: Any, name: str = "date") -> datetime.date:
    "Converts a datetime.date or ISO 'YYYY-MM-DD' string to a datetime.date"

    if isinstance(input, datetime.datetime):
        return input.date()
    elif isinstance(input, datetime.date):
        return input
    string(input, name)
    try:
        return datetime.date.fromisoformat(input)
    except ValueError as error:
        raise ValueError(
            f'{name} ({input}) is not a valid "YYYY-MM-DD" date'
        ) from error


_IDENTIFIER = re.compile(r"^[A-Za-z_]+$")


def identifier(input: Any, name: str) -> str:
    "Checks a SQL identifier only contains letters and underscores"
    string(input, name)
    if not _IDENTIFIER.match(input):
        raise ValueError(
            f"Invalid {name}: {input!r}. {name} may only contain letters and underscores"
        )
    return input


def credential(value: Optional[str], message: str) -> str:
    "Checks a required credential was provided"
    if value is None or value == "":
        raise ConfigurationMissingError(message)
    return value
