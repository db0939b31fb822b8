"""
The protocol-agnostic shape of a dataset query
----------
A Query collects the options a caller may use to filter a dataset. Every protocol
strategy translates the same Query into its own request parameters, and rejects any
option that it cannot honor. Queries are validated when they are created, so invalid
options raise errors before any network request is made.
----------
Classes:
    Query       - A validated, immutable dataset query
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field, fields

import wfdata._validate as validate
from wfdata._utils import aslist

if typing.TYPE_CHECKING:
    from datetime import date as Date
    from typing import Any, Optional

    from wfdata.typing import BBox


@dataclass(frozen=True)
class Query:
    """
    A validated, immutable dataset query
    ----------
    Query(...)
    Builds a query from keyword options. All options are optional, and an empty
    Query matches every record in a dataset.
    ----------
    Options:
        where: A filter expression in the backend's dialect (SQL-like "where" clause
            or CQL). None matches all records.
        fields: "*" for every field, or a list of field names
        limit: The maximum number of records to return (positive integer)
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        offset: The number of records to skip (non-negative integer)
        sortby: A sort expression in the backend's dialect
        datetime: An ISO-8601 instant or interval
        date: A single date, used by sources that publish daily files
        days: A number of days, used by sources with relative time windows
        options: Protocol-specific options (for example, WMS image width)
    """

    where: Optional[str] = None
    fields: str | tuple[str, ...] = "*"
    limit: Optional[int] = None
    bbox: Optional[BBox] = None
    offset: Optional[int] = None
    sortby: Optional[str] = None
    datetime: Optional[str] = None
    date: Optional[Date] = None
    days: Optional[int] = None
    options: dict[str, Any] = field(default_factory=dict)

    # Options is a dict, so queries compare by value but cannot be hashed
    __hash__ = None

    def __post_init__(self):
        if self.where is not None:
            validate.string(self.where, "where")
        if self.sortby is not None:
            validate.string(self.sortby, "sortby")
        if self.datetime is not None:
            validate.string(self.datetime, "datetime")
        object.__setattr__(self, "fields", _fields(self.fields))
        if self.limit is not None:
            validate.positive(self.limit, "limit")
        if self.offset is not None:
            validate.nonnegative(self.offset, "offset")
        if self.days is not None:
            validate.nonnegative(self.days, "days")
        if self.bbox is not None:
            object.__setattr__(self, "bbox", validate.bbox(self.bbox))
        if self.date is not None:
            object.__setattr__(self, "date", validate.date(self.date))
        validate.type(self.options, "options", dict, "dict")
        object.__setattr__(self, "options", dict(self.options))

    @property
    def projected(self) -> bool:
        "True if the query selects a subset of fields"
        return self.fields != "*"

    def requested(self) -> list[str]:
        "Returns the names of the options that differ from the defaults"
        names = []
        for option in fields(self):
            value = getattr(self, option.name)
            if option.name == "fields":
                if self.projected:
                    names.append("fields")
            elif option.name == "options":
                names.extend(f"options.{key}" for key in value)
            elif value is not None:
                names.append(option.name)
        return names


def _fields(fields: Any) -> str | tuple[str, ...]:
    "Checks a field selection is '*' or a list of field names"

    if fields == "*":
        return "*"
    fields = aslist(fields)
    if len(fields) == 0:
        raise ValueError("fields cannot be empty. Use '*' to select every field")
    for f, name in enumerate(fields):
        if not isinstance(name, str):
            raise TypeError(
                "fields must be a string or list of strings, "
                f"but fields[{f}] is not a string"
            )
    return tuple(fields)
