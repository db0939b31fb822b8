"""
The interface shared by every protocol strategy
----------
A protocol strategy knows how to translate a Query into a request URL for one family
of web services, and how to decode that family's responses. The engine treats every
strategy the same way: build the URL, make the request, and let the strategy turn
the response into a typed outcome.
----------
Classes:
    Protocol        - Base class for protocol strategies

Functions:
    bbox_string     - Formats a bounding box as a "west,south,east,north" string
    fields_string   - Formats a field selection as a comma-delimited string
    at_ceiling      - True if a result reaches a dataset's record ceiling
"""

from __future__ import annotations

import typing

from requests.exceptions import JSONDecodeError

from wfdata.data._core.results import BackendFailure, Success, TransportFailure

if typing.TYPE_CHECKING:
    from typing import Any, Callable, Optional

    from requests import Response

    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset
    from wfdata.data._core.results import Outcome
    from wfdata.typing import BBox


class Protocol:
    """
    Base class for protocol strategies
    ----------
    Subclasses set the following class attributes:
        name: A display name for the protocol
        supports: The Query options the protocol can honor
        options: The keys of Query.options the protocol accepts
        format: How to read a data response ("json", "text", or "bytes")
        count_format: How to read a record count response
        fields_format: How to read a field listing response

    and implement some or all of:
        _build_url      - Returns the request URL for a query
        decode          - Converts a response payload into a canonical result
        detect_error    - Returns the message of an error encoded in a payload
        count_url       - Returns the URL that counts matching records
        parse_count     - Returns the record count from a payload
        fields_url      - Returns the URL that lists a dataset's fields
        parse_fields    - Returns (name, type, alias) tuples from a payload
    """

    name = "base"
    supports: frozenset[str] = frozenset()
    options: frozenset[str] = frozenset()
    format = "json"
    count_format = "json"
    fields_format = "json"

    #####
    # URLs
    #####

    def check(self, dataset: Dataset, query: Query) -> None:
        "Raises a ValueError if a query uses an option the protocol cannot honor"

        for name in query.requested():
            if name.startswith("options."):
                key = name.removeprefix("options.")
                supported = key in self.options
            else:
                supported = name in self.supports
            if not supported:
                raise ValueError(
                    f'The {self.name} protocol used by the {dataset.source} '
                    f'"{dataset.id}" dataset does not support the "{name}" query option'
                )

    def build_url(self, dataset: Dataset, query: Query) -> str:
        "Validates a query and returns the request URL"
        self.check(dataset, query)
        return self._build_url(dataset, query)

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        raise NotImplementedError

    def count_url(self, dataset: Dataset, query: Query) -> str:
        raise NotImplementedError(
            f"The {self.name} protocol does not support record counts"
        )

    def fields_url(self, dataset: Dataset) -> str:
        raise NotImplementedError(
            f"The {self.name} protocol does not support field listings"
        )

    def default_filename(self, dataset: Dataset, query: Query) -> str:
        "Returns the default name of a saved dataset"
        return f"{dataset.id}.geojson"

    def redact(self, text: str) -> str:
        "Removes credentials from a URL or message"
        return text

    #####
    # Responses
    #####

    def outcome(
        self, response: Response, parse: Callable[[Any], Any], format: str
    ) -> Outcome:
        """Converts an HTTP response into a typed outcome. The parse function
        converts a checked payload into a result"""

        status = response.status_code
        if not 200 <= status < 300:
            return TransportFailure(status, response.reason or "")

        payload = self.payload(response, format)
        if isinstance(payload, BackendFailure):
            return payload
        message = self.detect_error(payload)
        if message is not None:
            return BackendFailure(message)

        result = parse(payload)
        return Success(result, getattr(result, "truncated", False))

    def payload(self, response: Response, format: str) -> Any:
        "Reads a response body as JSON, text, or bytes"

        if format == "bytes":
            return response.content
        elif format == "text":
            return response.text
        try:
            return response.json()
        except JSONDecodeError:
            return BackendFailure(f"The {self.name} response was not valid JSON")

    def detect_error(self, payload: Any) -> Optional[str]:
        return None

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> Any:
        raise NotImplementedError

    def parse_count(self, payload: Any) -> int:
        raise NotImplementedError

    def parse_fields(self, payload: Any) -> list[tuple[str, str, str]]:
        raise NotImplementedError


#####
# Formatting utilities
#####


def _coordinate(value: float) -> str:
    "Formats a coordinate without a trailing .0"
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


def bbox_string(bbox: BBox) -> str:
    "Formats a bounding box as a 'west,south,east,north' string"
    return ",".join(_coordinate(value) for value in bbox)


def fields_string(fields: str | tuple[str, ...]) -> str:
    "Formats a field selection as a comma-delimited string"
    if fields == "*":
        return "*"
    return ",".join(fields)


def at_ceiling(count: int, dataset: Dataset) -> bool:
    """True if a result reaches the dataset's hard record ceiling. A query that
    legitimately matches exactly the ceiling is also flagged"""
    return dataset.ceiling is not None and count >= dataset.ceiling
