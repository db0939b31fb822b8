"""
The generic engine that runs a query against any protocol
----------
The engine performs the same steps for every data source: build a request URL with
the source's protocol strategy, make the request, let the strategy decode the
response into a typed outcome, and convert failed outcomes into informative
exceptions. Truncated results are returned normally, but are logged as a warning.
----------
Operations:
    fetch       - Downloads a dataset into memory
    count       - Returns the number of records matching a query
    fields      - Returns the fields of a dataset
    stream      - Streams a binary file straight to disk

Utilities:
    unwrap      - Returns the result of a successful outcome, or raises an error
"""

from __future__ import annotations

import logging
import typing

from wfdata.data._core.results import BackendFailure, Success, TransportFailure
from wfdata.data._utils import requests
from wfdata.errors import BackendError, HTTPStatusError, ParseError

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, Callable, Optional

    from wfdata.data._core.protocols import Protocol
    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset
    from wfdata.data._core.results import Outcome
    from wfdata.typing import strs, timeout

logger = logging.getLogger(__name__)


#####
# Operations
#####


def fetch(
    dataset: Dataset,
    query: Query,
    protocol: Protocol,
    timeout: timeout,
    servers: strs,
    outages: Optional[strs] = None,
) -> Any:
    "Downloads a dataset into memory as a canonical result"

    if dataset.archive:
        raise ValueError(
            f'The {dataset.source} "{dataset.id}" dataset is a binary archive and '
            "cannot be loaded into memory. Use download_file to save it instead."
        )
    url = protocol.build_url(dataset, query)
    parse = lambda payload: protocol.decode(payload, dataset, query)
    outcome = _request(
        dataset,
        "download",
        url,
        protocol,
        parse,
        protocol.format,
        timeout,
        servers,
        outages,
    )
    result = unwrap(outcome, dataset, "download", protocol.redact(url))
    logger.debug("Decoded the %s %s response", dataset.source, dataset.id)
    return result


def count(
    dataset: Dataset,
    query: Query,
    protocol: Protocol,
    timeout: timeout,
    servers: strs,
    outages: Optional[strs] = None,
) -> int:
    "Returns the number of records matching a query"

    url = protocol.count_url(dataset, query)
    outcome = _request(
        dataset,
        "count",
        url,
        protocol,
        protocol.parse_count,
        protocol.count_format,
        timeout,
        servers,
        outages,
    )
    return unwrap(outcome, dataset, "count", protocol.redact(url))


def fields(
    dataset: Dataset,
    protocol: Protocol,
    timeout: timeout,
    servers: strs,
    outages: Optional[strs] = None,
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, alias) of each field in a dataset"

    url = protocol.fields_url(dataset)
    outcome = _request(
        dataset,
        "list fields",
        url,
        protocol,
        protocol.parse_fields,
        protocol.fields_format,
        timeout,
        servers,
        outages,
    )
    return unwrap(outcome, dataset, "list fields", protocol.redact(url))


def stream(
    dataset: Dataset,
    url: str,
    path: Path,
    protocol: Protocol,
    timeout: timeout,
    servers: strs,
    outages: Optional[strs] = None,
) -> Path:
    """Streams a binary file straight to disk, without decoding it. The file only
    appears at the final path once the download completes"""

    display = protocol.redact(url)
    logger.info("Streaming %s %s to %s", dataset.source, dataset.id, path)
    logger.debug("Requesting %s", display)
    try:
        return requests.download(path, url, {}, timeout, servers, outages)
    except HTTPStatusError as error:
        raise HTTPStatusError(
            _context(dataset, "download")
            + f"The server responded with HTTP status {error.status}.\nURL: {display}",
            error.status,
            display,
            dataset.id,
        ) from None


#####
# Utilities
#####


def _context(dataset: Dataset, operation: str) -> str:
    "Returns the start of an error message"
    return f'Could not {operation} the {dataset.source} "{dataset.id}" dataset. '


def _request(
    dataset: Dataset,
    operation: str,
    url: str,
    protocol: Protocol,
    parse: Callable[[Any], Any],
    format: str,
    timeout: timeout,
    servers: strs,
    outages: Optional[strs],
) -> Outcome:
    "Makes a request and decodes the response into a typed outcome"

    logger.debug("Requesting %s", protocol.redact(url))
    response = requests.response(url, {}, timeout, servers, outages)
    try:
        return protocol.outcome(response, parse, format)
    except ParseError as error:
        message = _context(dataset, operation) + protocol.redact(str(error))
        raise type(error)(message, dataset.id) from error


def unwrap(outcome: Outcome, dataset: Dataset, operation: str, url: str) -> Any:
    """Returns the result of a successful outcome. Raises an informative error for
    failed outcomes, and logs a warning for truncated results"""

    if isinstance(outcome, Success):
        if outcome.truncated:
            logger.warning(
                "The %s server truncated the %s results. The data may be incomplete, "
                "so consider narrowing the filter or bounding box, or paging through "
                "the results with an offset.",
                dataset.source,
                dataset.id,
            )
        return outcome.result

    elif isinstance(outcome, BackendFailure):
        message = _context(dataset, operation) + (
            f"The server reported an error: {outcome.message}\nURL: {url}"
        )
        raise BackendError(message, dataset.id)

    elif isinstance(outcome, TransportFailure):
        status = f"HTTP status {outcome.status}"
        if outcome.reason:
            status += f" ({outcome.reason})"
        message = _context(dataset, operation) + (
            f"The server responded with {status}.\nURL: {url}"
        )
        raise HTTPStatusError(message, outcome.status, url, dataset.id)

    raise TypeError(f"Unrecognized request outcome: {outcome!r}")
