"""
Utility module to handle HTTP requests to data servers
----------
This module provides utilities that leverage the "requests" library to acquire data
from remote servers. Many of these functions are intended to help validate server
responses and provide informative errors when an HTTP request is invalid.
----------
Main functions:
    query_url           - Builds a query URL from base URL and parameters
    response            - Makes an HTTP request and returns the unchecked response
    get                 - Validates and returns an HTTP response
    content             - Validates and returns HTTP response content (as bytes)
    json                - Validates and returns an HTTP response as a JSON dict
    head                - Returns the status code of a HEAD request
    download            - Streams a remote file to the local filesystem

Utilities:
    _validate           - Parses timeout and error info for an HTTP request
    _check_status       - Raises an informative error for a non-success status code
    _connect_timeout    - Builds an informative error for a connection timeout
    _read_timeout       - Builds an informative error for a read timeout
    _check_connections  - Adds connection info to a timeout error
"""

from __future__ import annotations

import typing
from pathlib import Path
from tempfile import TemporaryDirectory
from urllib.parse import unquote

import requests
from requests.exceptions import ConnectTimeout, JSONDecodeError, ReadTimeout

from wfdata import _validate as validate
from wfdata._utils import aslist
from wfdata.errors import HTTPStatusError, InvalidJSONError

if typing.TYPE_CHECKING:
    from typing import Any, Optional

    from requests import Response

    from wfdata.typing import strs, timeout

    servers = list[str]
    outages = list[str | None]

# Size of streamed download chunks (bytes)
CHUNK_SIZE = 1024 * 1024


#####
# Main
#####


def _validate(
    timeout: Any, servers: strs, outages: strs | None
) -> tuple[timeout, servers, outages]:
    "Parses timeout and error info for an HTTP request"

    timeout = validate.timeout(timeout)
    servers = aslist(servers)
    if outages is None:
        outages = [None] * len(servers)
    else:
        outages = aslist(outages)
    return timeout, servers, outages


def query_url(base: str, params: dict, decode: bool = False) -> str:
    "Builds a percent-encoded query URL from a base URL and parameters"

    request = requests.Request(url=base, params=params)
    url = request.prepare().url
    if decode:
        url = unquote(url)
    return url


def response(
    url: str,
    params: dict[str, Any],
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> Response:
    """Makes an HTTP request and returns the response without checking the status
    code. Provides informative errors if the request times out"""

    timeout, servers, outages = _validate(timeout, servers, outages)
    try:
        return requests.get(url, params=params, timeout=timeout)

    # Informative error if the request timed out
    except ConnectTimeout as error:
        raise _connect_timeout(servers, outages) from error
    except ReadTimeout as error:
        raise _read_timeout(servers, outages) from error


def get(
    url: str,
    params: dict[str, Any],
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> Response:
    """Makes an HTTP request and returns the response. Provides informative errors if
    the request times out, or the request was not successful"""

    servers = aslist(servers)
    output = response(url, params, timeout, servers, outages)
    _check_status(output, servers[0])
    return output


def content(
    url: str,
    params: dict[str, Any],
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> bytes:
    "Validates an HTTP request and returns the response content as bytes"

    output = get(url, params, timeout, servers, outages)
    return output.content


def json(
    url: str,
    params: dict[str, Any],
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> dict:
    "Validates and returns an HTTP request as a JSON dict"

    # Validate and get response
    servers = aslist(servers)
    output = get(url, params, timeout, servers, outages)

    # Convert response to JSON
    try:
        return output.json()
    except JSONDecodeError as error:
        raise InvalidJSONError(
            f"The {servers[0]} response was not valid JSON"
        ) from error


def head(
    url: str,
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> int:
    "Makes an HTTP HEAD request and returns the status code"

    timeout, servers, outages = _validate(timeout, servers, outages)
    try:
        output = requests.head(url, timeout=timeout, allow_redirects=True)
    except ConnectTimeout as error:
        raise _connect_timeout(servers, outages) from error
    except ReadTimeout as error:
        raise _read_timeout(servers, outages) from error
    return output.status_code


def download(
    path: Path,
    url: str,
    params: dict[str, Any],
    timeout: Any,
    servers: strs,
    outages: Optional[strs] = None,
) -> Path:
    """Streams a web dataset to the indicated path. The data is written to a
    temporary file in the same folder, and only moved to the final path once the
    download completes"""

    timeout, servers, outages = _validate(timeout, servers, outages)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with requests.get(url, params=params, timeout=timeout, stream=True) as output:
            _check_status(output, servers[0])
            with TemporaryDirectory(dir=path.parent) as temp:
                partial = Path(temp) / path.name
                with open(partial, "wb") as file:
                    for chunk in output.iter_content(chunk_size=CHUNK_SIZE):
                        file.write(chunk)
                partial.replace(path)

    # Informative error if the request timed out
    except ConnectTimeout as error:
        raise _connect_timeout(servers, outages) from error
    except ReadTimeout as error:
        raise _read_timeout(servers, outages) from error
    return path


def _check_status(response: Response, server: str) -> None:
    "Raises an informative error if a response does not have a success status code"

    status = response.status_code
    if not 200 <= status < 300:
        raise HTTPStatusError(
            f"There was a problem connecting with the {server} server "
            f"(HTTP status {status}).",
            status,
        )


#####
# Timeout errors
#####


def _connect_timeout(servers: servers, outages: outages) -> ConnectTimeout:
    "Builds a ConnectTimeout error with an informative error message"

    message = f"Took too long to connect to the {servers[0]} server."
    servers = ["your internet connection"] + servers
    outages = [None] + outages
    message += _check_connections(servers, outages)
    return ConnectTimeout(message)


def _read_timeout(servers: servers, outages: outages) -> ReadTimeout:
    "Builds a ReadTimeout error with an informative error message"

    message = f"The {servers[0]} server took too long to respond."
    message += _check_connections(servers, outages)
    return ReadTimeout(message)


def _check_connections(connections: servers, outages: outages) -> str:
    "Builds an informative message indicating server connections that may be down"
    message = " Try checking:\n"
    for connection, outage in zip(connections, outages, strict=True):
        line = f"  * If {connection} is down"
        if outage is not None:
            line += f" ({outage})"
        message += line + "\n"
    message += (
        "If a connection is down, then wait a bit and try again later.\n"
        'Otherwise, try increasing "timeout" to a longer interval.'
    )
    return message
