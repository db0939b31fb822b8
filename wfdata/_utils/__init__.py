"""
_utils  Low-level utilities used throughout the package
----------
Functions:
    aslist          - Returns an input as a list
    format_number   - Formats an integer with thousands separators
    redact          - Replaces a secret in a string with a placeholder
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from typing import Any, Optional


def aslist(input: Any) -> list:
    """
    aslist  Returns an input as a list
    ----------
    aslist(input)
    Converts tuples to lists and returns lists unchanged. Any other input is
    wrapped in a new single-element list, so a lone server name and a list of
    server names can be handled the same way.
    """
    if isinstance(input, tuple):
        return list(input)
    elif isinstance(input, list):
        return input
    return [input]


def format_number(n: int) -> str:
    "Formats an integer with comma thousands separators"
    return f"{n:,}"


def redact(text: str, secret: Optional[str], placeholder: str = "[MAP_KEY]") -> str:
    "Replaces every occurrence of a secret in a string with a placeholder"
    if secret:
        text = text.replace(secret, placeholder)
    return text
