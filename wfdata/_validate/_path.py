"""
Functions that validate file/folder paths
----------
Functions:
    _path           - Checks an input represents a Path. Returns the resolved path
    input_file      - Checks an input is an existing file, or raises DataFileNotFoundError
    download_path   - Checks path options for a file download
"""

from __future__ import annotations

import typing
from pathlib import Path

import wfdata._validate._low as validate
from wfdata.errors import DataFileNotFoundError

if typing.TYPE_CHECKING:
    from typing import Any, Optional


def _path(path: Any, isparent: bool = False) -> Path:
    "Checks an input represents a Path object and returns the resolved path"

    # Get names
    if isparent:
        name = "parent"
        type_name = "path"
    else:
        name = "path"
        type_name = "filepath"
    if isinstance(path, str):
        path = Path(path)
    validate.type(path, name, Path, type_name)
    return path.resolve()


def input_file(path: Any, hint: Optional[str] = None) -> Path:
    """Checks an input is an existing file. Raises a DataFileNotFoundError if the
    file does not exist"""

    path = _path(path)
    if not path.is_file():
        message = f"File not found:\n\t{path}"
        if hint is not None:
            message += f"\n{hint}"
        raise DataFileNotFoundError(message)
    return path


def download_path(parent: Any, name: Any, default_name: str) -> Path:
    """Checks path options for a data download. The caller decides whether an
    existing file should be replaced"""

    # Validate parent is a path
    parent = _path(parent, isparent=True)

    # Validate name
    if name is None:
        name = default_name
    else:
        name = validate.string(name, "name")

    # Existing folders can never be replaced by a download
    path = parent / name
    if path.exists() and not path.is_file():
        raise FileExistsError(
            f"Cannot download because the current path is not a file:\n\t{path}"
        )
    return path
