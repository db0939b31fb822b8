"""
Utilities used to acquire remote datasets
----------
Modules:
    requests    - Functions that make HTTP requests and validate the responses

Functions:
    extract     - Extracts a single member from a zip archive
"""

from __future__ import annotations

import typing
import zipfile
from pathlib import Path
from tempfile import TemporaryDirectory

if typing.TYPE_CHECKING:
    from typing import Optional


def extract(archive: Path, suffix: str, path: Path) -> Path:
    """
    Extracts a single member from a zip archive
    ----------
    extract(archive, suffix, path)
    Locates the first archive member whose name ends with the indicated suffix and
    extracts it to the indicated path. The member is extracted to a temporary folder
    and then moved into place, so a failed extraction never leaves a partial file.
    Raises a FileNotFoundError if no member matches the suffix.
    ----------
    Inputs:
        archive: The path to the zip archive
        suffix: The file suffix of the member to extract (for example, ".sqlite")
        path: The path for the extracted file

    Outputs:
        Path: The path to the extracted file
    """

    with zipfile.ZipFile(archive) as zip:
        member = _find_member(zip, suffix)
        if member is None:
            raise FileNotFoundError(
                f'The archive does not contain a "{suffix}" file:\n\t{archive}'
            )
        with TemporaryDirectory(dir=path.parent) as temp:
            extracted = Path(zip.extract(member, temp))
            extracted.replace(path)
    return path


def _find_member(zip: zipfile.ZipFile, suffix: str) -> Optional[str]:
    "Returns the name of the first archive member with the given suffix"
    for name in zip.namelist():
        if name.lower().endswith(suffix.lower()):
            return name
    return None
