"""
Process-wide configuration
----------
wfdata saves downloaded datasets beneath a single data folder, with one subfolder
per data source (for example, "<data dir>/WFIGS"). By default, the data folder is
"~/.wfdata", but you can change it by setting the WFDATA_DIR environment variable,
or by calling `set_data_dir`.
----------
Constants:
    DEFAULT_TIMEOUT     - Default connect/read timeout (seconds) for HTTP requests
    DATA_DIR_VARIABLE   - Environment variable that overrides the data folder

Functions:
    data_dir        - Returns the root data folder
    set_data_dir    - Sets the root data folder for the current process
    source_dir      - Returns (and creates) the data folder for a source
"""

from __future__ import annotations

import os
import typing
from pathlib import Path

if typing.TYPE_CHECKING:
    from wfdata.typing import Pathlike

DEFAULT_TIMEOUT = 60
DATA_DIR_VARIABLE = "WFDATA_DIR"


def data_dir() -> Path:
    """
    Returns the root data folder
    ----------
    data_dir()
    Returns the root folder used to store downloaded datasets. Uses the WFDATA_DIR
    environment variable if it is set, otherwise "~/.wfdata". The folder is not
    created by this function.
    ----------
    Outputs:
        Path: The root data folder
    """
    folder = os.environ.get(DATA_DIR_VARIABLE)
    if folder:
        return Path(folder).expanduser()
    return Path.home() / ".wfdata"


def set_data_dir(path: Pathlike) -> None:
    """
    Sets the root data folder for the current process
    ----------
    set_data_dir(path)
    Sets the WFDATA_DIR environment variable for the current process, so that
    subsequent downloads are saved beneath the indicated folder.
    ----------
    Inputs:
        path: The new root data folder
    """
    os.environ[DATA_DIR_VARIABLE] = str(Path(path).expanduser())


def source_dir(name: str) -> Path:
    "Returns the data folder for a source, creating it if necessary"
    folder = data_dir() / name
    folder.mkdir(parents=True, exist_ok=True)
    return folder
