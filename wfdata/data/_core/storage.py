"""
Saves canonical results to disk, and loads them back
----------
Feature collections are saved as GeoJSON, tables as CSV, and images as raw image
bytes. Files are written to a temporary folder beside the final path and then moved
into place, so a failed write never leaves a partial file at the final path.
----------
Functions:
    save        - Saves a result to a file
    load        - Loads a saved result
    atomic      - Writes a file via a temporary path in the same folder
"""

from __future__ import annotations

import json
import typing
from pathlib import Path
from tempfile import TemporaryDirectory

import pandas as pd

import wfdata._validate as validate
from wfdata.data._core.protocols.wms import EXTENSIONS
from wfdata.data._core.results import FeatureCollection, Image, Table
from wfdata.errors import ParseError

if typing.TYPE_CHECKING:
    from typing import Any, Callable, Optional

# Suffixes of saved feature collections and tables
GEOJSON = (".geojson", ".json")
CSV = (".csv",)


def atomic(path: Path, write: Callable[[Path], Any]) -> Path:
    """Calls a writer on a temporary path, and moves the written file to the final
    path once the writer finishes successfully"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with TemporaryDirectory(dir=path.parent) as temp:
        partial = Path(temp) / path.name
        write(partial)
        partial.replace(path)
    return path


def save(result: FeatureCollection | Table | Image, path: Path) -> Path:
    """
    Saves a result to a file
    ----------
    save(result, path)
    Saves a FeatureCollection as GeoJSON, a Table as CSV, or an Image as raw bytes.
    The file is only created at the final path once it has been written completely.
    ----------
    Inputs:
        result: The result being saved
        path: The path of the saved file

    Outputs:
        Path: The path to the saved file
    """

    if isinstance(result, FeatureCollection):
        geojson = result.to_geojson()

        def write(file: Path) -> None:
            with open(file, "w", encoding="utf-8") as handle:
                json.dump(geojson, handle)

    elif isinstance(result, Table):
        write = lambda file: result.data.to_csv(file, index=False)
    elif isinstance(result, Image):
        write = lambda file: file.write_bytes(result.content)
    else:
        raise TypeError(f"Cannot save a {type(result).__name__} object")
    return atomic(path, write)


def load(
    path: Path, hint: Optional[str] = None
) -> FeatureCollection | Table | Image:
    """
    Loads a saved result
    ----------
    load(path)
    Loads a saved GeoJSON file as a FeatureCollection, a CSV file as a Table, or an
    image file as an Image. Raises a DataFileNotFoundError if the file does not
    exist. This function never makes a network request.

    load(path, hint)
    Appends a hint to the DataFileNotFoundError message.
    ----------
    Inputs:
        path: The path to a saved file
        hint: Advice shown if the file does not exist

    Outputs:
        FeatureCollection | Table | Image: The loaded result
    """

    path = validate.input_file(path, hint)
    suffix = path.suffix.lower()
    if suffix in GEOJSON:
        with open(path, encoding="utf-8") as file:
            try:
                geojson = json.load(file)
            except json.JSONDecodeError as error:
                raise ParseError(f"The file is not valid GeoJSON:\n\t{path}") from error
        truncated = isinstance(geojson, dict) and bool(geojson.get("truncated", False))
        return FeatureCollection.from_geojson(geojson, truncated)
    elif suffix in CSV:
        return Table(pd.read_csv(path))

    for format, extension in EXTENSIONS.items():
        if suffix == f".{extension}":
            return Image(path.read_bytes(), format)
    raise ValueError(f"Cannot load files with a {suffix} extension:\n\t{path}")
