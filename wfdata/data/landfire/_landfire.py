"""
Functions that download LANDFIRE archives
----------
Functions:
    info                - Returns a description of LANDFIRE
    download_product    - Downloads a full-extent LANDFIRE archive
    list_downloads      - Lists previously downloaded LANDFIRE files
"""

from __future__ import annotations

import logging
import typing
from pathlib import PurePosixPath
from urllib.parse import urlparse

import wfdata._validate as validate
from wfdata import config
from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._utils import requests
from wfdata.data.landfire import _validate
from wfdata.data.landfire.url import download_url
from wfdata.errors import HTTPStatusError

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.typing import Pathlike, timeout

logger = logging.getLogger(__name__)

SOURCE = "LANDFIRE"
SERVER = "LANDFIRE"


def info() -> str:
    "Returns a description of LANDFIRE data products and access methods"
    return (
        "LANDFIRE: Landscape Fire and Resource Management Planning Tools\n"
        "A joint USDI/USDA Forest Service program providing geospatial data for "
        "wildland fire and natural resource management.\n"
        "\n"
        "Product categories:\n"
        "  fuel         - Fire behavior fuel models and canopy characteristics\n"
        "  vegetation   - Existing and potential vegetation\n"
        "  disturbance  - Annual and historical disturbance events\n"
        "  topographic  - Elevation, slope, and aspect\n"
        "  fire_regime  - Historical fire frequency and severity\n"
        "\n"
        "Access: full-extent GeoTIFF archives, and WCS/WMS services.\n"
        "Regions: conus, alaska, hawaii. Versions: LF2001 to LF2024."
    )


def download_product(
    product: str,
    region: str,
    version: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Downloads a full-extent LANDFIRE archive
    ----------
    download_product(product, region, version)
    Downloads the zip archive of a product for a region and version, and saves it in
    the LANDFIRE data folder using the name of the published archive. If the file
    already exists, returns its path without contacting the server. Archives are
    large (hundreds of MB to several GB), so the file is streamed to disk.

    Before downloading, checks that the archive exists using an HTTP HEAD request.
    Not every product/region/version combination is published, and a missing
    combination raises an HTTPStatusError without downloading anything.

    download_product(..., *, filename, parent)
    download_product(..., *, force=True)
    Specifies the name and folder of the saved file. Use `force=True` to replace an
    existing file.
    ----------
    Inputs:
        product: A product acronym (for example, "FBFM40")
        region: "conus", "alaska", or "hawaii"
        version: A version name (for example, "LF2024")
        filename: The name of the saved file
        parent: The folder in which to save the file
        force: True to replace an existing file
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Path: The path to the downloaded archive
    """

    url = download_url(product, region, version)
    if parent is None:
        parent = config.source_dir(SOURCE)
    default = PurePosixPath(urlparse(url).path).name
    path = validate.download_path(parent, filename, default)
    if path.exists() and not force:
        logger.info("Using the existing LANDFIRE file: %s", path)
        return path

    # Check the combination is published before streaming
    status = requests.head(url, timeout, SERVER)
    if status != 200:
        product = _validate.product(product)
        raise HTTPStatusError(
            f"LANDFIRE {product.acronym} is not available for {region} {version} "
            f"(HTTP status {status}).",
            status,
            url,
        )

    logger.info("Downloading LANDFIRE archive from %s", url)
    requests.download(path, url, {}, timeout, SERVER)
    logger.info("Saved LANDFIRE archive to %s", path)
    return path


def list_downloads() -> list[str]:
    "Returns the names of the files in the LANDFIRE data folder"
    folder = config.data_dir() / SOURCE
    if not folder.is_dir():
        return []
    return sorted(path.name for path in folder.iterdir())
