"""
Functions to access map layers from the Global Wildfire Information System
----------
The Global Wildfire Information System (GWIS) and the European Forest Fire
Information System (EFFIS) are part of the Copernicus Emergency Management Service.
They publish fire danger forecasts, active fire detections, burnt area mapping, and
fire severity assessments as WMS map layers (CC BY 4.0).

This module builds WMS GetMap requests for these layers, and downloads the rendered
map images. Active fire and burnt area layers also accept a time window in days
(1, 7, or 30, or 0 for the full fire season). Other layers are static, and never
receive a time window.
----------
Catalog:
    datasets        - Returns the layers, optionally filtered by category
    dataset         - Returns the descriptor of a layer
    info            - Returns a description of a layer

Map images:
    wms_url         - Returns the GetMap URL for a layer
    download        - Downloads a layer as an Image
    download_tile   - Saves a layer image to a local file
    load_file       - Loads a saved layer image

Constants:
    SEVERITY_YEARS  - The years with fire severity layers
"""

from __future__ import annotations

import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source, yearly
from wfdata.data._core.protocols import WMS
from wfdata.data._core.protocols.wms import DAYS, FORMAT, HEIGHT, SRS, WIDTH, WORLD

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import Image
    from wfdata.typing import BBox, Pathlike, timeout

WMS_BASE_GWIS = "https://maps.effis.emergency.copernicus.eu/gwis"
WMS_BASE_EFFIS = "https://maps.effis.emergency.copernicus.eu/effis"
SEVERITY_YEARS = range(2018, 2025)

# Categories whose layers accept a time window
TEMPORAL = ("active_fires", "burnt_areas")


def _layer(id, layer, name, description, category, geometry, root=WMS_BASE_GWIS):
    return Dataset(
        id=id,
        source="GWIS",
        root=root,
        resource=layer,
        name=name,
        description=description,
        category=category,
        geometry=geometry,
        temporal=category in TEMPORAL,
    )


def _danger(id, layer, name, description, category="fire_danger"):
    return _layer(id, layer, name, description, category, "raster")


REGISTRY = Registry(
    "GWIS",
    [
        _layer(
            "modis_hotspots",
            "modis.hs",
            "MODIS Active Fires",
            "MODIS satellite active fire/hotspot detections.",
            "active_fires",
            "point",
        ),
        _layer(
            "viirs_hotspots",
            "viirs.hs",
            "VIIRS Active Fires",
            "VIIRS satellite active fire/hotspot detections.",
            "active_fires",
            "point",
        ),
        _layer(
            "modis_burnt_areas",
            "modis.ba",
            "MODIS Burnt Areas",
            "Burnt area perimeters derived from MODIS satellite data (>= 30 hectares).",
            "burnt_areas",
            "polygon",
            root=WMS_BASE_EFFIS,
        ),
        _layer(
            "viirs_burnt_areas",
            "nrt.ba",
            "VIIRS Burnt Areas (NRT)",
            "Near real-time burnt area perimeters derived from VIIRS/Sentinel-2 "
            "satellite data.",
            "burnt_areas",
            "polygon",
        ),
        _danger(
            "fwi",
            "ecmwf.fwi",
            "Fire Weather Index (ECMWF)",
            "Fire Weather Index from ECMWF forecasts (8 km resolution).",
        ),
        _danger(
            "ffmc",
            "ecmwf.ffmc",
            "Fine Fuel Moisture Code (ECMWF)",
            "Fine Fuel Moisture Code from ECMWF forecasts.",
        ),
        _danger(
            "dmc",
            "ecmwf.dmc",
            "Duff Moisture Code (ECMWF)",
            "Duff Moisture Code from ECMWF forecasts.",
        ),
        _danger(
            "dc", "ecmwf.dc", "Drought Code (ECMWF)", "Drought Code from ECMWF forecasts."
        ),
        _danger(
            "isi",
            "ecmwf.isi",
            "Initial Spread Index (ECMWF)",
            "Initial Spread Index from ECMWF forecasts.",
        ),
        _danger(
            "bui",
            "ecmwf.bui",
            "Build Up Index (ECMWF)",
            "Build Up Index from ECMWF forecasts.",
        ),
        _danger(
            "fwi_anomaly",
            "ecmwf.anomaly",
            "FWI Anomaly (ECMWF)",
            "Fire Weather Index anomaly from ECMWF forecasts.",
        ),
        _danger(
            "fwi_ranking",
            "ecmwf.ranking",
            "Fire Danger Ranking (ECMWF)",
            "Fire danger ranking from ECMWF forecasts.",
        ),
        _danger(
            "fwi_mf",
            "mf010.fwi",
            "Fire Weather Index (Meteo France)",
            "Fire Weather Index from Meteo France forecasts.",
            category="fire_danger_mf",
        ),
    ]
    + yearly(
        _layer(
            "severity_{year}",
            "severity_{year}",
            "Fire Severity ({year})",
            "Annual fire severity assessment for {year}.",
            "severity",
            "raster",
        ),
        SEVERITY_YEARS,
    ),
)
SOURCE = Source(REGISTRY, WMS(), "Copernicus GWIS/EFFIS")


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the GWIS and EFFIS layers
    ----------
    datasets()
    datasets(category)
    Returns the layer descriptors, optionally filtered by category. Supported
    categories are "active_fires", "burnt_areas", "fire_danger", "fire_danger_mf",
    and "severity".
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    return SOURCE.dataset(id)


def info(id: str) -> str:
    return SOURCE.info(id)


def _query(bbox, width, height, days, format, srs) -> Query:
    options = {"width": width, "height": height, "format": format, "srs": srs}
    return Query(bbox=bbox, days=days, options=options)


def wms_url(
    layer: str,
    *,
    bbox: BBox | str = WORLD,
    width: int = WIDTH,
    height: int = HEIGHT,
    days: int = DAYS,
    format: str = FORMAT,
    srs: str = SRS,
) -> str:
    """
    Returns the WMS GetMap URL for a GWIS layer
    ----------
    wms_url(layer)
    Returns a GetMap URL for a 1024 x 512 PNG image of the whole world.

    wms_url(..., *, bbox, width, height, format, srs)
    Specifies the (west, south, east, north) bounding box, the image size in pixels,
    the image format, and the spatial reference system of the bounding box.

    wms_url(..., *, days)
    Specifies the time window of active fire and burnt area layers: 1, 7, or 30 days,
    or 0 for the full fire season. Ignored for other layers, which never receive a
    time parameter.
    ----------
    Inputs:
        layer: A GWIS layer ID
        bbox: A (west, south, east, north) bounding box
        width: The image width in pixels
        height: The image height in pixels
        days: The time window of temporal layers
        format: The image MIME type
        srs: The spatial reference system of the bounding box

    Outputs:
        str: The GetMap URL
    """
    query = _query(bbox, width, height, days, format, srs)
    return SOURCE.query_url(layer, query)


def download(
    layer: str,
    *,
    bbox: BBox | str = WORLD,
    width: int = WIDTH,
    height: int = HEIGHT,
    days: int = DAYS,
    format: str = FORMAT,
    srs: str = SRS,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Image:
    """Downloads a GWIS layer as an Image. Raises a BackendError if the server returns
    a WMS service exception instead of an image"""
    query = _query(bbox, width, height, days, format, srs)
    return SOURCE.fetch(layer, query, timeout)


def download_tile(
    layer: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    bbox: BBox | str = WORLD,
    width: int = WIDTH,
    height: int = HEIGHT,
    days: int = DAYS,
    format: str = FORMAT,
    srs: str = SRS,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves a GWIS layer image to a local file
    ----------
    download_tile(layer, **options)
    Downloads the map image and saves it as "<layer>.png" in the GWIS data folder
    (or with the extension of the requested format). If the file already exists,
    returns its path without making a request. Accepts the same options as
    `wms_url`.

    download_tile(..., *, filename, parent, force)
    Specifies the name and folder of the saved file. Use `force=True` to replace an
    existing file.
    """
    query = _query(bbox, width, height, days, format, srs)
    return SOURCE.download_file(layer, query, filename, parent, force, timeout)


def load_file(
    layer: str,
    *,
    format: str = FORMAT,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> Image:
    "Loads a saved GWIS layer image. Raises a DataFileNotFoundError if it was not saved"
    query = Query(options={"format": format})
    return SOURCE.load_file(layer, query, filename, parent)
