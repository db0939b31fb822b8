"""
Functions that return LANDFIRE URLs
----------
The functions in this module return URLs for LANDFIRE full-extent downloads and
for the LANDFIRE WCS/WMS services. They do not query the servers themselves. Note
that not every product/region/version combination is published, so a download URL
may not exist on the server.
----------
Base URLs:
    DOWNLOAD_BASE           - Base URL of full-extent downloads
    WCS_BASE                - Base URL of the WCS services
    WMS_BASE                - Base URL of the WMS services

Downloads:
    download_url            - Returns the URL of a full-extent archive

Services:
    wcs_url                 - Returns the WCS endpoint for a region and version
    wms_url                 - Returns the WMS endpoint for a region and version
    wcs_capabilities_url    - Returns the WCS GetCapabilities URL
    wms_capabilities_url    - Returns the WMS GetCapabilities URL
"""

from __future__ import annotations

from wfdata.data._utils import requests
from wfdata.data.landfire import _validate

DOWNLOAD_BASE = "https://landfire.gov/data-downloads"
WCS_BASE = "https://edcintl.cr.usgs.gov/geoserver/landfire_wcs"
WMS_BASE = "https://edcintl.cr.usgs.gov/geoserver/landfire"

# Cumulative disturbance archives, by region code
HISTORICAL_DISTURBANCE = {
    "US": "AnnualDist/USAnnualDisturbance_1999_present.zip",
    "AK": "AnnualDist/AKAnnualDisturbance_1999_present.zip",
    "HI": "AnnualDist/HIAnnualDisturbance_2011_present.zip",
}


#####
# Downloads
#####


def download_url(product: str, region: str, version: str) -> str:
    """
    Returns the URL of a full-extent LANDFIRE archive
    ----------
    download_url(product, region, version)
    Returns the URL of the zip archive holding a product for a region and version.
    Keys are case-insensitive. Topographic and disturbance products use their own
    download folders, and historical disturbance uses a single cumulative archive
    per region, regardless of version.
    ----------
    Inputs:
        product: A product acronym (for example, "FBFM40")
        region: "conus", "alaska", or "hawaii"
        version: A version name (for example, "LF2024")

    Outputs:
        str: The download URL
    """

    product = _validate.product(product)
    region = _validate.region(region)
    version = _validate.version(version)

    if product.acronym == "HDist":
        return f"{DOWNLOAD_BASE}/{HISTORICAL_DISTURBANCE[region.code]}"

    prefix = f"LF{version.year}_{product.acronym}_{version.code}"
    if product.category == "topographic":
        folder = f"Topo_{version.year}"
        filename = f"{prefix}_{region.code}.zip"
    elif product.category == "disturbance":
        folder = "Disturbance"
        filename = f"{prefix}_{region.code}.zip"
    else:
        folder = version.code
        name = "CONUS" if region.code == "US" else region.code
        filename = f"{prefix}_{name}.zip"
    return f"{DOWNLOAD_BASE}/{region.code}_{folder}/{filename}"


#####
# Services
#####


def _service(base: str, region: str, version: str, endpoint: str) -> str:
    region = _validate.region(region)
    version = _validate.version(version)
    return f"{base}/{region.service_code}_{version.code}/{endpoint}"


def wcs_url(region: str, version: str) -> str:
    """
    Returns the WCS endpoint for a LANDFIRE region and version
    ----------
    wcs_url(region, version)
    Returns the Web Coverage Service endpoint, which provides pixel-level access to
    the LANDFIRE rasters of a region and version.
    ----------
    Inputs:
        region: "conus", "alaska", or "hawaii"
        version: A version name (for example, "LF2024")

    Outputs:
        str: The WCS endpoint
    """
    return _service(WCS_BASE, region, version, "wcs")


def wms_url(region: str, version: str) -> str:
    "Returns the WMS endpoint (map images) for a LANDFIRE region and version"
    return _service(WMS_BASE, region, version, "ows")


def wcs_capabilities_url(region: str, version: str) -> str:
    "Returns the WCS GetCapabilities URL for a LANDFIRE region and version"
    params = {"request": "GetCapabilities", "service": "WCS"}
    return requests.query_url(wcs_url(region, version), params)


def wms_capabilities_url(region: str, version: str) -> str:
    "Returns the WMS GetCapabilities URL for a LANDFIRE region and version"
    params = {"service": "WMS", "request": "GetCapabilities"}
    return requests.query_url(wms_url(region, version), params)
