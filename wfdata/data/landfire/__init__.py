"""
Access LANDFIRE fuel, vegetation, and topographic rasters
----------
LANDFIRE (Landscape Fire and Resource Management Planning Tools) is a joint program
of the USDA Forest Service and the US Department of the Interior that publishes
national geospatial layers for wildland fire management. These include fire
behavior fuel models, canopy characteristics, existing vegetation, disturbance
history, topography, and historical fire regimes.

The `products` module holds static catalogs of the LANDFIRE products, versions, and
regions. The `url` module builds full-extent download URLs and WCS/WMS service URLs,
and the `download_product` function saves a full-extent archive to the local file
system. Note that full-extent archives are large (hundreds of MB to several GB), and
that not every product/region/version combination is published.
----------
Functions:
    download_product    - Downloads a full-extent LANDFIRE archive
    list_downloads      - Lists previously downloaded LANDFIRE files
    info                - Returns a description of LANDFIRE and its access methods

Catalog:
    versions            - Returns the LANDFIRE versions
    regions             - Returns the LANDFIRE regions

URLs:
    download_url        - Returns the download URL of a full-extent archive
    wcs_url             - Returns the WCS endpoint for a region and version
    wms_url             - Returns the WMS endpoint for a region and version
    wcs_capabilities_url - Returns the WCS GetCapabilities URL
    wms_capabilities_url - Returns the WMS GetCapabilities URL

Modules:
    products            - Static catalogs of LANDFIRE products, versions, and regions
    url                 - Functions returning LANDFIRE URLs

Internal modules:
    _landfire           - Module implementing downloads
    _validate           - Module for validating product, region, and version keys
"""

from wfdata.data.landfire import products, url
from wfdata.data.landfire._landfire import download_product, info, list_downloads
from wfdata.data.landfire.products import (
    PRODUCTS,
    REGIONS,
    VERSIONS,
    Product,
    Region,
    Version,
    regions,
    versions,
)
from wfdata.data.landfire.url import (
    download_url,
    wcs_capabilities_url,
    wcs_url,
    wms_capabilities_url,
    wms_url,
)
