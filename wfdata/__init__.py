"""
Query, download, and cache geospatial wildfire datasets
----------
The wfdata package provides a single interface to wildfire datasets published by a
range of government and scientific data services. Each service uses its own protocol
(ArcGIS REST, OGC WFS, OGC API Features, WMS, flat-file archives, and a SQLite
database), but every source module exposes the same family of functions: list the
available datasets, build a query URL, download a dataset into memory, save it to
the local data folder, and reload it later.

Most users will want to start with the source modules in the `data` subpackage. For
example, `wfdata.data.nifc.wfigs` provides current and historical fire perimeters,
and `wfdata.data.usfs.fpa_fod` queries the Fire Program Analysis fire-occurrence
database.
----------
Subpackages:
    data        - Data source modules

Modules:
    config      - Process-wide configuration (data folder, default timeout)
    errors      - Custom exceptions
    typing      - Type hints used throughout the package
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from wfdata import config, errors  # noqa: E402
from wfdata import data  # noqa: E402

__version__ = "1.0.0"
