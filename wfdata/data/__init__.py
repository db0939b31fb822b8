"""
Modules that access wildfire datasets from remote data services
----------
Sources are grouped by the agency that publishes them. Every source module supports
the same core functions: `datasets`, `dataset`, `info`, `query_url`, `download`,
`download_file`, and `load_file`. Sources backed by a feature service also support
`count` and `fields`.
----------
Subpackages:
    nifc        - National Interagency Fire Center (WFIGS, IRWIN, EGP)
    usfs        - US Forest Service (MTBS, FPA-FOD)
    nasa        - NASA (FIRMS active fires, FEDS fire event tracking)
    noaa        - NOAA Hazard Mapping System (HMS)
    nrcan       - Natural Resources Canada (CWFIS)
    copernicus  - Copernicus (GWIS / EFFIS)
    landfire    - LANDFIRE fuel, vegetation, and topographic products

Internal:
    _core       - Registry, query, engine, and storage shared by every source
    _utils      - HTTP request utilities
"""

from wfdata.data import copernicus, landfire, nasa, nifc, noaa, nrcan, usfs
