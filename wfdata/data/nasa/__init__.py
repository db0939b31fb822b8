"""
Access wildfire datasets published by NASA
----------
Modules:
    firms       - Active fire detections from MODIS, VIIRS, and Landsat (requires a MAP_KEY)
    feds        - Satellite fire perimeters and fire lines from the FEDS algorithm
"""

from wfdata.data.nasa import feds, firms
