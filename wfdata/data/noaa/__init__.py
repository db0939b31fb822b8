"""
Access wildfire datasets published by NOAA
----------
Modules:
    hms     - Daily fire points and smoke polygons from the Hazard Mapping System
"""

from wfdata.data.noaa import hms
