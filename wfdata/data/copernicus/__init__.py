"""
Access wildfire datasets published by the Copernicus Emergency Management Service
----------
Modules:
    gwis    - Fire danger, active fire, burnt area, and severity map layers
"""

from wfdata.data.copernicus import gwis
