"""
Access wildfire datasets published by Natural Resources Canada
----------
Modules:
    cwfis   - Fires, hotspots, perimeters, and fire weather from the Canadian
              Wildland Fire Information System
"""

from wfdata.data.nrcan import cwfis
