"""
Access wildfire datasets published by the USDA Forest Service
----------
Modules:
    mtbs        - Burn severity fire locations and boundaries (1984-present)
    fpa_fod     - The Fire Program Analysis Fire-Occurrence Database (1992-2020)
"""

from wfdata.data.usfs import fpa_fod, mtbs
