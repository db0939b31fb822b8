"""
Access wildfire datasets published by the National Interagency Fire Center
----------
All NIFC datasets are ArcGIS FeatureServer layers, so the modules in this package
share the same query options: a SQL-like "where" clause, field selection, a record
limit, a bounding box, pagination, and sort order.
----------
Modules:
    wfigs   - Interagency fire perimeters and incident locations (current and historic)
    irwin   - Fire occurrence records and current incidents derived from IRWIN
    egp     - Fire management boundaries from the Enterprise Geospatial Portal
"""

from wfdata.data.nifc import egp, irwin, wfigs
