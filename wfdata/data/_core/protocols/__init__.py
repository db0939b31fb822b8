"""
Protocol strategies that build request URLs and decode responses
----------
Classes:
    Protocol        - Base class for protocol strategies
    ArcGIS          - ArcGIS REST FeatureServer and MapServer layers
    WFS             - OGC WFS 2.0 GetFeature requests
    OGCFeatures     - OGC API Features collections
    WMS             - OGC WMS 1.1.1 GetMap requests
    DailyArchive    - Archives that publish one file per day
    StaticFile      - Files published at a fixed URL
"""

from wfdata.data._core.protocols.arcgis import ArcGIS
from wfdata.data._core.protocols.archive import DailyArchive
from wfdata.data._core.protocols.base import Protocol
from wfdata.data._core.protocols.ogc import OGCFeatures
from wfdata.data._core.protocols.static import StaticFile
from wfdata.data._core.protocols.wfs import WFS
from wfdata.data._core.protocols.wms import WMS
