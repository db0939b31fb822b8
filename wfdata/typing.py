"""
Type hints used throughout the package
----------
Basic:
    strs        - One or more strings
    Pathlike    - A string or pathlib.Path

Queries:
    timeout     - A scalar timeout, a (connect, read) pair, or None
    BBox        - A (west, south, east, north) bounding box in EPSG:4326
    Datelike    - A datetime.date or an ISO "YYYY-MM-DD" string
    Fields      - "*" or a sequence of field names
"""

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

strs = str | Sequence[str]
Pathlike = str | Path

timeout = Optional[float | tuple[float, float]]
BBox = tuple[float, float, float, float]
Datelike = date | str
Fields = str | Sequence[str]
