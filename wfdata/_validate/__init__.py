"""
Functions that validate user inputs
----------
Low-level:
    type, string, option, integer, real, inrange, positive, nonnegative, timeout,
    bbox, date, identifier, credential

Paths:
    input_file, download_path
"""

from wfdata._validate._low import (
    bbox,
    credential,
    date,
    identifier,
    inrange,
    integer,
    nonnegative,
    option,
    positive,
    real,
    string,
    timeout,
    type,
)
from wfdata._validate._path import download_path, input_file
