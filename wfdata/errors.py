"""
Classes that define custom exceptions
----------
Datasets:
    UnknownDatasetError         - When a dataset ID is not in a source's registry

Configuration:
    ConfigurationMissingError   - When a required credential or setting is missing

Data Acquisition:
    DataAPIError                - When an API response is not valid
    HTTPStatusError             - When a data server returns a non-success status code
    BackendError                - When a successful response encodes an API error
    InvalidJSONError            - When an API response is not valid JSON
    ParseError                  - When a response cannot be decoded into features or rows
    MissingAPIFieldError        - When an API JSON response is missing a required field

Local Files:
    DataFileNotFoundError       - When a previously downloaded file does not exist
    DatabaseNotAvailableError   - When a local database has not been downloaded
"""

#####
# Datasets
#####


class UnknownDatasetError(LookupError):
    "When a dataset ID is not in a source's registry"

    def __init__(self, message, dataset=None):
        super().__init__(message)
        self.dataset = dataset

    def __str__(self):
        return self.args[0]


#####
# Configuration
#####


class ConfigurationMissingError(Exception):
    "When a required credential or setting is missing"


#####
# Data Acquisition
#####


class DataAPIError(Exception):
    "When an API response is not valid"

    def __init__(self, message, dataset=None):
        super().__init__(message)
        self.dataset = dataset


class HTTPStatusError(DataAPIError):
    "When a data server returns a non-success status code"

    def __init__(self, message, status, url=None, dataset=None):
        super().__init__(message, dataset)
        self.status = status
        self.url = url


class BackendError(DataAPIError):
    "When a successful response encodes an API error"


class InvalidJSONError(BackendError):
    "When API JSON is not valid"


class ParseError(DataAPIError):
    "When a response cannot be decoded into features or rows"


class MissingAPIFieldError(ParseError, KeyError):
    "When an API JSON response is missing a required field"

    def __str__(self):
        return self.args[0]


#####
# Local Files
#####


class DataFileNotFoundError(FileNotFoundError):
    "When a previously downloaded file does not exist"


class DatabaseNotAvailableError(FileNotFoundError):
    "When a local database has not been downloaded"
