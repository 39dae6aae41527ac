"""
Application errors that map to fixed HTTP responses.

HTTPException covers request-level problems (not found, bad input). The two
classes below cover the server side: absent credentials and failures of the
persistence gateway. Both are rendered as plain-text 500 responses by the
handlers registered in main.py.
"""


class ConfigurationError(Exception):
    """A required service credential is not configured."""

    def __init__(self, message: str = "Server keys missing"):
        super().__init__(message)
        self.message = message


class PersistenceError(Exception):
    """A read or write against the database failed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
