"""Custom cascade_tree exceptions"""

from cascade_tree.version import __version__

from .log import log


class CascadeTreeError(Exception):
    """Any error in cascade_tree"""

    def __init__(self, message: str = None):
        """Log just the error message and then raise the Exception."""
        super().__init__(message)
        log.error("%s (cascade_tree version: %s)", message, __version__)


class CascadeTreeValueError(CascadeTreeError):
    """Error with value."""


class CascadeTreeConfigError(CascadeTreeError):
    """Error when configuring cascade_tree."""


class CascadeTreeFileError(CascadeTreeError):
    """Error reading or writing to file."""
