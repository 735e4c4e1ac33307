"""Custom exception classes for the catalog."""


class CatalogException(Exception):
    """
    Base exception class for all catalog errors.
    """
    pass


class NodeNotFoundError(CatalogException):
    """
    Raised when a requested node does not exist.
    """
    pass


class ParentNotFoundError(NodeNotFoundError):
    """
    Raised when a referenced parent node does not exist.
    """
    pass


class InvalidStructureError(CatalogException):
    """
    Raised when a change would break the folder hierarchy
    (parent is not a folder, move into own subtree).
    """
    pass


class DanglingReferenceError(InvalidStructureError):
    """
    Raised in strict tree mode when a node references a missing parent.
    """
    pass


class InvalidInputError(CatalogException):
    """
    Raised when a request is missing required fields or carries invalid values.
    """
    pass
