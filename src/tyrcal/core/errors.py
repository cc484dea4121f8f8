class TyrcalError(Exception):
    """Base error."""

class MissingContextError(TyrcalError):
    """Raised when the provider has no active calendar or no current date."""

class MalformedInputError(TyrcalError):
    """Raised for unparseable dates or non-finite years."""

class DegenerateConfigurationError(TyrcalError):
    """Raised when a calendar cannot support date arithmetic (e.g. zero-length year)."""
