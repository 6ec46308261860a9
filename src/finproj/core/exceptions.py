"""
Finproj exception hierarchy.

All finproj exceptions inherit from FinprojError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class FinprojError(Exception):
    """Base exception class for all finproj errors."""


class ConfigurationError(FinprojError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvalidParametersError(FinprojError, ValueError):
    """Raised when an engine receives inputs it cannot project.

    Covers non-positive principal/term/years, negative rates or payments,
    empty irregular contribution sequences and infeasible payoff inputs.
    No partial result is ever returned alongside this error.
    """


class CatalogError(FinprojError):
    """Raised for malformed static catalogs (brackets, account or risk profiles)."""
