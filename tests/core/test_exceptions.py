"""Tests for finproj.core.exceptions."""

import pytest

from finproj.core.exceptions import CatalogError, ConfigurationError, FinprojError, InvalidParametersError


def test_hierarchy():
    """All exceptions should inherit from FinprojError."""
    for exc_cls in [ConfigurationError, InvalidParametersError, CatalogError]:
        assert issubclass(exc_cls, FinprojError)


def test_invalid_parameters_is_value_error():
    assert issubclass(InvalidParametersError, ValueError)
    assert not issubclass(CatalogError, ValueError)


def test_exception_message():
    err = InvalidParametersError("Loan principal must be positive, got 0")
    assert "principal" in str(err)


def test_catch_base():
    with pytest.raises(FinprojError):
        raise CatalogError("gap between brackets")
