"""Unit tests for custom exception classes."""

import pytest

from calabi_deployments.exceptions import (
    ArtifactNotFoundError,
    ChainMismatchError,
    ConfigurationError,
    DefectiveArtifactError,
    DeploymentError,
    DeploymentFailedError,
    InvalidAddressError,
    InvalidAmountError,
    MissingEntryError,
    NetworkNotFoundError,
    RegistryFormatError,
    UnknownCategoryError,
    UnresolvedDependencyError,
)

ALL_EXCEPTIONS = [
    DeploymentError,
    UnknownCategoryError,
    MissingEntryError,
    RegistryFormatError,
    InvalidAddressError,
    InvalidAmountError,
    UnresolvedDependencyError,
    DeploymentFailedError,
    ArtifactNotFoundError,
    DefectiveArtifactError,
    NetworkNotFoundError,
    ChainMismatchError,
    ConfigurationError,
]


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    @pytest.mark.parametrize(
        "exc_class", [UnknownCategoryError, MissingEntryError, UnresolvedDependencyError]
    )
    def test_lookup_failures_catchable_as_lookup_error(self, exc_class):
        with pytest.raises(LookupError):
            raise exc_class("test")

    @pytest.mark.parametrize(
        "exc_class",
        [
            RegistryFormatError,
            InvalidAddressError,
            InvalidAmountError,
            DefectiveArtifactError,
            NetworkNotFoundError,
            ChainMismatchError,
            ConfigurationError,
        ],
    )
    def test_bad_values_catchable_as_value_error(self, exc_class):
        with pytest.raises(ValueError):
            raise exc_class("test")

    def test_catch_deployment_failed_as_runtime_error(self):
        with pytest.raises(RuntimeError):
            raise DeploymentFailedError("test")

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    def test_catch_all_as_deployment_error(self):
        """Test that all custom exceptions can be caught as DeploymentError."""
        for exc_class in ALL_EXCEPTIONS:
            with pytest.raises(DeploymentError):
                raise exc_class("test")


class TestExceptionCreation:
    """Test creating exceptions with various message types."""

    def test_exceptions_accept_string_messages(self):
        for exc_class in ALL_EXCEPTIONS:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_exceptions_accept_empty_messages(self):
        for exc_class in ALL_EXCEPTIONS:
            exc = exc_class("")
            assert isinstance(exc, exc_class)


class TestExceptionContext:
    """Test the diagnostic attributes some exceptions carry."""

    def test_unresolved_dependency_context(self):
        exc = UnresolvedDependencyError(
            "missing", step="CalabiRouter02", category="tokens", name="wFIL"
        )

        assert exc.step == "CalabiRouter02"
        assert exc.category == "tokens"
        assert exc.name == "wFIL"

    def test_unresolved_dependency_context_defaults(self):
        exc = UnresolvedDependencyError("missing")

        assert exc.step is None
        assert exc.category is None
        assert exc.name is None

    def test_deployment_failed_step(self):
        assert DeploymentFailedError("boom", step="CalabiFactory").step == "CalabiFactory"
        assert DeploymentFailedError("boom").step is None
