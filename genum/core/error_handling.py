"""
Error handling utilities for genum.

Every failure of the tool is fatal: an exception from this hierarchy travels
up to the command-line entry point, which reports its message once on the
error stream. Context passed as keyword arguments is kept for logging and
does not change the message.
"""
import logging
from typing import Any

logger = logging.getLogger('genum')


class GenumError(Exception):
    """Base class for all genum exceptions."""

    def __init__(self, message: str, **kwargs):
        self.message = message
        self.context = kwargs.pop('context', {})
        for key, value in kwargs.items():
            self.context[key] = value
        super().__init__(message)

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context information to the exception.

        Args:
            key: The context key
            value: The context value
        """
        self.context[key] = value

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Return the message followed by any context information."""
        if not self.context:
            return self.message
        context_str = ', '.join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} [Context: {context_str}]"


# ===== Directive Errors =====

class DirectiveError(GenumError):
    """Exception raised for a malformed ``//go:generate genum`` comment."""
    pass


class InvalidArgumentError(DirectiveError):
    """Exception raised when a directive token is not a ``key=value`` pair."""
    def __init__(self, argument: str, **kwargs):
        super().__init__(f"invalid argument: {argument}", argument=argument, **kwargs)
        self.argument = argument


class MissingParameterError(DirectiveError):
    """Exception raised when a required directive flag is missing or empty."""
    def __init__(self, parameter: str, placeholder: str, **kwargs):
        super().__init__(f"{parameter}=<{placeholder}> is required", parameter=parameter, **kwargs)
        self.parameter = parameter


class InvalidParameterError(DirectiveError):
    """Exception raised when a directive flag has an unsupported value."""
    def __init__(self, parameter: str, value: Any, **kwargs):
        super().__init__(f"invalid argument {parameter}: {value}", parameter=parameter, value=value, **kwargs)
        self.parameter = parameter
        self.value = value


# ===== Configuration Errors =====

class ConfigurationError(GenumError):
    """Exception raised for an unknown configuration section or key."""
    def __init__(self, section: str, key: str, **kwargs):
        super().__init__(f"unknown configuration setting {section}.{key}", section=section, key=key, **kwargs)
        self.section = section
        self.key = key


# ===== Loader Errors =====

class LoaderError(GenumError):
    """Exception raised while loading the Go package."""
    pass


class PackageNotFoundError(LoaderError):
    """Exception raised when the directory holds no Go files."""
    def __init__(self, directory: str = '', **kwargs):
        super().__init__("package not found", directory=directory, **kwargs)
        self.directory = directory


class SourceFileNotFoundError(LoaderError):
    """Exception raised when the file being processed is not part of the package."""
    def __init__(self, file_name: str, package: str, **kwargs):
        super().__init__(f"{file_name} not find in package {package}", file_name=file_name, package=package, **kwargs)
        self.file_name = file_name
        self.package = package


class SourceReadError(LoaderError):
    """Exception raised when a package file cannot be read or decoded."""
    def __init__(self, file_name: str, reason: Any, **kwargs):
        super().__init__(f"read {file_name}: {reason}", file_name=file_name, **kwargs)
        self.file_name = file_name
        self.reason = reason


# ===== Extraction Errors =====

class ExtractionError(GenumError):
    """Exception raised while resolving the constants of an enum."""
    pass


class NoDirectivesFoundError(ExtractionError):
    """Exception raised when the processed file holds no genum directive."""
    def __init__(self, **kwargs):
        super().__init__("no genum directives found", **kwargs)


class TypeNotFoundError(ExtractionError):
    """Exception raised when the directive type is not a package type."""
    def __init__(self, type_name: str, **kwargs):
        super().__init__(f"type {type_name} not found", type_name=type_name, **kwargs)
        self.type_name = type_name


class NoValuesFoundError(ExtractionError):
    """Exception raised when no exported constant has the enum type."""
    def __init__(self, type_name: str, **kwargs):
        super().__init__(f"no values found for enum {type_name}", type_name=type_name, **kwargs)
        self.type_name = type_name


# ===== Generation Errors =====

class GenerationError(GenumError):
    """Exception raised when the output template cannot be rendered."""
    def __init__(self, output: str, reason: Any, **kwargs):
        super().__init__(f"generate {output}: {reason}", output=output, **kwargs)
        self.output = output
        self.reason = reason


class WriteError(GenumError):
    """Exception raised when the generated file cannot be written."""
    def __init__(self, output: str, reason: Any, **kwargs):
        super().__init__(f"write {output}: {reason}", output=output, **kwargs)
        self.output = output
        self.reason = reason
