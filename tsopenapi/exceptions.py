"""Custom exceptions for ts-open-api.

This module defines a hierarchy of exceptions used throughout the library
to provide clear, actionable error messages for different failure scenarios.
Reference errors are fatal: a run that raises one produces no output.
"""


class TsOpenAPIError(Exception):
    """Base exception for all ts-open-api errors.

    All exceptions raised by the library inherit from this class, making it
    easy to catch every generation failure with a single except clause.

    Example:
        try:
            text = generate(document)
        except TsOpenAPIError as e:
            print(f"ts-open-api error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(TsOpenAPIError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an OpenAPI document from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The loaded content could not be read as an OpenAPI document.

    Attributes:
        source: The source path or URL of the document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class SchemaReferenceError(SchemaError):
    """Failed to resolve a $ref reference in the document.

    Attributes:
        reference: The $ref string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
        location: The declaration or operation being expanded, if known.
    """

    def __init__(
        self,
        reference: str,
        reason: str | None = None,
        location: str | None = None,
    ):
        self.reference = reference
        self.reason = reason
        self.location = location
        message = f"Failed to resolve reference '{reference}'"
        if location:
            message += f' in {location}'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class UnresolvedReferenceError(SchemaReferenceError):
    """A well-formed pointer names a component that does not exist."""

    pass


class UnsupportedReferenceError(SchemaReferenceError):
    """A pointer has a form the resolver does not understand.

    Only ``#/components/{schemas|responses|parameters|requestBodies}/{name}``
    pointers are supported.
    """

    pass


class ConfigurationError(TsOpenAPIError):
    """The generator options or the document configuration are invalid.

    Attributes:
        config_path: The configuration file that was read, if any.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(TsOpenAPIError):
    """The generated TypeScript file could not be written.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
