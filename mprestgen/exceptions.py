"""Custom exceptions for mprestgen.

This module defines the hierarchy of exceptions raised by the host-facing
parts of mprestgen (schema loading, configuration, rendering and output).
The generation core itself (policy resolution, naming, grouping and the
formatting sweep) never raises; it degrades to well-defined defaults.
"""


class MpRestGenError(Exception):
    """Base exception for all mprestgen errors.

    Example:
        try:
            codegen.generate()
        except MpRestGenError as e:
            print(f"mprestgen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(MpRestGenError):
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
    """The loaded document is not a valid OpenAPI 3.x document.

    Attributes:
        source: The source path or URL of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class CodeGenerationError(MpRestGenError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class TemplateRenderError(CodeGenerationError):
    """A Jinja2 template failed to render.

    Attributes:
        template_name: The template that failed.
        artifact: The artifact (interface or model name) being rendered.
    """

    def __init__(
        self,
        template_name: str,
        artifact: str | None = None,
        cause: Exception | None = None,
    ):
        self.template_name = template_name
        self.artifact = artifact
        message = f"Failed to render template '{template_name}'"
        super().__init__(message, context=artifact, cause=cause)


class ConfigurationError(MpRestGenError):
    """Error in the host configuration file.

    Attributes:
        config_path: The path to the configuration file, if applicable.
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


class OutputError(MpRestGenError):
    """Error writing a generated artifact.

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


class FormattingError(MpRestGenError):
    """The external source formatter rejected or could not process a file.

    Raised by formatters and caught by the formatting sweep, which records
    it against the offending file and moves on.

    Attributes:
        reason: Why formatting failed (formatter stderr, timeout, ...).
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f'Formatting failed: {reason}')
