"""mprestgen - Generate MicroProfile REST clients from OpenAPI specifications.

mprestgen reads an OpenAPI 3.x document and writes Java sources: one JAX-RS
client interface per resource group and one model class (or enum) per
component schema. Written files are formatted with google-java-format.

Quick Start:
    >>> from mprestgen import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="https://api.example.com/openapi.json",
    ...     output="./src/main/java",
    ...     api_package="com.example.api",
    ...     model_package="com.example.model",
    ...     options={"fieldGen": "lombok", "jsonLib": "jackson"},
    ... )
    >>> Codegen(config).generate()

CLI Usage:
    $ mprestgen init  # Write a starter mprestgen.yaml
    $ mprestgen options  # Show the resolved generator options
    $ mprestgen generate
"""

from importlib.metadata import PackageNotFoundError, version

from mprestgen.codegen.codegen import Codegen, GenerationResult
from mprestgen.codegen.policy import (
    ConfigurationResolver,
    FieldGenerator,
    GenerationPolicy,
    JsonLib,
    resolve_policy,
)
from mprestgen.codegen.schema_loader import SchemaLoader
from mprestgen.config import CodegenConfig, DocumentConfig, get_config
from mprestgen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    FormattingError,
    MpRestGenError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaValidationError,
    TemplateRenderError,
)

__all__ = [
    # Main classes
    'Codegen',
    'GenerationResult',
    'SchemaLoader',
    # Policy
    'ConfigurationResolver',
    'FieldGenerator',
    'GenerationPolicy',
    'JsonLib',
    'resolve_policy',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'MpRestGenError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'CodeGenerationError',
    'TemplateRenderError',
    'ConfigurationError',
    'OutputError',
    'FormattingError',
]

try:
    __version__ = version('mprestgen')
except PackageNotFoundError:
    __version__ = 'unknown'
