"""Code generation module for mprestgen.

Main Components:
    - Codegen: The orchestrator of a generation pass
    - ConfigurationResolver: Resolves the option bag into a GenerationPolicy
    - NameResolver: Interface and bean-parameter naming
    - OperationGrouper: Assigns operations to interface groups
    - ArtifactPostProcessor: Formats written files in one sweep
    - OpenAPIProcessor: Turns an OpenAPI document into operations and models
"""

from mprestgen.codegen.codegen import Codegen, GenerationResult
from mprestgen.codegen.context import ApiContextBuilder, ModelContextBuilder
from mprestgen.codegen.grouping import GroupAssignment, OperationGrouper
from mprestgen.codegen.hooks import GenerationHooks, MicroProfileHooks
from mprestgen.codegen.import_collector import ImportCollector
from mprestgen.codegen.naming import NameResolver
from mprestgen.codegen.openapi_processor import OpenAPIProcessor
from mprestgen.codegen.policy import (
    ConfigurationResolver,
    FieldGenerator,
    GenerationPolicy,
    JsonLib,
    resolve_policy,
)
from mprestgen.codegen.postprocess import ArtifactPostProcessor, FormatResult
from mprestgen.codegen.renderer import TemplateRenderer
from mprestgen.codegen.schema_loader import SchemaLoader
from mprestgen.codegen.swagger import upgrade_swagger
from mprestgen.codegen.types import (
    CodegenModel,
    CodegenOperation,
    CodegenParameter,
    CodegenProperty,
)

__all__ = [
    'Codegen',
    'GenerationResult',
    # Policy and naming
    'ConfigurationResolver',
    'GenerationPolicy',
    'FieldGenerator',
    'JsonLib',
    'resolve_policy',
    'NameResolver',
    # Grouping
    'OperationGrouper',
    'GroupAssignment',
    'GenerationHooks',
    'MicroProfileHooks',
    # Post-processing
    'ArtifactPostProcessor',
    'FormatResult',
    # Parsing and rendering
    'SchemaLoader',
    'upgrade_swagger',
    'OpenAPIProcessor',
    'ApiContextBuilder',
    'ModelContextBuilder',
    'ImportCollector',
    'TemplateRenderer',
    # Intermediate representation
    'CodegenOperation',
    'CodegenParameter',
    'CodegenProperty',
    'CodegenModel',
]
