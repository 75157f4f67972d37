"""Code generation module for mprestgen.

This module provides the main Codegen class that orchestrates the generation
of MicroProfile REST client sources from OpenAPI documents.
"""

import dataclasses
import logging
from pathlib import Path

from upath import UPath

from mprestgen.codegen.context import ApiContextBuilder, ModelContextBuilder
from mprestgen.codegen.file_writer import SourceFileWriter, package_dir
from mprestgen.codegen.formatters import Formatter, GoogleJavaFormatter
from mprestgen.codegen.grouping import GroupAssignment
from mprestgen.codegen.hooks import GenerationHooks, MicroProfileHooks
from mprestgen.codegen.openapi_processor import OpenAPIProcessor
from mprestgen.codegen.policy import GenerationPolicy, resolve_policy
from mprestgen.codegen.postprocess import FormatResult
from mprestgen.codegen.renderer import API_TEMPLATE, MODEL_TEMPLATE, TemplateRenderer
from mprestgen.codegen.schema_loader import SchemaLoader
from mprestgen.config import DocumentConfig
from mprestgen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class GenerationResult:
    """Outcome of one generation pass.

    Attributes:
        policy: The policy the pass ran with.
        files: Every written file, in emission order.
        format_results: One entry per formatted (or skipped) file; empty
            when formatting is disabled.
        groups: The operations of the pass, by group name.
    """

    policy: GenerationPolicy
    files: list[str]
    format_results: list[FormatResult]
    groups: GroupAssignment

    @property
    def failed_files(self) -> list[str]:
        """Files that kept their unformatted content because formatting failed."""
        return [r.path for r in self.format_results if r.status == 'failed']


class Codegen:
    """Main code generator for MicroProfile REST clients.

    This class runs one generation pass per call to :meth:`generate`:

    - load and validate the OpenAPI document
    - resolve the option bag into a :class:`GenerationPolicy`
    - group operations into interfaces
    - render and write interface and model sources
    - format every written file

    Attributes:
        config: The DocumentConfig containing source and output settings.
        policy: The resolved generation policy.
        openapi: The loaded OpenAPI document (populated after _load_schema).

    Example:
        >>> from mprestgen.config import DocumentConfig
        >>> from mprestgen.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(
        ...     source="https://api.example.com/openapi.json",
        ...     output="./src/main/java",
        ...     api_package="com.example.api",
        ... )
        >>> result = Codegen(config).generate()
        >>> result.files
        ['src/main/java/com/example/api/PetsApi.java', ...]
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        formatter: Formatter | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output location.
            schema_loader: Optional custom schema loader.
            formatter: Optional formatter for the post-processing sweep. If not
                provided, google-java-format is used.
            renderer: Optional template renderer.
        """
        self.config = config
        self.policy = resolve_policy(config.options)
        self.openapi = None
        self._schema_loader = schema_loader or SchemaLoader()
        self._formatter = formatter or GoogleJavaFormatter(config.formatter_executable)
        self._renderer = renderer or self._create_renderer()

    def _create_renderer(self) -> TemplateRenderer:
        """Build the renderer, preferring templates from ``template_dir``.

        Raises:
            ConfigurationError: If the template directory does not exist.
        """
        template_dir = self.config.template_dir
        if template_dir is None:
            return TemplateRenderer()
        if not Path(template_dir).is_dir():
            raise ConfigurationError(
                f"Template directory '{template_dir}' does not exist",
                field='template_dir',
            )
        logger.info(f'Using templates from {template_dir}')
        return TemplateRenderer(template_dir)

    def _load_schema(self) -> None:
        """Load and validate the OpenAPI document.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the document is not valid OpenAPI 3.x.
        """
        self.openapi = self._schema_loader.load(self.config.source)

    def create_hooks(self) -> GenerationHooks:
        """Create the hooks of a new generation pass."""
        return MicroProfileHooks(self.policy, self._formatter)

    def generate(self) -> GenerationResult:
        """Run a generation pass.

        Raises:
            SchemaLoadError: If the document cannot be loaded.
            SchemaValidationError: If the document is not valid OpenAPI 3.x.
            TemplateRenderError: If a template fails to render.
            OutputError: If a file cannot be written.
        """
        self._load_schema()
        processor = OpenAPIProcessor(self.openapi)
        hooks = self.create_hooks()

        groups: GroupAssignment = {}
        for resource_path, operation in processor.operations():
            hooks.resolve_group(operation, resource_path, groups)
        if not groups:
            logger.warning(f'No operations found in {self.config.source}')

        writer = SourceFileWriter(on_write=hooks.record_file)
        output = UPath(self.config.output)
        models = processor.model_class_names

        api_dir = package_dir(output, self.config.api_package)
        api_builder = ApiContextBuilder(
            self.policy,
            hooks.resolve_name,
            api_package=self.config.api_package,
            model_package=self.config.model_package,
            models=models,
            title=self.config.title or processor.title,
            version=processor.version,
        )
        for context in api_builder.build(groups):
            source = self._renderer.render(API_TEMPLATE, context)
            writer.write(api_dir / f'{context["class_name"]}.java', source)

        if self.config.generate_models:
            model_dir = package_dir(output, self.config.model_package)
            codegen_models = list(processor.models())
            model_builder = ModelContextBuilder(
                self.policy,
                self.config.model_package,
                models,
                enums={model.name for model in codegen_models if model.is_enum},
            )
            for model in codegen_models:
                source = self._renderer.render(
                    MODEL_TEMPLATE, model_builder.build(model)
                )
                writer.write(model_dir / f'{model.name}.java', source)

        logger.info(f'Wrote {len(writer.written)} files to {output}')
        format_results = hooks.post_process()

        return GenerationResult(
            policy=self.policy,
            files=[str(path) for path in writer.written],
            format_results=format_results,
            groups=groups,
        )
