"""Template contexts for interface and model artifacts.

Groups whose resolved interface names coincide are merged into a single
interface; with a fixed ``apiName`` every group collapses into one. The
interface ``@Path`` is the resource base shared by all of its operations;
when the merged operations do not share a base, each method carries its
full path instead.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mprestgen.codegen.import_collector import ImportCollector

if TYPE_CHECKING:
    from mprestgen.codegen.grouping import GroupAssignment
    from mprestgen.codegen.policy import GenerationPolicy
    from mprestgen.codegen.types import (
        CodegenModel,
        CodegenOperation,
        CodegenParameter,
    )

JAXRS = 'javax.ws.rs'
RESPONSE_CLASS = 'javax.ws.rs.core.Response'
NOT_NULL_CLASS = 'javax.validation.constraints.NotNull'
VALID_CLASS = 'javax.validation.Valid'
REGISTER_REST_CLIENT_CLASS = (
    'org.eclipse.microprofile.rest.client.inject.RegisterRestClient'
)
JSONB_PROPERTY_CLASS = 'javax.json.bind.annotation.JsonbProperty'
JSONB_TYPE_ADAPTER_CLASS = 'javax.json.bind.annotation.JsonbTypeAdapter'
JSONB_ADAPTER_CLASS = 'javax.json.bind.adapter.JsonbAdapter'
JACKSON_PROPERTY_CLASS = 'com.fasterxml.jackson.annotation.JsonProperty'
LOMBOK_DATA_CLASS = 'lombok.Data'
OBJECTS_CLASS = 'java.util.Objects'


def split_resource_path(operation: CodegenOperation) -> tuple[str, str]:
    """Split an operation's declared path into ``(base, residual)``.

    The residual is the path left by the grouper; the base is whatever the
    grouper removed from the front of the declared path. When the residual
    is not a suffix of the declared path the base is empty.
    """
    declared, residual = operation.declared_path, operation.path
    if not residual:
        return declared, ''
    if declared.endswith(residual):
        return declared[: len(declared) - len(residual)], residual
    return '', residual


def join_path(base: str, residual: str) -> str:
    if not base:
        return residual
    if not residual:
        return base
    if base.endswith('/') and residual.startswith('/'):
        return base + residual[1:]
    if base.endswith('/') or residual.startswith('/'):
        return base + residual
    return f'{base}/{residual}'


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


@dataclasses.dataclass
class MethodContext:
    """One interface method.

    Attributes:
        operation: The grouped operation.
        name: The Java method name, unique within the interface.
        path: The method-level ``@Path`` value, or None.
        return_type: The Java return type.
        arguments: Parameters passed as individual method arguments.
        bean_fields: Parameters bundled into the bean parameter class.
        bean_variable: The argument name of the bean parameter.
    """

    operation: CodegenOperation
    name: str
    path: str | None
    return_type: str
    arguments: list[CodegenParameter]
    bean_fields: list[CodegenParameter]
    bean_variable: str | None = None


class ApiContextBuilder:
    """Builds the template context of every generated interface."""

    def __init__(
        self,
        policy: GenerationPolicy,
        resolve_name: Callable[[str], str],
        api_package: str,
        model_package: str,
        models: set[str],
        title: str | None = None,
        version: str | None = None,
    ):
        self.policy = policy
        self.resolve_name = resolve_name
        self.api_package = api_package
        self.model_package = model_package
        self.models = models
        self.title = title
        self.version = version

    def build(self, groups: GroupAssignment) -> list[dict[str, Any]]:
        """Return one context per interface, in first-seen group order."""
        interfaces: dict[str, list[CodegenOperation]] = {}
        group_keys: dict[str, list[str]] = {}
        for key, operations in groups.items():
            class_name = self.resolve_name(key)
            interfaces.setdefault(class_name, []).extend(operations)
            group_keys.setdefault(class_name, []).append(key)

        return [
            self._interface_context(class_name, operations, group_keys[class_name])
            for class_name, operations in interfaces.items()
        ]

    def _interface_context(
        self,
        class_name: str,
        operations: list[CodegenOperation],
        groups: list[str],
    ) -> dict[str, Any]:
        splits = [split_resource_path(op) for op in operations]
        bases = {base for base, _ in splits}
        shared_base = len(bases) == 1

        if shared_base:
            class_path = next(iter(bases)).rstrip('/') or '/'
        else:
            class_path = '/'

        used_names: set[str] = set()
        methods = []
        for op, (base, residual) in zip(operations, splits):
            method_path = residual if shared_base else join_path(base, residual)
            methods.append(
                self._method_context(op, method_path or None, used_names)
            )

        return {
            'package': self.api_package,
            'class_name': class_name,
            'groups': groups,
            'path': class_path,
            'methods': methods,
            'imports': self._interface_imports(methods),
            'config_key': lower_first(class_name),
            'title': self.title,
            'version': self.version,
            'policy': self.policy,
            'options': self.policy.to_options(),
        }

    def _method_context(
        self,
        op: CodegenOperation,
        path: str | None,
        used_names: set[str],
    ) -> MethodContext:
        name, index = op.nickname, 2
        while name in used_names:
            name = f'{op.nickname}{index}'
            index += 1
        used_names.add(name)

        if self.policy.return_response:
            return_type = 'Response'
        else:
            return_type = op.return_type or 'void'

        if op.has_bean_param:
            bean_fields = op.bean_params
            arguments = [op.body_param] if op.body_param else []
            bean_variable = lower_first(op.bean_param_name or 'beanParam')
        else:
            bean_fields = []
            arguments = op.all_params
            bean_variable = None

        return MethodContext(
            operation=op,
            name=name,
            path=path,
            return_type=return_type,
            arguments=arguments,
            bean_fields=bean_fields,
            bean_variable=bean_variable,
        )

    def _interface_imports(self, methods: list[MethodContext]) -> list[str]:
        collector = ImportCollector(
            model_package=self.model_package,
            models=self.models,
            own_package=self.api_package,
        )
        collector.add_import(f'{JAXRS}.Path')
        if not self.policy.interface_only:
            collector.add_import(REGISTER_REST_CLIENT_CLASS)
        if self.policy.return_response:
            collector.add_import(RESPONSE_CLASS)

        for method in methods:
            op = method.operation
            collector.add_import(f'{JAXRS}.{op.http_method}')
            if op.consumes:
                collector.add_import(f'{JAXRS}.Consumes')
            if op.produces:
                collector.add_import(f'{JAXRS}.Produces')
            if op.has_bean_param:
                collector.add_import(f'{JAXRS}.BeanParam')
            if not self.policy.return_response:
                collector.add_type(op.return_type)

            for param in [*method.arguments, *method.bean_fields]:
                collector.add_type(param.data_type)
                if param.annotation:
                    collector.add_import(f'{JAXRS}.{param.annotation}')
                if self.policy.use_bean_validation:
                    if param.required:
                        collector.add_import(NOT_NULL_CLASS)
                    if param.is_model:
                        collector.add_import(VALID_CLASS)
        return collector.to_list()


class ModelContextBuilder:
    """Builds the template context of generated models.

    JSON-B binds enums by constant name, so with ``jsonLib=jsonb`` every
    enum carries a nested ``Adapter`` mapping it to its wire value, and
    properties typed with one of ``enums`` are annotated to use it.
    """

    def __init__(
        self,
        policy: GenerationPolicy,
        model_package: str,
        models: set[str],
        enums: set[str] | None = None,
    ):
        self.policy = policy
        self.model_package = model_package
        self.models = models
        self.enums = enums or set()

    def build(self, model: CodegenModel) -> dict[str, Any]:
        return {
            'package': self.model_package,
            'class_name': model.name,
            'model': model,
            'imports': self._model_imports(model),
            'enums': self.enums,
            'policy': self.policy,
            'options': self.policy.to_options(),
        }

    def _model_imports(self, model: CodegenModel) -> list[str]:
        collector = ImportCollector(
            model_package=self.model_package,
            models=self.models,
            own_package=self.model_package,
        )
        if model.is_enum:
            if self.policy.jackson:
                collector.add_import(JACKSON_PROPERTY_CLASS)
            else:
                collector.add_import(JSONB_ADAPTER_CLASS)
            return collector.to_list()

        for prop in model.properties:
            collector.add_type(prop.data_type)
            if self.policy.jsonb and prop.data_type in self.enums:
                collector.add_import(JSONB_TYPE_ADAPTER_CLASS)
            if self.policy.use_bean_validation and prop.required:
                collector.add_import(NOT_NULL_CLASS)
        if model.properties:
            if self.policy.jsonb:
                collector.add_import(JSONB_PROPERTY_CLASS)
            else:
                collector.add_import(JACKSON_PROPERTY_CLASS)
        if self.policy.lombok_data:
            collector.add_import(LOMBOK_DATA_CLASS)
        if self.policy.generate_equals:
            collector.add_import(OBJECTS_CLASS)
        return collector.to_list()
