"""Conversion of OpenAPI documents into codegen operations and models.

The processor walks a validated openapi-pydantic document and produces the
intermediate representation consumed by grouping and rendering: one
:class:`CodegenOperation` per endpoint, in document order, and one
:class:`CodegenModel` per component schema that becomes a Java class or
enum. Both OpenAPI 3.0 and 3.1 models are accepted; references are
resolved against ``#/components/...`` and unresolvable ones are logged and
skipped.
"""

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Any

from openapi_pydantic.v3.parser import OpenAPIv3

from mprestgen.codegen.types import (
    CodegenEnumValue,
    CodegenModel,
    CodegenOperation,
    CodegenParameter,
    CodegenProperty,
)
from mprestgen.codegen.utils import (
    camelize,
    java_constant,
    java_identifier,
    sanitize_name,
)

logger = logging.getLogger(__name__)

# TRACE has no JAX-RS annotation and is not generated
HTTP_METHODS = ['get', 'put', 'post', 'delete', 'options', 'head', 'patch']

# Content types that should be treated as JSON
JSON_CONTENT_TYPES = {'application/json', 'text/json'}

FORM_CONTENT_TYPES = {'application/x-www-form-urlencoded', 'multipart/form-data'}

STRING_FORMATS = {
    'date': 'LocalDate',
    'date-time': 'OffsetDateTime',
    'uuid': 'UUID',
    'byte': 'byte[]',
    'binary': 'InputStream',
}

NUMBER_FORMATS = {
    'float': 'Float',
    'double': 'Double',
}


def _value(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    return obj


def _ref_of(obj: Any) -> str | None:
    ref = getattr(obj, 'ref', None)
    return ref if isinstance(ref, str) else None


def _schema_type(schema: Any) -> str | None:
    type_ = getattr(schema, 'type', None)
    if isinstance(type_, list):
        type_ = next((_value(t) for t in type_ if _value(t) != 'null'), None)
    return _value(type_)


def _is_json(content_type: str) -> bool:
    return content_type in JSON_CONTENT_TYPES or content_type.endswith('+json')


class OpenAPIProcessor:
    """Builds operations and models from an OpenAPI document.

    Attributes:
        openapi: The validated OpenAPI document.
        model_names: Component schema name to generated class name, for the
            schemas that become Java classes or enums.
    """

    def __init__(self, openapi: OpenAPIv3):
        self.openapi = openapi
        self.model_names: dict[str, str] = self._collect_model_names()

    @property
    def title(self) -> str:
        return self.openapi.info.title

    @property
    def version(self) -> str:
        return self.openapi.info.version

    @property
    def model_class_names(self) -> set[str]:
        return set(self.model_names.values())

    def _component_schemas(self) -> dict[str, Any]:
        components = self.openapi.components
        if components is None or not components.schemas:
            return {}
        return components.schemas

    def _collect_model_names(self) -> dict[str, str]:
        names: dict[str, str] = {}
        used: set[str] = set()
        for schema_name, schema in self._component_schemas().items():
            if not self._is_model_schema(schema):
                continue
            class_name = camelize(sanitize_name(schema_name)) or 'Model'
            if class_name[0].isdigit():
                class_name = '_' + class_name
            candidate, index = class_name, 2
            while candidate in used:
                candidate = f'{class_name}{index}'
                index += 1
            used.add(candidate)
            names[schema_name] = candidate
        return names

    def _is_model_schema(self, schema: Any) -> bool:
        if _ref_of(schema) is not None:
            return False
        type_ = _schema_type(schema)
        if getattr(schema, 'enum', None):
            return type_ in (None, 'string')
        if getattr(schema, 'properties', None) or getattr(schema, 'allOf', None):
            return True
        additional = getattr(schema, 'additionalProperties', None)
        return type_ == 'object' and additional in (None, False)

    def _resolve(self, obj: Any, section: str) -> Any | None:
        """Follow ``#/components/<section>/`` references to their target."""
        seen: set[str] = set()
        prefix = f'#/components/{section}/'
        while (ref := _ref_of(obj)) is not None:
            if not ref.startswith(prefix) or ref in seen:
                logger.warning(f'Unsupported {section} reference: {ref}')
                return None
            seen.add(ref)
            name = ref[len(prefix) :]
            components = self.openapi.components
            items = getattr(components, section, None) if components else None
            if not items or name not in items:
                logger.warning(
                    f"Referenced {section} '{name}' not found in components.{section}"
                )
                return None
            obj = items[name]
        return obj

    def java_type(self, schema: Any, _seen: frozenset[str] = frozenset()) -> str:
        """Map a schema (or reference) to a Java type."""
        if schema is None:
            return 'Object'

        ref = _ref_of(schema)
        if ref is not None:
            name = ref.rsplit('/', 1)[-1]
            if ref.startswith('#/components/schemas/') and name in self.model_names:
                return self.model_names[name]
            if ref in _seen:
                return 'Object'
            target = self._resolve(schema, 'schemas')
            if target is None:
                return 'Object'
            return self.java_type(target, _seen | {ref})

        all_of = getattr(schema, 'allOf', None)
        if all_of and len(all_of) == 1 and not getattr(schema, 'properties', None):
            return self.java_type(all_of[0], _seen)

        type_ = _schema_type(schema)
        fmt = getattr(schema, 'schema_format', None)
        if type_ == 'array':
            return f'List<{self.java_type(getattr(schema, "items", None), _seen)}>'
        if type_ == 'string':
            return STRING_FORMATS.get(fmt, 'String')
        if type_ == 'integer':
            return 'Long' if fmt == 'int64' else 'Integer'
        if type_ == 'number':
            return NUMBER_FORMATS.get(fmt, 'BigDecimal')
        if type_ == 'boolean':
            return 'Boolean'

        additional = getattr(schema, 'additionalProperties', None)
        if type_ in (None, 'object') and additional not in (None, False):
            if additional is True:
                return 'Map<String, Object>'
            return f'Map<String, {self.java_type(additional, _seen)}>'
        return 'Object'

    def operations(self) -> Iterator[tuple[str, CodegenOperation]]:
        """Yield ``(resource_path, operation)`` pairs in document order."""
        for path, path_item in (self.openapi.paths or {}).items():
            for method in HTTP_METHODS:
                operation = getattr(path_item, method, None)
                if operation is None:
                    continue
                yield path, self.build_operation(
                    path, method, operation, getattr(path_item, 'parameters', None)
                )

    def build_operation(
        self,
        path: str,
        method: str,
        operation: Any,
        path_item_parameters: list | None = None,
    ) -> CodegenOperation:
        """Build the codegen view of one OpenAPI operation."""
        operation_id = operation.operationId or self._generate_operation_id(
            path, method
        )
        used_names: set[str] = set()
        parameters = self._extract_parameters(
            operation, path_item_parameters, used_names
        )
        body_param, form_params, consumes = self._extract_request_body(
            operation, used_names
        )
        return_type, produces = self._extract_response(operation)

        return CodegenOperation(
            http_method=method.upper(),
            declared_path=path,
            path=path,
            operation_id=operation_id,
            nickname=java_identifier(operation_id, fallback=method.lower()),
            summary=operation.summary,
            notes=operation.description,
            tags=list(operation.tags or []),
            parameters=parameters + form_params,
            body_param=body_param,
            return_type=return_type,
            consumes=consumes,
            produces=produces,
            deprecated=bool(operation.deprecated),
        )

    def _generate_operation_id(self, path: str, method: str) -> str:
        raw = f'{method}_{path.replace("/", "_").replace("{", "").replace("}", "")}'
        return camelize(sanitize_name(raw), lower_first=True)

    def _unique_name(self, name: str, used: set[str]) -> str:
        candidate, index = name, 2
        while candidate in used:
            candidate = f'{name}{index}'
            index += 1
        used.add(candidate)
        return candidate

    def _extract_parameters(
        self,
        operation: Any,
        path_item_parameters: list | None,
        used_names: set[str],
    ) -> list[CodegenParameter]:
        """Merge operation-level and path-level parameters.

        Operation parameters override path-level parameters with the same
        name and location.
        """
        params: list[CodegenParameter] = []
        seen: set[tuple[str, str]] = set()

        for param_or_ref in [*(operation.parameters or []), *(path_item_parameters or [])]:
            param = self._resolve(param_or_ref, 'parameters')
            if param is None:
                continue
            location = _value(param.param_in)
            if (param.name, location) in seen:
                continue
            seen.add((param.name, location))

            data_type = self.java_type(param.param_schema)
            params.append(
                CodegenParameter(
                    name=param.name,
                    param_name=self._unique_name(java_identifier(param.name), used_names),
                    location=location,
                    data_type=data_type,
                    required=bool(param.required) or location == 'path',
                    description=param.description,
                    is_model=data_type in self.model_class_names,
                )
            )
        return params

    def _select_content_type(self, content: dict) -> tuple[str, Any]:
        """Prefer JSON content types, else take the first declared one."""
        for content_type, media_type in content.items():
            if _is_json(content_type):
                return content_type, media_type
        return next(iter(content.items()))

    def _extract_request_body(
        self, operation: Any, used_names: set[str]
    ) -> tuple[CodegenParameter | None, list[CodegenParameter], list[str]]:
        if operation.requestBody is None:
            return None, [], []

        body = self._resolve(operation.requestBody, 'requestBodies')
        if body is None or not body.content:
            return None, [], []

        consumes = list(body.content.keys())
        content_type, media_type = self._select_content_type(body.content)
        schema = media_type.media_type_schema

        if content_type in FORM_CONTENT_TYPES:
            form_schema = self._resolve(schema, 'schemas') if schema else None
            properties = getattr(form_schema, 'properties', None) or {}
            required = set(getattr(form_schema, 'required', None) or [])
            form_params = [
                CodegenParameter(
                    name=name,
                    param_name=self._unique_name(java_identifier(name), used_names),
                    location='form',
                    data_type=self.java_type(prop_schema),
                    required=name in required,
                    description=getattr(prop_schema, 'description', None),
                )
                for name, prop_schema in properties.items()
            ]
            if form_params:
                return None, form_params, consumes

        data_type = self.java_type(schema)
        body_param = CodegenParameter(
            name='body',
            param_name=self._unique_name('body', used_names),
            location='body',
            data_type=data_type,
            required=bool(body.required),
            description=body.description,
            is_model=data_type in self.model_class_names,
        )
        return body_param, [], consumes

    def _extract_response(self, operation: Any) -> tuple[str | None, list[str]]:
        """Return the success type and every produced content type."""
        responses = operation.responses or {}
        responses = getattr(responses, 'root', responses)

        produces: list[str] = []
        resolved: dict[str, Any] = {}
        for status_code, response_or_ref in responses.items():
            response = self._resolve(response_or_ref, 'responses')
            if response is None:
                continue
            resolved[str(status_code)] = response
            for content_type in response.content or {}:
                if content_type not in produces:
                    produces.append(content_type)

        success_codes = sorted(code for code in resolved if code.startswith('2'))
        if not success_codes:
            success_codes = [code for code in resolved if code == 'default']
        for code in success_codes:
            response = resolved[code]
            if not response.content:
                continue
            _, media_type = self._select_content_type(response.content)
            return self.java_type(media_type.media_type_schema), produces
        return None, produces

    def models(self) -> list[CodegenModel]:
        """Build a model for every component schema that needs a class."""
        schemas = self._component_schemas()
        models = []
        for schema_name, class_name in self.model_names.items():
            schema = schemas[schema_name]
            model = CodegenModel(
                name=class_name,
                schema_name=schema_name,
                description=getattr(schema, 'description', None),
                deprecated=bool(getattr(schema, 'deprecated', False)),
            )
            if getattr(schema, 'enum', None):
                used: set[str] = set()
                model.enum_values = [
                    CodegenEnumValue(
                        name=self._unique_name(java_constant(value), used),
                        value=str(value),
                    )
                    for value in schema.enum
                    if value is not None
                ]
            else:
                model.properties = self._collect_properties(schema, set())
            models.append(model)
        return models

    def _collect_properties(self, schema: Any, seen: set[int]) -> list[CodegenProperty]:
        """Collect properties, flattening ``allOf`` members first."""
        if schema is None or id(schema) in seen:
            return []
        seen.add(id(schema))

        collected: dict[str, CodegenProperty] = {}
        for member in getattr(schema, 'allOf', None) or []:
            target = self._resolve(member, 'schemas')
            for prop in self._collect_properties(target, seen):
                collected[prop.base_name] = prop

        required = set(getattr(schema, 'required', None) or [])
        used = {prop.name for prop in collected.values()}
        for prop_name, prop_schema in (getattr(schema, 'properties', None) or {}).items():
            previous = collected.pop(prop_name, None)
            if previous is not None:
                used.discard(previous.name)
            collected[prop_name] = CodegenProperty(
                name=self._unique_name(java_identifier(prop_name), used),
                base_name=prop_name,
                data_type=self.java_type(prop_schema),
                required=prop_name in required,
                description=getattr(prop_schema, 'description', None),
                deprecated=bool(getattr(prop_schema, 'deprecated', False)),
            )
        return list(collected.values())
