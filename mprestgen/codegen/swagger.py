"""Upgrade of Swagger 2.0 documents to OpenAPI 3.0.

The conversion works on the raw mapping, before validation, and covers what
client generation reads: servers, paths, parameters, request bodies,
responses and definitions. Lossy steps are reported as warnings.
"""

import copy
from typing import Any

__all__ = ('upgrade_swagger',)

HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch')

DEFAULT_MEDIA_TYPE = 'application/json'
FORM_MEDIA_TYPE = 'application/x-www-form-urlencoded'
MULTIPART_MEDIA_TYPE = 'multipart/form-data'

_REF_PREFIXES = {
    '#/definitions/': '#/components/schemas/',
    '#/responses/': '#/components/responses/',
    '#/parameters/': '#/components/parameters/',
}

# keywords a Swagger 2.0 parameter shares with a JSON schema
_SCHEMA_KEYWORDS = (
    'format',
    'default',
    'maximum',
    'exclusiveMaximum',
    'minimum',
    'exclusiveMinimum',
    'maxLength',
    'minLength',
    'pattern',
    'maxItems',
    'minItems',
    'uniqueItems',
    'enum',
    'multipleOf',
)

_COLLECTION_FORMATS = {
    'csv': ('form', False),
    'ssv': ('spaceDelimited', False),
    'pipes': ('pipeDelimited', False),
    'multi': ('form', True),
}


def upgrade_swagger(document: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Convert a Swagger 2.0 mapping into an OpenAPI 3.0.3 mapping.

    Returns:
        A tuple of (OpenAPI 3.0 mapping, list of warnings).
    """
    return _SwaggerUpgrade(document).run()


def _update_ref(ref: str) -> str:
    for old, new in _REF_PREFIXES.items():
        if ref.startswith(old):
            return new + ref[len(old) :]
    return ref


class _SwaggerUpgrade:
    def __init__(self, document: dict[str, Any]):
        self.document = document
        self.warnings: list[str] = []
        self.consumes = document.get('consumes') or []
        self.produces = document.get('produces') or [DEFAULT_MEDIA_TYPE]

    def run(self) -> tuple[dict[str, Any], list[str]]:
        result: dict[str, Any] = {
            'openapi': '3.0.3',
            'info': copy.deepcopy(self.document.get('info')),
            'servers': self._convert_servers(),
            'paths': {
                path: self._convert_path_item(item)
                for path, item in (self.document.get('paths') or {}).items()
            },
        }

        components = self._convert_components()
        if components:
            result['components'] = components
        for key in ('tags', 'security', 'externalDocs'):
            if key in self.document:
                result[key] = copy.deepcopy(self.document[key])
        if self.document.get('securityDefinitions'):
            self.warnings.append('securityDefinitions are not converted')

        return result, self.warnings

    def _convert_servers(self) -> list[dict[str, str]]:
        host = self.document.get('host')
        base_path = self.document.get('basePath') or ''
        if not host and not base_path:
            self.warnings.append(
                "No host or basePath specified, defaulting to server URL '/'"
            )
            return [{'url': '/'}]
        if not host:
            return [{'url': base_path}]
        schemes = self.document.get('schemes') or ['http']
        return [{'url': f'{scheme}://{host}{base_path}'} for scheme in schemes]

    def _convert_components(self) -> dict[str, Any]:
        components: dict[str, Any] = {}
        definitions = self.document.get('definitions') or {}
        if definitions:
            components['schemas'] = {
                name: self._convert_schema(schema)
                for name, schema in definitions.items()
            }
        responses = self.document.get('responses') or {}
        if responses:
            components['responses'] = {
                name: self._convert_response(response, self.produces)
                for name, response in responses.items()
            }
        parameters = {
            name: self._convert_parameter(param)
            for name, param in (self.document.get('parameters') or {}).items()
            if param.get('in') not in ('body', 'formData')
        }
        if parameters:
            components['parameters'] = parameters
        return components

    def _convert_path_item(self, item: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(item, dict):
            return item
        shared = [self._resolve_parameter(p) for p in item.get('parameters') or []]
        result: dict[str, Any] = {}
        for key, value in item.items():
            if key.startswith('x-'):
                result[key] = value
            elif key == '$ref':
                result[key] = _update_ref(value)
            elif key in HTTP_METHODS:
                result[key] = self._convert_operation(value, shared)

        path_params = [
            self._convert_parameter(p)
            for p in shared
            if p.get('in') not in ('body', 'formData')
        ]
        if path_params:
            result['parameters'] = path_params
        return result

    def _resolve_parameter(self, param: dict[str, Any]) -> dict[str, Any]:
        """Inline references to global parameters.

        Body and form parameters have no component form in OpenAPI 3.0, so
        every global reference is inlined before the split.
        """
        ref = param.get('$ref', '')
        if ref.startswith('#/parameters/'):
            name = ref[len('#/parameters/') :]
            target = (self.document.get('parameters') or {}).get(name)
            if target is None:
                self.warnings.append(f'Unresolvable parameter reference {ref}')
                return param
            return target
        return param

    def _convert_operation(
        self, operation: dict[str, Any], shared: list[dict[str, Any]]
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            key: copy.deepcopy(operation[key])
            for key in (
                'tags',
                'summary',
                'description',
                'externalDocs',
                'operationId',
                'deprecated',
                'security',
            )
            if key in operation
        }
        result.update({k: v for k, v in operation.items() if k.startswith('x-')})

        own = [self._resolve_parameter(p) for p in operation.get('parameters') or []]
        own_keys = {(p.get('name'), p.get('in')) for p in own}
        inherited = [p for p in shared if (p.get('name'), p.get('in')) not in own_keys]
        params = inherited + own

        consumes = operation.get('consumes') or self.consumes
        body = next((p for p in params if p.get('in') == 'body'), None)
        form = [p for p in params if p.get('in') == 'formData']
        if body is not None:
            result['requestBody'] = self._convert_body(body, consumes)
        elif form:
            result['requestBody'] = self._convert_form(form, consumes)

        # path-level parameters stay on the path item
        converted = [
            self._convert_parameter(p)
            for p in own
            if p.get('in') not in ('body', 'formData')
        ]
        if converted:
            result['parameters'] = converted

        produces = operation.get('produces') or self.produces
        result['responses'] = {
            str(status): self._convert_response(response, produces)
            for status, response in (operation.get('responses') or {}).items()
        }
        return result

    def _convert_parameter(self, param: dict[str, Any]) -> dict[str, Any]:
        if '$ref' in param:
            return {'$ref': _update_ref(param['$ref'])}

        result: dict[str, Any] = {'name': param.get('name'), 'in': param.get('in')}
        for key in ('description', 'required', 'allowEmptyValue'):
            if key in param:
                result[key] = param[key]
        if param.get('in') == 'path':
            result['required'] = True
        result['schema'] = self._parameter_schema(param)

        if param.get('type') == 'array' and 'collectionFormat' in param:
            fmt = param['collectionFormat']
            if fmt in _COLLECTION_FORMATS:
                result['style'], result['explode'] = _COLLECTION_FORMATS[fmt]
            else:
                self.warnings.append(
                    f"collectionFormat '{fmt}' of parameter "
                    f"'{param.get('name')}' has no OpenAPI 3.0 equivalent"
                )
        result.update({k: v for k, v in param.items() if k.startswith('x-')})
        return result

    def _parameter_schema(self, param: dict[str, Any]) -> dict[str, Any]:
        schema: dict[str, Any] = {}
        if param.get('type') == 'file':
            schema['type'] = 'string'
            schema['format'] = 'binary'
        elif 'type' in param:
            schema['type'] = param['type']
        for key in _SCHEMA_KEYWORDS:
            if key in param and key not in schema:
                schema[key] = copy.deepcopy(param[key])
        if 'items' in param:
            schema['items'] = self._parameter_schema(param['items'])
        return schema

    def _convert_body(
        self, param: dict[str, Any], consumes: list[str]
    ) -> dict[str, Any]:
        schema = self._convert_schema(param.get('schema') or {})
        result: dict[str, Any] = {
            'content': {
                media_type: {'schema': copy.deepcopy(schema)}
                for media_type in consumes or [DEFAULT_MEDIA_TYPE]
            }
        }
        if param.get('description'):
            result['description'] = param['description']
        if param.get('required'):
            result['required'] = True
        return result

    def _convert_form(
        self, params: list[dict[str, Any]], consumes: list[str]
    ) -> dict[str, Any]:
        has_file = any(p.get('type') == 'file' for p in params)
        if has_file:
            media_type = MULTIPART_MEDIA_TYPE
            if consumes and MULTIPART_MEDIA_TYPE not in consumes:
                self.warnings.append(
                    f'File upload parameter requires {MULTIPART_MEDIA_TYPE}, '
                    f'but consumes specifies: {consumes}'
                )
        elif MULTIPART_MEDIA_TYPE in consumes and FORM_MEDIA_TYPE not in consumes:
            media_type = MULTIPART_MEDIA_TYPE
        else:
            media_type = FORM_MEDIA_TYPE

        schema: dict[str, Any] = {
            'type': 'object',
            'properties': {p['name']: self._parameter_schema(p) for p in params},
        }
        required = [p['name'] for p in params if p.get('required')]
        if required:
            schema['required'] = required
        return {'content': {media_type: {'schema': schema}}}

    def _convert_response(
        self, response: dict[str, Any], produces: list[str]
    ) -> dict[str, Any]:
        if '$ref' in response:
            return {'$ref': _update_ref(response['$ref'])}

        result: dict[str, Any] = {'description': response.get('description', '')}
        if 'schema' in response:
            schema = self._convert_schema(response['schema'])
            result['content'] = {
                media_type: {'schema': copy.deepcopy(schema)}
                for media_type in produces
            }
        if response.get('headers'):
            result['headers'] = {
                name: {
                    'description': header.get('description', ''),
                    'schema': self._parameter_schema(header),
                }
                for name, header in response['headers'].items()
            }
        return result

    def _convert_schema(self, schema: Any) -> Any:
        if isinstance(schema, list):
            return [self._convert_schema(item) for item in schema]
        if not isinstance(schema, dict):
            return schema

        result: dict[str, Any] = {}
        for key, value in schema.items():
            if key == '$ref' and isinstance(value, str):
                result[key] = _update_ref(value)
            elif key == 'type' and value == 'file':
                result['type'] = 'string'
                result['format'] = 'binary'
            elif key == 'discriminator' and isinstance(value, str):
                result[key] = {'propertyName': value}
            elif key == 'x-nullable':
                result['nullable'] = value
            elif key == 'properties' and isinstance(value, dict):
                result[key] = {
                    name: self._convert_schema(prop) for name, prop in value.items()
                }
            elif key == 'example' or key.startswith('x-'):
                result[key] = copy.deepcopy(value)
            else:
                result[key] = self._convert_schema(value)
        return result
