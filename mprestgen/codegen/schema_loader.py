"""Schema loading utilities for OpenAPI documents.

This module loads OpenAPI 3.x and Swagger 2.0 documents from URLs or local
files, in JSON or YAML, and validates them into openapi-pydantic models.
Swagger 2.0 documents are upgraded to OpenAPI 3.0 on the way.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from openapi_pydantic.v3.parser import OpenAPIv3
from pydantic import TypeAdapter, ValidationError

from mprestgen.codegen.swagger import upgrade_swagger
from mprestgen.codegen.utils import is_url
from mprestgen.exceptions import SchemaLoadError, SchemaValidationError

logger = logging.getLogger(__name__)

_openapi_adapter = TypeAdapter(OpenAPIv3)


class SchemaLoader:
    """Loads OpenAPI schemas from URLs or file paths.

    Example:
        >>> loader = SchemaLoader()
        >>> schema = loader.load('https://api.example.com/openapi.json')
        >>> # or
        >>> schema = loader.load('/path/to/openapi.yaml')
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, ``httpx.get`` is used.
        """
        self._http_client = http_client
        self._upgrade_warnings: list[str] = []

    def load(self, source: str) -> OpenAPIv3:
        """Load and validate an OpenAPI document from a URL or file path.

        Raises:
            SchemaLoadError: If the document cannot be read or parsed.
            SchemaValidationError: If the document is not valid OpenAPI 3.x.
        """
        try:
            if is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)
        except SchemaLoadError:
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e) from e

        return self.parse(content, source)

    def parse(self, content: Any, source: str = '<memory>') -> OpenAPIv3:
        """Validate an already loaded document.

        Swagger 2.0 documents are upgraded to OpenAPI 3.0 first; the warnings
        of that upgrade are available from :meth:`get_upgrade_warnings`.

        Raises:
            SchemaValidationError: If the document is not valid OpenAPI 3.x
                or Swagger 2.0.
        """
        self._upgrade_warnings = []
        if not isinstance(content, dict):
            raise SchemaValidationError(source, ['document root must be a mapping'])

        if 'swagger' in content:
            content = self._upgrade(content, source)

        version = str(content.get('openapi', ''))
        if not version.startswith('3.'):
            raise SchemaValidationError(
                source, [f"unsupported OpenAPI version '{version}'"]
            )

        try:
            return _openapi_adapter.validate_python(content)
        except ValidationError as e:
            errors = [
                f'{".".join(str(part) for part in err["loc"])}: {err["msg"]}'
                for err in e.errors()
            ]
            raise SchemaValidationError(source, errors) from e

    def get_upgrade_warnings(self) -> list[str]:
        """Get any warnings generated during the last Swagger 2.0 upgrade."""
        return self._upgrade_warnings.copy()

    def _upgrade(self, content: dict, source: str) -> dict:
        version = str(content.get('swagger'))
        if version != '2.0':
            raise SchemaValidationError(
                source, [f"unsupported Swagger version '{version}'"]
            )
        if not isinstance(content.get('paths', {}), dict):
            raise SchemaValidationError(source, ['paths: must be a mapping'])

        logger.info(f'Upgrading Swagger 2.0 document {source} to OpenAPI 3.0')
        try:
            upgraded, warnings = upgrade_swagger(content)
        except (AttributeError, KeyError, TypeError) as e:
            raise SchemaValidationError(source, [f'cannot upgrade document: {e}']) from e

        for warning in warnings:
            logger.warning(f'{source}: {warning}')
        self._upgrade_warnings = warnings
        return upgraded

    def _load_from_url(self, url: str) -> Any:
        logger.info(f'Loading OpenAPI document from {url}')
        if self._http_client is not None:
            response = self._http_client.get(url)
        else:
            response = httpx.get(url, follow_redirects=True)
        response.raise_for_status()
        return self._parse_text(response.text, url)

    def _load_from_file(self, path: str) -> Any:
        logger.info(f'Loading OpenAPI document from {path}')
        text = Path(path).read_text(encoding='utf-8')
        return self._parse_text(text, path)

    def _parse_text(self, text: str, source: str) -> Any:
        if source.lower().endswith('.json'):
            return json.loads(text)
        # YAML is a superset of JSON, so it also covers JSON served from URLs
        return yaml.safe_load(text)
