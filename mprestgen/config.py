"""Configuration for mprestgen.

Configuration is read from ``mprestgen.yaml`` / ``mprestgen.yml`` /
``mprestgen.json`` in the working directory, from ``[tool.mprestgen]`` in
``pyproject.toml``, or from an explicit path. ``${VAR}`` and
``${VAR:-default}`` references in string values are expanded from the
environment.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mprestgen.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['mprestgen.yaml', 'mprestgen.yml', 'mprestgen.json']

_ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}')


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(
        ..., description='Source root directory for the generated Java files.'
    )

    api_package: str = Field('api', description='Java package of the interfaces.')

    model_package: str = Field('model', description='Java package of the models.')

    title: str | None = Field(
        None, description='Optional override of the document title in Javadoc.'
    )

    generate_models: bool = Field(
        True, description='Whether to generate model classes for component schemas.'
    )

    formatter_executable: str = Field(
        'google-java-format',
        description='Executable used to format generated sources.',
    )

    template_dir: str | None = Field(
        None,
        description=(
            'Directory with templates overriding the built-in '
            'api.java.jinja2 and model.java.jinja2.'
        ),
    )

    options: dict[str, Any] = Field(
        default_factory=dict,
        description='Generator options (apiName, fieldGen, jsonLib, ...).',
    )

    @field_validator('source', 'output')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('must not be empty')
        return value

    @field_validator('api_package', 'model_package')
    @classmethod
    def _java_package(cls, value: str) -> str:
        if not re.fullmatch(r'[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*', value):
            raise ValueError(f"'{value}' is not a valid Java package name")
        return value


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='MPRESTGEN_')

    documents: list[DocumentConfig] = Field(
        ..., min_length=1, description='List of OpenAPI documents to process.'
    )


def _expand_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` in a string.

    Unset variables without a default are left as written.
    """

    def replace(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            return default
        return match.group(0)

    return _ENV_VAR_PATTERN.sub(replace, value)


def _expand_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return _expand_env_vars(data)
    if isinstance(data, dict):
        return {key: _expand_env_vars_recursive(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars_recursive(item) for item in data]
    return data


def load_yaml(path: str | Path) -> dict:
    try:
        data = yaml.safe_load(Path(path).read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Invalid YAML: {e}', config_path=str(path)) from e
    return _expand_env_vars_recursive(data or {})


def load_json(path: str | Path) -> dict:
    try:
        data = json.loads(Path(path).read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f'Invalid JSON: {e}', config_path=str(path)) from e
    return _expand_env_vars_recursive(data)


def _load_file(path: Path) -> dict:
    if path.suffix.lower() == '.json':
        return load_json(path)
    return load_yaml(path)


def _validate(data: Any, config_path: str) -> CodegenConfig:
    if not isinstance(data, dict):
        raise ConfigurationError(
            'Configuration must be a mapping', config_path=config_path
        )
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = '.'.join(str(part) for part in first['loc'])
        raise ConfigurationError(
            f'Invalid configuration: {first["msg"]}',
            config_path=config_path,
            field=field,
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or discover it in the working directory.

    Raises:
        ConfigurationError: If no configuration is found or it is invalid.
    """
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(
                'Configuration file not found', config_path=str(config_path)
            )
        return _validate(_load_file(config_path), str(config_path))

    cwd = Path(os.getcwd())

    for filename in DEFAULT_FILENAMES:
        config_path = cwd / filename
        if config_path.exists():
            return _validate(_load_file(config_path), str(config_path))

    pyproject_path = cwd / 'pyproject.toml'

    if pyproject_path.exists():
        import tomllib

        pyproject = tomllib.loads(pyproject_path.read_text(encoding='utf-8'))
        tools = pyproject.get('tool', {})

        if 'mprestgen' in tools:
            data = _expand_env_vars_recursive(tools['mprestgen'])
            return _validate(data, str(pyproject_path))

    raise ConfigurationError(
        f'No configuration found; create {DEFAULT_FILENAMES[0]} '
        'or add [tool.mprestgen] to pyproject.toml'
    )


DEFAULT_CONFIG = {
    'documents': [
        {
            'source': './openapi.yaml',
            'output': './src/main/java',
            'api_package': 'com.example.api',
            'model_package': 'com.example.model',
            'options': {
                'fieldGen': 'public',
                'jsonLib': 'jsonb',
                'returnResponse': True,
                'interfaceOnly': True,
                'beanParamCount': 4,
                'formatter': True,
            },
        }
    ]
}


def create_default_config(path: str | Path) -> Path:
    """Write a starter configuration file.

    The format follows the suffix: ``.json`` writes JSON, anything else YAML.

    Raises:
        ConfigurationError: If the file already exists.
    """
    path = Path(path)
    if path.exists():
        raise ConfigurationError('Configuration file already exists', str(path))

    if path.suffix.lower() == '.json':
        text = json.dumps(DEFAULT_CONFIG, indent=2) + '\n'
    else:
        text = yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False)
    path.write_text(text, encoding='utf-8')
    return path
