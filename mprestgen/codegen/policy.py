"""Generation policy resolution.

This module turns the flat option bag of a document configuration into an
immutable, fully typed :class:`GenerationPolicy`. Resolution is total: an
unknown or malformed value never raises, it falls back to the default of
that option. Mutually exclusive choices (field-access strategy and JSON
binding library) are single enum selectors; the booleans templates branch
on are derived from them, so exactly one of each family is ever active.

Example:
    >>> policy = resolve_policy({'fieldGen': 'lombok', 'beanParamCount': '3'})
    >>> policy.lombok_data, policy.field_public, policy.bean_param_count
    (True, False, 3)
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

__all__ = (
    'FieldGenerator',
    'JsonLib',
    'GenerationPolicy',
    'ConfigurationResolver',
    'resolve_policy',
)

# Option keys of the raw option bag.
API_NAME = 'apiName'
PATH_PREFIX = 'pathPrefix'
API_SUFFIX = 'apiSuffix'
BEAN_PARAM_SUFFIX = 'beanParamSuffix'
BEAN_PARAM_COUNT = 'beanParamCount'
FIELD_GEN = 'fieldGen'
JSON_LIB = 'jsonLib'
RETURN_RESPONSE = 'returnResponse'
INTERFACE_ONLY = 'interfaceOnly'
FORMATTER = 'formatter'
USE_BEAN_VALIDATION = 'useBeanValidation'
API_INTERFACE_DOC = 'apiInterfaceDoc'
ANNOTATIONS = 'annotations'
MODEL_ANNOTATIONS = 'modelAnnotations'

DEFAULT_API_SUFFIX = 'Api'
DEFAULT_BEAN_PARAM_SUFFIX = 'BeanParam'
DEFAULT_BEAN_PARAM_COUNT = 4

_TRUE_STRINGS = frozenset({'true', 'yes', 'on', '1'})
_FALSE_STRINGS = frozenset({'false', 'no', 'off', '0'})


class FieldGenerator(str, Enum):
    """How generated models expose their fields."""

    PUBLIC = 'public'
    LOMBOK = 'lombok'
    GET_SET = 'get-set'


class JsonLib(str, Enum):
    """Which JSON binding annotations generated models carry."""

    JSONB = 'jsonb'
    JACKSON = 'jackson'


class GenerationPolicy(BaseModel):
    """Resolved, mutually consistent generation settings.

    Instances are immutable; build them with :class:`ConfigurationResolver`
    rather than directly so that option-bag semantics apply.
    """

    model_config = ConfigDict(frozen=True)

    field_gen: FieldGenerator = Field(
        FieldGenerator.PUBLIC, description='Field-access strategy for models.'
    )
    json_lib: JsonLib = Field(
        JsonLib.JSONB, description='JSON binding annotation family for models.'
    )
    api_name: str | None = Field(
        None, description='Fixed interface name for every operation.'
    )
    path_prefix: str | None = Field(
        None, description='Prefix removed from resource paths before grouping.'
    )
    api_suffix: str = Field(
        DEFAULT_API_SUFFIX, description='Suffix appended to computed interface names.'
    )
    bean_param_suffix: str = Field(
        DEFAULT_BEAN_PARAM_SUFFIX,
        description='Suffix of synthetic bundled-parameter class names.',
    )
    bean_param_count: int = Field(
        DEFAULT_BEAN_PARAM_COUNT,
        ge=0,
        description='Parameter count at which parameters are bundled.',
    )
    return_response: bool = True
    interface_only: bool = True
    formatter: bool = True
    use_bean_validation: bool = True
    api_interface_doc: bool = True
    annotations: tuple[str, ...] = ()
    model_annotations: tuple[str, ...] = ()

    @property
    def field_public(self) -> bool:
        return self.field_gen is FieldGenerator.PUBLIC

    @property
    def lombok_data(self) -> bool:
        return self.field_gen is FieldGenerator.LOMBOK

    @property
    def generate_getter_setter(self) -> bool:
        return self.field_gen is FieldGenerator.GET_SET

    @property
    def generate_equals(self) -> bool:
        return self.field_gen is FieldGenerator.GET_SET

    @property
    def generate_to_string(self) -> bool:
        return self.field_gen is FieldGenerator.GET_SET

    @property
    def jsonb(self) -> bool:
        return self.json_lib is JsonLib.JSONB

    @property
    def jackson(self) -> bool:
        return self.json_lib is JsonLib.JACKSON

    @property
    def has_annotations(self) -> bool:
        return bool(self.annotations)

    @property
    def has_model_annotations(self) -> bool:
        return bool(self.model_annotations)

    def to_options(self) -> dict[str, Any]:
        """Return the fully materialized option bag.

        Every option is written back, including unset ones (as ``None``),
        together with the derived booleans templates and introspection
        tools read. Resolving the result yields an equal policy.
        """
        return {
            API_NAME: self.api_name,
            PATH_PREFIX: self.path_prefix,
            API_SUFFIX: self.api_suffix,
            BEAN_PARAM_SUFFIX: self.bean_param_suffix,
            BEAN_PARAM_COUNT: self.bean_param_count,
            FIELD_GEN: self.field_gen.value,
            JSON_LIB: self.json_lib.value,
            RETURN_RESPONSE: self.return_response,
            INTERFACE_ONLY: self.interface_only,
            FORMATTER: self.formatter,
            USE_BEAN_VALIDATION: self.use_bean_validation,
            API_INTERFACE_DOC: self.api_interface_doc,
            ANNOTATIONS: list(self.annotations),
            MODEL_ANNOTATIONS: list(self.model_annotations),
            'hasAnnotations': self.has_annotations,
            'hasModelAnnotations': self.has_model_annotations,
            'fieldPublic': self.field_public,
            'lombokData': self.lombok_data,
            'generateGetterSetter': self.generate_getter_setter,
            'generateEquals': self.generate_equals,
            'generateToString': self.generate_to_string,
            'jsonb': self.jsonb,
            'jackson': self.jackson,
        }


class ConfigurationResolver:
    """Resolves a raw option bag into a :class:`GenerationPolicy`.

    The resolver is stateless; :func:`resolve_policy` is a shortcut around
    a module-level instance.
    """

    def resolve(
        self, raw: Mapping[str, Any] | GenerationPolicy | None
    ) -> GenerationPolicy:
        """Resolve options into a policy. Never raises.

        Args:
            raw: The option bag, an already resolved policy, or None.

        Returns:
            The resolved policy. A policy passed in is returned unchanged.
        """
        if isinstance(raw, GenerationPolicy):
            return raw
        if raw is None:
            options: Mapping[str, Any] = {}
        elif isinstance(raw, Mapping):
            options = raw
        else:
            logger.debug(f'Ignoring option bag of type {type(raw).__name__}')
            options = {}

        return GenerationPolicy(
            field_gen=self._choice(
                options, FIELD_GEN, FieldGenerator, FieldGenerator.PUBLIC
            ),
            json_lib=self._choice(options, JSON_LIB, JsonLib, JsonLib.JSONB),
            api_name=self._optional_string(options, API_NAME),
            path_prefix=self._optional_string(options, PATH_PREFIX),
            api_suffix=self._string(options, API_SUFFIX, DEFAULT_API_SUFFIX),
            bean_param_suffix=self._string(
                options, BEAN_PARAM_SUFFIX, DEFAULT_BEAN_PARAM_SUFFIX
            ),
            bean_param_count=self._integer(
                options, BEAN_PARAM_COUNT, DEFAULT_BEAN_PARAM_COUNT
            ),
            return_response=self._boolean(options, RETURN_RESPONSE, True),
            interface_only=self._boolean(options, INTERFACE_ONLY, True),
            formatter=self._boolean(options, FORMATTER, True),
            use_bean_validation=self._boolean(options, USE_BEAN_VALIDATION, True),
            api_interface_doc=self._boolean(options, API_INTERFACE_DOC, True),
            annotations=self._annotation_list(options, ANNOTATIONS),
            model_annotations=self._annotation_list(options, MODEL_ANNOTATIONS),
        )

    def _choice(
        self, options: Mapping[str, Any], key: str, enum_type: type[Enum], default
    ):
        value = options.get(key)
        if value is None:
            return default
        if isinstance(value, enum_type):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace('_', '-')
            try:
                return enum_type(normalized)
            except ValueError:
                pass
        logger.debug(f'Unknown value {value!r} for {key}, using {default.value}')
        return default

    def _optional_string(self, options: Mapping[str, Any], key: str) -> str | None:
        value = options.get(key)
        if isinstance(value, str) and value.strip():
            return value
        if value is not None and not isinstance(value, str):
            logger.debug(f'Ignoring non-string value {value!r} for {key}')
        return None

    def _string(self, options: Mapping[str, Any], key: str, default: str) -> str:
        value = options.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value
        logger.debug(f'Ignoring non-string value {value!r} for {key}')
        return default

    def _boolean(self, options: Mapping[str, Any], key: str, default: bool) -> bool:
        value = options.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _TRUE_STRINGS:
                return True
            if normalized in _FALSE_STRINGS:
                return False
        logger.debug(f'Malformed boolean {value!r} for {key}, using {default}')
        return default

    def _integer(self, options: Mapping[str, Any], key: str, default: int) -> int:
        value = options.get(key)
        if value is None:
            return default
        result = None
        if isinstance(value, int) and not isinstance(value, bool):
            result = value
        elif isinstance(value, str):
            try:
                result = int(value.strip())
            except ValueError:
                result = None
        if result is None or result < 0:
            logger.debug(f'Malformed integer {value!r} for {key}, using {default}')
            return default
        return result

    def _annotation_list(
        self, options: Mapping[str, Any], key: str
    ) -> tuple[str, ...]:
        value = options.get(key)
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,) if value.strip() else ()
        if isinstance(value, (list, tuple)):
            return tuple(str(item) for item in value if item is not None)
        logger.debug(f'Ignoring annotation list {value!r} for {key}')
        return ()


_resolver = ConfigurationResolver()


def resolve_policy(raw: Mapping[str, Any] | GenerationPolicy | None) -> GenerationPolicy:
    """Resolve an option bag with the default :class:`ConfigurationResolver`."""
    return _resolver.resolve(raw)
