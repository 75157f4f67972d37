"""Intermediate representation handed from the OpenAPI processor to rendering.

Operations and models are plain dataclasses. The OpenAPI processor creates
them once per run; the operation grouper derives rewritten copies of
operations and never mutates the originals.
"""

import dataclasses
from typing import Literal

ParameterLocation = Literal['path', 'query', 'header', 'cookie', 'form', 'body']

JAXRS_PARAM_ANNOTATIONS = {
    'path': 'PathParam',
    'query': 'QueryParam',
    'header': 'HeaderParam',
    'cookie': 'CookieParam',
    'form': 'FormParam',
}


@dataclasses.dataclass
class CodegenParameter:
    """A single operation parameter.

    Attributes:
        name: The wire name of the parameter.
        param_name: The Java identifier used in generated code.
        location: Where the parameter travels; ``body`` for request bodies.
        data_type: The Java type of the parameter.
        required: Whether the parameter is required.
        description: Optional description from the API document.
        is_model: Whether ``data_type`` refers to a generated model.
    """

    name: str
    param_name: str
    location: ParameterLocation
    data_type: str
    required: bool = False
    description: str | None = None
    is_model: bool = False

    @property
    def is_bean_eligible(self) -> bool:
        """Whether this parameter may be bundled into a bean parameter."""
        return self.location != 'body'

    @property
    def annotation(self) -> str | None:
        """The JAX-RS annotation name binding this parameter, if any."""
        return JAXRS_PARAM_ANNOTATIONS.get(self.location)


@dataclasses.dataclass
class CodegenOperation:
    """One API endpoint, as seen by grouping and rendering."""

    http_method: str
    declared_path: str
    path: str
    operation_id: str
    nickname: str
    summary: str | None = None
    notes: str | None = None
    tags: list[str] = dataclasses.field(default_factory=list)
    parameters: list[CodegenParameter] = dataclasses.field(default_factory=list)
    body_param: CodegenParameter | None = None
    return_type: str | None = None
    consumes: list[str] = dataclasses.field(default_factory=list)
    produces: list[str] = dataclasses.field(default_factory=list)
    deprecated: bool = False

    # Derived by the operation grouper
    group_name: str | None = None
    is_sub_resource: bool = False
    has_bean_param: bool = False
    bean_param_name: str | None = None

    @property
    def bean_params(self) -> list[CodegenParameter]:
        """Parameters eligible for bundling into a bean parameter."""
        return [p for p in self.parameters if p.is_bean_eligible]

    @property
    def all_params(self) -> list[CodegenParameter]:
        """Parameters followed by the request body, if any."""
        if self.body_param is None:
            return list(self.parameters)
        return [*self.parameters, self.body_param]


@dataclasses.dataclass
class CodegenProperty:
    """A field of a generated model."""

    name: str
    base_name: str
    data_type: str
    required: bool = False
    description: str | None = None
    deprecated: bool = False

    @property
    def getter(self) -> str:
        return 'get' + self.name[0].upper() + self.name[1:]

    @property
    def setter(self) -> str:
        return 'set' + self.name[0].upper() + self.name[1:]


@dataclasses.dataclass
class CodegenEnumValue:
    """A constant of a generated enum."""

    name: str
    value: str


@dataclasses.dataclass
class CodegenModel:
    """A component schema rendered as a Java class or enum."""

    name: str
    schema_name: str
    description: str | None = None
    properties: list[CodegenProperty] = dataclasses.field(default_factory=list)
    enum_values: list[CodegenEnumValue] = dataclasses.field(default_factory=list)
    deprecated: bool = False

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)
