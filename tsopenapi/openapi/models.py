"""OpenAPI document models.

This module provides lenient Pydantic models for the parts of an OpenAPI 3.x
document that type generation reads. Unknown keys are kept (``extra='allow'``)
because documents are compiled on a best-effort basis and never validated.

Every position that may hold either an object or a ``$ref`` is a
discriminated union, so a ``{"$ref": ...}`` mapping always becomes a
:class:`Reference` and anything else becomes the concrete model.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

__all__ = [
    'HTTP_METHODS',
    'Components',
    'Info',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'ParameterOrReference',
    'PathItem',
    'Reference',
    'RequestBody',
    'RequestBodyOrReference',
    'Response',
    'ResponseOrReference',
    'Schema',
    'SchemaOrReference',
]

# Order in which operations of a path item are emitted.
HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')


def _reference_or_object(value: Any) -> str:
    """Discriminator function telling a ``$ref`` object apart from an inline one."""
    if isinstance(value, dict):
        return 'reference' if '$ref' in value else 'object'
    if isinstance(value, Reference):
        return 'reference'
    return 'object'


def _or_reference(model: type[BaseModel]) -> Any:
    return Annotated[
        Union[
            Annotated[Reference, Tag('reference')],
            Annotated[model, Tag('object')],
        ],
        Discriminator(_reference_or_object),
    ]


class _Model(BaseModel):
    model_config = ConfigDict(
        extra='allow',
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class Reference(_Model):
    """A ``$ref`` pointer to another object in the same document."""

    ref: str = Field(..., alias='$ref')
    summary: Optional[str] = None
    description: Optional[str] = None


class Info(_Model):
    title: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None


class Schema(_Model):
    """A JSON-Schema-like node (OpenAPI 3.0 and 3.1 flavours)."""

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[Union[str, List[str]]] = None
    format: Optional[str] = None
    enum: Optional[List[Any]] = None
    const: Optional[Any] = None
    default: Optional[Any] = None
    example: Optional[Any] = None

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusiveMinimum: Optional[Union[bool, float]] = None
    exclusiveMaximum: Optional[Union[bool, float]] = None
    multipleOf: Optional[float] = None
    minLength: Optional[int] = None
    maxLength: Optional[int] = None
    pattern: Optional[str] = None

    items: Optional[SchemaOrReference] = None
    minItems: Optional[int] = None
    maxItems: Optional[int] = None
    uniqueItems: Optional[bool] = None

    properties: Optional[Dict[str, SchemaOrReference]] = None
    required: Optional[List[str]] = None
    additionalProperties: Optional[Union[bool, SchemaOrReference]] = None
    minProperties: Optional[int] = None
    maxProperties: Optional[int] = None

    allOf: Optional[List[SchemaOrReference]] = None
    oneOf: Optional[List[SchemaOrReference]] = None
    anyOf: Optional[List[SchemaOrReference]] = None
    not_: Optional[SchemaOrReference] = Field(None, alias='not')

    nullable: Optional[bool] = None
    readOnly: Optional[bool] = None
    writeOnly: Optional[bool] = None
    deprecated: Optional[bool] = None

    @field_validator('required', mode='before')
    @classmethod
    def _ignore_boolean_required(cls, value: Any) -> Any:
        # ``required: true`` on a property schema is a common authoring mistake
        if isinstance(value, bool):
            return None
        return value

    @property
    def types(self) -> list[str]:
        """The declared type names, normalising the 3.1 list form."""
        if self.type is None:
            return []
        if isinstance(self.type, str):
            return [self.type]
        return list(self.type)

    @property
    def has_const(self) -> bool:
        return 'const' in self.model_fields_set

    @property
    def has_example(self) -> bool:
        return 'example' in self.model_fields_set

    @property
    def has_composition(self) -> bool:
        return (
            self.allOf is not None
            or self.oneOf is not None
            or self.anyOf is not None
            or self.not_ is not None
        )


SchemaOrReference = _or_reference(Schema)


class MediaType(_Model):
    schema_: Optional[SchemaOrReference] = Field(None, alias='schema')
    example: Optional[Any] = None


class Parameter(_Model):
    name: str
    in_: str = Field(..., alias='in')
    description: Optional[str] = None
    required: Optional[bool] = False
    deprecated: Optional[bool] = False
    schema_: Optional[SchemaOrReference] = Field(None, alias='schema')
    content: Optional[Dict[str, MediaType]] = None
    example: Optional[Any] = None


ParameterOrReference = _or_reference(Parameter)


class RequestBody(_Model):
    description: Optional[str] = None
    content: Dict[str, MediaType] = Field(default_factory=dict)
    required: Optional[bool] = False


RequestBodyOrReference = _or_reference(RequestBody)


class Response(_Model):
    description: Optional[str] = None
    content: Optional[Dict[str, MediaType]] = None


ResponseOrReference = _or_reference(Response)


class Operation(_Model):
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operationId: Optional[str] = None
    parameters: Optional[List[ParameterOrReference]] = None
    requestBody: Optional[RequestBodyOrReference] = None
    responses: Dict[str, ResponseOrReference] = Field(default_factory=dict)
    deprecated: Optional[bool] = False


class PathItem(_Model):
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    parameters: Optional[List[ParameterOrReference]] = None

    def operations(self) -> list[tuple[str, Operation]]:
        """Return ``(method, operation)`` pairs for the methods defined here."""
        return [
            (method, getattr(self, method))
            for method in HTTP_METHODS
            if getattr(self, method) is not None
        ]


class Components(_Model):
    schemas: Optional[Dict[str, SchemaOrReference]] = None
    responses: Optional[Dict[str, ResponseOrReference]] = None
    parameters: Optional[Dict[str, ParameterOrReference]] = None
    requestBodies: Optional[Dict[str, RequestBodyOrReference]] = None
    securitySchemes: Optional[Dict[str, Any]] = None


class OpenAPI(_Model):
    """Root OpenAPI document."""

    openapi: Optional[str] = None
    info: Optional[Info] = None
    servers: Optional[List[Any]] = None
    paths: Dict[str, PathItem] = Field(default_factory=dict)
    components: Optional[Components] = None
    security: Optional[List[Any]] = None
    tags: Optional[List[Any]] = None

    @field_validator('paths', mode='before')
    @classmethod
    def _drop_extensions(cls, value: Any) -> Any:
        # ``x-`` keys are extensions, not path items
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if not str(k).startswith('x-')}
        if value is None:
            return {}
        return value


Schema.model_rebuild()
MediaType.model_rebuild()
Parameter.model_rebuild()
RequestBody.model_rebuild()
Response.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()
