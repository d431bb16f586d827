"""OpenAPI document models used by the type generator."""

from tsopenapi.openapi.models import (
    HTTP_METHODS,
    Components,
    Info,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
)

__all__ = [
    'HTTP_METHODS',
    'Components',
    'Info',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'PathItem',
    'Reference',
    'RequestBody',
    'Response',
    'Schema',
]
