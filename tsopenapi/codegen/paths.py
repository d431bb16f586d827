"""The synthesized ``paths`` declaration.

The ``paths`` interface has one member per path string, one member per HTTP
method under it, and for each operation its parameters (grouped by
location), request body and responses. Every leaf schema is mapped with the
shared :class:`~tsopenapi.codegen.types.TypeMapper`.
"""

import logging
from typing import Any

from tsopenapi.codegen.declarations import GeneratedDeclaration
from tsopenapi.codegen.resolver import PATHS_DECLARATION
from tsopenapi.codegen.types import UNKNOWN, MappingContext, TypeMapper
from tsopenapi.codegen.utils import doc_comment, indent, quote
from tsopenapi.config import GeneratorOptions
from tsopenapi.exceptions import UnsupportedReferenceError
from tsopenapi.openapi.models import (
    MediaType,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
)

logger = logging.getLogger(__name__)

__all__ = ['PARAMETER_LOCATIONS', 'PathSurfaceEmitter', 'primary_media_type']

PARAMETER_LOCATIONS = ('path', 'query', 'header', 'cookie')

# Content types that should be treated as JSON
JSON_CONTENT_TYPES = {'application/json', 'text/json'}

# Type of a response that has no content
NO_CONTENT = 'void'

PATH_PARAM_LITERAL = '`${string}`'


def _is_json(content_type: str) -> bool:
    media = content_type.split(';', 1)[0].strip().lower()
    return media in JSON_CONTENT_TYPES or media.endswith('+json')


def primary_media_type(content: dict[str, MediaType] | None) -> MediaType | None:
    """Pick the media type whose schema describes a body.

    Prefers the first JSON content type, otherwise the first one listed.
    """
    if not content:
        return None
    for content_type, media_type in content.items():
        if _is_json(content_type):
            return media_type
    return next(iter(content.values()))


def _status_key(status: str) -> str:
    if status.isdigit() or status == 'default':
        return status
    return quote(status)


class PathSurfaceEmitter:
    """Emits the ``paths`` declaration for the document's path items."""

    def __init__(self, mapper: TypeMapper):
        self.mapper = mapper
        self.resolver = mapper.resolver

    def emit(self, options: GeneratorOptions) -> GeneratedDeclaration | None:
        """Return the ``paths`` declaration, or None when there are no paths."""
        paths = self.resolver.openapi.paths
        if not paths:
            return None

        lines: list[str] = []
        for path, item in paths.items():
            lines.extend(self._path_item(path, item, options))

        kind = 'type' if options.export_type else 'interface'
        body = '{\n' + '\n'.join(lines) + '\n}'
        return GeneratedDeclaration(name=PATHS_DECLARATION, kind=kind, body=body)

    def _path_item(
        self, path: str, item: PathItem, options: GeneratorOptions
    ) -> list[str]:
        pad = indent(1)
        operations = item.operations()
        if not operations:
            logger.debug('Path %s defines no operations', path)
            return [f'{pad}{quote(path)}: Record<string, never>;']

        lines = [f'{pad}{quote(path)}: {{']
        for method, operation in operations:
            ctx = MappingContext(options, location=f'{method.upper()} {path}')
            lines.extend(self._operation(method, operation, item, ctx))
        lines.append(f'{pad}}};')
        return lines

    def _operation(
        self,
        method: str,
        operation: Operation,
        item: PathItem,
        ctx: MappingContext,
    ) -> list[str]:
        pad = indent(2)
        inner = indent(3)
        options = ctx.options

        lines = [pad + line for line in self._operation_doc(operation, options)]
        lines.append(f'{pad}{method}: {{')

        lines.extend(self._parameters(operation, item, ctx.at_indent(3)))

        if operation.requestBody is not None:
            body = self._resolve(
                operation.requestBody, RequestBody, 'a request body', ctx
            )
            body_type = self._media_type(body.content, ctx.at_indent(3))
            optional = '' if body.required else '?'
            if options.include_descriptions and body.description:
                lines.extend(inner + line for line in doc_comment(body.description))
            lines.append(f'{inner}requestBody{optional}: {body_type};')

        lines.extend(self._responses(operation, ctx.at_indent(3)))
        lines.append(f'{pad}}};')
        return lines

    @staticmethod
    def _operation_doc(operation: Operation, options: GeneratorOptions) -> list[str]:
        if not options.include_descriptions:
            return []
        text = '\n'.join(
            part for part in (operation.summary, operation.description) if part
        )
        tags = []
        if operation.operationId:
            tags.append(f'@operationId {operation.operationId}')
        if operation.deprecated:
            tags.append('@deprecated')
        return doc_comment(text or None, tags=tags)

    # ------------------------------------------------------------------
    # parameters
    # ------------------------------------------------------------------

    def _collect_parameters(
        self, operation: Operation, item: PathItem, ctx: MappingContext
    ) -> list[Parameter]:
        # operation parameters override path-level ones with the same key
        merged: dict[tuple[str, str], Parameter] = {}
        for node in [*(item.parameters or []), *(operation.parameters or [])]:
            parameter = self._resolve(node, Parameter, 'a parameter', ctx)
            merged[(parameter.in_, parameter.name)] = parameter
        return list(merged.values())

    def _parameters(
        self, operation: Operation, item: PathItem, ctx: MappingContext
    ) -> list[str]:
        groups: dict[str, list[Parameter]] = {
            location: [] for location in PARAMETER_LOCATIONS
        }
        for parameter in self._collect_parameters(operation, item, ctx):
            if parameter.in_ not in groups:
                logger.debug(
                    'Skipping parameter %s in unknown location %s',
                    parameter.name,
                    parameter.in_,
                )
                continue
            groups[parameter.in_].append(parameter)

        if not any(groups.values()):
            return []

        pad = indent(ctx.indent)
        group_pad = indent(ctx.indent + 1)
        entry_ctx = ctx.at_indent(ctx.indent + 2)
        entry_pad = indent(ctx.indent + 2)

        lines = [f'{pad}parameters: {{']
        for location, parameters in groups.items():
            if not parameters:
                continue
            optional = '' if any(p.required for p in parameters) else '?'
            lines.append(f'{group_pad}{location}{optional}: {{')
            for parameter in parameters:
                lines.extend(
                    entry_pad + line
                    for line in self._parameter_doc(parameter, ctx.options)
                )
                marker = '' if parameter.required else '?'
                type_ = self._parameter_type(parameter, entry_ctx)
                lines.append(f'{entry_pad}{quote(parameter.name)}{marker}: {type_};')
            lines.append(f'{group_pad}}};')
        lines.append(f'{pad}}};')
        return lines

    def _parameter_type(self, parameter: Parameter, ctx: MappingContext) -> str:
        if parameter.schema_ is not None:
            type_ = self.mapper.map_type(parameter.schema_, ctx)
        else:
            type_ = self._media_type(parameter.content, ctx)

        if (
            ctx.options.path_params_as_types
            and parameter.in_ == 'path'
            and type_ == 'string'
        ):
            return PATH_PARAM_LITERAL
        return type_

    @staticmethod
    def _parameter_doc(parameter: Parameter, options: GeneratorOptions) -> list[str]:
        if not options.include_descriptions:
            return []
        tags = ['@deprecated'] if parameter.deprecated else []
        return doc_comment(parameter.description, tags=tags)

    # ------------------------------------------------------------------
    # responses
    # ------------------------------------------------------------------

    def _responses(self, operation: Operation, ctx: MappingContext) -> list[str]:
        pad = indent(ctx.indent)
        if not operation.responses:
            return [f'{pad}responses: Record<string, never>;']

        entry_pad = indent(ctx.indent + 1)
        entry_ctx = ctx.at_indent(ctx.indent + 1)

        lines = [f'{pad}responses: {{']
        for status, node in operation.responses.items():
            response = self._resolve(node, Response, 'a response', ctx)
            if ctx.options.include_descriptions and response.description:
                lines.extend(
                    entry_pad + line for line in doc_comment(response.description)
                )
            if response.content:
                type_ = self._media_type(response.content, entry_ctx)
            else:
                type_ = NO_CONTENT
            lines.append(f'{entry_pad}{_status_key(status)}: {type_};')
        lines.append(f'{pad}}};')
        return lines

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _media_type(
        self, content: dict[str, MediaType] | None, ctx: MappingContext
    ) -> str:
        media_type = primary_media_type(content)
        if media_type is None or media_type.schema_ is None:
            return UNKNOWN
        return self.mapper.map_type(media_type.schema_, ctx)

    def _resolve(
        self, node: Any, expected: type, what: str, ctx: MappingContext
    ) -> Any:
        resolved = self.resolver.resolve_object(node, ctx.location)
        if not isinstance(resolved, expected):
            pointer = node.ref if isinstance(node, Reference) else '<inline>'
            raise UnsupportedReferenceError(
                pointer, f'Does not point to {what}', location=ctx.location
            )
        return resolved
