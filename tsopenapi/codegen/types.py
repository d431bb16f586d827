"""Schema to TypeScript type mapping.

This module provides the TypeMapper class, which turns one schema node (or
``$ref``) into a TypeScript type expression, and the MappingContext threaded
through every recursive call.

Mapping is pure: the only state a call depends on is the resolver (read-only)
and the context, which is immutable and copied on every change.
"""

import dataclasses
import logging
from typing import Any

from tsopenapi.codegen.resolver import ReferenceResolver
from tsopenapi.codegen.utils import (
    doc_comment,
    indent,
    literal,
    parenthesize,
    quote,
    split_top_level,
)
from tsopenapi.config import GeneratorOptions
from tsopenapi.exceptions import UnsupportedReferenceError
from tsopenapi.openapi.models import Parameter, Reference, Schema

logger = logging.getLogger(__name__)

__all__ = ['UNKNOWN', 'MappingContext', 'ObjectMember', 'TypeMapper']

UNKNOWN = 'unknown'

_PRIMITIVE_TYPE_MAP = {
    'string': 'string',
    'number': 'number',
    'integer': 'number',
    'boolean': 'boolean',
    'null': 'null',
}


@dataclasses.dataclass(frozen=True)
class MappingContext:
    """Read-only state of one mapping call.

    Attributes:
        options: The options of the generation run.
        stack: Canonical pointers currently being expanded, outermost first.
        indent: Nesting level of the object body being written.
        location: The declaration or operation being expanded, for errors.
    """

    options: GeneratorOptions
    stack: tuple[str, ...] = ()
    indent: int = 0
    location: str | None = None

    def push(self, pointer: str) -> 'MappingContext':
        return dataclasses.replace(self, stack=(*self.stack, pointer))

    def nested(self) -> 'MappingContext':
        return dataclasses.replace(self, indent=self.indent + 1)

    def at_indent(self, level: int) -> 'MappingContext':
        return dataclasses.replace(self, indent=level)


@dataclasses.dataclass(frozen=True)
class ObjectMember:
    """One property of an object body, with the context it is mapped in."""

    name: str
    node: Any
    context: MappingContext


class TypeMapper:
    """Maps schema nodes to TypeScript type expressions.

    Composition keywords are delegated to a
    :class:`~tsopenapi.codegen.composition.CompositionReducer`, which calls
    back into this mapper for each branch.

    Example:
        >>> mapper = TypeMapper(ReferenceResolver(openapi))
        >>> ctx = MappingContext(GeneratorOptions())
        >>> mapper.map_type(Schema(type='array', items=Schema(type='string')), ctx)
        'string[]'
    """

    def __init__(self, resolver: ReferenceResolver):
        from tsopenapi.codegen.composition import CompositionReducer

        self.resolver = resolver
        self.composition = CompositionReducer(self)

    def map_type(self, node: Schema | Reference | None, ctx: MappingContext) -> str:
        """Map a schema node or reference to a type expression."""
        if node is None:
            return UNKNOWN

        if isinstance(node, Reference):
            return self._map_reference(node, ctx)

        if node.has_composition:
            expression = self.composition.reduce(node, ctx)
        else:
            expression = self._map_schema(node, ctx)

        return self._with_nullable(expression, node, ctx)

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def _map_reference(self, reference: Reference, ctx: MappingContext) -> str:
        pointer = self.resolver.canonical(reference.ref, ctx.location)

        target = self.resolver.resolve(pointer, ctx.location)

        # every component schema is emitted as its own declaration
        if self.resolver.is_schema_pointer(pointer):
            return self.resolver.declaration_name(pointer)

        if pointer in ctx.stack:
            return UNKNOWN

        target = self.resolver.resolve_object(target, ctx.location)
        if isinstance(target, Parameter):
            return self.map_type(target.schema_, ctx.push(pointer))

        raise UnsupportedReferenceError(
            reference.ref,
            'Reference in schema position does not point to a schema',
            location=ctx.location,
        )

    # ------------------------------------------------------------------
    # Inline schemas
    # ------------------------------------------------------------------

    def _map_schema(self, schema: Schema, ctx: MappingContext) -> str:
        if schema.has_const:
            return literal(schema.const) or UNKNOWN

        if schema.enum is not None:
            return self._map_enum(schema.enum)

        types = [t for t in schema.types if t != 'null']
        if not types:
            if 'null' in schema.types:
                return 'null'
            inferred = self._infer_type(schema)
            if inferred is None:
                return UNKNOWN
            types = [inferred]

        return ' | '.join(self._map_typed(schema, type_, ctx) for type_ in types)

    @staticmethod
    def _infer_type(schema: Schema) -> str | None:
        if (
            schema.properties is not None
            or schema.additionalProperties is not None
            or schema.required
        ):
            return 'object'
        if schema.items is not None:
            return 'array'
        return None

    def _map_typed(self, schema: Schema, type_: str, ctx: MappingContext) -> str:
        if type_ == 'array':
            return self._map_array(schema, ctx)
        if type_ == 'object':
            return self._map_object(schema, ctx)
        return _PRIMITIVE_TYPE_MAP.get(type_, UNKNOWN)

    @staticmethod
    def _map_enum(values: list[Any]) -> str:
        literals = [literal(value) for value in values]
        if not literals or any(item is None for item in literals):
            return UNKNOWN
        return ' | '.join(literals)

    def _map_array(self, schema: Schema, ctx: MappingContext) -> str:
        item = self.map_type(schema.items, ctx) if schema.items is not None else UNKNOWN

        if (
            ctx.options.support_array_length
            and schema.minItems is not None
            and schema.minItems == schema.maxItems
        ):
            return '[' + ', '.join([item] * schema.minItems) + ']'

        return f'{parenthesize(item)}[]'

    def _map_object(self, schema: Schema, ctx: MappingContext) -> str:
        members = [
            ObjectMember(name, node, ctx)
            for name, node in (schema.properties or {}).items()
        ]
        return self.render_object(
            members,
            required=set(schema.required or []),
            additional=schema.additionalProperties,
            additional_context=ctx,
            ctx=ctx,
        )

    def _with_nullable(
        self, expression: str, schema: Schema, ctx: MappingContext
    ) -> str:
        if not self.is_nullable(schema, ctx.options):
            return expression
        if 'null' in split_top_level(expression, '|'):
            return expression
        return f'{expression} | null'

    @staticmethod
    def is_nullable(schema: Schema, options: GeneratorOptions) -> bool:
        if schema.nullable or 'null' in schema.types:
            return True
        # a null default implies nullability unless only explicit flags count
        return (
            not options.default_non_nullable
            and 'default' in schema.model_fields_set
            and schema.default is None
        )

    # ------------------------------------------------------------------
    # Object bodies
    # ------------------------------------------------------------------

    def render_object(
        self,
        members: list[ObjectMember],
        required: set[str],
        additional: Any,
        additional_context: MappingContext,
        ctx: MappingContext,
    ) -> str:
        """Render an object body, one member per line, at ``ctx.indent``.

        Each member is mapped in its own context (so pointers pushed while
        merging ``allOf`` branches stay on the stack) at the indentation of
        the body.
        """
        level = ctx.indent + 1
        pad = indent(level)
        readonly = 'readonly ' if ctx.options.immutable else ''

        lines: list[str] = []
        for member in members:
            member_ctx = member.context.at_indent(level)
            lines.extend(pad + line for line in self.describe(member.node, ctx.options))
            optional = '' if member.name in required else '?'
            type_ = self.map_type(member.node, member_ctx)
            lines.append(f'{pad}{readonly}{quote(member.name)}{optional}: {type_};')

        index_type = self.index_signature(
            additional, additional_context.at_indent(level)
        )
        if index_type is not None:
            lines.append(f'{pad}{readonly}[key: string]: {index_type};')

        if not lines:
            if additional is False:
                return 'Record<string, never>'
            return 'Record<string, unknown>'

        return '{\n' + '\n'.join(lines) + '\n' + indent(ctx.indent) + '}'

    def index_signature(self, additional: Any, ctx: MappingContext) -> str | None:
        """Type of the ``[key: string]`` signature, or None for no signature.

        Additional properties have no exact equivalent in a structural type;
        they are approximated by an index signature.
        """
        if additional is None:
            return UNKNOWN if ctx.options.additional_properties else None
        if additional is False:
            return None
        if additional is True:
            return UNKNOWN
        return self.map_type(additional, ctx)

    def is_plain_object(self, schema: Schema | Reference) -> bool:
        """Check whether a node is an object with only property constraints."""
        if isinstance(schema, Reference):
            return False
        if schema.has_composition or schema.enum is not None or schema.has_const:
            return False
        if schema.nullable or 'null' in schema.types:
            return False
        if schema.types:
            return schema.types == ['object']
        return self._infer_type(schema) == 'object'

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    @staticmethod
    def describe(node: Any, options: GeneratorOptions) -> list[str]:
        """Doc-comment lines for a schema node, according to the options."""
        if isinstance(node, Reference):
            if options.include_descriptions and node.description:
                return doc_comment(node.description)
            return []
        if not isinstance(node, Schema):
            return []

        description = node.description if options.include_descriptions else None
        tags = []
        if options.include_descriptions and node.deprecated:
            tags.append('@deprecated')
        has_example = options.include_examples and node.has_example
        return doc_comment(description, node.example, has_example, tags)
