"""Reduction of allOf/oneOf/anyOf/not to TypeScript types.

- ``oneOf``/``anyOf`` become unions, in source order and without
  deduplication.
- ``allOf`` merges object branches into one object body (later property
  types win, ``required`` accumulates); any non-object branch turns the
  whole ``allOf`` into an intersection.
- ``not`` has no TypeScript equivalent and is approximated as ``unknown``.
- Object keywords next to a composition keyword act as one more ``allOf``
  branch, placed after the explicit ones.
"""

import logging
from typing import TYPE_CHECKING, Any

from tsopenapi.codegen.types import UNKNOWN, MappingContext, ObjectMember
from tsopenapi.codegen.utils import parenthesize
from tsopenapi.openapi.models import Reference, Schema

if TYPE_CHECKING:
    from tsopenapi.codegen.types import TypeMapper

logger = logging.getLogger(__name__)

__all__ = ['NEGATION_FALLBACK', 'CompositionReducer']

NEGATION_FALLBACK = f'{UNKNOWN} /* not: negated schemas are not expressible */'


class CompositionReducer:
    """Reduces composition keywords of a schema node to one type expression."""

    def __init__(self, mapper: 'TypeMapper'):
        self.mapper = mapper
        self.resolver = mapper.resolver

    def reduce(self, schema: Schema, ctx: MappingContext) -> str:
        """Reduce every composition keyword of ``schema`` and intersect the results."""
        implicit = self._implicit_branch(schema)
        parts: list[str] = []

        if schema.allOf is not None:
            parts.append(self.intersection(schema.allOf, ctx, implicit=implicit))
            implicit = None
        if schema.oneOf is not None:
            parts.append(self.union(schema.oneOf, ctx))
        if schema.anyOf is not None:
            parts.append(self.union(schema.anyOf, ctx))
        if schema.not_ is not None:
            parts.append(self.negation(ctx))
        if implicit is not None and self._has_members(implicit):
            parts.append(self.mapper.map_type(implicit, ctx))

        if not parts:
            return UNKNOWN
        return self._join_intersection(parts)

    def union(self, branches: list[Any], ctx: MappingContext) -> str:
        if not branches:
            return UNKNOWN
        return ' | '.join(self.mapper.map_type(branch, ctx) for branch in branches)

    def intersection(
        self,
        branches: list[Any],
        ctx: MappingContext,
        implicit: Schema | None = None,
    ) -> str:
        """Apply the allOf rule to ``branches`` (plus the implicit sibling branch)."""
        candidates = [*branches, *([implicit] if implicit is not None else [])]
        if not candidates:
            return UNKNOWN

        members = self._collect_objects(candidates, ctx)
        if members is not None:
            return self._merge(members, ctx)

        expressions = [self.mapper.map_type(branch, ctx) for branch in branches]
        if implicit is not None and self._has_members(implicit):
            expressions.append(self.mapper.map_type(implicit, ctx))
        if not expressions:
            return UNKNOWN
        return self._join_intersection(expressions)

    def negation(self, ctx: MappingContext) -> str:
        """Approximate a ``not`` schema, which no structural type can express."""
        logger.debug('Approximating "not" schema in %s as unknown', ctx.location)
        return NEGATION_FALLBACK

    # ------------------------------------------------------------------
    # allOf merging
    # ------------------------------------------------------------------

    def _collect_objects(
        self, branches: list[Any], ctx: MappingContext
    ) -> list[tuple[Schema, MappingContext]] | None:
        collected: list[tuple[Schema, MappingContext]] = []
        for branch in branches:
            parts = self._object_parts(branch, ctx)
            if parts is None:
                return None
            collected.extend(parts)
        return collected

    def _object_parts(
        self, branch: Any, ctx: MappingContext
    ) -> list[tuple[Schema, MappingContext]] | None:
        """Flatten a branch into plain object schemas, or None if it is not one.

        References are followed with their pointer pushed on the stack; a
        pointer already being expanded is not object-shaped here and ends up
        as a named reference in the intersection instead.
        """
        if isinstance(branch, Reference):
            pointer = self.resolver.canonical(branch.ref, ctx.location)
            if pointer in ctx.stack:
                return None
            target = self.resolver.resolve(pointer, ctx.location)
            return self._object_parts(target, ctx.push(pointer))

        if not isinstance(branch, Schema):
            return None

        if branch.has_composition:
            only_all_of = (
                branch.allOf is not None
                and branch.oneOf is None
                and branch.anyOf is None
                and branch.not_ is None
            )
            if not only_all_of or self.mapper.is_nullable(branch, ctx.options):
                return None
            nested = list(branch.allOf)
            implicit = self._implicit_branch(branch)
            if implicit is not None:
                nested.append(implicit)
            return self._collect_objects(nested, ctx)

        if self.mapper.is_plain_object(branch):
            return [(branch, ctx)]
        return None

    def _merge(
        self, parts: list[tuple[Schema, MappingContext]], ctx: MappingContext
    ) -> str:
        members: dict[str, ObjectMember] = {}
        required: set[str] = set()
        additional: Any = None
        additional_context = ctx

        for schema, part_ctx in parts:
            for name, node in (schema.properties or {}).items():
                # a later branch replaces the type but keeps the first position
                members[name] = ObjectMember(name, node, part_ctx)
            required.update(schema.required or [])
            if schema.additionalProperties is not None:
                additional = schema.additionalProperties
                additional_context = part_ctx

        return self.mapper.render_object(
            list(members.values()),
            required=required,
            additional=additional,
            additional_context=additional_context,
            ctx=ctx,
        )

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _implicit_branch(schema: Schema) -> Schema | None:
        """Object keywords next to composition keywords, as a schema of their own."""
        if (
            schema.properties is None
            and schema.additionalProperties is None
            and not schema.required
        ):
            return None
        fields: dict[str, Any] = {'type': 'object'}
        if schema.properties is not None:
            fields['properties'] = schema.properties
        if schema.required:
            fields['required'] = schema.required
        if schema.additionalProperties is not None:
            fields['additionalProperties'] = schema.additionalProperties
        return Schema.model_construct(**fields)

    @staticmethod
    def _has_members(schema: Schema) -> bool:
        return bool(schema.properties) or schema.additionalProperties is not None

    @staticmethod
    def _join_intersection(expressions: list[str]) -> str:
        if len(expressions) == 1:
            return expressions[0]
        return ' & '.join(parenthesize(expr, '|') for expr in expressions)
