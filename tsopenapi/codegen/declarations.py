"""Top-level declarations for component schemas."""

import dataclasses
import logging
from typing import Literal

from tsopenapi.codegen.types import MappingContext, TypeMapper
from tsopenapi.config import GeneratorOptions
from tsopenapi.openapi.models import Reference, Schema

logger = logging.getLogger(__name__)

__all__ = ['DeclarationEmitter', 'GeneratedDeclaration']


@dataclasses.dataclass(frozen=True)
class GeneratedDeclaration:
    """One named, exported type of the generated file.

    Attributes:
        name: The declared TypeScript name.
        kind: ``'interface'`` for plain object shapes, ``'type'`` otherwise.
        body: The type expression (for interfaces, the ``{ ... }`` body).
        doc: Doc-comment lines placed before the declaration.
    """

    name: str
    kind: Literal['interface', 'type']
    body: str
    doc: tuple[str, ...] = ()


class DeclarationEmitter:
    """Emits one declaration per component schema.

    Each declaration is expanded in a fresh context whose stack already holds
    the schema's own pointer, so a direct self-reference is written as the
    declaration name.
    """

    def __init__(self, mapper: TypeMapper):
        self.mapper = mapper
        self.resolver = mapper.resolver

    def emit(self, options: GeneratorOptions) -> list[GeneratedDeclaration]:
        """Return the schema declarations in source or alphabetical order."""
        declarations = [
            self.emit_one(pointer, name, node, options)
            for pointer, name, node in self.resolver.schema_declarations()
        ]

        if options.alphabetize:
            declarations.sort(key=lambda declaration: declaration.name)

        return declarations

    def emit_one(
        self,
        pointer: str,
        name: str,
        node: Schema | Reference,
        options: GeneratorOptions,
    ) -> GeneratedDeclaration:
        ctx = MappingContext(options, stack=(pointer,), location=pointer)
        body = self.mapper.map_type(node, ctx)

        if (
            not options.export_type
            and self.mapper.is_plain_object(node)
            and body.startswith('{')
        ):
            kind = 'interface'
        else:
            kind = 'type'

        doc = self.mapper.describe(node, options) if isinstance(node, Schema) else []
        logger.debug('Emitted %s %s', kind, name)
        return GeneratedDeclaration(name=name, kind=kind, body=body, doc=tuple(doc))
