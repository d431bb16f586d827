"""Reference resolution for OpenAPI documents.

This module provides the ReferenceResolver class, which indexes the
``components`` section of a document once and then answers ``$ref`` lookups
in constant time. It also owns the table of declaration names given to
component schemas, so every part of a generation run agrees on them.
"""

import logging
from typing import Any
from urllib.parse import unquote

from tsopenapi.codegen.utils import sanitize_identifier
from tsopenapi.exceptions import UnresolvedReferenceError, UnsupportedReferenceError
from tsopenapi.openapi.models import OpenAPI, Reference

logger = logging.getLogger(__name__)

__all__ = ['PATHS_DECLARATION', 'SUPPORTED_SECTIONS', 'ReferenceResolver']

SUPPORTED_SECTIONS = ('schemas', 'responses', 'parameters', 'requestBodies')

PATHS_DECLARATION = 'paths'

_POINTER_PREFIX = '#/components/'


def _decode_segment(segment: str) -> str:
    return unquote(segment).replace('~1', '/').replace('~0', '~')


def _encode_segment(segment: str) -> str:
    return segment.replace('~', '~0').replace('/', '~1')


class ReferenceResolver:
    """Resolves ``$ref`` pointers against the components of one document.

    The resolver is read-only after construction: it never copies or mutates
    the nodes it returns, so a single instance can be shared by every mapping
    call of a run.

    Example:
        >>> resolver = ReferenceResolver(openapi)
        >>> node = resolver.resolve('#/components/schemas/Pet')
        >>> resolver.declaration_name('#/components/schemas/Pet')
        'Pet'
    """

    def __init__(self, openapi: OpenAPI):
        """Build the pointer index and the declaration-name table.

        Args:
            openapi: The document to resolve references against.
        """
        self.openapi = openapi
        self._index: dict[str, Any] = {}
        self._names: dict[str, str] = {}

        components = openapi.components
        if components is not None:
            for section in SUPPORTED_SECTIONS:
                for name, node in (getattr(components, section) or {}).items():
                    self._index[self.pointer(section, name)] = node

        self._assign_declaration_names()
        logger.debug(
            'Indexed %d component(s), %d schema declaration(s)',
            len(self._index),
            len(self._names),
        )

    @staticmethod
    def pointer(section: str, name: str) -> str:
        """Build the pointer of a component."""
        return f'{_POINTER_PREFIX}{section}/{_encode_segment(name)}'

    def _assign_declaration_names(self) -> None:
        taken: set[str] = set()
        if self.openapi.paths:
            taken.add(PATHS_DECLARATION)

        for name in self.schemas:
            candidate = sanitize_identifier(name)
            if candidate in taken:
                counter = 1
                while f'{candidate}{counter}' in taken:
                    counter += 1
                candidate = f'{candidate}{counter}'
            taken.add(candidate)
            self._names[self.pointer('schemas', name)] = candidate

    @property
    def schemas(self) -> dict[str, Any]:
        """Component schemas in document order."""
        components = self.openapi.components
        if components is None or not components.schemas:
            return {}
        return components.schemas

    def parse(self, pointer: str, location: str | None = None) -> tuple[str, str]:
        """Split a pointer into its component section and name.

        Raises:
            UnsupportedReferenceError: If the pointer is not of the form
                ``#/components/{section}/{name}`` with a supported section.
        """
        if not pointer.startswith(_POINTER_PREFIX):
            if pointer.startswith(('http://', 'https://')):
                reason = 'External URL references are not supported'
            elif not pointer.startswith('#'):
                reason = 'References to other files are not supported'
            else:
                reason = 'Only #/components/... references are supported'
            raise UnsupportedReferenceError(pointer, reason, location=location)

        parts = pointer[len(_POINTER_PREFIX) :].split('/')
        if len(parts) != 2 or not parts[1]:
            raise UnsupportedReferenceError(
                pointer,
                'Expected #/components/{section}/{name}',
                location=location,
            )

        section, name = parts
        if section not in SUPPORTED_SECTIONS:
            raise UnsupportedReferenceError(
                pointer,
                f"Unsupported component section '{section}'",
                location=location,
            )
        return section, _decode_segment(name)

    def canonical(self, pointer: str, location: str | None = None) -> str:
        """Normalise a pointer so equal targets compare equal."""
        section, name = self.parse(pointer, location)
        return self.pointer(section, name)

    def resolve(self, pointer: str, location: str | None = None) -> Any:
        """Return the node a pointer names.

        The returned node may itself be a :class:`Reference` when a component
        is an alias of another one; see :meth:`resolve_object`.

        Raises:
            UnsupportedReferenceError: If the pointer form is not supported.
            UnresolvedReferenceError: If no component has that name.
        """
        section, name = self.parse(pointer, location)
        node = self._index.get(self.pointer(section, name))
        if node is None:
            available = sorted(getattr(self.openapi.components, section, None) or {})
            reason = f"'{name}' not found in components.{section}"
            if available:
                shown = ', '.join(available[:10])
                if len(available) > 10:
                    shown += f', ... ({len(available)} total)'
                reason += f'. Available: {shown}'
            raise UnresolvedReferenceError(pointer, reason, location=location)
        return node

    def resolve_object(self, node: Any, location: str | None = None) -> Any:
        """Follow references until a concrete (non-reference) node is reached.

        Used for parameters, request bodies and responses, which are always
        inlined. Schemas are not resolved this way; they are named.

        Raises:
            UnresolvedReferenceError: If a chain of aliases loops.
        """
        seen: list[str] = []
        while isinstance(node, Reference):
            if node.ref in seen:
                raise UnresolvedReferenceError(
                    node.ref,
                    'Circular alias: ' + ' -> '.join([*seen, node.ref]),
                    location=location,
                )
            seen.append(node.ref)
            node = self.resolve(node.ref, location)
        return node

    def is_schema_pointer(self, pointer: str) -> bool:
        return pointer in self._names

    def declaration_name(self, pointer: str) -> str:
        """Return the declaration name of a component schema pointer."""
        return self._names[pointer]

    def schema_declarations(self) -> list[tuple[str, str, Any]]:
        """Return ``(pointer, declaration name, node)`` for every schema, in order."""
        result = []
        for name, node in self.schemas.items():
            pointer = self.pointer('schemas', name)
            result.append((pointer, self._names[pointer], node))
        return result
