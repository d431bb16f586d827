"""Entry point of the schema-to-TypeScript compiler.

The compiler is the pure function ``(document, options) -> text``. Loading
the document and writing the text are left to the caller (see
:class:`~tsopenapi.codegen.codegen.Codegen` for the file-based pipeline).
"""

import logging
from typing import Any

from pydantic import ValidationError

from tsopenapi.codegen.declarations import DeclarationEmitter
from tsopenapi.codegen.formatter import Formatter
from tsopenapi.codegen.paths import PathSurfaceEmitter
from tsopenapi.codegen.resolver import ReferenceResolver
from tsopenapi.codegen.schema import SchemaLoader
from tsopenapi.codegen.types import TypeMapper
from tsopenapi.config import GeneratorOptions
from tsopenapi.exceptions import ConfigurationError
from tsopenapi.openapi.models import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['TypeScriptGenerator', 'generate']


class TypeScriptGenerator:
    """Compiles one OpenAPI document into TypeScript declarations.

    The resolver is built once here and shared by the declaration and path
    emitters. Nothing is mutated after construction, so ``generate()`` can be
    called any number of times and always returns the same text.

    Example:
        >>> options = GeneratorOptions(alphabetize=True)
        >>> generator = TypeScriptGenerator(document, options)
        >>> text = generator.generate()
    """

    def __init__(
        self,
        document: OpenAPI | dict[str, Any],
        options: GeneratorOptions | dict[str, Any] | None = None,
        source: str = '<document>',
    ):
        """Initialize the generator.

        Args:
            document: A parsed document, as a model or a plain mapping.
            options: Emission options; a mapping may use camelCase keys.
            source: Name of the document, used in error messages.

        Raises:
            SchemaValidationError: If a mapping cannot be read as a document.
            ConfigurationError: If a mapping of options is invalid.
        """
        self.openapi = self._parse(document, source)
        if options is None:
            options = GeneratorOptions()
        elif isinstance(options, dict):
            try:
                options = GeneratorOptions.model_validate(options)
            except ValidationError as e:
                raise ConfigurationError(
                    f'Invalid generator options: {e.error_count()} error(s)'
                ) from e
        self.options = options

        self.resolver = ReferenceResolver(self.openapi)
        self.mapper = TypeMapper(self.resolver)
        self.declarations = DeclarationEmitter(self.mapper)
        self.paths = PathSurfaceEmitter(self.mapper)
        self.formatter = Formatter(self.options)

    @staticmethod
    def _parse(document: OpenAPI | dict[str, Any], source: str) -> OpenAPI:
        if isinstance(document, OpenAPI):
            return document
        return SchemaLoader.validate(document, source)

    def generate(self) -> str:
        """Return the generated TypeScript text.

        Raises:
            UnresolvedReferenceError: If a ``$ref`` names a missing component.
            UnsupportedReferenceError: If a ``$ref`` has an unsupported form.
        """
        paths = self.paths.emit(self.options)
        declarations = self.declarations.emit(self.options)
        logger.debug(
            'Generated %d declaration(s)%s',
            len(declarations),
            ' and the paths declaration' if paths is not None else '',
        )
        return self.formatter.format(paths, declarations)


def generate(
    document: OpenAPI | dict[str, Any],
    options: GeneratorOptions | dict[str, Any] | None = None,
) -> str:
    """Compile ``document`` into TypeScript declarations.

    Example:
        >>> print(generate({'openapi': '3.0.0', 'components': {'schemas': {
        ...     'Id': {'type': 'string'}}}}, {'header': False}))
        export type Id = string;
        <BLANKLINE>
    """
    return TypeScriptGenerator(document, options).generate()
