import logging

from tsopenapi.codegen.emitter import CodeEmitter, FileEmitter
from tsopenapi.codegen.generator import TypeScriptGenerator
from tsopenapi.codegen.schema import SchemaLoader
from tsopenapi.config import DocumentConfig
from tsopenapi.openapi.models import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['Codegen']


class Codegen:
    """Generates the TypeScript declarations file for one configured document.

    This class ties together the file-based pipeline:
    - Loading and validating the OpenAPI document
    - Compiling it to TypeScript with :class:`TypeScriptGenerator`
    - Writing the text through a :class:`CodeEmitter`

    Attributes:
        config: The DocumentConfig containing source, output and options.
        openapi: The loaded document (populated after _load_schema).

    Example:
        >>> from tsopenapi.config import DocumentConfig
        >>> from tsopenapi.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(
        ...     source="https://api.example.com/openapi.json",
        ...     output="./src/api-types.ts"
        ... )
        >>> codegen = Codegen(config)
        >>> codegen.generate()
        './src/api-types.ts'

    Note:
        The document is not loaded until generate() is called or
        _load_schema() is explicitly invoked.
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        emitter: CodeEmitter | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output file.
            schema_loader: Optional custom schema loader. If not provided,
                          a default SchemaLoader will be created.
            emitter: Optional output target. Defaults to a FileEmitter
                    writing to ``config.output``.
        """
        self.config = config
        self.openapi: OpenAPI | None = None
        self._schema_loader = schema_loader or SchemaLoader()
        self._emitter = emitter or FileEmitter(config.output)

    def _load_schema(self) -> OpenAPI:
        """Load and validate the document from the configured source.

        The loaded document is kept on ``self.openapi`` and returned.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the content is not an OpenAPI document.
        """
        self.openapi = self._schema_loader.load(self.config.source)
        return self.openapi

    def render(self) -> str:
        """Return the generated TypeScript text without writing it."""
        openapi = self.openapi
        if openapi is None:
            openapi = self._load_schema()

        generator = TypeScriptGenerator(
            openapi, self.config.options, source=self.config.source
        )
        return generator.generate()

    def generate(self) -> str:
        """Generate and emit the declarations file.

        Returns:
            What the emitter returned (the output path for files).

        Raises:
            SchemaError: If the document cannot be loaded or a ``$ref``
                cannot be resolved. Nothing is written in that case.
            OutputError: If the output cannot be written.
        """
        source = self.render()
        result = self._emitter.emit(source)
        logger.info('Generated %s from %s', self.config.output, self.config.source)
        return result
