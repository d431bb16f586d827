"""ts-open-api - Generate TypeScript declarations from OpenAPI documents.

ts-open-api compiles an OpenAPI 3.x document into a single TypeScript file:
one exported declaration per component schema, plus a ``paths`` interface
describing the parameters, request bodies and responses of every operation.

Quick Start:
    >>> from tsopenapi import generate
    >>>
    >>> text = generate(document, {'alphabetize': True})

    >>> from tsopenapi import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="https://api.example.com/openapi.json",
    ...     output="./src/api-types.ts"
    ... )
    >>> Codegen(config).generate()

CLI Usage:
    $ open-api generate ./api.yaml --output ./src/api-types.ts
    $ open-api generate  # Generate the documents listed in open-api.yaml
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

from tsopenapi.codegen.codegen import Codegen
from tsopenapi.codegen.generator import TypeScriptGenerator, generate
from tsopenapi.codegen.schema import SchemaLoader
from tsopenapi.config import CodegenConfig, DocumentConfig, GeneratorOptions, get_config
from tsopenapi.exceptions import (
    ConfigurationError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
    TsOpenAPIError,
    UnresolvedReferenceError,
    UnsupportedReferenceError,
)

__all__ = [
    # Main entry points
    'generate',
    'TypeScriptGenerator',
    'Codegen',
    'SchemaLoader',
    # Configuration
    'GeneratorOptions',
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'TsOpenAPIError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'SchemaReferenceError',
    'UnresolvedReferenceError',
    'UnsupportedReferenceError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = _distribution_version('ts-open-api')
except PackageNotFoundError:
    __version__ = 'unknown'
