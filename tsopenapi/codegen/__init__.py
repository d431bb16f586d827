"""Code generation module for ts-open-api.

This module provides the compiler that turns an OpenAPI document into
TypeScript declarations, and the pipeline around it.

Main Components:
    - TypeScriptGenerator / generate: The pure document-to-text compiler
    - ReferenceResolver: Resolves local $ref pointers and declaration names
    - TypeMapper: Maps schema nodes to TypeScript type expressions
    - SchemaLoader: Loads OpenAPI documents from URLs or files
    - Codegen: Loads, compiles and writes one configured document
    - CodeEmitter: Handles output of generated code

Example:
    >>> from tsopenapi.codegen import Codegen
    >>> from tsopenapi.config import DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="./openapi.json",
    ...     output="./src/api-types.ts"
    ... )
    >>> codegen = Codegen(config)
    >>> codegen.generate()
"""

from tsopenapi.codegen.codegen import Codegen
from tsopenapi.codegen.composition import CompositionReducer
from tsopenapi.codegen.declarations import DeclarationEmitter, GeneratedDeclaration
from tsopenapi.codegen.emitter import CodeEmitter, FileEmitter, StringEmitter
from tsopenapi.codegen.formatter import HEADER, Formatter
from tsopenapi.codegen.generator import TypeScriptGenerator, generate
from tsopenapi.codegen.paths import PathSurfaceEmitter
from tsopenapi.codegen.resolver import ReferenceResolver
from tsopenapi.codegen.schema import SchemaLoader
from tsopenapi.codegen.types import MappingContext, TypeMapper

__all__ = [
    # Core
    'TypeScriptGenerator',
    'generate',
    'ReferenceResolver',
    'TypeMapper',
    'MappingContext',
    'CompositionReducer',
    'DeclarationEmitter',
    'GeneratedDeclaration',
    'PathSurfaceEmitter',
    'Formatter',
    'HEADER',
    # Pipeline
    'Codegen',
    'SchemaLoader',
    'CodeEmitter',
    'FileEmitter',
    'StringEmitter',
]
