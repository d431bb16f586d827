"""Output targets for generated TypeScript.

This module provides the CodeEmitter interface and concrete implementations
for writing generated declarations to disk or keeping them in memory.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from upath import UPath

from tsopenapi.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = ['CodeEmitter', 'FileEmitter', 'StringEmitter']


class CodeEmitter(ABC):
    """Abstract base class for code emitters.

    A CodeEmitter takes the generated text of one document and outputs it
    somewhere (a file, memory, ...).
    """

    @abstractmethod
    def emit(self, source: str) -> str:
        """Emit the generated text.

        Args:
            source: The complete generated TypeScript text.

        Returns:
            Where the text went (a path), or the text itself, depending on
            the implementation.
        """
        pass


class FileEmitter(CodeEmitter):
    """Writes generated TypeScript to a single file.

    The output may be a local path or any location understood by
    ``universal-pathlib`` (``s3://``, ``memory://``, ...). Missing parent
    directories are created.
    """

    def __init__(self, output: str | Path | UPath):
        self.output = UPath(output)
        self._written_files: list[str] = []

    def emit(self, source: str) -> str:
        """Write ``source`` to the output file and return its path.

        Raises:
            OutputError: If the file cannot be written.
        """
        try:
            self.output.parent.mkdir(parents=True, exist_ok=True)
            self.output.write_text(source, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(self.output), cause=e) from e

        logger.debug('Wrote %d characters to %s', len(source), self.output)
        self._written_files.append(str(self.output))
        return str(self.output)

    def get_written_files(self) -> list[str]:
        """Get list of all files written by this emitter."""
        return self._written_files.copy()


class StringEmitter(CodeEmitter):
    """Keeps generated TypeScript in memory.

    This emitter is useful for testing or when you need to manipulate
    the generated code before writing it.
    """

    def __init__(self):
        self._outputs: list[str] = []

    def emit(self, source: str) -> str:
        self._outputs.append(source)
        return source

    @property
    def output(self) -> str | None:
        """The most recently emitted text, or None if nothing was emitted."""
        return self._outputs[-1] if self._outputs else None

    def get_all_outputs(self) -> list[str]:
        return self._outputs.copy()
