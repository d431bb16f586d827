"""Loading of OpenAPI documents.

This module provides SchemaLoader, which reads an OpenAPI document from a
URL or a local file (JSON or YAML) and validates it into the lenient
:class:`~tsopenapi.openapi.models.OpenAPI` model.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from tsopenapi.codegen.utils import is_url
from tsopenapi.exceptions import SchemaLoadError, SchemaValidationError
from tsopenapi.openapi.models import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['SchemaLoader']

YAML_SUFFIXES = ('.yaml', '.yml')


class SchemaLoader:
    """Loads OpenAPI documents from URLs or file paths.

    Both JSON and YAML are supported. The format is chosen from the file
    suffix, or for URLs from the response content type.

    Example:
        >>> loader = SchemaLoader()
        >>> openapi = loader.load('https://api.example.com/openapi.json')
        >>> # or
        >>> openapi = loader.load('/path/to/openapi.yaml')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, ``httpx.get`` is used.
            base_path: Base path for relative file paths.
                      Defaults to current working directory.
        """
        self._http_client = http_client
        self._base_path = Path(base_path) if base_path else Path.cwd()

    def load(self, source: str) -> OpenAPI:
        """Load and validate an OpenAPI document from a URL or file path.

        Args:
            source: URL or file path to the document.

        Returns:
            The validated document.

        Raises:
            SchemaLoadError: If the document cannot be read or parsed.
            SchemaValidationError: If the content is not an OpenAPI document.
        """
        try:
            if is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)
        except (SchemaLoadError, SchemaValidationError):
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e) from e

        logger.debug('Loaded document from %s', source)
        return self.validate(content, source)

    @staticmethod
    def validate(content: Any, source: str) -> OpenAPI:
        """Validate parsed content as an OpenAPI document."""
        if not isinstance(content, dict):
            raise SchemaValidationError(
                source, errors=['Document root must be a mapping']
            )
        try:
            return OpenAPI.model_validate(content)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise SchemaValidationError(source, errors=errors) from e

    def _load_from_url(self, url: str) -> Any:
        """Load document content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(YAML_SUFFIXES):
                return yaml.safe_load(content)
            else:
                return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e) from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e) from e

    def _load_from_file(self, file_path: str) -> Any:
        """Load document content from a file."""
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(content)
            else:
                return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e) from e
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e) from e
