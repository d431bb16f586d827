import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from tsopenapi.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['open-api.yaml', 'open-api.yml', 'open-api.json']
PYPROJECT_TOOL_KEY = 'open-api'


class GeneratorOptions(BaseModel):
    """Options controlling how TypeScript declarations are emitted.

    The model is frozen and passed by reference through every component of a
    generation run. Fields accept both snake_case and camelCase names
    (``export_type`` or ``exportType``).
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    alphabetize: bool = Field(
        False, description='Sort top-level declarations by name.'
    )
    immutable: bool = Field(False, description='Emit readonly properties.')
    export_type: bool = Field(
        False, description='Use `export type` instead of `export interface`.'
    )
    default_non_nullable: bool = Field(
        False,
        description='Only explicit nullable flags make a schema nullable.',
    )
    additional_properties: bool = Field(
        False,
        description='Give objects an index signature unless they forbid extra keys.',
    )
    path_params_as_types: bool = Field(
        False, description='Type string path parameters as template literals.'
    )
    support_array_length: bool = Field(
        False, description='Emit fixed-length tuples for fixed-size arrays.'
    )
    header: bool = Field(True, description='Emit the generated-file banner.')
    include_descriptions: bool = Field(
        False, description='Emit descriptions as doc comments.'
    )
    include_examples: bool = Field(
        False, description='Emit examples as doc comments.'
    )


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(
        './api-types.ts', description='Path of the generated TypeScript file.'
    )

    options: GeneratorOptions = Field(
        default_factory=GeneratorOptions,
        description='Emission options for this document.',
    )


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='OPEN_API_')

    documents: list[DocumentConfig] = Field(
        ..., description='List of OpenAPI documents to process.'
    )

    verbose: bool = Field(True, description='Log progress at debug level.')


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text(encoding='utf-8'))


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text(encoding='utf-8'))


def _load_file(path: Path) -> dict:
    import yaml

    try:
        if path.suffix.lower() == '.json':
            data = load_json(path)
        else:
            data = load_yaml(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f'Could not read configuration: {e}', config_path=str(path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            'Configuration must be a mapping', config_path=str(path)
        )
    return data


def _validate(data: dict, config_path: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f'Invalid configuration: {e.error_count()} error(s)',
            config_path=config_path,
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or from pyproject.toml.

    Lookup order: the explicit ``path``, then ``open-api.yaml``,
    ``open-api.yml`` and ``open-api.json`` in the working directory, then the
    ``[tool.open-api]`` table of ``pyproject.toml``.

    Raises:
        ConfigurationError: If no configuration is found or it is invalid.
    """
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _validate(_load_file(config_path), str(config_path))

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        config_path = Path(cwd) / filename
        if config_path.exists():
            return _validate(_load_file(config_path), str(config_path))

    config_path = Path(cwd) / 'pyproject.toml'

    if config_path.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(config_path.read_text(encoding='utf-8'))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f'Could not read configuration: {e}', config_path=str(config_path)
            ) from e
        tools = pyproject.get('tool', {})

        if PYPROJECT_TOOL_KEY in tools:
            return _validate(tools[PYPROJECT_TOOL_KEY], str(config_path))

    raise ConfigurationError('No configuration found')
