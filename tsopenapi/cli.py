import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tsopenapi.codegen.codegen import Codegen
from tsopenapi.codegen.emitter import StringEmitter
from tsopenapi.config import DocumentConfig, GeneratorOptions, get_config
from tsopenapi.exceptions import TsOpenAPIError

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name='open-api',
    help='Generate TypeScript declarations from OpenAPI documents',
    no_args_is_help=True,
)


def _configure_logging(verbose: bool, silent: bool) -> None:
    if silent:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    source: Annotated[
        str | None,
        typer.Argument(
            metavar='INPUT',
            help='Path or URL of the OpenAPI document. '
            'Without it, the configured documents are generated.',
        ),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(
            '--output', '-o', help='Output file. Prints to stdout if omitted.'
        ),
    ] = None,
    alphabetize: Annotated[
        bool, typer.Option('--alphabetize', help='Sort declarations by name.')
    ] = False,
    immutable: Annotated[
        bool, typer.Option('--immutable', help='Emit readonly properties.')
    ] = False,
    export_type: Annotated[
        bool,
        typer.Option('--export-type', help='Use `export type` for every declaration.'),
    ] = False,
    default_non_nullable: Annotated[
        bool,
        typer.Option(
            '--default-non-nullable',
            help='Only explicit nullable flags make a schema nullable.',
        ),
    ] = False,
    additional_properties: Annotated[
        bool,
        typer.Option(
            '--additional-properties',
            help='Allow arbitrary keys on objects unless they forbid them.',
        ),
    ] = False,
    path_params_as_types: Annotated[
        bool,
        typer.Option(
            '--path-params-as-types',
            help='Type string path parameters as template literals.',
        ),
    ] = False,
    support_array_length: Annotated[
        bool,
        typer.Option(
            '--support-array-length',
            help='Emit tuples for arrays with a fixed length.',
        ),
    ] = False,
    header: Annotated[
        bool,
        typer.Option('--header/--no-header', help='Emit the generated-file banner.'),
    ] = True,
    include_descriptions: Annotated[
        bool,
        typer.Option(
            '--include-descriptions', help='Emit descriptions as doc comments.'
        ),
    ] = False,
    include_examples: Annotated[
        bool,
        typer.Option('--include-examples', help='Emit examples as doc comments.'),
    ] = False,
    silent: Annotated[
        bool, typer.Option('--silent', help='Only print errors.')
    ] = False,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Generate TypeScript declarations from a document or from configuration.

    If no INPUT is given, will look for default config files in the current
    directory or the [tool.open-api] table of pyproject.toml.

    Examples:
        open-api generate ./openapi.yaml -o ./src/api-types.ts
        open-api generate https://api.example.com/openapi.json --alphabetize
        open-api generate
        open-api generate --config my-config.yaml
    """
    try:
        if source is not None:
            _configure_logging(verbose=False, silent=silent)
            options = GeneratorOptions(
                alphabetize=alphabetize,
                immutable=immutable,
                export_type=export_type,
                default_non_nullable=default_non_nullable,
                additional_properties=additional_properties,
                path_params_as_types=path_params_as_types,
                support_array_length=support_array_length,
                header=header,
                include_descriptions=include_descriptions,
                include_examples=include_examples,
            )
            if output is None:
                emitter = StringEmitter()
                Codegen(
                    DocumentConfig(source=source, options=options), emitter=emitter
                ).generate()
                typer.echo(emitter.output, nl=False)
                return
            documents = [DocumentConfig(source=source, output=output, options=options)]
        else:
            codegen_config = get_config(config)
            _configure_logging(verbose=codegen_config.verbose, silent=silent)
            documents = codegen_config.documents

        for document_config in documents:
            path = Codegen(document_config).generate()
            if not silent:
                console.print(
                    f'[green]Generated[/green] {path} '
                    f'[dim]from {document_config.source}[/dim]'
                )

    except TsOpenAPIError as e:
        err_console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of ts-open-api."""
    from tsopenapi import __version__

    console.print(f'ts-open-api version: {__version__}')


if __name__ == '__main__':
    app()
