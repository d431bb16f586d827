"""Assembly of the generated TypeScript file."""

from tsopenapi.codegen.declarations import GeneratedDeclaration
from tsopenapi.config import GeneratorOptions

__all__ = ['HEADER', 'Formatter']

HEADER = '\n'.join(
    [
        '/**',
        ' * This file was auto-generated by ts-open-api.',
        ' * DO NOT MAKE DIRECT CHANGES TO THE FILE.',
        ' */',
    ]
)


class Formatter:
    """Joins the header and declarations into the final text.

    Blocks are separated by one blank line and the text ends with a newline.
    Indentation inside declarations is produced by the emitters (two spaces
    per level).
    """

    def __init__(self, options: GeneratorOptions):
        self.options = options

    @staticmethod
    def render(declaration: GeneratedDeclaration) -> str:
        if declaration.kind == 'interface':
            statement = f'export interface {declaration.name} {declaration.body}'
        else:
            statement = f'export type {declaration.name} = {declaration.body};'
        return '\n'.join([*declaration.doc, statement])

    def format(
        self,
        paths: GeneratedDeclaration | None,
        declarations: list[GeneratedDeclaration],
    ) -> str:
        blocks: list[str] = []
        if self.options.header:
            blocks.append(HEADER)
        if paths is not None:
            blocks.append(self.render(paths))
        blocks.extend(self.render(declaration) for declaration in declarations)

        if not blocks:
            return ''
        return '\n\n'.join(blocks) + '\n'
