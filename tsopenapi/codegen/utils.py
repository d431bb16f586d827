import json
import re
import unicodedata
from typing import Any
from urllib.parse import urlparse

__all__ = (
    'doc_comment',
    'indent',
    'is_identifier',
    'is_url',
    'literal',
    'needs_parentheses',
    'parenthesize',
    'quote',
    'split_top_level',
    'sanitize_identifier',
)

INDENT = '  '

_IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Names that cannot be used for a type declaration.
TS_RESERVED_TYPE_NAMES = frozenset(
    {
        'any',
        'bigint',
        'boolean',
        'never',
        'null',
        'number',
        'object',
        'string',
        'symbol',
        'undefined',
        'unknown',
        'void',
    }
)


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def is_url(text):
    try:
        result = urlparse(text)
        return result.scheme in ('http', 'https') and bool(result.netloc)
    except ValueError:
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def sanitize_identifier(name: str) -> str:
    """Convert a component name into a valid TypeScript type name.

    - Names that already are identifiers are kept verbatim
    - Otherwise split on invalid characters and join as PascalCase
    - Ensure it doesn't start with a digit
    - Avoid the primitive type keywords
    """
    if not name:
        return 'UnnamedType'

    if is_identifier(name):
        sanitized = name
    else:
        parts = re.sub(r'[^A-Za-z0-9_$]+', ' ', remove_accents(name)).split()
        sanitized = ''.join(capitalize(part) for part in parts)

        if sanitized and sanitized[0].isdigit():
            sanitized = '_' + sanitized

    if sanitized in TS_RESERVED_TYPE_NAMES:
        sanitized += '_'

    return sanitized or 'UnnamedType'


def quote(value: str) -> str:
    """Return ``value`` as a double-quoted TypeScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def literal(value: Any) -> str | None:
    """Render a JSON scalar as a TypeScript literal type.

    Returns None for values that have no literal type (objects, arrays).
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return quote(value)
    return None


def indent(level: int) -> str:
    return INDENT * level


def split_top_level(expression: str, operator: str) -> list[str]:
    """Split a type expression on ``operator`` outside brackets and strings.

    ``/* ... */`` comments are skipped, so quotes or operators inside doc
    comments never affect the result.

    >>> split_top_level('"a|b" | { x: A | B }', '|')
    ['"a|b"', '{ x: A | B }']
    """
    members = []
    depth = 0
    start = 0
    in_string = False
    comment_start = -1
    escaped = False
    for i, char in enumerate(expression):
        if comment_start >= 0:
            if char == '/' and i > comment_start + 2 and expression[i - 1] == '*':
                comment_start = -1
            continue
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == '/' and expression.startswith('/*', i):
            comment_start = i
        elif char in '{[(<':
            depth += 1
        elif char in '}])>':
            depth -= 1
        elif char == operator and depth == 0:
            members.append(expression[start:i].strip())
            start = i + 1
    members.append(expression[start:].strip())
    return members


def needs_parentheses(expression: str, operators: str = '|&') -> bool:
    """Check whether a type has a union or intersection at its top level.

    Such types must be wrapped before ``[]`` is appended, and unions must be
    wrapped before they are joined into an intersection.
    """
    return any(len(split_top_level(expression, op)) > 1 for op in operators)


def parenthesize(expression: str, operators: str = '|&') -> str:
    if needs_parentheses(expression, operators):
        return f'({expression})'
    return expression


def _comment_text(value: Any) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    return text.replace('*/', '*\\/')


def doc_comment(
    description: str | None = None,
    example: Any = None,
    has_example: bool = False,
    tags: list[str] | None = None,
) -> list[str]:
    """Build the lines of a ``/** ... */`` comment (without indentation).

    Returns an empty list when there is nothing to document.
    """
    lines: list[str] = []
    if description:
        lines.extend(_comment_text(description).strip().splitlines())
    for tag in tags or []:
        lines.append(_comment_text(tag))
    if has_example:
        rendered = json.dumps(example, ensure_ascii=False, default=str)
        lines.append(f'@example {_comment_text(rendered)}')

    if not lines:
        return []
    if len(lines) == 1:
        return [f'/** {lines[0]} */']
    return ['/**', *[f' * {line}'.rstrip() for line in lines], ' */']
