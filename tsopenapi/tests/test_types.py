"""Tests for mapping schema nodes to TypeScript type expressions."""

import pytest

from tsopenapi.codegen.resolver import ReferenceResolver
from tsopenapi.codegen.types import MappingContext, TypeMapper
from tsopenapi.config import GeneratorOptions
from tsopenapi.exceptions import UnresolvedReferenceError, UnsupportedReferenceError
from tsopenapi.openapi.models import OpenAPI, Reference, Schema

from .fixtures import PETSTORE_SPEC, document_with_schemas


def make_mapper(document: dict | None = None) -> TypeMapper:
    openapi = OpenAPI.model_validate(document or document_with_schemas({}))
    return TypeMapper(ReferenceResolver(openapi))


def map_schema(raw: dict, mapper: TypeMapper | None = None, **options) -> str:
    mapper = mapper or make_mapper()
    ctx = MappingContext(GeneratorOptions(**options))
    return mapper.map_type(Schema.model_validate(raw), ctx)


class TestPrimitives:
    """Test primitive schema types."""

    @pytest.mark.parametrize(
        'raw, expected',
        [
            ({'type': 'string'}, 'string'),
            ({'type': 'number'}, 'number'),
            ({'type': 'integer', 'format': 'int64'}, 'number'),
            ({'type': 'boolean'}, 'boolean'),
            ({'type': 'string', 'format': 'binary'}, 'string'),
            ({'type': 'null'}, 'null'),
        ],
    )
    def test_primitive_mapping(self, raw, expected):
        assert map_schema(raw) == expected

    def test_unknown_type_falls_back(self):
        assert map_schema({'type': 'file'}) == 'unknown'

    def test_missing_type_falls_back(self):
        assert map_schema({}) == 'unknown'
        assert map_schema({'description': 'anything goes'}) == 'unknown'

    def test_none_node_is_unknown(self):
        ctx = MappingContext(GeneratorOptions())
        assert make_mapper().map_type(None, ctx) == 'unknown'


class TestLiterals:
    """Test enum and const schemas."""

    def test_string_enum(self):
        raw = {'type': 'string', 'enum': ['active', 'inactive']}
        assert map_schema(raw) == '"active" | "inactive"'

    def test_mixed_scalar_enum(self):
        assert map_schema({'enum': [1, 2.5, True, None]}) == '1 | 2.5 | true | null'

    def test_duplicate_enum_values_are_kept(self):
        assert map_schema({'enum': ['a', 'a']}) == '"a" | "a"'

    def test_enum_strings_are_escaped(self):
        assert map_schema({'enum': ['say "hi"']}) == '"say \\"hi\\""'

    def test_non_scalar_enum_falls_back(self):
        assert map_schema({'enum': [{'a': 1}]}) == 'unknown'

    def test_const(self):
        assert map_schema({'const': 'circle'}) == '"circle"'
        assert map_schema({'const': 3}) == '3'
        assert map_schema({'const': None}) == 'null'


class TestNullability:
    """Test the nullable flag, 3.1 type lists and null defaults."""

    def test_nullable_flag(self):
        assert map_schema({'type': 'string', 'nullable': True}) == 'string | null'

    def test_type_list_with_null(self):
        assert map_schema({'type': ['string', 'null']}) == 'string | null'

    def test_type_list_without_null(self):
        assert map_schema({'type': ['string', 'number']}) == 'string | number'

    def test_null_is_not_duplicated(self):
        raw = {'type': 'string', 'enum': ['a', None], 'nullable': True}
        assert map_schema(raw) == '"a" | null'

    def test_null_default_is_nullable_by_default(self):
        assert map_schema({'type': 'string', 'default': None}) == 'string | null'

    def test_null_default_ignored_with_default_non_nullable(self):
        raw = {'type': 'string', 'default': None}
        assert map_schema(raw, default_non_nullable=True) == 'string'

    def test_explicit_nullable_kept_with_default_non_nullable(self):
        raw = {'type': 'string', 'nullable': True}
        assert map_schema(raw, default_non_nullable=True) == 'string | null'

    def test_non_null_default_is_not_nullable(self):
        assert map_schema({'type': 'string', 'default': 'x'}) == 'string'


class TestArrays:
    """Test array schemas and tuples."""

    def test_simple_array(self):
        assert map_schema({'type': 'array', 'items': {'type': 'string'}}) == 'string[]'

    def test_nested_arrays(self):
        raw = {
            'type': 'array',
            'items': {'type': 'array', 'items': {'type': 'string'}},
        }
        assert map_schema(raw) == 'string[][]'

    def test_union_items_are_parenthesized(self):
        raw = {
            'type': 'array',
            'items': {'anyOf': [{'type': 'string'}, {'type': 'number'}]},
        }
        assert map_schema(raw) == '(string | number)[]'

    def test_nullable_items_are_parenthesized(self):
        raw = {'type': 'array', 'items': {'type': 'string', 'nullable': True}}
        assert map_schema(raw) == '(string | null)[]'

    def test_missing_items(self):
        assert map_schema({'type': 'array'}) == 'unknown[]'

    def test_items_infer_array(self):
        assert map_schema({'items': {'type': 'boolean'}}) == 'boolean[]'

    def test_fixed_length_tuple(self):
        raw = {
            'type': 'array',
            'items': {'type': 'number'},
            'minItems': 2,
            'maxItems': 2,
        }
        assert map_schema(raw, support_array_length=True) == '[number, number]'
        assert map_schema(raw) == 'number[]'

    def test_empty_tuple(self):
        raw = {'type': 'array', 'items': {'type': 'number'}, 'maxItems': 0, 'minItems': 0}
        assert map_schema(raw, support_array_length=True) == '[]'

    def test_unequal_bounds_stay_open(self):
        raw = {
            'type': 'array',
            'items': {'type': 'number'},
            'minItems': 1,
            'maxItems': 3,
        }
        assert map_schema(raw, support_array_length=True) == 'number[]'


class TestObjects:
    """Test object schemas."""

    USER = {
        'type': 'object',
        'properties': {'id': {'type': 'number'}, 'name': {'type': 'string'}},
        'required': ['id'],
    }

    def test_required_and_optional_properties(self):
        assert map_schema(self.USER) == '{\n  "id": number;\n  "name"?: string;\n}'

    def test_property_order_follows_document(self):
        raw = {
            'type': 'object',
            'properties': {'b': {'type': 'string'}, 'a': {'type': 'string'}},
        }
        result = map_schema(raw, alphabetize=True)
        assert result.index('"b"') < result.index('"a"')

    def test_immutable(self):
        result = map_schema(self.USER, immutable=True)
        assert '  readonly "id": number;' in result
        assert '  readonly "name"?: string;' in result

    def test_nested_object_indentation(self):
        raw = {
            'type': 'object',
            'properties': {
                'user': {'type': 'object', 'properties': {'name': {'type': 'string'}}}
            },
        }
        assert map_schema(raw) == (
            '{\n  "user"?: {\n    "name"?: string;\n  };\n}'
        )

    def test_property_names_are_quoted(self):
        raw = {'type': 'object', 'properties': {'content-type': {'type': 'string'}}}
        assert '"content-type"?: string;' in map_schema(raw)

    def test_additional_properties_true(self):
        raw = {'type': 'object', 'additionalProperties': True}
        assert map_schema(raw) == '{\n  [key: string]: unknown;\n}'

    def test_additional_properties_schema(self):
        raw = {
            'type': 'object',
            'properties': {'id': {'type': 'number'}},
            'additionalProperties': {'type': 'string'},
        }
        assert map_schema(raw) == (
            '{\n  "id"?: number;\n  [key: string]: string;\n}'
        )

    def test_additional_properties_option(self):
        result = map_schema(self.USER, additional_properties=True)
        assert result.endswith('  [key: string]: unknown;\n}')

    def test_additional_properties_option_respects_false(self):
        raw = {**self.USER, 'additionalProperties': False}
        result = map_schema(raw, additional_properties=True)
        assert '[key: string]' not in result

    def test_empty_object(self):
        assert map_schema({'type': 'object'}) == 'Record<string, unknown>'

    def test_closed_empty_object(self):
        raw = {'type': 'object', 'additionalProperties': False}
        assert map_schema(raw) == 'Record<string, never>'

    def test_properties_infer_object(self):
        raw = {'properties': {'id': {'type': 'number'}}}
        assert map_schema(raw) == '{\n  "id"?: number;\n}'

    def test_nullable_object(self):
        raw = {**self.USER, 'nullable': True}
        assert map_schema(raw).endswith('} | null')


class TestReferences:
    """Test $ref handling in schema positions."""

    @pytest.fixture
    def mapper(self):
        return make_mapper(PETSTORE_SPEC)

    def test_schema_reference_is_named(self, mapper):
        ctx = MappingContext(GeneratorOptions())
        node = Reference(ref='#/components/schemas/Pet')
        assert mapper.map_type(node, ctx) == 'Pet'

    def test_array_of_references(self, mapper):
        raw = {'type': 'array', 'items': {'$ref': '#/components/schemas/Pet'}}
        assert map_schema(raw, mapper) == 'Pet[]'

    def test_missing_reference_raises(self, mapper):
        ctx = MappingContext(GeneratorOptions(), location='#/components/schemas/X')
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            mapper.map_type(Reference(ref='#/components/schemas/Missing'), ctx)
        assert exc_info.value.location == '#/components/schemas/X'

    def test_response_reference_in_schema_position_raises(self, mapper):
        ctx = MappingContext(GeneratorOptions())
        with pytest.raises(UnsupportedReferenceError):
            mapper.map_type(Reference(ref='#/components/responses/NotFound'), ctx)

    def test_parameter_reference_maps_its_schema(self):
        document = document_with_schemas({})
        document['components']['parameters'] = {
            'Limit': {'name': 'limit', 'in': 'query', 'schema': {'type': 'integer'}}
        }
        ctx = MappingContext(GeneratorOptions())
        node = Reference(ref='#/components/parameters/Limit')
        assert make_mapper(document).map_type(node, ctx) == 'number'

    def test_sanitized_name_is_used(self):
        mapper = make_mapper(document_with_schemas({'pet-status': {'type': 'string'}}))
        ctx = MappingContext(GeneratorOptions())
        node = Reference(ref='#/components/schemas/pet-status')
        assert mapper.map_type(node, ctx) == 'PetStatus'


class TestDocumentation:
    """Test doc comments on properties."""

    RAW = {
        'type': 'object',
        'properties': {
            'id': {'type': 'number', 'description': 'The id', 'example': 5},
        },
    }

    def test_no_comments_by_default(self):
        assert '/**' not in map_schema(self.RAW)

    def test_description(self):
        result = map_schema(self.RAW, include_descriptions=True)
        assert result == '{\n  /** The id */\n  "id"?: number;\n}'

    def test_example(self):
        result = map_schema(self.RAW, include_examples=True)
        assert '  /** @example 5 */\n  "id"?: number;' in result

    def test_description_and_example(self):
        result = map_schema(self.RAW, include_descriptions=True, include_examples=True)
        assert '  /**\n   * The id\n   * @example 5\n   */\n  "id"?: number;' in result

    def test_deprecated(self):
        raw = {
            'type': 'object',
            'properties': {'old': {'type': 'string', 'deprecated': True}},
        }
        result = map_schema(raw, include_descriptions=True)
        assert '  /** @deprecated */\n  "old"?: string;' in result

    def test_comment_terminator_is_escaped(self):
        raw = {
            'type': 'object',
            'properties': {'x': {'type': 'string', 'description': 'a */ b'}},
        }
        result = map_schema(raw, include_descriptions=True)
        assert '/** a *\\/ b */' in result

    def test_quote_in_description_keeps_array_parentheses(self):
        raw = {
            'type': 'array',
            'items': {
                'type': 'object',
                'nullable': True,
                'properties': {
                    'size': {'type': 'string', 'description': 'Diagonal, e.g. 5"'},
                },
            },
        }
        result = map_schema(raw, include_descriptions=True)
        assert result == (
            '({\n  /** Diagonal, e.g. 5" */\n  "size"?: string;\n} | null)[]'
        )

    def test_quote_in_description_does_not_duplicate_null(self):
        raw = {
            'type': 'object',
            'nullable': True,
            'properties': {
                'size': {'type': 'string', 'description': '5" screen'},
                'label': {'type': 'string', 'nullable': True},
            },
        }
        result = map_schema(raw, include_descriptions=True)
        assert result.endswith('\n} | null')
        assert result.count('| null') == 2


class TestIsPlainObject:
    """Test the object-shape check used for declaration kinds and allOf."""

    @pytest.mark.parametrize(
        'raw, expected',
        [
            ({'type': 'object', 'properties': {'a': {'type': 'string'}}}, True),
            ({'properties': {'a': {'type': 'string'}}}, True),
            ({'type': 'object'}, True),
            ({'type': 'object', 'nullable': True}, False),
            ({'type': ['object', 'null']}, False),
            ({'type': 'string'}, False),
            ({'allOf': [{'type': 'object'}]}, False),
            ({'type': 'object', 'enum': [{}]}, False),
        ],
    )
    def test_is_plain_object(self, raw, expected):
        assert make_mapper().is_plain_object(Schema.model_validate(raw)) is expected

    def test_reference_is_not_plain(self):
        node = Reference(ref='#/components/schemas/Pet')
        assert make_mapper().is_plain_object(node) is False
