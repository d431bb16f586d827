"""Test fixtures for ts-open-api tests.

This module provides sample OpenAPI documents and helpers for testing the
TypeScript generation.
"""

import copy

# Minimal OpenAPI 3.0 document for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Simple API with one endpoint
SIMPLE_API_SPEC = {
    'openapi': '3.0.0',
    'info': {
        'title': 'Simple API',
        'version': '1.0.0',
        'description': 'A simple API for testing',
    },
    'servers': [{'url': 'https://api.example.com/v1'}],
    'paths': {
        '/health': {
            'get': {
                'operationId': 'getHealth',
                'summary': 'Health check endpoint',
                'responses': {
                    '200': {
                        'description': 'Successful response',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {'status': {'type': 'string'}},
                                }
                            }
                        },
                    }
                },
            }
        }
    },
}

# Petstore-like API with models and multiple endpoints
PETSTORE_SPEC = {
    'openapi': '3.0.0',
    'info': {
        'title': 'Petstore API',
        'version': '1.0.0',
        'description': 'A sample Petstore API for testing',
    },
    'servers': [{'url': 'https://petstore.example.com/api/v1'}],
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'parameters': [
                    {
                        'name': 'limit',
                        'in': 'query',
                        'description': 'Maximum number of pets to return',
                        'required': False,
                        'schema': {'type': 'integer', 'format': 'int32'},
                    },
                    {
                        'name': 'status',
                        'in': 'query',
                        'description': 'Filter by status',
                        'required': False,
                        'schema': {
                            'type': 'string',
                            'enum': ['available', 'pending', 'sold'],
                        },
                    },
                ],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {'$ref': '#/components/schemas/Pet'},
                                }
                            }
                        },
                    },
                    'default': {
                        'description': 'Unexpected error',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            },
            'post': {
                'operationId': 'createPet',
                'summary': 'Create a pet',
                'requestBody': {
                    'required': True,
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/NewPet'}
                        }
                    },
                },
                'responses': {
                    '201': {
                        'description': 'Pet created',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                },
            },
        },
        '/pets/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'description': 'The id of the pet',
                    'schema': {'type': 'string'},
                }
            ],
            'get': {
                'operationId': 'getPet',
                'responses': {
                    '200': {
                        'description': 'The pet',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    '404': {'$ref': '#/components/responses/NotFound'},
                },
            },
            'delete': {
                'operationId': 'deletePet',
                'responses': {'204': {'description': 'Pet deleted'}},
            },
        },
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'required': ['id', 'name'],
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                    'status': {'$ref': '#/components/schemas/PetStatus'},
                },
            },
            'NewPet': {
                'type': 'object',
                'required': ['name'],
                'properties': {
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
            },
            'PetStatus': {
                'type': 'string',
                'enum': ['available', 'pending', 'sold'],
            },
            'Error': {
                'type': 'object',
                'required': ['code', 'message'],
                'properties': {
                    'code': {'type': 'integer', 'format': 'int32'},
                    'message': {'type': 'string'},
                },
            },
        },
        'responses': {
            'NotFound': {
                'description': 'The resource was not found',
                'content': {
                    'application/json': {
                        'schema': {'$ref': '#/components/schemas/Error'}
                    }
                },
            }
        },
    },
}

# Self- and mutually-referential schemas
RECURSIVE_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Recursive API', 'version': '1.0.0'},
    'paths': {},
    'components': {
        'schemas': {
            'TreeNode': {
                'type': 'object',
                'required': ['value'],
                'properties': {
                    'value': {'type': 'string'},
                    'children': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/TreeNode'},
                    },
                },
            },
            'Person': {
                'type': 'object',
                'properties': {
                    'employer': {'$ref': '#/components/schemas/Company'},
                },
            },
            'Company': {
                'type': 'object',
                'properties': {
                    'employees': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/Person'},
                    },
                },
            },
        }
    },
}

# OpenAPI 3.1 document using type lists and const
OPENAPI_31_SPEC = {
    'openapi': '3.1.0',
    'info': {'title': 'Modern API', 'version': '1.0.0'},
    'components': {
        'schemas': {
            'MaybeName': {'type': ['string', 'null']},
            'Kind': {'const': 'circle'},
            'Scalar': {'type': ['string', 'number']},
        }
    },
}


def document_with_schemas(schemas: dict, paths: dict | None = None) -> dict:
    """Build a minimal document holding the given component schemas."""
    document = copy.deepcopy(MINIMAL_OPENAPI_SPEC)
    document['paths'] = paths or {}
    document['components'] = {'schemas': schemas}
    return document


def document_with_paths(paths: dict, components: dict | None = None) -> dict:
    """Build a minimal document holding the given paths and components."""
    document = copy.deepcopy(MINIMAL_OPENAPI_SPEC)
    document['paths'] = paths
    if components is not None:
        document['components'] = components
    return document
