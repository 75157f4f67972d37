"""Test fixtures for mprestgen tests.

This module provides sample OpenAPI documents and utilities for testing
the code generation functionality.
"""

import json

import yaml

# Minimal OpenAPI 3.0 spec for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Petstore-like API with models and multiple resource groups
PETSTORE_SPEC = {
    'openapi': '3.0.3',
    'info': {
        'title': 'Petstore API',
        'version': '1.0.0',
        'description': 'A sample Petstore API for testing',
    },
    'paths': {
        '/': {
            'get': {
                'operationId': 'getRoot',
                'summary': 'API root',
                'responses': {'200': {'description': 'OK'}},
            }
        },
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'parameters': [
                    {
                        'name': 'limit',
                        'in': 'query',
                        'description': 'How many items to return',
                        'schema': {'type': 'integer', 'format': 'int32'},
                    }
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
                    }
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
                        'description': 'Created',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    }
                },
            },
        },
        '/pets/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'integer', 'format': 'int64'},
                }
            ],
            'get': {
                'operationId': 'showPetById',
                'summary': 'Info for a specific pet',
                'responses': {
                    '200': {
                        'description': 'Expected response to a valid request',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    }
                },
            },
            'delete': {
                'operationId': 'deletePet',
                'deprecated': True,
                'responses': {'204': {'description': 'Deleted'}},
            },
        },
        '/store/inventory': {
            'get': {
                'operationId': 'getInventory',
                'responses': {
                    '200': {
                        'description': 'Inventory counts',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'additionalProperties': {
                                        'type': 'integer',
                                        'format': 'int32',
                                    },
                                }
                            }
                        },
                    }
                },
            }
        },
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'description': 'A pet in the store',
                'required': ['id', 'name'],
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                    'status': {'$ref': '#/components/schemas/PetStatus'},
                    'birth-date': {'type': 'string', 'format': 'date'},
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
            'PetId': {'type': 'integer', 'format': 'int64'},
        }
    },
}

# One operation with five query parameters and a header
SEARCH_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Search API', 'version': '2.0.0'},
    'paths': {
        '/search': {
            'get': {
                'operationId': 'search_items',
                'parameters': [
                    {'name': 'q', 'in': 'query', 'required': True, 'schema': {'type': 'string'}},
                    {'name': 'page', 'in': 'query', 'schema': {'type': 'integer'}},
                    {'name': 'size', 'in': 'query', 'schema': {'type': 'integer'}},
                    {'name': 'sort', 'in': 'query', 'schema': {'type': 'string'}},
                    {'name': 'X-Trace-Id', 'in': 'header', 'schema': {'type': 'string'}},
                ],
                'responses': {
                    '200': {
                        'description': 'OK',
                        'content': {
                            'application/json': {
                                'schema': {'type': 'array', 'items': {'type': 'string'}}
                            }
                        },
                    }
                },
            }
        }
    },
}

# Paths below a common /api prefix, including a form post
PREFIXED_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Prefixed API', 'version': '1.0.0'},
    'paths': {
        '/api/users': {
            'get': {
                'operationId': 'listUsers',
                'responses': {'200': {'description': 'OK'}},
            }
        },
        '/api/users/{id}': {
            'get': {
                'operationId': 'getUser',
                'parameters': [
                    {'name': 'id', 'in': 'path', 'required': True, 'schema': {'type': 'string', 'format': 'uuid'}}
                ],
                'responses': {'200': {'description': 'OK'}},
            }
        },
        '/api/login': {
            'post': {
                'operationId': 'login',
                'requestBody': {
                    'content': {
                        'application/x-www-form-urlencoded': {
                            'schema': {
                                'type': 'object',
                                'required': ['username'],
                                'properties': {
                                    'username': {'type': 'string'},
                                    'password': {'type': 'string'},
                                },
                            }
                        }
                    }
                },
                'responses': {'204': {'description': 'Logged in'}},
            }
        },
    },
}

SWAGGER_2_SPEC = {
    'swagger': '2.0',
    'info': {'title': 'Old API', 'version': '1.0.0'},
    'host': 'api.example.com',
    'basePath': '/v1',
    'schemes': ['https'],
    'consumes': ['application/json'],
    'produces': ['application/json'],
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'parameters': [
                    {'$ref': '#/parameters/limit'},
                    {
                        'name': 'tags',
                        'in': 'query',
                        'type': 'array',
                        'items': {'type': 'string'},
                        'collectionFormat': 'multi',
                    },
                ],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'schema': {
                            'type': 'array',
                            'items': {'$ref': '#/definitions/Pet'},
                        },
                    }
                },
            },
            'post': {
                'operationId': 'createPet',
                'parameters': [
                    {
                        'name': 'pet',
                        'in': 'body',
                        'required': True,
                        'schema': {'$ref': '#/definitions/Pet'},
                    }
                ],
                'responses': {'201': {'description': 'Created'}},
            },
        },
        '/pets/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'type': 'integer',
                    'format': 'int64',
                }
            ],
            'get': {
                'operationId': 'showPetById',
                'responses': {
                    '200': {
                        'description': 'A pet',
                        'schema': {'$ref': '#/definitions/Pet'},
                    },
                    '404': {'$ref': '#/responses/NotFound'},
                },
            },
            'post': {
                'operationId': 'uploadPhoto',
                'consumes': ['multipart/form-data'],
                'parameters': [
                    {'name': 'photo', 'in': 'formData', 'type': 'file'},
                    {'name': 'caption', 'in': 'formData', 'type': 'string'},
                ],
                'responses': {'204': {'description': 'Uploaded'}},
            },
        },
    },
    'parameters': {
        'limit': {
            'name': 'limit',
            'in': 'query',
            'type': 'integer',
            'format': 'int32',
            'maximum': 100,
        }
    },
    'responses': {'NotFound': {'description': 'Not found'}},
    'definitions': {
        'Pet': {
            'type': 'object',
            'required': ['id', 'name'],
            'properties': {
                'id': {'type': 'integer', 'format': 'int64'},
                'name': {'type': 'string'},
            },
        }
    },
}


def get_spec_as_json(spec: dict) -> str:
    """Convert a spec dictionary to JSON string."""
    return json.dumps(spec, indent=2)


def get_spec_as_yaml(spec: dict) -> str:
    """Convert a spec dictionary to YAML string."""
    return yaml.dump(spec, default_flow_style=False, sort_keys=False)
