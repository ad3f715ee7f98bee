'''
seeded fake records for the underbar test suites.

schemas are plain python structures:
    'word'                                  -> faker provider called with no arguments
    ('pyint', {'min_value': 1})             -> faker provider called with keyword arguments
    {'_provider': 'choice', 'from': [...]}  -> a numpy-seeded pick from the list
    {'_provider': 'literal', 'value': x}    -> x as is
    {'name': ..., 'age': ...}               -> a record, each field generated in turn
anything else is returned unchanged.
'''

import numpy as np
from faker import Faker
from typing import Any, Dict, List, Optional


class Generator:
    """schema interpreter."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _call_faker(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, method_name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _resolve_provider(self, config: Dict) -> Any:
        provider = config["_provider"]
        if provider == "choice":
            # convert numpy's choice result to a native python type
            picked = self._rng.choice(config["from"])
            return picked.item() if hasattr(picked, 'item') else picked
        if provider == "literal":
            if "value" not in config:
                raise ValueError("_provider 'literal' requires a 'value' key.")
            return config["value"]
        raise ValueError(f"unknown _provider: '{provider}'")

    def create(self, schema: Any) -> Any:
        if isinstance(schema, dict):
            if "_provider" in schema:
                return self._resolve_provider(schema)
            return {key: self.create(field) for key, field in schema.items()}

        if isinstance(schema, str):
            if hasattr(self._fake, schema):
                return self._call_faker(schema)
            return schema

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._call_faker(schema[0], schema[1])

        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> List[Any]:
        return [self._generator.create(self._schema) for _ in range(count)]


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
