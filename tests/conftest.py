"""
Pytest configuration and shared fixtures for strapi_ts tests.

Provides record factories and a small cross-referenced model set used
across the test suite.
"""

from typing import Any, Dict, List, Optional

import pytest

from strapi_ts.core.config import GeneratorConfig, load_config
from strapi_ts.core.graph import build_graph
from strapi_ts.core.naming import NamingPolicy
from strapi_ts.core.resolver import ReferenceResolver
from strapi_ts.core.schema import RawModelRecord, record_from_dict
from strapi_ts.typescript.types import TypeScriptTypeMapper


def _record(
    filename: str,
    name: Optional[str],
    attributes: Optional[Dict[str, Any]] = None,
    is_component: bool = False,
    description: Optional[str] = None,
) -> RawModelRecord:
    info: Dict[str, Any] = {}
    if name is not None:
        info["name"] = name
    if description is not None:
        info["description"] = description
    document = {
        "connection": "default",
        "collectionName": name.lower() + "s" if name else "unknown",
        "info": info,
        "options": {"timestamps": True},
        "attributes": attributes or {},
    }
    return record_from_dict(document, filename, is_component=is_component)


@pytest.fixture
def make_record():
    """Factory building a RawModelRecord from a display name and attributes."""
    return _record


@pytest.fixture
def make_model():
    """Factory for a top-level model stored at api/<key>/models/<key>.settings.json."""

    def factory(key: str, name: str, attributes=None, **kwargs) -> RawModelRecord:
        return _record(f"api/{key}/models/{key}.settings.json", name, attributes, **kwargs)

    return factory


@pytest.fixture
def make_component():
    """Factory for a component stored at components/<folder>/<file>.json."""

    def factory(folder: str, file: str, name: str, attributes=None, **kwargs) -> RawModelRecord:
        return _record(
            f"components/{folder}/{file}.json", name, attributes, is_component=True, **kwargs
        )

    return factory


@pytest.fixture
def sample_records(make_model, make_component) -> List[RawModelRecord]:
    """Article with a hero component and writer relation, plus the targets."""
    return [
        make_model(
            "article",
            "Article",
            {
                "title": {"type": "text", "required": True},
                "writer": {"model": "writer", "via": "articles"},
                "hero": {"type": "component", "component": "layout.hero"},
            },
        ),
        make_model(
            "writer",
            "Writer",
            {
                "name": {"type": "string"},
                "articles": {"collection": "article", "via": "writer"},
            },
        ),
        make_component(
            "layout",
            "hero",
            "Hero",
            {
                "heading": {"type": "string", "required": True},
                "article": {"model": "article"},
            },
        ),
        make_component("layout", "cta", "Cta", {"label": {"type": "string"}}),
    ]


@pytest.fixture
def make_mapper():
    """Factory returning (mapper, resolver) for records and config options."""

    def factory(records: List[RawModelRecord], config: Optional[GeneratorConfig] = None, **options):
        config = config or load_config(custom_config=options)
        graph = build_graph(records, config)
        resolver = ReferenceResolver(graph, config)
        return TypeScriptTypeMapper(resolver, config, NamingPolicy(config)), resolver

    return factory
