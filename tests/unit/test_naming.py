"""
Unit tests for naming defaults and overrides.
"""

import pytest

from strapi_ts.core.config import GeneratorConfig
from strapi_ts.core.naming import (
    NamingPolicy,
    component_folder,
    default_enum_name,
    default_interface_name,
    default_output_unit,
)


class TestDefaults:
    """Test the default naming functions."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("article", "Article"),
            ("blog post", "BlogPost"),
            ("blog   post  item", "BlogPostItem"),
            ("users/permissions", "Userspermissions"),
            ("Article", "Article"),
        ],
    )
    def test_interface_name(self, name, expected):
        assert default_interface_name(name) == expected

    @pytest.mark.parametrize("name", ["", None])
    def test_interface_name_of_empty(self, name):
        assert default_interface_name(name) == "unknown"

    def test_enum_name(self):
        assert default_enum_name("status", "Article") == "ArticleStatus"

    def test_enum_name_of_empty_field(self):
        assert default_enum_name("", "Article") == "any"

    def test_output_unit(self):
        assert default_output_unit("Article") == "article"
        assert default_output_unit("Article", nested=True) == "article/article"
        assert default_output_unit("Layout.Hero", is_component=True) == "Layout/Hero"
        assert default_output_unit("layout.hero", is_component=True, nested=True) == "layout/hero"

    def test_component_folder(self):
        assert component_folder("/srv/components/layout/hero.json") == "layout"
        assert component_folder("C:\\srv\\components\\shared\\seo.json") == "shared"


class TestNamingPolicy:
    """Test overrides and their fallback to the defaults."""

    def test_defaults_without_overrides(self):
        policy = NamingPolicy()

        assert policy.interface_name("blog post", "api/blog-post/models/blog-post.settings.json") == "BlogPost"
        assert policy.enum_name("status", "BlogPost") == "BlogPostStatus"
        assert policy.property_name("title", "BlogPost") == "title"

    def test_component_interface_name_has_folder_prefix(self):
        policy = NamingPolicy()

        assert policy.interface_name("Hero", "components/layout/hero.json", is_component=True) == "LayoutHero"

    def test_component_without_name_is_unknown(self):
        policy = NamingPolicy()

        assert policy.interface_name(None, "components/layout/hero.json", is_component=True) == "unknown"

    def test_interface_override(self):
        config = GeneratorConfig(interface_name=lambda name, filename: f"I{name}")
        policy = NamingPolicy(config)

        assert policy.interface_name("Article", "article.settings.json") == "IArticle"

    def test_declining_override_falls_back(self):
        config = GeneratorConfig(
            interface_name=lambda name, filename: "Post" if name == "Article" else None,
            enum_name=lambda field, interface: "",
            field_name=lambda field, interface: field.upper() if field == "id" else None,
        )
        policy = NamingPolicy(config)

        assert policy.interface_name("Article", "article.settings.json") == "Post"
        assert policy.interface_name("Writer", "writer.settings.json") == "Writer"
        assert policy.enum_name("status", "Post") == "PostStatus"
        assert policy.property_name("id", "Post") == "ID"
        assert policy.property_name("title", "Post") == "title"

    def test_output_unit_override_and_nesting(self):
        config = GeneratorConfig(
            nested=True,
            output_file_name=lambda interface, filename: "models\\special" if interface == "Special" else None,
        )
        policy = NamingPolicy(config)

        assert policy.output_unit("special", False, "Special", "special.settings.json") == "models/special"
        assert policy.output_unit("Article", False, "Article", "article.settings.json") == "article/article"
        assert policy.output_unit("layout.hero", True, "LayoutHero", "components/layout/hero.json") == "layout/hero"
