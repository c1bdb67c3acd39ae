"""
Tests for domain models — validation, lookups, plugin descriptor tagging.
"""

import pydantic
import pytest

from sitepack.core.models import (
    BuildConfiguration,
    CommonsChunkPlugin,
    LoaderSpec,
    ModuleRule,
    OutputSpec,
    PageDescriptor,
    ProgramSettings,
    SiteConfig,
    StaticSiteGeneratorPlugin,
)


def _config(**kwargs) -> BuildConfiguration:
    return BuildConfiguration(
        context="/site/pages",
        entry={"main": "/site/app"},
        output=OutputSpec(path="/site/public", filename="main.js"),
        **kwargs,
    )


class TestSiteInputs:
    def test_program_defaults(self):
        program = ProgramSettings()
        assert program.host == "localhost"
        assert program.prefix_links is False
        assert program.framework_package == "sitepack"

    def test_snapshots_are_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            SiteConfig(link_prefix="/a").link_prefix = "/b"
        with pytest.raises(pydantic.ValidationError):
            PageDescriptor(route="/", component="A").component = "B"

    def test_site_config_keeps_extra_keys(self):
        site = SiteConfig(link_prefix="/x", title="Docs")
        assert site.model_extra == {"title": "Docs"}


class TestBuildConfiguration:
    def test_defaults(self):
        config = _config()
        assert config.node == {"__filename": True}
        assert config.debug is True
        assert config.plugins == []
        assert config.source_map is None

    def test_get_rule(self):
        rule = ModuleRule(name="json", test=r"\.json$", use=[LoaderSpec(loader="json")])
        config = _config(module_rules=[rule])
        assert config.get_rule("json") is rule
        assert config.get_rule("css") is None
        assert rule.loader_names == ["json"]

    def test_plugins_validated_by_kind(self):
        config = BuildConfiguration.model_validate({
            "context": "/site/pages",
            "entry": {"main": "/site/app"},
            "output": {"path": "/site/public", "filename": "main.js"},
            "plugins": [
                {"kind": "commons-chunk", "name": "commons", "chunks": ["app"], "min_chunks": 0},
                {"kind": "static-site-generator", "renderFilename": "render-page.js"},
            ],
        })
        assert isinstance(config.plugins[0], CommonsChunkPlugin)
        assert isinstance(config.plugins[1], StaticSiteGeneratorPlugin)
        assert config.plugin_kinds == ["commons-chunk", "static-site-generator"]
        assert config.get_plugin("offline") is None

    def test_unknown_plugin_kind_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            BuildConfiguration.model_validate({
                "context": "/",
                "entry": {},
                "output": {"path": "/", "filename": "x.js"},
                "plugins": [{"kind": "teleport"}],
            })

    def test_extra_keys_rendered(self):
        config = BuildConfiguration.model_validate({
            "context": "/",
            "entry": {},
            "output": {"path": "/", "filename": "x.js"},
            "externals": {"react": "React"},
        })
        assert config.to_bundler_dict()["externals"] == {"react": "React"}
