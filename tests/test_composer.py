"""
Tests for compose() — end-to-end composition across all stages.
"""

from pathlib import Path

import pydantic
import pytest

from sitepack import compose as top_level_compose
from sitepack.core.models import (
    BuildConfiguration,
    PageDescriptor,
    ProgramSettings,
    SiteConfig,
    Stage,
)
from sitepack.core.services.bundle_config import (
    ConfigContractError,
    StageError,
    compose,
)

SITE = "/srv/site"


class TestCompose:
    @pytest.mark.parametrize("stage", [s.value for s in Stage])
    def test_every_stage_composes(self, program: ProgramSettings, stage: str):
        config = compose(program, SITE, stage, environ={})
        assert isinstance(config, BuildConfiguration)
        assert config.context == "/srv/site/pages"
        assert config.node == {"__filename": True}
        assert config.debug is True

    def test_reexported_at_package_root(self):
        assert top_level_compose is compose

    def test_develop_public_path(self, program: ProgramSettings):
        config = compose(ProgramSettings(host="localhost"), SITE, "develop", 1500, [])
        assert config.output.public_path == "http://localhost:1500/"

    def test_default_port(self, program: ProgramSettings):
        config = compose(program, SITE, "develop")
        assert config.output.public_path.endswith(":1500/")

    def test_build_javascript_min_chunks(self, program: ProgramSettings):
        pages = [
            PageDescriptor(route="/a/", component="A"),
            PageDescriptor(route="/b/", component="B"),
            PageDescriptor(route="/c/", component="A"),
        ]
        config = compose(program, SITE, "build-javascript", 1500, pages)
        assert config.get_plugin("commons-chunk").min_chunks == 1

    def test_pages_accepts_generator(self, program: ProgramSettings):
        pages = (PageDescriptor(route=f"/{c}/", component=c) for c in "ABCD")
        config = compose(program, SITE, "build-javascript", pages=pages)
        assert config.get_plugin("commons-chunk").min_chunks == 2

    def test_pages_as_mappings(self, program: ProgramSettings):
        pages = [
            {"route": "/a/", "component": "A"},
            {"route": "/b/", "component": "B"},
            {"route": "/c/", "component": "A"},
        ]
        config = compose(program, SITE, "build-javascript", 1500, pages)
        commons = config.get_plugin("commons-chunk")
        assert commons.min_chunks == 1
        assert commons.chunks == ("app", "component---a", "component---b")

    def test_program_and_site_as_mappings(self):
        config = compose({"host": "localhost"}, SITE, "develop", 1500, [])
        assert config.output.public_path == "http://localhost:1500/"

        config = compose(
            {"prefix_links": True}, SITE, "build-javascript", site={"link_prefix": "/docs"},
        )
        assert config.output.public_path == "/docs/"

    def test_path_directory(self, program: ProgramSettings):
        config = compose(program, Path(SITE), "build-css")
        assert config.output.path == "/srv/site/public"

    def test_site_config_snapshot(self, prefixed_program: ProgramSettings):
        site = SiteConfig(link_prefix="/docs")
        config = compose(prefixed_program, SITE, "build-javascript", site=site)
        assert config.output.public_path == "/docs/"
        assert config.get_plugin("define").link_prefix == "/docs"
        assert site.link_prefix == "/docs"

    def test_environ_node_env(self, program: ProgramSettings):
        config = compose(program, SITE, "build-css", environ={"NODE_ENV": "test"})
        assert config.get_plugin("define").node_env == "test"

    def test_os_environ_default(self, program: ProgramSettings, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("NODE_ENV", "qa")
        config = compose(program, SITE, "develop")
        assert config.get_plugin("define").node_env == "qa"

    def test_source_maps(self, program: ProgramSettings):
        assert compose(program, SITE, "develop").source_map == "eval"
        assert compose(program, SITE, "develop-html").source_map == "eval"
        assert compose(program, SITE, "build-html").source_map is None
        assert compose(program, SITE, "build-javascript").source_map == "source-map"


class TestDevelopAlias:
    def test_develop_html_shares_entry_output_plugins(self, program: ProgramSettings):
        develop = compose(program, SITE, "develop", environ={})
        develop_html = compose(program, SITE, "develop-html", environ={})
        assert develop_html.entry == develop.entry
        assert develop_html.output == develop.output
        assert develop_html.plugins == develop.plugins

    def test_develop_html_differs_only_in_compiler(self, program: ProgramSettings):
        develop = compose(program, SITE, "develop", environ={})
        develop_html = compose(program, SITE, "develop-html", environ={})
        assert develop_html.module_rules != develop.module_rules
        assert develop_html.get_rule("css") == develop.get_rule("css")

    def test_hook_sees_normalized_stage(self, program: ProgramSettings):
        seen = []

        def hook(cfg, stage):
            seen.append(stage)
            return cfg

        compose(program, SITE, "develop-html", modify_config=hook)
        assert seen == [Stage.DEVELOP]


class TestDeterminism:
    @pytest.mark.parametrize("stage", [s.value for s in Stage])
    def test_identical_inputs_identical_output(self, program, pages, stage: str):
        first = compose(program, SITE, stage, 1500, pages, environ={})
        second = compose(program, SITE, stage, 1500, pages, environ={})
        assert first == second
        assert first is not second
        assert first.to_bundler_dict() == second.to_bundler_dict()

    def test_fresh_value_per_call(self, program):
        first = compose(program, SITE, "build-css", environ={})
        first.module_rules.clear()
        second = compose(program, SITE, "build-css", environ={})
        assert second.module_rules


class TestStylesheetInvariants:
    @pytest.mark.parametrize("stage", ["build-css", "build-html"])
    def test_no_runtime_injection(self, program, stage: str):
        config = compose(program, SITE, stage)
        assert "style" not in config.get_rule("css").loader_names

    def test_develop_injects(self, program):
        config = compose(program, SITE, "develop")
        assert config.get_rule("css").loader_names[0] == "style"


class TestFilenames:
    def test_production_hashed(self, program):
        assert "[chunkhash" in compose(program, SITE, "build-javascript").output.filename

    @pytest.mark.parametrize("stage", ["develop", "build-css", "build-html"])
    def test_others_unhashed(self, program, stage: str):
        assert "hash" not in compose(program, SITE, stage).output.filename


class TestFailures:
    def test_unknown_stage(self, program):
        calls = []
        with pytest.raises(StageError):
            compose(program, SITE, "build-everything", modify_config=lambda c, s: calls.append(c))
        assert calls == []

    @pytest.mark.parametrize("bad", [None, "str", []])
    def test_hook_contract(self, program, bad):
        with pytest.raises(ConfigContractError, match="build-html"):
            compose(program, SITE, "build-html", modify_config=lambda c, s: bad)

    def test_invalid_page_mapping(self, program):
        with pytest.raises(pydantic.ValidationError):
            compose(program, SITE, "build-javascript", pages=[{"route": "/a/"}])

    def test_hook_may_return_bundler_layout(self, program):
        def hook(cfg, stage):
            layout = cfg.to_bundler_dict()
            layout["output"]["filename"] = "app.js"
            return layout

        config = compose(program, SITE, "build-javascript", modify_config=hook)
        assert isinstance(config, dict)
        assert config["output"]["filename"] == "app.js"
        assert config["output"]["publicPath"] == "/"

    def test_hook_replacement_returned(self, program):
        def hook(cfg, stage):
            cfg.output.filename = "app.js"
            return cfg

        config = compose(program, SITE, "build-javascript", modify_config=hook)
        assert config.output.filename == "app.js"


class TestBundlerDict:
    def test_develop_layout(self, program):
        rendered = compose(program, SITE, "develop", environ={}).to_bundler_dict()
        assert rendered["devtool"] == "eval"
        assert rendered["output"]["publicPath"] == "http://localhost:1500/"
        assert "libraryTarget" not in rendered["output"]
        assert rendered["resolve"]["modulesDirectories"][0] == "/srv/site/node_modules"
        assert rendered["resolveLoader"]["root"][0] == "/srv/site/loaders"
        assert [p["name"] for p in rendered["plugins"]][-1] == "define"
        assert rendered["postcss"][0]["name"] == "postcss-import"

    def test_build_html_layout(self, program):
        rendered = compose(program, SITE, "build-html", environ={}).to_bundler_dict()
        assert rendered["devtool"] is False
        assert rendered["output"]["libraryTarget"] == "umd"
        assert "publicPath" not in rendered["output"]
        assert "postcss" not in rendered
        modules_rule = next(r for r in rendered["module"]["loaders"] if r["name"] == "css-modules")
        assert modules_rule["extract"] == {"fallback": "style"}

    def test_images_flags(self, program):
        rendered = compose(program, SITE, "build-javascript").to_bundler_dict()
        images = next(r for r in rendered["module"]["loaders"] if r["name"] == "images")
        assert images["flags"] == "i"
        assert images["loaders"] == [{"loader": "url-loader", "options": {"limit": 10000}}]
