"""
Plugin descriptors — declarative stand-ins for bundler plugins.

Each descriptor is a tagged variant: ``kind`` names the plugin, the other
fields are its parameters. Nothing here talks to a bundler; the adapter in
``BuildConfiguration.to_bundler_dict()`` renders them as
``{"name": kind, "options": {...}}``.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Plugin(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def options(self) -> dict[str, Any]:
        """Plugin parameters in bundler key layout."""
        return self.model_dump(exclude={"kind"}, by_alias=True)


# ── Every stage ─────────────────────────────────────────────────


class DefinePlugin(_Plugin):
    """Compile-time constants injected into output code."""

    kind: Literal["define"] = "define"
    node_env: str
    prefix_links: bool = False
    link_prefix: str = ""

    def options(self) -> dict[str, Any]:
        # Values are substituted as source text, so strings are JSON-quoted.
        return {
            "process.env": {"NODE_ENV": json.dumps(self.node_env)},
            "__PREFIX_LINKS__": self.prefix_links,
            "__LINK_PREFIX__": json.dumps(self.link_prefix),
        }


class ExtractTextPlugin(_Plugin):
    """Collect extracted stylesheet output into one physical file."""

    kind: Literal["extract-text"] = "extract-text"
    filename: str = "styles.css"


# ── Develop ─────────────────────────────────────────────────────


class OccurrenceOrderPlugin(_Plugin):
    kind: Literal["occurrence-order"] = "occurrence-order"


class HotModuleReplacementPlugin(_Plugin):
    kind: Literal["hot-module-replacement"] = "hot-module-replacement"


class NoErrorsPlugin(_Plugin):
    """Skip emitting bundles when compilation fails."""

    kind: Literal["no-errors"] = "no-errors"


# ── build-html ──────────────────────────────────────────────────


class StaticSiteGeneratorPlugin(_Plugin):
    """Render each route to HTML through the render-page bundle."""

    kind: Literal["static-site-generator"] = "static-site-generator"
    render_filename: str = Field(alias="renderFilename")
    routes: tuple[str, ...] = ()


# ── build-javascript ────────────────────────────────────────────


class IgnorePlugin(_Plugin):
    """Drop modules matching ``resource`` when required from ``context``."""

    kind: Literal["ignore"] = "ignore"
    resource: str
    context: str


class Md5HashPlugin(_Plugin):
    """Chunk hashes derived from module contents only."""

    kind: Literal["md5-hash"] = "md5-hash"


class DedupePlugin(_Plugin):
    kind: Literal["dedupe"] = "dedupe"


class CommonsChunkPlugin(_Plugin):
    """Pull modules shared by ``min_chunks`` member chunks into ``name``."""

    kind: Literal["commons-chunk"] = "commons-chunk"
    name: str
    chunks: tuple[str, ...]
    min_chunks: int = Field(alias="minChunks")


class OfflinePlugin(_Plugin):
    """Offline cache manifest plus service worker."""

    kind: Literal["offline"] = "offline"
    public_path: str
    relative_paths: bool = False
    service_worker_events: bool = True

    def options(self) -> dict[str, Any]:
        return {
            "publicPath": self.public_path,
            "relativePaths": self.relative_paths,
            "ServiceWorker": {"events": self.service_worker_events},
        }


class UglifyJsPlugin(_Plugin):
    kind: Literal["uglify-js"] = "uglify-js"


class StatsWriterPlugin(_Plugin):
    """Write build stats (stats.json) for downstream tooling."""

    kind: Literal["stats-writer"] = "stats-writer"
    filename: str = "stats.json"


PluginDescriptor = Annotated[
    Union[
        DefinePlugin,
        ExtractTextPlugin,
        OccurrenceOrderPlugin,
        HotModuleReplacementPlugin,
        NoErrorsPlugin,
        StaticSiteGeneratorPlugin,
        IgnorePlugin,
        Md5HashPlugin,
        DedupePlugin,
        CommonsChunkPlugin,
        OfflinePlugin,
        UglifyJsPlugin,
        StatsWriterPlugin,
    ],
    Field(discriminator="kind"),
]
