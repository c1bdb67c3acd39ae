"""
Plugin chain builder — the ordered plugin descriptors for each stage.

Order matters to the bundler and is part of the contract:

  develop            occurrence-order, hot-module-replacement, no-errors, define
  build-css          define, extract-text
  build-html         static-site-generator, define, extract-text
  build-javascript   ignore, md5-hash, dedupe, occurrence-order, commons-chunk,
                     define, extract-text, offline, uglify-js, stats-writer
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from sitepack.core.models.plugins import (
    CommonsChunkPlugin,
    DedupePlugin,
    DefinePlugin,
    ExtractTextPlugin,
    HotModuleReplacementPlugin,
    IgnorePlugin,
    Md5HashPlugin,
    NoErrorsPlugin,
    OccurrenceOrderPlugin,
    OfflinePlugin,
    PluginDescriptor,
    StaticSiteGeneratorPlugin,
    StatsWriterPlugin,
    UglifyJsPlugin,
)
from sitepack.core.models.site import PageDescriptor, ProgramSettings, SiteConfig
from sitepack.core.models.stage import Stage
from sitepack.core.services.bundle_config.chunks import (
    APP_CHUNK_NAME,
    COMMONS_CHUNK_NAME,
    component_chunk_name,
    distinct_components,
    min_chunks_threshold,
)
from sitepack.core.services.bundle_config.output import RENDER_PAGE_FILENAME, link_prefix_path

logger = logging.getLogger(__name__)

STYLES_FILENAME = "styles.css"

# The date library ships hundreds of KB of locale data most sites never use.
LOCALE_RESOURCE = r"^\./locale$"
LOCALE_CONTEXT = r"moment$"


def node_env(stage: Stage, environ: Mapping[str, str]) -> str:
    """Effective build mode label; NODE_ENV wins when set."""
    value = environ.get("NODE_ENV")
    if value:
        return value
    return "development" if stage is Stage.DEVELOP else "production"


def define_plugin(
    program: ProgramSettings,
    site: SiteConfig,
    stage: Stage,
    environ: Mapping[str, str],
) -> DefinePlugin:
    return DefinePlugin(
        node_env=node_env(stage, environ),
        prefix_links=program.prefix_links,
        link_prefix=site.link_prefix,
    )


def commons_chunk_plugin(pages: Sequence[PageDescriptor], directory: str) -> CommonsChunkPlugin:
    """Shared chunk over the app entry and one chunk per page component.

    Components whose paths kebab to the same chunk name share that chunk,
    so the threshold counts chunk names rather than component paths.
    """
    distinct = distinct_components(pages)
    components = list(dict.fromkeys(component_chunk_name(c, directory) for c in distinct))
    if len(components) < len(distinct):
        logger.debug(
            "Commons chunk: %d components collapse to %d chunk names",
            len(distinct), len(components),
        )
    threshold = min_chunks_threshold(len(components))
    logger.debug(
        "Commons chunk: %d page components, min_chunks=%d", len(components), threshold,
    )
    return CommonsChunkPlugin(
        name=COMMONS_CHUNK_NAME,
        chunks=(APP_CHUNK_NAME, *components),
        min_chunks=threshold,
    )


def build_plugins(
    program: ProgramSettings,
    site: SiteConfig,
    directory: str,
    stage: Stage,
    pages: Sequence[PageDescriptor],
    environ: Mapping[str, str],
) -> list[PluginDescriptor]:
    """Ordered plugin descriptors for a (normalized) stage."""
    define = define_plugin(program, site, stage, environ)

    if stage is Stage.DEVELOP:
        return [
            OccurrenceOrderPlugin(),
            HotModuleReplacementPlugin(),
            NoErrorsPlugin(),
            define,
        ]

    if stage is Stage.BUILD_CSS:
        return [define, ExtractTextPlugin(filename=STYLES_FILENAME)]

    if stage is Stage.BUILD_HTML:
        return [
            StaticSiteGeneratorPlugin(
                render_filename=RENDER_PAGE_FILENAME,
                routes=tuple(page.route for page in pages),
            ),
            define,
            ExtractTextPlugin(filename=STYLES_FILENAME),
        ]

    if stage is Stage.BUILD_JAVASCRIPT:
        return [
            IgnorePlugin(resource=LOCALE_RESOURCE, context=LOCALE_CONTEXT),
            Md5HashPlugin(),
            DedupePlugin(),
            OccurrenceOrderPlugin(),
            commons_chunk_plugin(pages, directory),
            define,
            ExtractTextPlugin(filename=STYLES_FILENAME),
            OfflinePlugin(public_path=link_prefix_path(program, site)),
            UglifyJsPlugin(),
            StatsWriterPlugin(),
        ]

    raise ValueError(f"No plugin chain for stage {stage!r}")
