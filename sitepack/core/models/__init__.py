"""
Domain models — Pydantic types for bundle configuration.

All models are re-exported here for convenient access:

    from sitepack.core.models import BuildConfiguration, Stage, SiteConfig
"""

from sitepack.core.models.build_config import (
    BuildConfiguration,
    LoaderSpec,
    ModuleRule,
    OutputSpec,
    PostcssPlugin,
    ResolveLoaderSpec,
    ResolveSpec,
)
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
from sitepack.core.models.stage import Stage, StageResolution

__all__ = [
    # build_config.py
    "BuildConfiguration",
    "CommonsChunkPlugin",
    "DedupePlugin",
    # plugins.py
    "DefinePlugin",
    "ExtractTextPlugin",
    "HotModuleReplacementPlugin",
    "IgnorePlugin",
    "LoaderSpec",
    "Md5HashPlugin",
    "ModuleRule",
    "NoErrorsPlugin",
    "OccurrenceOrderPlugin",
    "OfflinePlugin",
    "OutputSpec",
    # site.py
    "PageDescriptor",
    "PluginDescriptor",
    "PostcssPlugin",
    "ProgramSettings",
    "ResolveLoaderSpec",
    "ResolveSpec",
    "SiteConfig",
    # stage.py
    "Stage",
    "StageResolution",
    "StaticSiteGeneratorPlugin",
    "StatsWriterPlugin",
    "UglifyJsPlugin",
]
