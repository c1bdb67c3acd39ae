"""
Bundle configuration — stage-driven composition of bundler configs.

    from sitepack.core.services.bundle_config import compose

    config = compose(program, "/srv/site", "build-javascript", pages=pages)
"""

from sitepack.core.services.bundle_config.chunks import min_chunks_threshold
from sitepack.core.services.bundle_config.composer import DEFAULT_DEV_SERVER_PORT, compose
from sitepack.core.services.bundle_config.customize import (
    ComposedConfig,
    ConfigContractError,
    ModifyConfigHook,
    apply_customization,
)
from sitepack.core.services.bundle_config.stages import StageError, resolve_stage

__all__ = [
    "DEFAULT_DEV_SERVER_PORT",
    "ComposedConfig",
    "ConfigContractError",
    "ModifyConfigHook",
    "StageError",
    "apply_customization",
    "compose",
    "min_chunks_threshold",
    "resolve_stage",
]
