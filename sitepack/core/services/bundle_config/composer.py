"""
Composer — one call, one complete bundler configuration.

    compose(program, directory, stage, dev_server_port, pages,
            site=..., modify_config=..., environ=...)

The stage is validated first; no planner runs for an unknown stage.
Each planner is keyed only on the normalized stage and the explicit
inputs, so composing twice with the same inputs gives equal results.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from os import PathLike
from typing import Any

from sitepack.core.models.build_config import BuildConfiguration
from sitepack.core.models.site import PageDescriptor, ProgramSettings, SiteConfig
from sitepack.core.models.stage import Stage
from sitepack.core.services.bundle_config.customize import (
    ComposedConfig,
    ModifyConfigHook,
    apply_customization,
)
from sitepack.core.services.bundle_config.entry import plan_entry
from sitepack.core.services.bundle_config.output import plan_output, plan_source_map
from sitepack.core.services.bundle_config.plugins import build_plugins
from sitepack.core.services.bundle_config.resolution import plan_resolve, plan_resolve_loader
from sitepack.core.services.bundle_config.rules import build_module_rules, build_postcss_plugins
from sitepack.core.services.bundle_config.stages import resolve_stage

logger = logging.getLogger(__name__)

DEFAULT_DEV_SERVER_PORT = 1500


def _as_model(model, value):
    if isinstance(value, model):
        return value
    return model.model_validate(value)


def compose(
    program: ProgramSettings | Mapping[str, Any],
    directory: str | PathLike[str],
    stage: Stage | str,
    dev_server_port: int = DEFAULT_DEV_SERVER_PORT,
    pages: Iterable[PageDescriptor | Mapping[str, Any]] = (),
    *,
    site: SiteConfig | Mapping[str, Any] | None = None,
    modify_config: ModifyConfigHook | None = None,
    environ: Mapping[str, str] | None = None,
) -> ComposedConfig:
    """Compose the bundler configuration for a stage.

    Args:
        program: Process-wide settings (dev server host, link prefixing),
            as a ProgramSettings or a plain mapping.
        directory: Site directory.
        stage: Stage token or Stage.
        dev_server_port: Port the develop dev server listens on.
        pages: Page descriptors; only their routes and distinct components
            are read. Plain mappings are validated into PageDescriptor.
        site: Site config snapshot or mapping. Defaults to an empty SiteConfig.
        modify_config: Optional override hook ``(config, stage) -> config``.
        environ: Environment used for NODE_ENV. Defaults to os.environ.

    Returns:
        A freshly built BuildConfiguration, or whatever the hook returned
        in its place (a BuildConfiguration or a plain dict).

    Raises:
        StageError: If the stage is unknown.
        pydantic.ValidationError: If program, site or a page does not
            validate.
        ConfigContractError: If the override hook returns a non-mapping.
    """
    resolution = resolve_stage(stage)
    normalized = resolution.stage
    logger.debug("Composing build config for stage %s", resolution.requested)

    directory = os.fspath(directory)
    program = _as_model(ProgramSettings, program)
    site = _as_model(SiteConfig, site) if site is not None else SiteConfig()
    environ = environ if environ is not None else os.environ
    pages = tuple(_as_model(PageDescriptor, page) for page in pages)

    config = BuildConfiguration(
        context=f"{directory}/pages",
        entry=plan_entry(program, directory, normalized, dev_server_port),
        output=plan_output(program, site, directory, normalized, dev_server_port),
        module_rules=build_module_rules(resolution),
        plugins=build_plugins(program, site, directory, normalized, pages, environ),
        resolve=plan_resolve(program, directory),
        resolve_loader=plan_resolve_loader(program, directory),
        source_map=plan_source_map(normalized),
        postcss=build_postcss_plugins(normalized),
    )

    return apply_customization(config, normalized, modify_config)
