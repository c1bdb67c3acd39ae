"""
Customization gate — let site code rewrite the assembled configuration.

The hook is a plain callable ``(config, stage) -> config`` passed in by
the caller. Whatever it returns becomes the final configuration, as long
as it is a BuildConfiguration or a mapping. A mapping is taken as-is:
hooks may hand back the bundler layout from ``to_bundler_dict()`` or any
other shape the bundler accepts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sitepack.core.models.build_config import BuildConfiguration
from sitepack.core.models.stage import Stage

logger = logging.getLogger(__name__)

ModifyConfigHook = Callable[[BuildConfiguration, Stage], Any]

ComposedConfig = BuildConfiguration | dict[str, Any]


class ConfigContractError(TypeError):
    """Raised when an override hook returns something other than a mapping."""

    def __init__(self, stage: Stage, value: Any) -> None:
        self.stage = stage
        self.value = value
        super().__init__(
            "You must return an object when modifying the build config. "
            f"Returned: {value!r} (stage: {stage})"
        )


def apply_customization(
    config: BuildConfiguration,
    stage: Stage,
    hook: ModifyConfigHook | None,
) -> ComposedConfig:
    """Run the override hook, if any, and check what it hands back.

    Raises:
        ConfigContractError: If the hook's result is neither a
            BuildConfiguration nor a mapping.
    """
    if hook is None:
        return config

    logger.debug("Applying build config override for stage %s", stage)
    result = hook(config, stage)

    if isinstance(result, BuildConfiguration):
        return result
    if not isinstance(result, Mapping):
        raise ConfigContractError(stage, result)

    logger.debug("Override for stage %s returned a plain mapping", stage)
    return dict(result)
