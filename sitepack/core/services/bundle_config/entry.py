"""
Entry point planner — the compilation roots for each stage.
"""

from __future__ import annotations

from sitepack.core.models.site import ProgramSettings
from sitepack.core.models.stage import Stage
from sitepack.core.services.bundle_config.chunks import APP_CHUNK_NAME, COMMONS_CHUNK_NAME
from sitepack.core.services.bundle_config.resolution import FRAMEWORK_DIR

INTERMEDIATE_DIR = ".intermediate-representation"

DEV_SERVER_CLIENT = "webpack-dev-server/client"
HOT_ONLY_DEV_SERVER = "webpack/hot/only-dev-server"
HOT_LOADER_PATCH = "react-hot-loader/patch"

RENDER_DRIVER = "static-entry"


def app_module(directory: str) -> str:
    return f"{directory}/{INTERMEDIATE_DIR}/app"


def production_app_module(directory: str) -> str:
    return f"{directory}/{INTERMEDIATE_DIR}/production-app"


def dev_server_url(program: ProgramSettings, port: int) -> str:
    return f"http://{program.host}:{port}/"


def plan_entry(
    program: ProgramSettings,
    directory: str,
    stage: Stage,
    port: int,
) -> dict[str, list[str] | str]:
    """Entry bundles for a (normalized) stage.

    develop has a single bundle whose tooling clients come first: they
    must initialize before any app code runs.
    """
    if stage is Stage.DEVELOP:
        return {
            COMMONS_CHUNK_NAME: [
                f"{DEV_SERVER_CLIENT}?{dev_server_url(program, port)}",
                HOT_ONLY_DEV_SERVER,
                HOT_LOADER_PATCH,
                app_module(directory),
            ],
        }
    if stage is Stage.BUILD_CSS:
        return {"main": app_module(directory)}
    if stage is Stage.BUILD_HTML:
        return {"main": f"{FRAMEWORK_DIR}/{RENDER_DRIVER}"}
    if stage is Stage.BUILD_JAVASCRIPT:
        return {APP_CHUNK_NAME: production_app_module(directory)}
    raise ValueError(f"No entry plan for stage {stage!r}")
