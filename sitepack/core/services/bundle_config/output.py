"""
Output planner — where bundles land, what they are called, where they
are served from, and which source maps they carry.

  develop            [name].js             served from memory by the dev server
  build-css          bundle-for-css.js     never shipped; the build step deletes it
  build-html         render-page.js        read by fixed name by the static site
                                           generator, then deleted
  build-javascript   [name]-[chunkhash:8].js   content-hashed for long-term caching
"""

from __future__ import annotations

from sitepack.core.models.build_config import OutputSpec
from sitepack.core.models.site import ProgramSettings, SiteConfig
from sitepack.core.models.stage import Stage
from sitepack.core.services.bundle_config.entry import dev_server_url

PUBLIC_DIR = "public"

DEVELOP_FILENAME = "[name].js"
CSS_BUNDLE_FILENAME = "bundle-for-css.js"
RENDER_PAGE_FILENAME = "render-page.js"
HASHED_FILENAME = "[name]-[chunkhash:8].js"

# Universal module wrapper: the render bundle is both required as a
# module and called as a render function.
RENDER_LIBRARY_TARGET = "umd"


def link_prefix_path(program: ProgramSettings, site: SiteConfig) -> str:
    """Public path for shipped artifacts, honoring the site's link prefix."""
    if program.prefix_links:
        return f"{site.link_prefix}/"
    return "/"


def plan_output(
    program: ProgramSettings,
    site: SiteConfig,
    directory: str,
    stage: Stage,
    port: int,
) -> OutputSpec:
    public = f"{directory}/{PUBLIC_DIR}"

    if stage is Stage.DEVELOP:
        return OutputSpec(
            path=directory,
            filename=DEVELOP_FILENAME,
            public_path=dev_server_url(program, port),
        )
    if stage is Stage.BUILD_CSS:
        return OutputSpec(
            path=public,
            filename=CSS_BUNDLE_FILENAME,
            public_path=link_prefix_path(program, site),
        )
    if stage is Stage.BUILD_HTML:
        return OutputSpec(
            path=public,
            filename=RENDER_PAGE_FILENAME,
            library_target=RENDER_LIBRARY_TARGET,
        )
    if stage is Stage.BUILD_JAVASCRIPT:
        return OutputSpec(
            path=public,
            filename=HASHED_FILENAME,
            public_path=link_prefix_path(program, site),
        )
    raise ValueError(f"No output plan for stage {stage!r}")


def plan_source_map(stage: Stage) -> str | None:
    """Source map mode. None disables source maps."""
    if stage is Stage.DEVELOP:
        return "eval"
    if stage is Stage.BUILD_JAVASCRIPT:
        return "source-map"
    return None
