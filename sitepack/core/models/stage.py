"""
Stage model — the five build modes a site goes through.

    develop            interactive development, hot reload, CSS injection
    develop-html       develop, compiled without the hot-reload wiring
                       (used when server-rendering HTML during develop)
    build-css          extract the single styles.css artifact
    build-html         pre-render every page to static HTML
    build-javascript   production client bundles for the single page app
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Stage(StrEnum):
    """A build stage token, as passed on the command line."""

    DEVELOP = "develop"
    DEVELOP_HTML = "develop-html"
    BUILD_CSS = "build-css"
    BUILD_HTML = "build-html"
    BUILD_JAVASCRIPT = "build-javascript"

    @property
    def is_develop(self) -> bool:
        """True for the two development-like stages."""
        return self in (Stage.DEVELOP, Stage.DEVELOP_HTML)


class StageResolution(BaseModel, frozen=True):
    """A validated stage request.

    Attributes:
        stage:            Normalized stage. ``develop-html`` becomes ``develop``.
        requested:        The stage as asked for. Only the compiler options
                          of the script rule look at this.
        is_develop_alias: True when ``requested`` was ``develop-html``.
    """

    stage: Stage
    requested: Stage
    is_develop_alias: bool = False
