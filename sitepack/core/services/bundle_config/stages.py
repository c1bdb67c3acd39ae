"""
Stage resolution — validate a stage token before anything else runs.
"""

from __future__ import annotations

import logging

from sitepack.core.models.stage import Stage, StageResolution

logger = logging.getLogger(__name__)


class StageError(ValueError):
    """Raised when a requested stage is not one of the known stages."""

    def __init__(self, requested: object) -> None:
        self.requested = requested
        accepted = ", ".join(s.value for s in Stage)
        super().__init__(
            f"The stage requested {requested!r} doesn't exist. "
            f"Expected one of: {accepted}"
        )


def resolve_stage(requested: Stage | str) -> StageResolution:
    """Normalize a stage token.

    ``develop-html`` is ``develop`` for every planner except the script
    compiler options, which must not carry the hot-reload wiring.

    Raises:
        StageError: If the token is not a known stage.
    """
    try:
        stage = Stage(requested)
    except ValueError:
        raise StageError(requested) from None

    if stage is Stage.DEVELOP_HTML:
        logger.debug("Stage %s compiles as %s", stage, Stage.DEVELOP)
        return StageResolution(stage=Stage.DEVELOP, requested=stage, is_develop_alias=True)
    return StageResolution(stage=stage, requested=stage)
