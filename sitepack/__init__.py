"""
sitepack — stage-driven bundler configuration for static sites.

    from sitepack import compose, ProgramSettings

    config = compose(ProgramSettings(host="localhost"), "/srv/site", "develop")
"""

from sitepack.core.models import (
    BuildConfiguration,
    PageDescriptor,
    ProgramSettings,
    SiteConfig,
    Stage,
)
from sitepack.core.services.bundle_config import (
    ConfigContractError,
    StageError,
    compose,
)

__version__ = "0.1.0"

__all__ = [
    "BuildConfiguration",
    "ConfigContractError",
    "PageDescriptor",
    "ProgramSettings",
    "SiteConfig",
    "Stage",
    "StageError",
    "__version__",
    "compose",
]
