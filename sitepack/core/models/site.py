"""
Site inputs — program settings, site config and page descriptors.

All three are read-only snapshots handed to the composer. The composer
never writes to them; pages and site config are owned by whatever
discovered them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProgramSettings(BaseModel):
    """Process-wide settings chosen by the build driver.

    Attributes:
        host:              Dev server host address.
        prefix_links:      Whether site-relative links get the link prefix.
        framework_package: npm package whose nested ``node_modules`` is the
                           last-resort dependency directory.
    """

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    prefix_links: bool = False
    framework_package: str = "sitepack"


class SiteConfig(BaseModel):
    """Snapshot of the site's own configuration (site.yml).

    Only ``link_prefix`` is read by the composer; other keys are kept so
    the snapshot can travel to an override hook untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    link_prefix: str = ""


class PageDescriptor(BaseModel):
    """One page: the route it is served at and its template component."""

    model_config = ConfigDict(frozen=True)

    route: str
    component: str
