"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from sitepack.core.models import PageDescriptor, ProgramSettings, SiteConfig


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Return an empty site directory."""
    site = tmp_path / "site"
    site.mkdir()
    return site


@pytest.fixture
def program() -> ProgramSettings:
    """Default program settings (localhost, no link prefixing)."""
    return ProgramSettings(host="localhost")


@pytest.fixture
def prefixed_program() -> ProgramSettings:
    return ProgramSettings(host="localhost", prefix_links=True)


@pytest.fixture
def blog_site() -> SiteConfig:
    return SiteConfig(link_prefix="/blog")


@pytest.fixture
def pages() -> list[PageDescriptor]:
    """Four pages over three distinct template components."""
    return [
        PageDescriptor(route="/", component="/srv/site/pages/index.js"),
        PageDescriptor(route="/about/", component="/srv/site/pages/about.js"),
        PageDescriptor(route="/posts/a/", component="/srv/site/templates/post.js"),
        PageDescriptor(route="/posts/b/", component="/srv/site/templates/post.js"),
    ]


@pytest.fixture
def empty_environ() -> dict[str, str]:
    """An environment without NODE_ENV."""
    return {}
