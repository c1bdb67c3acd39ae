"""
Configuration loader — reads site.yml, pages.yml and the site override hook.

Site config and pages are read from YAML, validated against Pydantic
schemas, and returned as read-only snapshots for the composer. The
override hook is discovered here, once, and handed to ``compose()``
explicitly.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sitepack.core.models.site import PageDescriptor, SiteConfig
from sitepack.core.services.bundle_config.customize import ModifyConfigHook

logger = logging.getLogger(__name__)

# Default config filenames
SITE_CONFIG_FILE = "site.yml"
PAGES_FILE = "pages.yml"

# Conventional override hook location, relative to the site directory
HOOK_MODULE_FILE = "site_node.py"
HOOK_FUNCTION = "modify_build_config"


class ConfigError(Exception):
    """Raised when site configuration is invalid or cannot be loaded."""


def _read_yaml(path: Path) -> Any:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_site_config(path: Path | None = None, directory: Path | None = None) -> SiteConfig:
    """Load and validate the site configuration.

    Args:
        path: Explicit path to site.yml. Must exist.
        directory: Site directory to look in when no path is given. A
            missing site.yml there yields an empty SiteConfig.

    Raises:
        ConfigError: If the file is missing (explicit path) or invalid.
    """
    if path is None:
        candidate = (directory or Path.cwd()) / SITE_CONFIG_FILE
        if not candidate.is_file():
            logger.debug("No %s in %s, using defaults", SITE_CONFIG_FILE, candidate.parent)
            return SiteConfig()
        path = candidate

    data = _read_yaml(path)
    if data is None:
        return SiteConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "site" key or be flat
    site_data = data["site"] if isinstance(data.get("site"), dict) else data

    try:
        site = SiteConfig.model_validate(site_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid site configuration: {e}") from e

    logger.info("Loaded site config from %s (link prefix %r)", path, site.link_prefix)
    return site


def load_pages(path: Path) -> list[PageDescriptor]:
    """Load page descriptors from a YAML list (or ``{pages: [...]}``).

    Raises:
        ConfigError: If the file is missing or any entry is invalid.
    """
    data = _read_yaml(path)
    if data is None:
        return []
    if isinstance(data, dict) and "pages" in data:
        data = data["pages"] or []
    if not isinstance(data, list):
        raise ConfigError(f"Expected a YAML list of pages in {path}, got {type(data).__name__}")

    pages: list[PageDescriptor] = []
    for i, item in enumerate(data):
        try:
            pages.append(PageDescriptor.model_validate(item))
        except ValidationError as e:
            raise ConfigError(f"Invalid page descriptor #{i} in {path}: {e}") from e

    logger.info("Loaded %d pages from %s", len(pages), path)
    return pages


def load_override_hook(directory: Path | None = None) -> ModifyConfigHook | None:
    """Find the site's ``modify_build_config`` hook, if it has one.

    Returns None when site_node.py does not exist or does not define the
    hook. Any failure while importing an existing site_node.py is raised.

    Raises:
        ConfigError: If site_node.py fails to import, or the hook attribute
            is not callable.
    """
    hook_path = (directory or Path.cwd()) / HOOK_MODULE_FILE
    if not hook_path.is_file():
        logger.debug("No %s in %s", HOOK_MODULE_FILE, hook_path.parent)
        return None

    spec = importlib.util.spec_from_file_location("_sitepack_site_node", hook_path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot load {hook_path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Error loading {hook_path}: {e}") from e

    hook = getattr(module, HOOK_FUNCTION, None)
    if hook is None:
        logger.debug("%s defines no %s()", hook_path, HOOK_FUNCTION)
        return None
    if not callable(hook):
        raise ConfigError(f"{HOOK_FUNCTION} in {hook_path} is not callable")

    logger.info("Using %s() from %s", HOOK_FUNCTION, hook_path)
    return hook
