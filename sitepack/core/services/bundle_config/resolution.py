"""
Resolution planner — where modules and loaders are looked up.

Precedence is the same for both hierarchies: site-local code always
shadows what the framework ships.

Modules:
  1. the site directory
  2. the framework's isomorphic modules
  3. the site's node_modules
  4. the framework's own node_modules (nested under the site's)

Loaders:
  1. <site>/loaders
  2. the framework's loaders
  3. the site's node_modules
  4. the framework's own node_modules
"""

from __future__ import annotations

from pathlib import Path

from sitepack.core.models.build_config import ResolveLoaderSpec, ResolveSpec
from sitepack.core.models.site import ProgramSettings

# Ships static-entry.js; isomorphic/ and loaders/ are search tiers that may be empty
FRAMEWORK_DIR = str(Path(__file__).resolve().parent.parent.parent.parent / "runtime")

EXTENSIONS = ["", ".js", ".jsx", ".cjsx", ".coffee"]


def _join(*parts: str) -> str:
    return "/".join(p.rstrip("/") for p in parts)


def framework_modules_dir(program: ProgramSettings, directory: str) -> str:
    """The framework package's nested node_modules inside the site."""
    return _join(directory, "node_modules", program.framework_package, "node_modules")


def plan_resolve(program: ProgramSettings, directory: str) -> ResolveSpec:
    return ResolveSpec(
        extensions=list(EXTENSIONS),
        root=[directory, _join(FRAMEWORK_DIR, "isomorphic")],
        modules_directories=[
            _join(directory, "node_modules"),
            framework_modules_dir(program, directory),
            "node_modules",
        ],
    )


def plan_resolve_loader(program: ProgramSettings, directory: str) -> ResolveLoaderSpec:
    return ResolveLoaderSpec(
        root=[
            _join(directory, "loaders"),
            _join(FRAMEWORK_DIR, "loaders"),
            _join(directory, "node_modules"),
            framework_modules_dir(program, directory),
        ],
    )
