"""
sitepack — CLI entrypoint.

Usage:
    python -m sitepack.main --help
    python -m sitepack.main stages
    python -m sitepack.main compose build-javascript --directory ./site --pages pages.yml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from sitepack import __version__
from sitepack.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="sitepack")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(verbose: bool, quiet: bool, debug: bool) -> None:
    """sitepack — bundler configuration for static site builds."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(os.environ, debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
def stages() -> None:
    """List the build stages."""
    from sitepack.core.models.stage import Stage

    for stage in Stage:
        click.echo(stage.value)


@cli.command()
@click.argument("stage")
@click.option(
    "--directory", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Site directory.",
)
@click.option("--port", "-p", type=int, default=1500, show_default=True, help="Dev server port.")
@click.option("--host", default="localhost", show_default=True, help="Dev server host.")
@click.option("--prefix-links", is_flag=True, help="Prefix links with the site's link_prefix.")
@click.option(
    "--site-config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to site.yml (default: <directory>/site.yml if present).",
)
@click.option(
    "--pages",
    "pages_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a pages.yml list of {route, component}.",
)
@click.option("--no-hook", is_flag=True, help="Ignore <directory>/site_node.py.")
def compose(
    stage: str,
    directory: Path,
    port: int,
    host: str,
    prefix_links: bool,
    site_config: Path | None,
    pages_path: Path | None,
    no_hook: bool,
) -> None:
    """Compose the bundler configuration for STAGE and print it as JSON."""
    from sitepack.core.config.loader import (
        ConfigError,
        load_override_hook,
        load_pages,
        load_site_config,
    )
    from sitepack.core.models.build_config import BuildConfiguration
    from sitepack.core.models.site import ProgramSettings
    from sitepack.core.services.bundle_config import (
        ConfigContractError,
        StageError,
        compose as compose_config,
    )

    directory = directory.resolve()
    program = ProgramSettings(host=host, prefix_links=prefix_links)

    try:
        site = load_site_config(site_config, directory=directory)
        pages = load_pages(pages_path) if pages_path else []
        hook = None if no_hook else load_override_hook(directory)
        config = compose_config(
            program,
            str(directory),
            stage,
            port,
            pages,
            site=site,
            modify_config=hook,
        )
    except (StageError, ConfigError, ConfigContractError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    # A hook may hand back the bundler layout itself
    rendered = config.to_bundler_dict() if isinstance(config, BuildConfiguration) else config
    click.echo(json.dumps(rendered, indent=2, default=str))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
