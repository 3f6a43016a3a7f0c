import logging
import sys
from typing import Optional

import click

from pdfcrawl import __version__
from pdfcrawl.container import Container
from pdfcrawl.domain.config import COLOR_SCHEMES, MEDIA_TYPES
from pdfcrawl.exceptions import ConfigNotFoundError, CrawlAbortedError, InvalidRootUrlError, RendererError
from pdfcrawl.services.crawl_config_parser import load_config_file

logger = logging.getLogger("pdfcrawl")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("root_url", required=False)
@click.option("-c", "--concurrency", type=click.IntRange(min=1), default=None, help="Pages rendered at the same time.")
@click.option("-e", "--exclude", multiple=True, help="Skip URLs containing this substring (repeatable).")
@click.option("--dry-run", is_flag=True, help="Crawl without writing PDFs.")
@click.option("--skip-existing", is_flag=True, help="Do not regenerate PDFs that already exist.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--media", type=click.Choice(MEDIA_TYPES), default=None, help="CSS media type to emulate.")
@click.option("--color-scheme", type=click.Choice(COLOR_SCHEMES), default=None, help="Color scheme to emulate.")
@click.option("--with-header", is_flag=True, help="Print header and footer on each PDF page.")
@click.option("-o", "--output-dir", type=click.Path(file_okay=False), default=None, help="Where PDFs are written.")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML crawl config.")
@click.version_option(__version__, "--version")
@click.pass_context
def cli(ctx, root_url, concurrency, exclude, dry_run, skip_existing, verbose, media, color_scheme, with_header, output_dir, config_file):
    """Crawl ROOT_URL and save every same-origin page as a PDF."""
    ctx.exit(main(
        root_url=root_url,
        concurrency=concurrency,
        exclude=exclude,
        dry_run=dry_run,
        skip_existing=skip_existing,
        verbose=verbose,
        media=media,
        color_scheme=color_scheme,
        with_header=with_header,
        output_dir=output_dir,
        config_file=config_file,
    ))


def main(container: Optional[Container] = None, *, config_file: Optional[str] = None, **options) -> int:
    """Build the crawl from options (and an optional YAML file) and run it.

    Returns the process exit status. Per-page failures do not affect it;
    only whether the run completed does.
    """
    # flags only switch things on; an unset flag must not override the file
    for flag in ("dry_run", "skip_existing", "verbose", "with_header"):
        if not options.get(flag):
            options[flag] = None
    _setup_logging(bool(options.get("verbose")))

    if container is None:
        container = Container()

    try:
        data = load_config_file(config_file) if config_file else {}
        crawl_config = container.config_parser().parse(data, config_path=config_file, **options)
    except (ConfigNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_FAILED

    if crawl_config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    executor = container.crawl_executor()
    try:
        result = executor.crawl(crawl_config)
    except InvalidRootUrlError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_FAILED
    except (CrawlAbortedError, RendererError) as e:
        logger.error("Crawl did not complete: %s", e)
        return EXIT_FAILED
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED

    click.echo(
        f"Visited {result.pages_visited} pages: {result.captures} captured, "
        f"{result.captures_skipped} skipped, {result.navigation_failures} failed to load, "
        f"{result.capture_failures} failed to capture"
    )
    return EXIT_INTERRUPTED if result.stopped else EXIT_OK


if __name__ == '__main__':
    sys.exit(cli())
