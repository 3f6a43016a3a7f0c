"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from pdfcrawl import config as env
from pdfcrawl.services.crawl_config_parser import CrawlConfigParser
from pdfcrawl.services.crawl_executor import CrawlExecutor
from pdfcrawl.services.href_extractor import HrefExtractor
from pdfcrawl.services.playwright_renderer import PlaywrightRenderer, PlaywrightRendererOptions


# Environment variables used by the container (read via `pdfcrawl.config` helpers).
#
# Notes:
# - Types are enforced by the helper used (`get_int_env`, `get_str_env`, etc.).
# - Defaults shown here are the effective defaults used when the env var is unset.
# - Command-line options and YAML config files override these per run.
#
# PDFCRAWL_USER_AGENT (str, default: "pdfcrawl/0.1")
#   User-Agent of the headless browser context.
#
# PDFCRAWL_CONCURRENCY (int, default: 5)
#   Maximum number of pages rendered at the same time.
#
# PDFCRAWL_OUTPUT_DIR (str, default: "./output")
#   Directory PDF artifacts are written to.
#
# PDFCRAWL_NAV_TIMEOUT_MS (int milliseconds, default: 30000)
#   Per-navigation timeout. Expiry is handled like any other navigation failure.
#
# PDFCRAWL_WAIT_UNTIL (str, default: "networkidle")
#   Playwright load state to wait for: domcontentloaded | load | networkidle.
#
# PDFCRAWL_MEDIA (str, default: "print")
#   CSS media type emulated before capture: screen | print.
#
# PDFCRAWL_COLOR_SCHEME (str, default: "light")
#   Color scheme emulated before capture: light | dark | no-preference.
ENV = {
    "PDFCRAWL_USER_AGENT": env.get_str_env("PDFCRAWL_USER_AGENT", "pdfcrawl/0.1"),
    "PDFCRAWL_CONCURRENCY": env.get_int_env("PDFCRAWL_CONCURRENCY", 5),
    "PDFCRAWL_OUTPUT_DIR": env.get_str_env("PDFCRAWL_OUTPUT_DIR", "./output"),
    "PDFCRAWL_NAV_TIMEOUT_MS": env.get_int_env("PDFCRAWL_NAV_TIMEOUT_MS", 30_000),
    "PDFCRAWL_WAIT_UNTIL": env.get_str_env("PDFCRAWL_WAIT_UNTIL", "networkidle").strip().lower(),
    "PDFCRAWL_MEDIA": env.get_str_env("PDFCRAWL_MEDIA", "print").strip().lower(),
    "PDFCRAWL_COLOR_SCHEME": env.get_str_env("PDFCRAWL_COLOR_SCHEME", "light").strip().lower(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the pdfcrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    href_extractor = providers.Singleton(
        HrefExtractor
    )

    renderer = providers.Singleton(
        PlaywrightRenderer,
        user_agent=config.PDFCRAWL_USER_AGENT.as_(str),
        options=providers.Factory(
            PlaywrightRendererOptions,
            timeout_ms=config.PDFCRAWL_NAV_TIMEOUT_MS.as_(int),
            wait_until=config.PDFCRAWL_WAIT_UNTIL.as_(str),
        ),
        href_extractor=href_extractor,
    )

    config_parser = providers.Singleton(
        CrawlConfigParser,
        default_concurrency=config.PDFCRAWL_CONCURRENCY.as_(int),
        default_output_dir=config.PDFCRAWL_OUTPUT_DIR.as_(str),
        default_media=config.PDFCRAWL_MEDIA.as_(str),
        default_color_scheme=config.PDFCRAWL_COLOR_SCHEME.as_(str),
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        renderer=renderer,
    )
