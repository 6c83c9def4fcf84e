"""Command line entrypoint for running an accessibility insight audit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from a11yinsights.config import InsightsConfig
from a11yinsights.errors import InsightsError
from a11yinsights.llm import list_providers
from a11yinsights.logging_config import configure_logging
from a11yinsights.pipeline import run_pipeline

EXIT_PASSED = 0
EXIT_NO_SUGGESTIONS = 1
EXIT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Audit a page with axe-core and ask an LLM for remediation suggestions"
    )
    parser.add_argument("url", nargs="?", help="Page to audit. Defaults to the configured target URL.")
    parser.add_argument(
        "--provider",
        help=f"Insight provider to use ({', '.join(list_providers())}).",
    )
    parser.add_argument("--model", help="Override the provider's default model.")
    parser.add_argument("--config", type=Path, help="Path to a JSON configuration file.")
    parser.add_argument("--timeout", type=float, help="Overall time budget for the run in seconds.")
    parser.add_argument("--headed", action="store_true", help="Show the browser window.")
    parser.add_argument("--log-level", default="INFO", help="Python logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    # configuration warnings need a handler before the pipeline installs one
    configure_logging(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = InsightsConfig.load(args.config)
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.timeout is not None:
        config.pipeline_timeout = max(1.0, args.timeout)
    if args.headed:
        config.headless = False

    try:
        report = run_pipeline(config, args.url, log_level=args.log_level)
    except InsightsError as exc:
        logging.getLogger("a11y_audit").error("Audit failed: %s", exc)
        return EXIT_ERROR

    print("🔍 **Accessibility Results and AI Insights**")
    print(report.suggestions)
    return EXIT_PASSED if report.passed else EXIT_NO_SUGGESTIONS


if __name__ == "__main__":
    sys.exit(main())
