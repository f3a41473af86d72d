"""
CLI entrypoint. Use from project root:
  python main.py "space battle with the Federation fleet"
  python -m shorts_automation "topic" [--platform youtube] [--no-publish]
"""

import argparse
import logging
import sys
from typing import List, Optional

DEFAULT_TOPIC = "space battle with the Federation fleet"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an AI short video from a topic and publish it"
    )
    parser.add_argument("topic", nargs="?", default=DEFAULT_TOPIC, help="Topic of the short")
    parser.add_argument(
        "--platform",
        action="append",
        dest="platforms",
        metavar="NAME",
        help="Publish destination (repeatable); defaults to PUBLISH_PLATFORMS",
    )
    parser.add_argument("--no-publish", action="store_true", help="Skip publishing")
    parser.add_argument("--env-file", type=str, help="Path to a .env file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    from shorts_automation.adapters import default_adapters
    from shorts_automation.application.pipeline import ShortsPipeline
    from shorts_automation.config import load_settings
    from shorts_automation.errors import ConfigError
    from shorts_automation.logging_utils import get_logger

    args = build_parser().parse_args(argv)
    logger = get_logger(level=logging.DEBUG if args.verbose else logging.INFO)
    logger.info("Starting AI shorts generator...")

    try:
        settings = load_settings(args.env_file)
    except ConfigError as e:
        logger.critical("Configuration error: %s", e)
        return 1

    if args.no_publish:
        settings.publish_platforms = []
    elif args.platforms:
        settings.publish_platforms = [p.lower() for p in args.platforms]

    logger.info("Bot running as: %s", settings.app_name)
    logger.info("Text AI: %s (%s)", settings.text_ai_provider, settings.text_ai_endpoint)
    logger.info("Video AI endpoint: %s", settings.video_ai_endpoint)
    settings.warn_missing_credentials(logger)

    pipeline = ShortsPipeline(
        **default_adapters(settings, logger),
        settings=settings,
        logger=logger,
    )
    report = pipeline.run(args.topic)
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
