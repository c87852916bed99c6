"""Command-line entry point for the Running Belt plugin.

Usage:
    runb -a APPLICATION -s SYSTEM -e ENVIRONMENT [-t TOOL] [-v]

Environment Variables:
    SENHASEGURA_URL: DSM API base URL
    SENHASEGURA_CLIENT_ID / SENHASEGURA_CLIENT_SECRET: OAuth2 client credentials
    SENHASEGURA_DISABLE_RUNB: Set to true to disable the plugin
    SENHASEGURA_SECRETS_FILE: Variables file to append to (default: .runb.vars)
    SENHASEGURA_MAPPING_FILE: Optional variable mapping file
    SENHASEGURA_CONFIG_FILE: Optional YAML config file
"""

import argparse
import logging
import sys

from .config import load_config
from .errors import RunbError
from .formats import valid_tools
from .logging_utils import configure_logging
from .plugin import run_belt

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runb",
        description=(
            "Running Belt plugin to insert/get/replace environment variables "
            "in most CI/CD pipelines."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose mode")
    parser.add_argument(
        "-a", "--application", required=True, help="Application name (required)"
    )
    parser.add_argument("-s", "--system", required=True, help="Application system (required)")
    parser.add_argument(
        "-e", "--environment", required=True, help="Application environment (required)"
    )
    parser.add_argument(
        "-t",
        "--tool",
        default="linux",
        help=f"Tool name [{', '.join(valid_tools())}]",
    )
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.add_argument(
        "-o", "--output", help="Variables file (overrides SENHASEGURA_SECRETS_FILE)"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the plugin and return the process exit status."""
    args = build_parser().parse_args(argv)
    redactor = configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        if args.output:
            config.secrets_file = args.output

        result = run_belt(
            config,
            tool=args.tool,
            application=args.application,
            system=args.system,
            environment=args.environment,
            redactor=redactor,
        )
    except RunbError as e:
        logger.debug("Plugin run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.count:
        print(f"Injected {result.count} variable(s) into {result.path} ({result.tool})")
    else:
        print("No secrets to be injected!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
