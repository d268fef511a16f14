"""Command line entry point for control plane load balancing validation.

Usage:
    python -m cplb_validate [options] config_file

Arguments:
    config_file: YAML or JSON file holding either the load balancing block or
        a complete k0s ClusterConfig document
"""

import argparse
import json
import logging
import sys

import yaml

from cplb_validate.errors import ErrorCollector
from cplb_validate.loader import ConfigLoadError, dump_spec, load_spec
from cplb_validate.validation import validate

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_LOAD_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_spec(data: dict, output: str) -> str:
    """Render a dumped spec as YAML or JSON text."""
    if output == "json":
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, sort_keys=False)


def check_configuration(
    config_path: str,
    external_address: str | None = None,
    output: str = "yaml",
) -> int:
    """Load, default and validate a configuration file.

    The defaulted configuration is printed to stdout when it is valid. All
    validation errors are logged together in a summary otherwise.

    Args:
        config_path: Path to the configuration file
        external_address: Overrides the API external address from the file
        output: Output format for the defaulted configuration ("yaml" or "json")

    Returns:
        Exit code (0 for a valid configuration, non-zero otherwise).
    """
    error_collector = ErrorCollector()

    try:
        logger.info("Loading configuration from %s", config_path)
        loaded = load_spec(config_path)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_LOAD_ERROR
    except ConfigLoadError as e:
        logger.error("Failed to load configuration: %s", e)
        return EXIT_LOAD_ERROR

    if loaded.spec is None:
        logger.info("No control plane load balancing configuration found")
        return EXIT_SUCCESS

    if external_address is None:
        external_address = loaded.external_address

    if not loaded.spec.enabled:
        logger.info("Control plane load balancing is disabled")

    error_collector.extend(validate(loaded.spec, external_address))

    if error_collector.has_errors():
        error_collector.log_summary()
        return EXIT_VALIDATION_ERROR

    logger.info("Configuration is valid")
    print(format_spec(dump_spec(loaded.spec), output), end="")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point for configuration validation.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Validate and default k0s control plane load balancing configuration",
        prog="python -m cplb_validate",
    )
    parser.add_argument(
        "config_file",
        help="YAML or JSON file with the load balancing block or a k0s ClusterConfig",
    )
    parser.add_argument(
        "--external-address",
        default=None,
        help="API external address (overrides spec.api.externalAddress from the file)",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format for the defaulted configuration (default: yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    return check_configuration(
        config_path=args.config_file,
        external_address=args.external_address,
        output=args.output,
    )


if __name__ == "__main__":
    sys.exit(main())
