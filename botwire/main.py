"""Main entry point for botwire.

Initializes logging in two phases (defaults then config-driven), loads
the commands declared in settings.yaml into a registry and writes the
exported registrations to stdout as YAML.

Key functions:
    main: Build the registry and print it; returns the exit code.
    run: Console script wrapper around main().
"""

import sys

import structlog
import yaml

from .logging_config import setup_logging


def main() -> int:
    """Load configured commands and dump them."""
    # Phase 1: defaults, cache_logger_on_first_use=False
    setup_logging()
    logger = structlog.get_logger("botwire")

    from .commands import CommandRegistry
    from .config import get_config
    from .exceptions import ConfigurationError

    try:
        config = get_config()
        config.validate()

        # Phase 2: reconfigure with real config
        setup_logging(config)

        registry = CommandRegistry()
        registry.load(config.commands)
    except ConfigurationError as e:
        logger.error("config_error", error=str(e), setting=e.setting_name)
        return 1

    yaml.safe_dump(registry.export(), sys.stdout, default_flow_style=False, sort_keys=False)
    return 0


def run():
    """Synchronous entry point for the ``botwire`` console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
