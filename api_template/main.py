"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service.
"""

import argparse
import logging

import uvicorn

from api_template.api import api_list_route_table
from api_template.bootstrap import bootstrap_create_application
from api_template.config import config_load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="API Template runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "routes"),
        help="Runtime command: `api` starts server, `routes` prints the mounted route table",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    application = bootstrap_create_application(settings=settings)

    if parsed_arguments.command == "routes":
        main_print_route_table(api_list_route_table(application))
        return

    logger.info(
        "Starting server on http://%s:%s (environment: %s)",
        settings.application_host,
        settings.application_port,
        settings.environment_name,
    )
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
        log_config=None,
        access_log=False,
    )


def main_print_route_table(route_table: list[tuple[str, str, str]]) -> None:
    """Print one aligned line per mounted route.

    Args:
        route_table: Rows of `(method, path, name)`.

    Returns:
        None: Prints the table to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for method, path, name in route_table:
        print(f"{method:<7} {path:<20} {name}")


if __name__ == "__main__":
    main()
