"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
or runs one catalog command against the configured registry.
"""

import argparse
import asyncio
import json
import logging

import uvicorn

from appstore.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_catalog_aggregator,
    bootstrap_create_registry_client,
)
from appstore.config import config_configure_logging, config_load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a command reports a failure.
    """

    argument_parser = argparse.ArgumentParser(description="App store service runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "catalog-list", "repository-access"),
        help="Runtime command: `api` starts server, `catalog-list` prints the app catalog as JSON, "
        "`repository-access` prints an access report for `--repository`",
        type=str,
    )
    argument_parser.add_argument(
        "--repository",
        dest="repository",
        type=str,
        help="Repository name in `<namespace>/<repo>` form for `repository-access`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()

    if parsed_arguments.command == "catalog-list":
        config_configure_logging(settings.log_level)
        app_catalog = bootstrap_create_catalog_aggregator(settings)
        records = asyncio.run(app_catalog.catalog_fetch_all())
        print(json.dumps([record.to_payload() for record in records], indent=2))
        return

    if parsed_arguments.command == "repository-access":
        if not (parsed_arguments.repository or "").strip():
            argument_parser.error("--repository is required for `repository-access`")
        config_configure_logging(settings.log_level)
        registry_client = bootstrap_create_registry_client(settings)
        report = asyncio.run(registry_client.registry_test_repository_access(parsed_arguments.repository.strip()))
        print(json.dumps(report.to_payload(), indent=2))
        if report.error is not None:
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings)
    logger.info("Server listening on http://%s:%s", settings.application_host, settings.application_port)
    logger.info("API documentation available at http://%s:%s/api-docs", settings.application_host, settings.application_port)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
