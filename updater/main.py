"""Main module entrypoint for reporting job events from the command line.

This module validates startup configuration and dispatches one report to the
orchestration service.
"""

import argparse
import json
import logging
from typing import Sequence

from updater.adapters import UpdateApiError
from updater.bootstrap import bootstrap_create_api_client, bootstrap_create_job_reporter
from updater.config import config_load_settings

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    """Run selected report command with validated startup configuration.

    Args:
        argv: Optional argument list, `sys.argv` when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when the service call fails.
    """

    argument_parser = argparse.ArgumentParser(description="Update job reporting entrypoint")
    argument_parser.add_argument(
        "command",
        choices=("mark-as-processed", "record-error", "increment-metric"),
        help="Report command: `mark-as-processed` completes the job, `record-error` records a job error, "
        "`increment-metric` reports one metric increment",
        type=str,
    )
    argument_parser.add_argument("--base-commit-sha", dest="base_commit_sha", type=str)
    argument_parser.add_argument("--error-type", dest="error_type", type=str)
    argument_parser.add_argument(
        "--details-json",
        dest="details_json",
        type=str,
        help="Error details as a JSON object",
    )
    argument_parser.add_argument(
        "--unknown",
        dest="unknown",
        action="store_true",
        help="Record the error through the unknown-error endpoint",
    )
    argument_parser.add_argument("--metric", dest="metric", type=str)
    argument_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="Metric tag as key=value, repeatable",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()
    logging.basicConfig(level=settings.log_level)

    try:
        if parsed_arguments.command == "mark-as-processed":
            if not parsed_arguments.base_commit_sha:
                argument_parser.error("--base-commit-sha is required for mark-as-processed")
            bootstrap_create_job_reporter(settings=settings).job_report_completion(
                base_commit_sha=parsed_arguments.base_commit_sha
            )
            return

        if parsed_arguments.command == "record-error":
            error_details = None
            if parsed_arguments.details_json:
                try:
                    error_details = json.loads(parsed_arguments.details_json)
                except json.JSONDecodeError as error:
                    argument_parser.error(f"--details-json is not valid JSON: {error}")
                if not isinstance(error_details, dict):
                    argument_parser.error("--details-json must be a JSON object")
            bootstrap_create_job_reporter(settings=settings).job_report_error(
                error_type=parsed_arguments.error_type,
                error_details=error_details,
                known=not parsed_arguments.unknown,
            )
            return

        if not parsed_arguments.metric:
            argument_parser.error("--metric is required for increment-metric")
        try:
            tags = main_parse_tags(parsed_arguments.tags)
        except ValueError as error:
            argument_parser.error(str(error))
        bootstrap_create_api_client(settings=settings).api_increment_metric(parsed_arguments.metric, tags=tags)
    except UpdateApiError as error:
        logger.error("Update job report failed: %s", error)
        raise SystemExit(1) from error


def main_parse_tags(raw_tags: Sequence[str]) -> dict[str, str]:
    """Parse `key=value` metric tags.

    Args:
        raw_tags: Raw tag arguments.

    Returns:
        dict[str, str]: Parsed tag map.

    Raises:
        ValueError: Raised when a tag is not in `key=value` form.
    """

    tags: dict[str, str] = {}
    for raw_tag in raw_tags:
        key, separator, value = raw_tag.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"Metric tag must be key=value: {raw_tag}")
        tags[key.strip()] = value.strip()
    return tags


if __name__ == "__main__":
    main()
