"""Entry point to the Daily Token Quota REST API service.

This source file contains entry point to the service. It is implemented in the
main() function.
"""

import os
from argparse import ArgumentParser

import constants
from log import get_logger, setup_logging
from configuration import configuration
from quota.errors import StoreUnavailableError
from quota.quota_service import QuotaService
from runners.quota_scheduler import start_quota_scheduler
from runners.uvicorn import start_uvicorn

logger = get_logger(__name__)


def create_argument_parser() -> ArgumentParser:
    """Create and configure argument parser object."""
    parser = ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        help="make it verbose",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-d",
        "--dump-configuration",
        dest="dump_configuration",
        help="dump actual configuration into JSON file and quit",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_file",
        help=f"path to configuration file (default: {constants.DEFAULT_CONFIGURATION_FILE})",
        default=constants.DEFAULT_CONFIGURATION_FILE,
    )
    parser.add_argument(
        "-r",
        "--reset-now",
        dest="reset_now",
        help="reset all stale quota records once, print the result and quit",
        action="store_true",
        default=False,
    )

    return parser


def reset_now() -> int:
    """Run one batch reconciliation and print its result as JSON.

    Returns:
        Process exit code, zero when all stale records were reset.
    """
    try:
        service = QuotaService(configuration.quota_configuration)
    except StoreUnavailableError as e:
        logger.error("Unable to connect to quota storage: %s", e)
        return 1

    try:
        result = service.reset_stale()
    finally:
        service.close()

    print(result.model_dump_json())
    return 0 if result.success else 1


def main() -> None:
    """Entry point to the web service."""
    parser = create_argument_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger.info("Daily Token Quota startup")

    configuration.load_configuration(args.config_file)
    logger.info("Configuration: %s", configuration.configuration)

    # -d or --dump-configuration CLI flags are used to dump the actual configuration
    # to a JSON file w/o doing any other operation
    if args.dump_configuration:
        try:
            configuration.configuration.dump()
            logger.info("Configuration dumped to configuration.json")
        except Exception as e:
            logger.error("Failed to dump configuration: %s", e)
            raise SystemExit(1) from e
        return

    # -r or --reset-now CLI flags are used by external schedulers such as cron
    if args.reset_now:
        raise SystemExit(reset_now())

    # Store config path in env so each uvicorn worker can load it
    # (step is needed because process context isn't shared).
    os.environ[constants.CONFIGURATION_PATH_ENV_VARIABLE] = args.config_file

    start_quota_scheduler(configuration.quota_configuration)

    # if every previous steps don't fail, start the service on specified port
    start_uvicorn(configuration.service_configuration, args.verbose)
    logger.info("Daily Token Quota finished")


if __name__ == "__main__":
    main()
