# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Command line application to create, list and delete DLP job triggers."""

import argparse
import logging
import os
import sys
from typing import Callable, List, NoReturn, Optional, TextIO

from dlp_triggers.errors import RemoteError, UsageError, ValidationError
from dlp_triggers.service import DlpTriggerService, TriggerService
from dlp_triggers.trigger import (build_trigger, likelihood_names,
                                  project_path, trigger_name)

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[], TriggerService]


class TriggerArgumentParser(argparse.ArgumentParser):
    """Raises UsageError instead of exiting on bad arguments."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    """Returns the command line parser."""
    parser = TriggerArgumentParser(
        prog="dlp-triggers",
        description="Create, list and delete Cloud DLP job triggers.")

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument(
        "--create",
        nargs="?",
        const=True,
        default=False,
        metavar="VALUE",
        help="Create a trigger to scan a Cloud Storage bucket. An optional "
             "value is accepted; the trigger ID comes from --triggerId.")
    actions.add_argument(
        "--list",
        action="store_true",
        help="List the triggers of the project.")
    actions.add_argument(
        "--delete",
        action="store_true",
        help="Delete a trigger.")

    parser.add_argument(
        "--projectId",
        dest="project_id",
        type=str,
        default=os.environ.get("GOOGLE_CLOUD_PROJECT"),
        help="The Google Cloud project to be used. Defaults to "
             "$GOOGLE_CLOUD_PROJECT.")
    parser.add_argument(
        "--triggerId",
        dest="trigger_id",
        type=str,
        help="The ID of the trigger to create or delete.")
    parser.add_argument(
        "--displayName",
        dest="display_name",
        type=str,
        default="",
        help="Display name of the trigger to create.")
    parser.add_argument(
        "--description",
        type=str,
        default="",
        help="Description of the trigger to create.")
    parser.add_argument(
        "--gcsUrl",
        dest="gcs_url",
        type=str,
        help="URL of the Cloud Storage location to scan, "
             "e.g. gs://my-bucket-name.")
    # Kept as text, the trigger builder validates it.
    parser.add_argument(
        "--scanPeriod",
        dest="scan_period",
        type=str,
        help="How often to wait between scans, in days (minimum 1 day).")
    parser.add_argument(
        "--infoTypes",
        dest="info_types",
        nargs="*",
        action="extend",
        default=[],
        help="Info types to match, e.g. PHONE_NUMBER EMAIL_ADDRESS.")
    parser.add_argument(
        "--minLikelihood",
        dest="min_likelihood",
        type=str,
        default="LIKELIHOOD_UNSPECIFIED",
        help="Minimum likelihood required before returning a match. "
             f"One of: {', '.join(likelihood_names())}.")
    parser.add_argument(
        "--maxFindings",
        dest="max_findings",
        type=int,
        default=0,
        help="Maximum number of findings to report per request "
             "(0 = server maximum).")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages.")
    return parser


def parse_arguments(parser: argparse.ArgumentParser,
                    argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command line arguments.

    Raises:
        UsageError: If an action or the project is missing, or an argument
            is malformed.
    """
    args = parser.parse_args(argv)
    if not args.project_id:
        parser.error("the following arguments are required: --projectId")
    return args


def create_trigger(args: argparse.Namespace,
                   service_factory: ServiceFactory, out: TextIO) -> None:
    """Schedules a DLP inspection trigger for a Cloud Storage location."""
    try:
        definition = build_trigger(
            storage_location=args.gcs_url,
            scan_period_days=args.scan_period,
            min_likelihood=args.min_likelihood,
            max_findings=args.max_findings,
            info_types=args.info_types,
            trigger_id=args.trigger_id,
            display_name=args.display_name,
            description=args.description,
        )
        with service_factory() as service:
            created = service.create_trigger(
                project_path(args.project_id), definition)
    except (ValidationError, RemoteError) as error:
        print(f"Error creating trigger: {error}", file=out)
        return
    print(f"Created Trigger: {created.display_name}", file=out)


def list_triggers(args: argparse.Namespace,
                  service_factory: ServiceFactory, out: TextIO) -> None:
    """Prints all DLP triggers of the project."""
    try:
        with service_factory() as service:
            for trigger in service.list_triggers(
                    project_path(args.project_id)):
                print(f"Trigger: {trigger.name}", file=out)
                print(f"Created: {trigger.create_time}", file=out)
                print(f"Updated: {trigger.update_time}", file=out)
                if trigger.display_name:
                    print(f"Display name: {trigger.display_name}", file=out)
                if trigger.description:
                    print(f"Description: {trigger.description}", file=out)
                print(f"Status: {trigger.status}", file=out)
                print(f"Error count: {trigger.error_count}", file=out)
    except RemoteError as error:
        print(f"Error listing triggers: {error}", file=out)


def delete_trigger(args: argparse.Namespace,
                   service_factory: ServiceFactory, out: TextIO) -> None:
    """Deletes a DLP trigger of the project."""
    try:
        if not args.trigger_id:
            raise ValidationError("A trigger ID is required to delete a "
                                  "trigger")
        name = trigger_name(args.project_id, args.trigger_id)
        with service_factory() as service:
            service.delete_trigger(name)
    except (ValidationError, RemoteError) as error:
        print(f"Error deleting trigger: {error}", file=out)
        return
    logger.debug("Deleted job trigger %s", name)


def run(args: argparse.Namespace,
        service_factory: ServiceFactory = DlpTriggerService,
        out: Optional[TextIO] = None) -> None:
    """Runs the selected action against the DLP API.

    Args:
        args: The parsed command line arguments.
        service_factory: Returns a new session to the trigger service.
        out: Stream the results are printed to. Defaults to stdout.
    """
    out = out or sys.stdout
    if args.create:
        create_trigger(args, service_factory, out)
    elif args.list:
        list_triggers(args, service_factory, out)
    elif args.delete:
        delete_trigger(args, service_factory, out)


def main(argv: Optional[List[str]] = None,
         service_factory: ServiceFactory = DlpTriggerService,
         out: Optional[TextIO] = None) -> int:
    """Parses the command line and runs the selected action.

    Returns:
        0 once the action ran, even when it printed an error, and 1 on
        command line usage errors.
    """
    out = out or sys.stdout
    parser = create_parser()
    try:
        args = parse_arguments(parser, argv)
    except UsageError as error:
        print(error, file=out)
        parser.print_help(out)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING)
    run(args, service_factory, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
