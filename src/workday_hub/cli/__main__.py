"""
Command-line interface for Workday Hub.

Credentials and the WSDL location come from WDAY_* settings (environment or
.env file); see ``workday_hub.config.settings``.

Usage:
    python -m workday_hub.cli <command> [options]

Available commands:
    update-email     - Set a worker's work email
    update-phone     - Set a worker's work phone
    update-photo     - Replace a worker's photo
    add-account      - Create a Workday account for a worker
    update-username  - Rename a worker's Workday account
    list-operations  - List operations declared by the WSDL
    list-types       - List types declared by the WSDL

Examples:
    python -m workday_hub.cli update-email 5001 jdoe@example.com
    python -m workday_hub.cli update-phone CON900 555-0100 --intl-code 1 --area-code 408
    python -m workday_hub.cli update-username 5001 jdoe --show-request
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from workday_hub.domain.models import PhoneNumber
from workday_hub.io.connectors.workday import (
    CallRecord,
    Operation,
    WorkdayClient,
    WorkdayClientError,
    WorkdayConfigurationError,
    WorkdayValidationError,
)
from workday_hub.utils.logging import mask_envelope

EXIT_OK = 0
EXIT_CALL_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workday_hub.cli",
        description="Workday Hub CLI - maintain worker data via Workday web services",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Work email
  python -m workday_hub.cli update-email 5001 jdoe@example.com

  # Work phone for a contingent worker
  python -m workday_hub.cli update-phone CON900 555-0100 --intl-code 1 --area-code 408

  # Photo, printing the request envelope that was sent
  python -m workday_hub.cli update-photo 5001 ./jdoe.jpg --show-request
        """,
    )

    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument(
        "--show-request",
        action="store_true",
        help="Print the raw SOAP request envelope",
    )
    output_options.add_argument(
        "--show-response",
        action="store_true",
        help="Print the raw SOAP response envelope",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    email_parser = subparsers.add_parser(
        "update-email", parents=[output_options], help="Set a worker's work email"
    )
    email_parser.add_argument("worker_id", help="Employee or contingent worker ID")
    email_parser.add_argument("email", help="New work email address")

    phone_parser = subparsers.add_parser(
        "update-phone", parents=[output_options], help="Set a worker's work phone"
    )
    phone_parser.add_argument("worker_id", help="Employee or contingent worker ID")
    phone_parser.add_argument("number", help="Phone number without codes")
    phone_parser.add_argument("--intl-code", help="International dialling code")
    phone_parser.add_argument("--area-code", help="Area code")
    phone_parser.add_argument("--extension", help="Extension")

    photo_parser = subparsers.add_parser(
        "update-photo", parents=[output_options], help="Replace a worker's photo"
    )
    photo_parser.add_argument("worker_id", help="Employee or contingent worker ID")
    photo_parser.add_argument("photo", help="Path of the image file")

    add_parser = subparsers.add_parser(
        "add-account",
        parents=[output_options],
        help="Create a Workday account (random password, SSO assumed)",
    )
    add_parser.add_argument("worker_id", help="Employee or contingent worker ID")
    add_parser.add_argument("username", help="User name of the new account")

    rename_parser = subparsers.add_parser(
        "update-username",
        parents=[output_options],
        help="Rename a worker's Workday account",
    )
    rename_parser.add_argument("worker_id", help="Employee or contingent worker ID")
    rename_parser.add_argument("username", help="New user name")

    subparsers.add_parser("list-operations", help="List operations in the WSDL")
    subparsers.add_parser("list-types", help="List types in the WSDL")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for a failed call, 2 for configuration errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        client = WorkdayClient.from_settings()
    except WorkdayConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.command in ("list-operations", "list-types"):
        try:
            entries = (
                client.list_operations()
                if args.command == "list-operations"
                else client.list_types()
            )
        except WorkdayClientError as e:
            print(f"Introspection failed: {e}", file=sys.stderr)
            return EXIT_CALL_FAILED
        for entry in entries:
            print(entry)
        return EXIT_OK

    record = _execute(client, args)
    return _report(record, args)


def _execute(client: WorkdayClient, args: argparse.Namespace) -> CallRecord:
    if args.command == "update-email":
        return client.update_email(args.worker_id, args.email)
    if args.command == "update-phone":
        try:
            phone = PhoneNumber(
                number=args.number,
                intl_code=args.intl_code,
                area_code=args.area_code,
                extension=args.extension,
            )
        except ValidationError as e:
            return client.invoker.reject(
                Operation.MAINTAIN_CONTACT_INFORMATION,
                WorkdayValidationError(f"Invalid phone number: {e.errors()[0]['msg']}"),
            )
        return client.update_work_phone(args.worker_id, phone)
    if args.command == "update-photo":
        return client.update_photo(args.worker_id, args.photo)
    if args.command == "add-account":
        return client.add_workday_account(args.worker_id, args.username)
    if args.command == "update-username":
        return client.update_username(args.worker_id, args.username)
    raise ValueError(f"Unknown command: {args.command}")


def _report(record: CallRecord, args: argparse.Namespace) -> int:
    print(json.dumps(record.summary(), indent=2, ensure_ascii=False))
    if args.show_request:
        print("--- request ---")
        print(mask_envelope(record.request_text or "(no request sent)"))
    if args.show_response:
        print("--- response ---")
        print(record.response_text or "(no response received)")
    return EXIT_OK if record.ok else EXIT_CALL_FAILED


if __name__ == "__main__":
    sys.exit(main())
