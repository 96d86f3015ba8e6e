"""Operator utility for the Cafe Bazaar configuration.

Two commands are available:

1. ``check`` instantiates ``AppSettings`` from the provided ``.env`` file,
   surfacing missing or malformed ``CAFEBAZAAR_*`` entries before the service
   refuses to start.
2. ``authorize-url`` additionally prints the consent URL an administrator must
   open once to grant offline access. A relative redirect path needs
   ``--public-url`` so the callback can be resolved to an absolute URI.

Example usages::

    python -m scripts.check_env check --env-file /opt/bazaar/.env

    python -m scripts.check_env authorize-url --env-file /opt/bazaar/.env \
        --public-url https://shop.example.com
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from urllib.parse import urlparse

from pydantic import ValidationError

from bazaar_devapi.clients import DeveloperApiClient
from bazaar_devapi.core.config import AppSettings, _load_env_file
from bazaar_devapi.core.errors import DeveloperApiError
from bazaar_devapi.services import AuthorizationFlowCoordinator
from bazaar_devapi.storage import InMemoryTokenStore

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    """Ensure required settings can be loaded from the supplied env file."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _print_authorization_url(settings: AppSettings, public_url: str | None) -> int:
    scheme = host = None
    if public_url:
        parsed = urlparse(public_url)
        scheme, host = parsed.scheme, parsed.netloc

    coordinator = AuthorizationFlowCoordinator(
        settings.bazaar,
        DeveloperApiClient(settings.bazaar),
        InMemoryTokenStore(),
    )
    try:
        print(coordinator.get_authorization_uri(scheme=scheme, host=host))
    except DeveloperApiError as exc:
        print(f"Cannot build authorization URL: {exc.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate Cafe Bazaar settings and print the consent URL."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
        )

    check_parser = subparsers.add_parser(
        "check",
        help="Validate settings only.",
    )
    add_common_arguments(check_parser)

    url_parser = subparsers.add_parser(
        "authorize-url",
        help="Validate settings and print the Cafe Bazaar consent URL.",
    )
    add_common_arguments(url_parser)
    url_parser.add_argument(
        "--public-url",
        default=None,
        help="Public scheme and host of this service, used for relative redirect paths.",
    )

    return parser


def _ensure_env_file(env_file: Path) -> None:
    if not env_file.exists():
        raise FileNotFoundError(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool."
        )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file

    try:
        _ensure_env_file(env_file)
        settings = _load_settings(env_file)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    if args.command == "authorize-url":
        return _print_authorization_url(settings, args.public_url)

    print("Cafe Bazaar settings OK.")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
