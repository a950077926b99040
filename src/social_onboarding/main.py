"""
Application entry point — composition root and command line.

    social-onboarding register 10 11 [--async]
    social-onboarding welcome 10

Responsibilities:
  1. Load and validate configuration from environment
  2. Configure structlog
  3. Create concrete adapters (repository, social network, mail, outcome sink)
  4. Run each requested person id through the pipeline inside a
     LoggingExecutionContext
  5. Exit 0 when every run succeeded, 1 otherwise

This is the ONLY place where concrete adapter classes are instantiated.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from railway import LoggingExecutionContext

from social_onboarding import __version__
from social_onboarding.adapters.http_client import (
    AsyncHttpSocialNetwork,
    HttpEmailSender,
    HttpSocialNetwork,
)
from social_onboarding.adapters.logger import StructlogRegistrationLogger
from social_onboarding.adapters.repository import (
    AsyncInMemoryPersonRepository,
    InMemoryPersonRepository,
)
from social_onboarding.config import AppSettings
from social_onboarding.pipeline import (
    register_person,
    register_person_async,
    send_welcome_email,
)


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured console logging.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@dataclass(frozen=True, slots=True)
class Adapters:
    repository: InMemoryPersonRepository
    network: HttpSocialNetwork
    async_network: AsyncHttpSocialNetwork
    email_sender: HttpEmailSender | None
    registration_log: StructlogRegistrationLogger
    welcome_log: StructlogRegistrationLogger


def _create_adapters(settings: AppSettings) -> Adapters:
    """Instantiate all concrete adapters from application settings."""
    seed_file = settings.directory.seed_file
    repository = (
        InMemoryPersonRepository.from_seed_file(seed_file)
        if seed_file is not None
        else InMemoryPersonRepository()
    )
    api_key = settings.social.api_key.get_secret_value()
    return Adapters(
        repository=repository,
        network=HttpSocialNetwork(settings.social.url, api_key, settings.http_timeout_seconds),
        async_network=AsyncHttpSocialNetwork(settings.social.url, api_key, settings.http_timeout_seconds),
        email_sender=(
            HttpEmailSender(settings.email.url, settings.http_timeout_seconds)
            if settings.email is not None
            else None
        ),
        registration_log=StructlogRegistrationLogger("registration"),
        welcome_log=StructlogRegistrationLogger("welcome_email"),
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="social-onboarding")
    parser.add_argument("--version", action="version", version=__version__)
    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="register people on the social network")
    register.add_argument("person_ids", nargs="+", type=int, metavar="PERSON_ID")
    register.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="use the asyncio pipeline",
    )

    welcome = commands.add_parser("welcome", help="send the welcome email")
    welcome.add_argument("person_ids", nargs="+", type=int, metavar="PERSON_ID")
    return parser


def _register(adapters: Adapters, settings: AppSettings, person_ids: Sequence[int], use_async: bool) -> bool:
    ctx = LoggingExecutionContext(operation="RegisterPerson")
    urls: list[str] = []
    if use_async:
        repository = AsyncInMemoryPersonRepository(adapters.repository)

        async def register_all() -> list[str]:
            return [
                await register_person_async(
                    person_id,
                    repository,
                    adapters.async_network,
                    adapters.registration_log,
                    settings.tweet_message,
                    ctx,
                )
                for person_id in person_ids
            ]

        urls = asyncio.run(register_all())
    else:
        urls = [
            register_person(
                person_id,
                adapters.repository,
                adapters.network,
                adapters.registration_log,
                settings.tweet_message,
                ctx,
            )
            for person_id in person_ids
        ]

    for person_id, url in zip(person_ids, urls):
        print(f"{person_id}\t{url or '-'}")  # noqa: T201
    return all(urls)


def _welcome(adapters: Adapters, person_ids: Sequence[int]) -> bool:
    if adapters.email_sender is None:
        print("FATAL: EMAIL__URL is not configured", file=sys.stderr)  # noqa: T201
        return False
    outcomes = [
        send_welcome_email(person_id, adapters.repository, adapters.email_sender, adapters.welcome_log)
        for person_id in person_ids
    ]
    return all(outcomes)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, wire dependencies and run the requested command."""
    args = _parser().parse_args(argv)

    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info("app.starting", version=__version__, command=args.command, log_level=settings.log_level)

    try:
        adapters = _create_adapters(settings)
    except Exception as e:
        log.error("app.fatal_error", error=str(e))
        sys.exit(1)

    if args.command == "register":
        ok = _register(adapters, settings, args.person_ids, args.use_async)
    else:
        ok = _welcome(adapters, args.person_ids)

    log.info("app.finished", command=args.command, ok=ok)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
