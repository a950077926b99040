"""
Registration pipeline — PURE orchestration, all I/O goes through ports.

Five steps, each RegistrationContext → Result[RegistrationContext]
(the first one starts from the person id):

  create_context(person_id)
    → register_account(context)
      → authenticate(context)
        → publish(context)
          → update_party(context)

A port that raises is captured by its step as a Failure; the composer then
skips every remaining step. The outcome is reported through the
RegistrationLogger exactly once, from the terminal continuation, never from
inside a step.

The *_async twins run the same flow against the async ports, awaiting one
step at a time.
"""

from __future__ import annotations

from functools import partial

from railway import (
    AsyncStep,
    ErrorCode,
    ExecutionContext,
    FailureDescription,
    NoOpExecutionContext,
    Result,
    Step,
    chain,
    chain_async,
)

from social_onboarding.domain.models import Person, RegistrationContext
from social_onboarding.domain.ports import (
    AsyncPersonRepository,
    AsyncSocialNetwork,
    EmailSender,
    PersonRepository,
    RegistrationLogger,
    SocialNetwork,
)

DEFAULT_MESSAGE = "Hello les cocos"


# ─────────────────────── Synchronous steps ───────────────────────


def create_context(person_id: int, repository: PersonRepository) -> Result[RegistrationContext]:
    """Look the person up and seed a RegistrationContext from the record."""
    return Result.attempt(
        lambda: repository.get_by_id(person_id),
        error_message="Person lookup failed",
    ).map(RegistrationContext.from_person)


def register_account(context: RegistrationContext, network: SocialNetwork) -> Result[RegistrationContext]:
    return Result.attempt(
        lambda: network.register(context.email, context.name),
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        "Account registration failed",
    ).map(context.with_account)


def authenticate(context: RegistrationContext, network: SocialNetwork) -> Result[RegistrationContext]:
    return Result.attempt(
        lambda: network.authenticate(context.email, context.password),
        ErrorCode.AUTHENTICATION_ERROR,
        "Authentication failed",
    ).map(context.with_token)


def publish(
    context: RegistrationContext,
    network: SocialNetwork,
    message: str = DEFAULT_MESSAGE,
) -> Result[RegistrationContext]:
    return Result.attempt(
        lambda: network.tweet(context.token, message),
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        "Publishing failed",
    ).map(context.with_tweet)


def update_party(context: RegistrationContext, repository: PersonRepository) -> Result[RegistrationContext]:
    """Record the new account id on the person; the context passes through unchanged."""

    def persist() -> RegistrationContext:
        repository.update(context.person_id, context.account_id)
        return context

    return Result.attempt(persist, ErrorCode.DATABASE_ERROR, "Party update failed")


def registration_steps(
    repository: PersonRepository,
    network: SocialNetwork,
    message: str = DEFAULT_MESSAGE,
) -> list[Step]:
    """The five registration steps with their ports bound."""
    return [
        partial(create_context, repository=repository),
        partial(register_account, network=network),
        partial(authenticate, network=network),
        partial(publish, network=network, message=message),
        partial(update_party, repository=repository),
    ]


# ─────────────────────── Asynchronous steps ───────────────────────


async def create_context_async(
    person_id: int, repository: AsyncPersonRepository
) -> Result[RegistrationContext]:
    found = await Result.attempt_async(
        lambda: repository.get_by_id(person_id),
        error_message="Person lookup failed",
    )
    return found.map(RegistrationContext.from_person)


async def register_account_async(
    context: RegistrationContext, network: AsyncSocialNetwork
) -> Result[RegistrationContext]:
    account = await Result.attempt_async(
        lambda: network.register(context.email, context.name),
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        "Account registration failed",
    )
    return account.map(context.with_account)


async def authenticate_async(
    context: RegistrationContext, network: AsyncSocialNetwork
) -> Result[RegistrationContext]:
    token = await Result.attempt_async(
        lambda: network.authenticate(context.email, context.password),
        ErrorCode.AUTHENTICATION_ERROR,
        "Authentication failed",
    )
    return token.map(context.with_token)


async def publish_async(
    context: RegistrationContext,
    network: AsyncSocialNetwork,
    message: str = DEFAULT_MESSAGE,
) -> Result[RegistrationContext]:
    tweet = await Result.attempt_async(
        lambda: network.tweet(context.token, message),
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        "Publishing failed",
    )
    return tweet.map(context.with_tweet)


async def update_party_async(
    context: RegistrationContext, repository: AsyncPersonRepository
) -> Result[RegistrationContext]:
    async def persist() -> RegistrationContext:
        await repository.update(context.person_id, context.account_id)
        return context

    return await Result.attempt_async(persist, ErrorCode.DATABASE_ERROR, "Party update failed")


def registration_steps_async(
    repository: AsyncPersonRepository,
    network: AsyncSocialNetwork,
    message: str = DEFAULT_MESSAGE,
) -> list[AsyncStep]:
    return [
        partial(create_context_async, repository=repository),
        partial(register_account_async, network=network),
        partial(authenticate_async, network=network),
        partial(publish_async, network=network, message=message),
        partial(update_party_async, repository=repository),
    ]


# ─────────────────────── Terminal continuations ───────────────────────


def _registered(person_id: int, logger: RegistrationLogger, context: RegistrationContext) -> str:
    logger.log_success(f"User {person_id} registered")
    return context.url or ""


def _not_registered(person_id: int, logger: RegistrationLogger, error: FailureDescription) -> str:
    logger.log_failure(f"Unable to register user : {person_id} {error.message}")
    return ""


# ─────────────────────── Entry points ───────────────────────


def register_person(
    person_id: int,
    repository: PersonRepository,
    network: SocialNetwork,
    logger: RegistrationLogger,
    message: str = DEFAULT_MESSAGE,
    execution_context: ExecutionContext | None = None,
) -> str:
    """
    Register a person on the social network.

    Returns the url of the first post on success, "" on failure. Exactly one
    of logger.log_success / logger.log_failure is called.
    """
    ctx = execution_context or NoOpExecutionContext()
    steps = registration_steps(repository, network, message)
    return ctx.execute(lambda: chain(steps, person_id)).either(
        partial(_registered, person_id, logger),
        partial(_not_registered, person_id, logger),
    )


async def register_person_async(
    person_id: int,
    repository: AsyncPersonRepository,
    network: AsyncSocialNetwork,
    logger: RegistrationLogger,
    message: str = DEFAULT_MESSAGE,
    execution_context: ExecutionContext | None = None,
) -> str:
    """Awaitable twin of register_person; same outcomes for the same port behaviour."""
    ctx = execution_context or NoOpExecutionContext()
    steps = registration_steps_async(repository, network, message)
    result = await ctx.execute_async(lambda: chain_async(steps, person_id))
    return result.either(
        partial(_registered, person_id, logger),
        partial(_not_registered, person_id, logger),
    )


# ─────────────────────── Welcome email ───────────────────────


def _lookup(person_id: int, repository: PersonRepository) -> Result[Person]:
    return Result.attempt(lambda: repository.get_by_id(person_id), error_message="Person lookup failed")


def _require_email(person: Person) -> Result[str]:
    return Result.from_optional(person.email, f"Person {person.id} has no email address")


def _send_welcome(email: str, email_sender: EmailSender) -> Result[str]:
    def send() -> str:
        email_sender.send_welcome(email)
        return email

    return Result.attempt(send, ErrorCode.EXTERNAL_SERVICE_ERROR, "Welcome email failed")


def send_welcome_email(
    person_id: int,
    repository: PersonRepository,
    email_sender: EmailSender,
    logger: RegistrationLogger,
) -> bool:
    """
    Send the welcome mail to a person.

    Three outcomes, each logged once:
      - sent                      → "Email sent for {id}"
      - person has no address     → "Email not sent for {id}"
      - lookup or sending raised  → "Error for {id} {detail}"
    """
    result = chain(
        [
            partial(_lookup, repository=repository),
            _require_email,
            partial(_send_welcome, email_sender=email_sender),
        ],
        person_id,
    )

    def sent(_email: str) -> bool:
        logger.log_success(f"Email sent for {person_id}")
        return True

    def not_sent(error: FailureDescription) -> bool:
        if error.exception is None:
            logger.log_failure(f"Email not sent for {person_id}")
        else:
            logger.log_failure(f"Error for {person_id} {error.message}")
        return False

    return result.either(sent, not_sent)
