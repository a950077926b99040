"""
Ports — Protocol-based interfaces for the collaborators of the pipeline.

Each port is a narrow capability (lookup, register, authenticate, publish,
persist, log) so tests can hand in deterministic fakes. Adapters satisfy a
port simply by implementing its methods — no inheritance.

Ports raise on failure (PersonNotFoundError, SocialNetworkError, httpx
errors, ...). The pipeline steps, not the adapters, turn those exceptions
into Result failures.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from social_onboarding.domain.models import Account, Person, Tweet


@runtime_checkable
class PersonRepository(Protocol):
    """
    Port: person records.

    get_by_id raises PersonNotFoundError when the id is unknown.
    update records the social account id opened for the person.
    """

    def get_by_id(self, person_id: int) -> Person: ...

    def update(self, person_id: int, account_id: str) -> None: ...


@runtime_checkable
class AsyncPersonRepository(Protocol):
    """Port: coroutine twin of PersonRepository."""

    async def get_by_id(self, person_id: int) -> Person: ...

    async def update(self, person_id: int, account_id: str) -> None: ...


@runtime_checkable
class SocialNetwork(Protocol):
    """
    Port: the social network the person is registered on.

    Three calls, used in this order by the pipeline:
      1. register(email, name)        → Account
      2. authenticate(email, password) → bearer token
      3. tweet(token, message)         → Tweet (with its public url)
    """

    def register(self, email: str | None, name: str) -> Account: ...

    def authenticate(self, email: str | None, password: str | None) -> str: ...

    def tweet(self, token: str, message: str) -> Tweet: ...


@runtime_checkable
class AsyncSocialNetwork(Protocol):
    """Port: coroutine twin of SocialNetwork."""

    async def register(self, email: str | None, name: str) -> Account: ...

    async def authenticate(self, email: str | None, password: str | None) -> str: ...

    async def tweet(self, token: str, message: str) -> Tweet: ...


@runtime_checkable
class EmailSender(Protocol):
    """Port: send the welcome mail to a freshly known address."""

    def send_welcome(self, email: str) -> None: ...


@runtime_checkable
class RegistrationLogger(Protocol):
    """
    Port: the outcome sink.

    Called exactly once per run, from the terminal continuation only.
    """

    def log_success(self, text: str) -> None: ...

    def log_failure(self, text: str) -> None: ...
