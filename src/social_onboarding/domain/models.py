"""
Domain models — immutable values exchanged between the pipeline and its ports.

RegistrationContext is the record threaded through the registration
pipeline. Each stage returns a NEW context with one more field filled in;
a context handed to a step is never modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Person:
    """A person record as stored by the PersonRepository."""

    id: int
    name: str
    email: str | None = None
    password: str | None = None


@dataclass(frozen=True, slots=True)
class Account:
    """Social network account opened for a person."""

    id: str


@dataclass(frozen=True, slots=True)
class Tweet:
    """A published post; `url` points at it on the social network."""

    url: str


@dataclass(frozen=True, slots=True)
class RegistrationContext:
    """
    Accumulated state of one registration run.

    Filled in stage by stage:
      lookup        → person_id, email, name, password
      register      → account_id
      authenticate  → token
      publish       → url  (the pipeline's output)
    """

    person_id: int
    name: str
    email: str | None = None
    password: str | None = None
    account_id: str | None = None
    token: str | None = None
    url: str | None = None

    @staticmethod
    def from_person(person: Person) -> RegistrationContext:
        return RegistrationContext(
            person_id=person.id,
            name=person.name,
            email=person.email,
            password=person.password,
        )

    def with_account(self, account: Account) -> RegistrationContext:
        return replace(self, account_id=account.id)

    def with_token(self, token: str) -> RegistrationContext:
        return replace(self, token=token)

    def with_tweet(self, tweet: Tweet) -> RegistrationContext:
        return replace(self, url=tweet.url)
