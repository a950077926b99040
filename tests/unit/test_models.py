"""
Unit tests for domain models and domain errors.

The RegistrationContext is never mutated: every with_* method returns a new
context and leaves the receiver as it was.
"""

from __future__ import annotations

import dataclasses

import pytest

from social_onboarding.domain.errors import PersonNotFoundError, SocialNetworkError
from social_onboarding.domain.models import Account, Person, RegistrationContext, Tweet
from tests.conftest import RICK


class TestRegistrationContext:
    def test_from_person_copies_identity(self) -> None:
        """
        GIVEN Rick's person record
        WHEN a context is created from it
        THEN identity fields are copied and progress fields are empty.
        """
        context = RegistrationContext.from_person(RICK)

        assert context.person_id == 10
        assert context.email == "rick.sanchez@crazy.com"
        assert context.name == "Rick Sanchez"
        assert context.password == "wubba-lubba"
        assert (context.account_id, context.token, context.url) == (None, None, None)

    def test_with_methods_return_new_contexts(self) -> None:
        """
        GIVEN a fresh context
        WHEN account, token and tweet are added one after the other
        THEN every intermediate context keeps its own state.
        """
        fresh = RegistrationContext.from_person(RICK)
        with_account = fresh.with_account(Account(id="9"))
        with_token = with_account.with_token("tok")
        done = with_token.with_tweet(Tweet(url="anUrl"))

        assert fresh.account_id is None
        assert with_account.account_id == "9"
        assert with_account.token is None
        assert with_token.token == "tok"
        assert with_token.url is None
        assert done == dataclasses.replace(fresh, account_id="9", token="tok", url="anUrl")

    def test_context_is_frozen(self) -> None:
        context = RegistrationContext.from_person(RICK)
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.url = "elsewhere"  # type: ignore[misc]

    def test_equal_people_give_equal_contexts(self) -> None:
        twin = Person(id=10, name="Rick Sanchez", email="rick.sanchez@crazy.com", password="wubba-lubba")
        assert RegistrationContext.from_person(RICK) == RegistrationContext.from_person(twin)


class TestDomainErrors:
    def test_person_not_found_is_a_lookup_error(self) -> None:
        error = PersonNotFoundError(404)

        assert isinstance(error, LookupError)
        assert str(error) == "Person 404 not found"
        assert error.person_id == 404

    def test_social_network_error_message(self) -> None:
        error = SocialNetworkError("register", 409, "already exists")

        assert str(error) == "register rejected with HTTP 409: already exists"
        assert error.status_code == 409

    def test_social_network_error_without_detail(self) -> None:
        assert str(SocialNetworkError("tweet", 500)) == "tweet rejected with HTTP 500"
