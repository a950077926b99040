"""
HTTP adapters — social network and mail API clients via httpx.

Implements the SocialNetwork, AsyncSocialNetwork and EmailSender ports.

Social network endpoints (relative to the configured base url):
  POST /accounts   {"email", "name"}       → {"id": ...}
  POST /sessions   {"email", "password"}   → {"token": ...}
  POST /tweets     {"status"} + bearer     → {"url": ...}

Each call opens its own client and closes it before returning, whether the
call succeeded or not. Non-2xx answers raise SocialNetworkError; transport
problems raise the httpx exception as-is. Nothing is retried, and nothing
is caught here: the pipeline steps turn exceptions into Result failures.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from social_onboarding.domain.errors import SocialNetworkError
from social_onboarding.domain.models import Account, Tweet

log = structlog.get_logger()


def _checked(operation: str, response: httpx.Response) -> dict[str, Any]:
    """Return the JSON body of a 2xx answer, raise SocialNetworkError otherwise."""
    if response.is_error:
        raise SocialNetworkError(operation, response.status_code, response.text)
    body: dict[str, Any] = response.json()
    return body


def _account(body: dict[str, Any]) -> Account:
    return Account(id=str(body["id"]))


def _token(body: dict[str, Any]) -> str:
    token: str = body["token"]
    return token


def _tweet(body: dict[str, Any]) -> Tweet:
    return Tweet(url=body["url"])


class HttpSocialNetwork:
    """Blocking SocialNetwork client."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _post(self, operation: str, path: str, payload: dict[str, Any], bearer: str) -> dict[str, Any]:
        with httpx.Client(timeout=self._timeout) as client:
            response = client.post(
                f"{self._base_url}{path}",
                headers={"Authorization": f"Bearer {bearer}"},
                json=payload,
            )
            return _checked(operation, response)

    def register(self, email: str | None, name: str) -> Account:
        account = _account(self._post("register", "/accounts", {"email": email, "name": name}, self._api_key))
        log.info("social.account_registered", account_id=account.id)
        return account

    def authenticate(self, email: str | None, password: str | None) -> str:
        token = _token(
            self._post("authenticate", "/sessions", {"email": email, "password": password}, self._api_key)
        )
        log.info("social.authenticated")
        return token

    def tweet(self, token: str, message: str) -> Tweet:
        tweet = _tweet(self._post("tweet", "/tweets", {"status": message}, token))
        log.info("social.tweet_published", url=tweet.url)
        return tweet


class AsyncHttpSocialNetwork:
    """AsyncSocialNetwork client; same endpoints as HttpSocialNetwork."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    async def _post(self, operation: str, path: str, payload: dict[str, Any], bearer: str) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                f"{self._base_url}{path}",
                headers={"Authorization": f"Bearer {bearer}"},
                json=payload,
            )
            return _checked(operation, response)

    async def register(self, email: str | None, name: str) -> Account:
        body = await self._post("register", "/accounts", {"email": email, "name": name}, self._api_key)
        account = _account(body)
        log.info("social.account_registered", account_id=account.id)
        return account

    async def authenticate(self, email: str | None, password: str | None) -> str:
        body = await self._post("authenticate", "/sessions", {"email": email, "password": password}, self._api_key)
        token = _token(body)
        log.info("social.authenticated")
        return token

    async def tweet(self, token: str, message: str) -> Tweet:
        tweet = _tweet(await self._post("tweet", "/tweets", {"status": message}, token))
        log.info("social.tweet_published", url=tweet.url)
        return tweet


class HttpEmailSender:
    """EmailSender over a transactional mail API (POST {url})."""

    def __init__(self, url: str, timeout: float = 30) -> None:
        self._url = url
        self._timeout = timeout

    def send_welcome(self, email: str) -> None:
        with httpx.Client(timeout=self._timeout) as client:
            response = client.post(self._url, json={"to": email, "template": "welcome"})
            response.raise_for_status()
        log.info("email.welcome_sent", to=email)
