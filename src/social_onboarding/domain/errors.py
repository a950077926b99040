"""Exceptions raised by ports; steps capture them into Result failures."""

from __future__ import annotations


class PersonNotFoundError(LookupError):
    """No person is stored under the requested id."""

    def __init__(self, person_id: int) -> None:
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


class SocialNetworkError(RuntimeError):
    """The social network answered, but refused the request."""

    def __init__(self, operation: str, status_code: int, detail: str = "") -> None:
        message = f"{operation} rejected with HTTP {status_code}"
        super().__init__(f"{message}: {detail}" if detail else message)
        self.operation = operation
        self.status_code = status_code
