"""
Person repository adapters — in-memory, seeded from code or a JSON file.

Implements the PersonRepository and AsyncPersonRepository ports. There is
no database: records live in a dict for the lifetime of the process, and
update() only remembers which social account was opened for whom.

Seed file format (list of person objects):

    [{"id": 10, "name": "Rick Sanchez", "email": "rick.sanchez@crazy.com", "password": "wubba"}]
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import TypeAdapter

from social_onboarding.domain.errors import PersonNotFoundError
from social_onboarding.domain.models import Person

log = structlog.get_logger()

_PEOPLE = TypeAdapter(list[Person])


class InMemoryPersonRepository:
    """Dict-backed PersonRepository."""

    def __init__(self, people: Iterable[Person] = ()) -> None:
        self._people: dict[int, Person] = {person.id: person for person in people}
        self._accounts: dict[int, str] = {}

    @classmethod
    def from_seed_file(cls, path: Path) -> InMemoryPersonRepository:
        """
        Load people from a JSON seed file.

        Raises pydantic.ValidationError on malformed content and OSError when
        the file can't be read; both surface at startup, not during a run.
        """
        people = _PEOPLE.validate_json(path.read_bytes())
        log.info("repository.seeded", path=str(path), people=len(people))
        return cls(people)

    def get_by_id(self, person_id: int) -> Person:
        try:
            return self._people[person_id]
        except KeyError:
            raise PersonNotFoundError(person_id) from None

    def update(self, person_id: int, account_id: str) -> None:
        if person_id not in self._people:
            raise PersonNotFoundError(person_id)
        self._accounts[person_id] = account_id
        log.info("repository.person_updated", person_id=person_id, account_id=account_id)

    def account_of(self, person_id: int) -> str | None:
        """Account id recorded by update(), if any."""
        return self._accounts.get(person_id)

    def __len__(self) -> int:
        return len(self._people)


class AsyncInMemoryPersonRepository:
    """AsyncPersonRepository over an InMemoryPersonRepository."""

    def __init__(self, inner: InMemoryPersonRepository) -> None:
        self._inner = inner

    async def get_by_id(self, person_id: int) -> Person:
        return self._inner.get_by_id(person_id)

    async def update(self, person_id: int, account_id: str) -> None:
        self._inner.update(person_id, account_id)

    def account_of(self, person_id: int) -> str | None:
        return self._inner.account_of(person_id)
