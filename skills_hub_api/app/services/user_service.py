"""
Business logic for users.

``UserService`` wraps a ``RecordStore``: it registers users, replaces
their skill sets and answers matching queries.  Domain errors from the
store (``ValidationError``, ``NotFoundError``, ``NoMatchesError``)
propagate unchanged; the API layer maps them to HTTP responses.
"""

import logging
from typing import List

from skills_hub_api.app.core.errors import NoMatchesError
from skills_hub_api.app.core.store import RecordStore, User
from skills_hub_api.app.schemas.user import MatchRead, UserCreate, UserRead, UserUpdate
from skills_hub_api.app.services import query_engine

logger = logging.getLogger(__name__)


class UserService:
    """Service for registering users and finding skill matches."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def create_user(self, data: UserCreate) -> str:
        return self.store.add_user(data.skills, data.wants_to_learn)

    async def update_user(self, user_id: str, data: UserUpdate) -> UserRead:
        """Replace both skill sets and return the stored record."""
        return self._to_read(self.store.update_user(user_id, data.skills, data.wants_to_learn))

    async def delete_user(self, user_id: str) -> None:
        self.store.delete_user(user_id)

    async def get_user(self, user_id: str) -> UserRead:
        return self._to_read(self.store.get_user(user_id))

    async def user_exists(self, user_id: str) -> bool:
        return self.store.user_exists(user_id)

    async def list_users(self) -> List[UserRead]:
        return [self._to_read(user) for user in self.store.get_all_users()]

    async def find_matches(self, user_id: str) -> List[UserRead]:
        """Return users teaching at least one skill ``user_id`` wants."""
        try:
            matches = query_engine.find_matches(self.store.snapshot(), user_id)
        except NoMatchesError:
            logger.info("No matches for user %s", user_id)
            raise
        logger.debug("Found %s matches for user %s", len(matches), user_id)
        return [self._to_read(user) for user in matches]

    async def match_summary(self, user_id: str) -> List[MatchRead]:
        pairs = query_engine.match_summary(self.store.snapshot(), user_id)
        return [MatchRead(user=self._to_read(user), shared_skills=shared) for user, shared in pairs]

    @staticmethod
    def _to_read(user: User) -> UserRead:
        return UserRead(
            id=user.id,
            skills=sorted(user.skills),
            wants_to_learn=sorted(user.wants_to_learn),
        )
