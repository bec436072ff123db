"""
In-memory record store for users and learning resources.

The store owns every ``User`` and ``Resource`` record.  Users are kept
in a dict keyed by id (insertion order is the listing order) and
resources in a dict mapping a category string to the list of
resources filed under it (insertion order is the display order).

Every public method acquires a single re-entrant lock, so concurrent
requests served from a thread pool observe mutations one at a time.
Records are frozen dataclasses: an update builds a new record and
swaps it into the mapping, which means readers never see a partially
updated user.

Category keys are created by the first resource filed under them and
are never removed.  ``get_resources`` therefore raises
``NotFoundError`` only for categories that were never used; a
category emptied by deletion returns an empty list.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from skills_hub_api.app.core.errors import IdCollisionError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    id: str
    skills: FrozenSet[str]
    wants_to_learn: FrozenSet[str]


@dataclass(frozen=True)
class Resource:
    id: str
    link: str
    category: str
    added_by: str


@dataclass(frozen=True)
class StoreView:
    """Immutable snapshot of the store handed to the query engine."""

    users: Tuple[User, ...]
    resources: Mapping[str, Tuple[Resource, ...]]

    def get_user(self, user_id: str) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None


def _new_id() -> str:
    return uuid.uuid4().hex


class RecordStore:
    """Owner of all user and resource records.

    Parameters
    ----------
    normalize_skills : bool
        Case-fold skill tags after stripping whitespace.  When ``False``
        tags are only stripped and otherwise compared by exact value.
    max_skills : int
        Largest accepted size of a skills or wants set.
    id_factory : Callable[[], str]
        Generator of fresh record ids; ``uuid4().hex`` by default.
    """

    def __init__(
        self,
        normalize_skills: bool = True,
        max_skills: int = 50,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.normalize_skills = normalize_skills
        self.max_skills = max_skills
        self._id_factory = id_factory
        self._users: Dict[str, User] = {}
        self._resources: Dict[str, List[Resource]] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    def _clean_skills(self, tags: Iterable[str], field: str, fold: Optional[bool] = None) -> FrozenSet[str]:
        if tags is None or isinstance(tags, str):
            raise ValidationError(f"{field} must be a collection of skill tags")
        try:
            items = list(tags)
        except TypeError as exc:
            raise ValidationError(f"{field} must be a collection of skill tags") from exc
        if fold is None:
            fold = self.normalize_skills
        cleaned = set()
        for tag in items:
            if not isinstance(tag, str):
                raise ValidationError(f"{field} entries must be strings")
            tag = tag.strip()
            if not tag:
                raise ValidationError(f"{field} must not contain empty skill tags")
            cleaned.add(tag.casefold() if fold else tag)
        if not cleaned:
            raise ValidationError(f"{field} must not be empty")
        if len(cleaned) > self.max_skills:
            raise ValidationError(f"{field} must contain at most {self.max_skills} skills")
        return frozenset(cleaned)

    @staticmethod
    def _clean_text(value: str, field: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must not be empty")
        return value.strip()

    @staticmethod
    def _category_key(category: str) -> str:
        return category.strip() if isinstance(category, str) else category

    def _fresh_id(self, taken: Callable[[str], bool]) -> str:
        new_id = self._id_factory()
        if taken(new_id):
            logger.critical("Generated id %s collides with an existing record", new_id)
            raise IdCollisionError(f"Generated id {new_id} is already in use")
        return new_id

    def _resource_id_taken(self, resource_id: str) -> bool:
        return any(r.id == resource_id for bucket in self._resources.values() for r in bucket)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def add_user(self, skills: Iterable[str], wants_to_learn: Iterable[str]) -> str:
        """Register a user and return the generated id."""
        clean_skills = self._clean_skills(skills, "skills")
        clean_wants = self._clean_skills(wants_to_learn, "wants_to_learn")
        with self._lock:
            user_id = self._fresh_id(lambda candidate: candidate in self._users)
            self._users[user_id] = User(user_id, clean_skills, clean_wants)
        logger.info("Added user %s", user_id)
        return user_id

    def update_user(self, user_id: str, skills: Iterable[str], wants_to_learn: Iterable[str]) -> User:
        """Replace both skill sets of an existing user and return the new record."""
        clean_skills = self._clean_skills(skills, "skills")
        clean_wants = self._clean_skills(wants_to_learn, "wants_to_learn")
        with self._lock:
            if user_id not in self._users:
                raise NotFoundError(f"User {user_id} not found")
            user = User(user_id, clean_skills, clean_wants)
            self._users[user_id] = user
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: str) -> None:
        """Remove a user.  Resources they added are kept as they are."""
        with self._lock:
            if self._users.pop(user_id, None) is None:
                raise NotFoundError(f"User {user_id} not found")
        logger.info("Deleted user %s", user_id)

    def user_exists(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._users

    def get_user(self, user_id: str) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_all_users(self) -> List[User]:
        """Return every user in insertion order."""
        with self._lock:
            return list(self._users.values())

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    def add_resource(self, link: str, category: str, added_by: str) -> str:
        """File a resource under ``category`` and return its id.

        ``added_by`` is not checked against the registered users.
        """
        link = self._clean_text(link, "link")
        category = self._clean_text(category, "category")
        added_by = self._clean_text(added_by, "added_by")
        with self._lock:
            resource_id = self._fresh_id(self._resource_id_taken)
            self._resources.setdefault(category, []).append(
                Resource(resource_id, link, category, added_by)
            )
        logger.info("Added resource %s to category %r", resource_id, category)
        return resource_id

    def delete_resource(self, resource_id: str, category: str) -> None:
        """Remove one resource, keeping the order of the rest."""
        category = self._category_key(category)
        with self._lock:
            bucket = self._resources.get(category)
            if bucket is None:
                raise NotFoundError(f"Category {category!r} not found")
            for index, resource in enumerate(bucket):
                if resource.id == resource_id:
                    del bucket[index]
                    break
            else:
                raise NotFoundError(f"Resource {resource_id} not found in category {category!r}")
        logger.info("Deleted resource %s from category %r", resource_id, category)

    def get_resources(self, category: str) -> List[Resource]:
        """Return the resources of ``category``; surrounding whitespace is ignored."""
        category = self._category_key(category)
        with self._lock:
            bucket = self._resources.get(category)
            if bucket is None:
                raise NotFoundError(f"Category {category!r} not found")
            return list(bucket)

    def list_categories(self) -> List[Tuple[str, int]]:
        """Return ``(category, resource count)`` pairs sorted by name."""
        with self._lock:
            return sorted((name, len(bucket)) for name, bucket in self._resources.items())

    # ------------------------------------------------------------------
    # Snapshots and serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> StoreView:
        with self._lock:
            return StoreView(
                users=tuple(self._users.values()),
                resources=MappingProxyType(
                    {name: tuple(bucket) for name, bucket in self._resources.items()}
                ),
            )

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users),
                "resources": sum(len(bucket) for bucket in self._resources.values()),
                "categories": len(self._resources),
            }

    def export_state(self) -> Dict[str, Any]:
        """Return every record as JSON-compatible data.

        Skill sets are written as sorted lists so the output does not
        depend on set iteration order.
        """
        with self._lock:
            return {
                "normalize_skills": self.normalize_skills,
                "users": [
                    {
                        "id": user.id,
                        "skills": sorted(user.skills),
                        "wants_to_learn": sorted(user.wants_to_learn),
                    }
                    for user in self._users.values()
                ],
                "resources": {
                    name: [
                        {"id": r.id, "link": r.link, "category": r.category, "added_by": r.added_by}
                        for r in bucket
                    ]
                    for name, bucket in self._resources.items()
                },
            }

    @classmethod
    def from_state(cls, state: Mapping[str, Any], **kwargs: Any) -> "RecordStore":
        """Rebuild a store from the output of ``export_state``.

        Records are validated with the same rules as the mutators, except
        that skill tags are kept exactly as exported so a state written by
        an exact-mode store keeps tags that differ only by case.  The
        exported ``normalize_skills`` flag is used unless overridden in
        ``kwargs``.  Duplicate user ids, or duplicate resource ids, are
        rejected.
        """
        kwargs.setdefault("normalize_skills", bool(state.get("normalize_skills", True)))
        store = cls(**kwargs)
        try:
            for item in state.get("users", []):
                user_id = store._clean_text(item["id"], "id")
                if user_id in store._users:
                    raise ValidationError(f"Duplicate user id {user_id}")
                store._users[user_id] = User(
                    user_id,
                    store._clean_skills(item["skills"], "skills", fold=False),
                    store._clean_skills(item["wants_to_learn"], "wants_to_learn", fold=False),
                )
            for name, items in state.get("resources", {}).items():
                category = store._clean_text(name, "category")
                bucket = store._resources.setdefault(category, [])
                for item in items:
                    resource_id = store._clean_text(item["id"], "id")
                    if store._resource_id_taken(resource_id):
                        raise ValidationError(f"Duplicate resource id {resource_id}")
                    bucket.append(
                        Resource(
                            resource_id,
                            store._clean_text(item["link"], "link"),
                            category,
                            store._clean_text(item["added_by"], "added_by"),
                        )
                    )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValidationError(f"Malformed store state: {exc}") from exc
        logger.info("Loaded %s users and %s categories", len(store._users), len(store._resources))
        return store
