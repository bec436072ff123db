"""
Read-only queries over a ``StoreView``.

Matching is a full scan: a user matches the requester when at least
one of the skills they teach is a skill the requester wants to learn.
``SkillIndex`` answers the same question through a skill -> user ids
inverted index built from one snapshot and returns identical results;
it exists for callers that run many queries against that snapshot.

Results are sorted by user id so a given store state always produces
the same sequence.
"""

from __future__ import annotations

from typing import Dict, List, Set, Tuple

from skills_hub_api.app.core.errors import NoMatchesError, NotFoundError
from skills_hub_api.app.core.store import Resource, StoreView, User


def _requester(view: StoreView, user_id: str) -> User:
    user = view.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def find_matches(view: StoreView, user_id: str) -> List[User]:
    """Return every other user who teaches something ``user_id`` wants.

    Raises ``NotFoundError`` if the requester is unknown and
    ``NoMatchesError`` if nobody qualifies.
    """
    requester = _requester(view, user_id)
    matches = [
        other
        for other in view.users
        if other.id != user_id and not other.skills.isdisjoint(requester.wants_to_learn)
    ]
    if not matches:
        raise NoMatchesError(f"No matches found for user {user_id}")
    return sorted(matches, key=lambda u: u.id)


def build_skill_index(view: StoreView) -> Dict[str, Set[str]]:
    """Map each taught skill to the ids of the users teaching it."""
    index: Dict[str, Set[str]] = {}
    for user in view.users:
        for skill in user.skills:
            index.setdefault(skill, set()).add(user.id)
    return index


class SkillIndex:
    """Inverted skill index bound to the snapshot it was built from."""

    def __init__(self, view: StoreView) -> None:
        self.view = view
        self.index = build_skill_index(view)
        self._by_id = {user.id: user for user in view.users}

    def find_matches(self, user_id: str) -> List[User]:
        """Same result as the module-level ``find_matches`` on ``self.view``."""
        requester = _requester(self.view, user_id)
        candidate_ids: Set[str] = set()
        for skill in requester.wants_to_learn:
            candidate_ids |= self.index.get(skill, set())
        candidate_ids.discard(user_id)
        matches = [self._by_id[uid] for uid in sorted(candidate_ids)]
        if not matches:
            raise NoMatchesError(f"No matches found for user {user_id}")
        return matches


def find_matches_indexed(view: StoreView, user_id: str) -> List[User]:
    return SkillIndex(view).find_matches(user_id)


def match_summary(view: StoreView, user_id: str) -> List[Tuple[User, List[str]]]:
    """Pair each match with the sorted skills it shares with the request."""
    requester = _requester(view, user_id)
    return [
        (match, sorted(match.skills & requester.wants_to_learn))
        for match in find_matches(view, user_id)
    ]


def resources_in_category(view: StoreView, category: str) -> List[Resource]:
    """Return the resources filed under ``category`` in display order."""
    if isinstance(category, str):
        category = category.strip()
    try:
        return list(view.resources[category])
    except KeyError:
        raise NotFoundError(f"Category {category!r} not found") from None
