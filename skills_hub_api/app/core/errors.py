"""
Domain errors raised by the record store and the query engine.

All caller-facing errors derive from ``SkillsHubError``, which is a
``ValueError`` so that code written against the service layer's
``raise ValueError(...)`` convention keeps working.  The API layer
translates each kind into an HTTP status code.
"""


class SkillsHubError(ValueError):
    """Base class for errors caused by caller input."""


class ValidationError(SkillsHubError):
    """A supplied field is empty or otherwise invalid."""


class NotFoundError(SkillsHubError):
    """A referenced user id, resource id or category does not exist."""


class NoMatchesError(SkillsHubError):
    """The requester exists but no other user teaches what they want."""


class IdCollisionError(RuntimeError):
    """A freshly generated id is already in use.

    This is the only fatal condition in the store; it is never raised
    for caller input and the store refuses to overwrite the existing
    record.
    """
