"""
Pydantic models for user data.

A user offers a set of skills and wants to learn another set.  Both
are sent as lists; duplicates are collapsed by the store and the
response lists are sorted.
"""

from typing import List

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    skills: List[str] = Field(..., examples=[["python", "sql"]])
    wants_to_learn: List[str] = Field(..., examples=[["go"]])


class UserCreate(UserBase):
    """Schema for registering a user."""
    pass


class UserUpdate(UserBase):
    """Schema for replacing both skill sets of a user.

    Partial updates are not supported: both lists are required and
    replace the stored sets wholesale.
    """
    pass


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class UserCreated(BaseModel):
    id: str


class UserExists(BaseModel):
    id: str
    exists: bool


class MatchRead(BaseModel):
    """A matching user together with the skills they can teach the requester."""

    user: UserRead
    shared_skills: List[str]
