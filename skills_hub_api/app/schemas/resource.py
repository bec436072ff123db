"""
Pydantic models for learning resources.

Resources are links filed under a category.  ``added_by`` names the
contributing user but is not checked against registered users.
"""

from pydantic import BaseModel, Field


class ResourceCreate(BaseModel):
    """Schema for publishing a resource."""

    link: str = Field(..., examples=["https://docs.python.org/3/tutorial/"])
    category: str = Field(..., examples=["python"])
    added_by: str = Field(..., description="Id of the contributing user")


class ResourceRead(ResourceCreate):
    """Schema for reading a resource from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class ResourceCreated(BaseModel):
    id: str
    category: str


class CategoryRead(BaseModel):
    name: str
    count: int
