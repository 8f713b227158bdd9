"""Acting user model."""

from pydantic import BaseModel, Field


class UserContext(BaseModel):
    """The authenticated user on whose behalf an operation runs."""

    id: str = Field(..., min_length=1, description="User ID")
    name: str = Field(..., min_length=1, description="Display name")
    is_admin: bool = Field(default=False, description="Admin role flag")

    model_config = {"frozen": True}
