"""
Post data models and schemas
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class PostCreate(BaseModel):
    """Schema for publishing a post"""
    content: str = Field("", max_length=3000)
    image: Optional[str] = None

    @model_validator(mode="after")
    def require_content_or_image(self):
        if not self.content.strip() and not self.image:
            raise ValueError("Post must have content or an image")
        return self


class CommentCreate(BaseModel):
    """Schema for commenting on a post"""
    content: str = Field(..., min_length=1, max_length=1250)
