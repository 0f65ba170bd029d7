"""Post data models shared by the parser, repository, and projections"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PostMeta(BaseModel):
    """Listing view of a post. Never carries the body."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    slug: str
    title: str
    date: date
    author: str
    category: str
    tags: list[str] = []
    excerpt: str = ""
    cover_image: Optional[str] = Field(default=None, alias="coverImage")
    reading_time: str = Field(default="1 min read", alias="readingTime")
    featured: bool = False
    author_image: Optional[str] = Field(default=None, alias="authorImage")


class Post(PostMeta):
    """Full post: metadata plus the markdown/MDX body with front matter removed."""
    content: str

    def meta(self) -> PostMeta:
        """Project down to the listing view."""
        return PostMeta(**self.model_dump(exclude={"content"}))


class TocItem(BaseModel):
    """One heading entry for a post's table of contents."""
    id: str
    text: str
    level: int
