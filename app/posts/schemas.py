# app/posts/schemas.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def normalize_trends(values: list[str]) -> list[str]:
    """
    "#React ", "react", "#JS" → ["react", "js"]
    Sin '#', minúsculas, sin duplicados (se respeta el primer orden).
    """
    out: list[str] = []
    for raw in values:
        name = raw.strip().lstrip("#").strip().lower()
        if not name:
            raise ValueError("trend must not be empty")
        if len(name) > 50:
            raise ValueError("trend must be at most 50 characters")
        if name not in out:
            out.append(name)
    return out


class CamelModel(BaseModel):
    """JSON en camelCase hacia/desde el front, snake_case en Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PostCreate(BaseModel):
    link: str = Field(..., min_length=1, max_length=2048)
    description: str = Field(..., max_length=1000)
    trends: list[str]

    @field_validator("trends")
    @classmethod
    def clean_trends(cls, v: list[str]) -> list[str]:
        return normalize_trends(v)


class PostUpdate(CamelModel):
    """
    Payload de edición: {newDescription, newTrends}
    """
    new_description: str = Field(..., max_length=1000)
    new_trends: list[str]

    @field_validator("new_trends")
    @classmethod
    def clean_trends(cls, v: list[str]) -> list[str]:
        return normalize_trends(v)


class UserMini(BaseModel):
    username: str
    picture: str | None = None


class EnrichedPostOut(CamelModel):
    id: int
    user_id: int
    username: str
    picture: str | None = None
    link: str
    description: str
    trends: list[str] = []
    shared_from_post_id: int | None = None
    created_at: datetime | None = None

    # 👇 preview del link, se calcula en cada lectura (no se guarda)
    link_title: str | None = None
    link_description: str | None = None
    link_image: str | None = None


class UserPostsOut(BaseModel):
    user: UserMini
    posts: list[EnrichedPostOut]
