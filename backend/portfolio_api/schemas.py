from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Language = NewType("Language", str)

CSHARP = Language("csharp")
GO = Language("go")
PYTHON = Language("python")
JAVA = Language("java")
JAVASCRIPT = Language("javascript")

KNOWN_LANGUAGES = (CSHARP, GO, PYTHON, JAVA, JAVASCRIPT)


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    language: str = ""
    stars: int = Field(default=0, ge=0, alias="stargazers_count")
    last_updated: str = Field(default="", alias="updated_at")

    @field_validator("name", "language", "last_updated", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Optional[str]) -> str:
        # GitHub sends null for repos without a detected language
        return "" if value is None else value

    @field_validator("stars", mode="before")
    @classmethod
    def _null_to_zero(cls, value: Optional[int]) -> int:
        return 0 if value is None else value


class User(BaseModel):
    followers: int = Field(default=0, ge=0)

    @field_validator("followers", mode="before")
    @classmethod
    def _null_to_zero(cls, value: Optional[int]) -> int:
        return 0 if value is None else value


class SearchResult(BaseModel):
    items: list[Repository] = []


class ErrorResponse(BaseModel):
    error: str
