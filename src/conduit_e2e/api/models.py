"""Conduit REST API models.

The backend wraps every resource in a named envelope (`{"user": {...}}`,
`{"articles": [...], "articlesCount": n}`) and uses camelCase keys. Models
accept both the camelCase wire names and the snake_case field names.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from conduit_e2e.core.exceptions import AssertionMismatchError, UpstreamResponseError


class ConduitModel(BaseModel):
    """Base for wire models: camelCase aliases, extra keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ArticleDraft(ConduitModel):
    """Article content as submitted by the editor or the API.

    Example:
        draft = ArticleDraft(
            title="API Test Article",
            description="Created via API test",
            body="Body",
            tag_list=["api", "testing"],
        )
    """

    title: str = Field(description="Article title")
    description: str = Field(description="One-line summary")
    body: str = Field(description="Markdown body")
    tag_list: list[str] = Field(default_factory=list, description="Tags, order preserved")


class Profile(ConduitModel):
    username: str
    bio: str | None = None
    image: str | None = None
    following: bool = False


class User(ConduitModel):
    """Authenticated user as returned by login, register and GET /user."""

    email: str
    username: str
    token: str = ""
    bio: str | None = None
    image: str | None = None


class Article(ConduitModel):
    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    favorited: bool = False
    favorites_count: int = Field(default=0, ge=0)
    author: Profile


class Comment(ConduitModel):
    id: int
    body: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author: Profile


class ApiResponse(BaseModel):
    """Outcome of a direct API call, whatever its status.

    Attributes:
        method: HTTP method.
        endpoint: Path relative to the API base.
        status_code: HTTP status code.
        body: Parsed JSON body, raw text, or None when empty.
        headers: Response headers (lower-cased names).
        elapsed_ms: Wall time of the call in milliseconds.
    """

    method: str
    endpoint: str
    status_code: int
    body: Any = None
    headers: dict[str, str] = Field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def errors(self) -> dict[str, Any] | None:
        """The `errors` map of a validation or auth failure body."""
        if isinstance(self.body, dict):
            return self.body.get("errors")
        return None

    def raise_for_status(self) -> "ApiResponse":
        if not self.ok:
            raise UpstreamResponseError(self.method, self.endpoint, self.status_code, self.errors)
        return self

    def should_have_status(self, expected: int) -> "ApiResponse":
        if self.status_code != expected:
            raise AssertionMismatchError(
                f"{self.method} {self.endpoint} status", expected, self.status_code
            )
        return self

    def envelope(self, key: str) -> Any:
        """Unwrap a named envelope key from the body."""
        if not isinstance(self.body, dict) or key not in self.body:
            raise AssertionMismatchError(
                f"{self.method} {self.endpoint} body to contain '{key}'", key, self.body
            )
        return self.body[key]

    def user(self) -> User:
        return User.model_validate(self.envelope("user"))

    def profile(self) -> Profile:
        return Profile.model_validate(self.envelope("profile"))

    def article(self) -> Article:
        return Article.model_validate(self.envelope("article"))

    def articles(self) -> list[Article]:
        return [Article.model_validate(item) for item in self.envelope("articles")]

    def comment(self) -> Comment:
        return Comment.model_validate(self.envelope("comment"))

    def comments(self) -> list[Comment]:
        return [Comment.model_validate(item) for item in self.envelope("comments")]

    def tags(self) -> list[str]:
        return list(self.envelope("tags"))
