"""Direct REST client for the Conduit backend.

Used for arranging state (seeding users and articles, logging in without the
UI) and by the API suite. Unlike a production client it returns every
response, 4xx and 5xx included, when the caller passes
fail_on_status_code=False, so negative paths can be asserted on.
"""

from __future__ import annotations

import time
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from conduit_e2e.api.models import ApiResponse, ArticleDraft, User

if TYPE_CHECKING:
    from conduit_e2e.config.settings import Settings

log = structlog.get_logger(__name__)

MAX_RETRIES = 3

# Only failures where the request never reached the server are retried
RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


class ConduitApiClient:
    """Synchronous client for the Conduit REST API.

    Attributes:
        base_url: API base path, e.g. https://conduit.productionready.io/api.
        timeout: Request timeout in seconds.
        token: JWT sent as `Authorization: Token <jwt>` when set.

    Example:
        with ConduitApiClient("http://localhost:3000/api") as api:
            api.authenticate("test@example.com", "testpassword123")
            slug = api.create_article(draft).article().slug
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> ConduitApiClient:
        return cls(settings.api_url, timeout=settings.request_timeout_ms / 1000)

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            self._client.close()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    def __enter__(self) -> ConduitApiClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    @retry(
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )
    def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._get_client().request(method, endpoint, **kwargs)
        except httpx.TransportError as e:
            log.warning("api_transport_error", method=method, endpoint=endpoint, error=str(e))
            raise  # Connection failures are retried by tenacity

    def request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        token: str | None = None,
        fail_on_status_code: bool = True,
    ) -> ApiResponse:
        """Send a request and wrap the outcome.

        Args:
            method: HTTP method.
            endpoint: Path relative to the API base ("/articles").
            json: JSON body.
            params: Query parameters; None values are dropped.
            token: Overrides the client token for this call.
            fail_on_status_code: Raise UpstreamResponseError on non-2xx.

        Returns:
            ApiResponse with status, parsed body, headers and timing.
        """
        method = method.upper()
        headers: dict[str, str] = {}
        auth = token if token is not None else self.token
        if auth:
            headers["Authorization"] = f"Token {auth}"
        query = {k: v for k, v in (params or {}).items() if v is not None}

        start_time = time.perf_counter()
        response = self._send(method, endpoint, json=json, params=query, headers=headers)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        result = ApiResponse(
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            body=_parse_body(response),
            headers=dict(response.headers),
            elapsed_ms=elapsed_ms,
        )
        log.debug(
            "api_request",
            method=method,
            endpoint=endpoint,
            status_code=result.status_code,
            elapsed_ms=round(elapsed_ms, 2),
        )
        if fail_on_status_code:
            result.raise_for_status()
        return result

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def login(self, email: str, password: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "POST",
            "/users/login",
            json={"user": {"email": email, "password": password}},
            fail_on_status_code=fail_on_status_code,
        )

    def authenticate(self, email: str, password: str) -> User:
        """Log in and keep the token for subsequent calls."""
        user = self.login(email, password).user()
        self.token = user.token
        log.info("api_authenticated", username=user.username)
        return user

    def register(
        self,
        username: str,
        email: str,
        password: str,
        *,
        fail_on_status_code: bool = True,
    ) -> ApiResponse:
        return self.request(
            "POST",
            "/users",
            json={"user": {"username": username, "email": email, "password": password}},
            fail_on_status_code=fail_on_status_code,
        )

    def current_user(self, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request("GET", "/user", fail_on_status_code=fail_on_status_code)

    def update_user(self, *, fail_on_status_code: bool = True, **fields: Any) -> ApiResponse:
        return self.request(
            "PUT", "/user", json={"user": fields}, fail_on_status_code=fail_on_status_code
        )

    # -------------------------------------------------------------------------
    # Articles
    # -------------------------------------------------------------------------

    def list_articles(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        tag: str | None = None,
        author: str | None = None,
        favorited: str | None = None,
        fail_on_status_code: bool = True,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/articles",
            params={
                "limit": limit,
                "offset": offset,
                "tag": tag,
                "author": author,
                "favorited": favorited,
            },
            fail_on_status_code=fail_on_status_code,
        )

    def feed(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        fail_on_status_code: bool = True,
    ) -> ApiResponse:
        return self.request(
            "GET",
            "/articles/feed",
            params={"limit": limit, "offset": offset},
            fail_on_status_code=fail_on_status_code,
        )

    def create_article(
        self, draft: ArticleDraft, *, fail_on_status_code: bool = True
    ) -> ApiResponse:
        return self.request(
            "POST",
            "/articles",
            json={"article": draft.to_wire()},
            fail_on_status_code=fail_on_status_code,
        )

    def get_article(self, slug: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request("GET", f"/articles/{slug}", fail_on_status_code=fail_on_status_code)

    def update_article(
        self, slug: str, *, fail_on_status_code: bool = True, **fields: Any
    ) -> ApiResponse:
        """Update an article. Field names may be snake_case or camelCase."""
        payload = {_camel(key): value for key, value in fields.items()}
        return self.request(
            "PUT",
            f"/articles/{slug}",
            json={"article": payload},
            fail_on_status_code=fail_on_status_code,
        )

    def delete_article(self, slug: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "DELETE", f"/articles/{slug}", fail_on_status_code=fail_on_status_code
        )

    def favorite(self, slug: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "POST", f"/articles/{slug}/favorite", fail_on_status_code=fail_on_status_code
        )

    def unfavorite(self, slug: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "DELETE", f"/articles/{slug}/favorite", fail_on_status_code=fail_on_status_code
        )

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def add_comment(
        self, slug: str, body: str, *, fail_on_status_code: bool = True
    ) -> ApiResponse:
        return self.request(
            "POST",
            f"/articles/{slug}/comments",
            json={"comment": {"body": body}},
            fail_on_status_code=fail_on_status_code,
        )

    def list_comments(self, slug: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "GET", f"/articles/{slug}/comments", fail_on_status_code=fail_on_status_code
        )

    def delete_comment(
        self, slug: str, comment_id: int, *, fail_on_status_code: bool = True
    ) -> ApiResponse:
        return self.request(
            "DELETE",
            f"/articles/{slug}/comments/{comment_id}",
            fail_on_status_code=fail_on_status_code,
        )

    # -------------------------------------------------------------------------
    # Profiles and tags
    # -------------------------------------------------------------------------

    def get_profile(self, username: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "GET", f"/profiles/{username}", fail_on_status_code=fail_on_status_code
        )

    def follow(self, username: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "POST", f"/profiles/{username}/follow", fail_on_status_code=fail_on_status_code
        )

    def unfollow(self, username: str, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request(
            "DELETE", f"/profiles/{username}/follow", fail_on_status_code=fail_on_status_code
        )

    def tags(self, *, fail_on_status_code: bool = True) -> ApiResponse:
        return self.request("GET", "/tags", fail_on_status_code=fail_on_status_code)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
