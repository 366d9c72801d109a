"""
Network Interception Layer

Declares expected HTTP calls under an alias, optionally answers them with a
canned response, and blocks until an aliased call has completed.

Usage:
    network.register("login", "POST", "**/users/login")
    auth_page.click("login-button")
    network.wait("login").should_have_status(200)

    # Error path without touching the backend
    network.register("create", "POST", "**/articles", StubResponse(status_code=500))

Rules:
    - Only requests issued after registration are captured
    - Each registration is consumed by one wait; register again to wait again
    - Waiting on an unknown or consumed alias fails immediately
    - Delayed stubs are released by pump(), the same loop every wait sleeps in
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from playwright.sync_api import Error as PlaywrightError

from conduit_e2e.core.exceptions import (
    AssertionMismatchError,
    ConditionTimeoutError,
    FixtureNotFoundError,
    NetworkExpectationError,
)
from conduit_e2e.core.waiting import Waiter
from conduit_e2e.network.patterns import UrlPattern

if TYPE_CHECKING:
    from playwright.sync_api import Page, Request, Response, Route

    from conduit_e2e.core.page_errors import PageErrorGuard

log = structlog.get_logger(__name__)

CORS_HEADERS = {"access-control-allow-origin": "*"}


@dataclass
class StubResponse:
    """Canned answer for an intercepted request.

    With no status, body or fixture the request reaches the real backend,
    after delay_ms if one is set.
    """

    status_code: int | None = None
    body: Any = None
    fixture: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    delay_ms: int = 0
    force_network_error: bool = False

    @property
    def passes_through(self) -> bool:
        return (
            self.status_code is None
            and self.body is None
            and self.fixture is None
            and not self.force_network_error
        )


@dataclass
class Interception:
    """A completed request/response pair captured for an alias."""

    alias: str
    method: str
    url: str
    request_body: Any = None
    status_code: int | None = None
    response_body: Any = None
    response_headers: dict[str, str] = field(default_factory=dict)
    failure: str | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def should_have_status(self, expected: int) -> Interception:
        actual: Any = self.status_code
        if self.failed:
            actual = f"network error: {self.failure}"
        if actual != expected:
            raise AssertionMismatchError(f"@{self.alias} response status", expected, actual)
        return self

    def should_have_failed(self) -> Interception:
        if not self.failed:
            raise AssertionMismatchError(
                f"@{self.alias} to fail at the network level", "network error", self.status_code
            )
        return self


@dataclass
class NetworkExpectation:
    """An aliased (method, url glob, stub) registration and what it captured."""

    alias: str
    pattern: UrlPattern
    stub: StubResponse | None = None
    pending: list[Request] = field(default_factory=list)
    completed: list[Request] = field(default_factory=list)
    consumed: bool = False

    @property
    def call_count(self) -> int:
        return len(self.pending) + len(self.completed)


class NetworkInterceptor:
    """Per-test registry of network expectations bound to one page."""

    def __init__(
        self,
        page: Page,
        *,
        response_timeout: float,
        poll_interval: float,
        fixtures_dir: Path,
        api_url: str = "",
        page_errors: PageErrorGuard | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.page = page
        self.fixtures_dir = fixtures_dir
        self.api_url = api_url
        self.page_errors = page_errors
        self.clock = clock
        self.waiter = Waiter(
            timeout=response_timeout, interval=poll_interval, sleep=self.pump, clock=clock
        )
        self._expectations: dict[str, NetworkExpectation] = {}
        self._routes: dict[str, tuple[Callable[[str], bool], Callable[[Route], None]]] = {}
        self._delayed: list[tuple[float, Callable[[], None]]] = []
        self._in_flight: list[Request] = []
        self._last: dict[str, Interception] = {}
        self._installed = False

    # -------------------------------------------------------------------------
    # Page wiring
    # -------------------------------------------------------------------------

    def install(self) -> None:
        """Attach request listeners to the page. Safe to call twice."""
        if self._installed:
            return
        self.page.on("request", self._on_request)
        self.page.on("requestfinished", self._on_complete)
        self.page.on("requestfailed", self._on_complete)
        self._installed = True

    def _on_request(self, request: Request) -> None:
        self._in_flight.append(request)
        for expectation in self._expectations.values():
            if not expectation.consumed and expectation.pattern.matches(
                request.method, request.url
            ):
                expectation.pending.append(request)
                log.debug(
                    "network_request_matched",
                    alias=expectation.alias,
                    method=request.method,
                    url=request.url,
                )

    def _on_complete(self, request: Request) -> None:
        if request in self._in_flight:
            self._in_flight.remove(request)
        for expectation in self._expectations.values():
            if request in expectation.pending:
                expectation.pending.remove(request)
                expectation.completed.append(request)

    @property
    def in_flight(self) -> int:
        """Requests issued by the page that have not completed yet."""
        return len(self._in_flight)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
        self,
        alias: str,
        method: str,
        pattern: str,
        stub: StubResponse | None = None,
    ) -> NetworkExpectation:
        """Declare an expected request. Re-registering an alias re-arms it."""
        self.install()
        if alias in self._routes:
            self.page.unroute(*self._routes.pop(alias))

        expectation = NetworkExpectation(
            alias=alias, pattern=UrlPattern(method, pattern), stub=stub
        )
        self._expectations[alias] = expectation
        if stub is not None:
            self._route(expectation, stub)

        log.debug(
            "network_expectation_registered",
            alias=alias,
            pattern=str(expectation.pattern),
            stubbed=stub is not None,
        )
        return expectation

    def _route(self, expectation: NetworkExpectation, stub: StubResponse) -> None:
        pattern = expectation.pattern

        def handler(route: Route) -> None:
            if not pattern.matches_method(route.request.method):
                route.fallback()
                return
            self._answer(expectation.alias, route, stub)

        matcher = pattern.matches_url
        self.page.route(matcher, handler)
        self._routes[expectation.alias] = (matcher, handler)

    def _answer(self, alias: str, route: Route, stub: StubResponse) -> None:
        if stub.force_network_error:

            def action() -> None:
                route.abort("failed")

        elif stub.passes_through:

            def action() -> None:
                route.continue_()

        else:
            status = stub.status_code or 200
            body = self._stub_body(stub)

            def action() -> None:
                route.fulfill(
                    status=status,
                    headers={"content-type": "application/json", **CORS_HEADERS, **stub.headers},
                    body=body,
                )

        if stub.delay_ms > 0:
            self._delayed.append((self.clock() + stub.delay_ms / 1000, action))
            log.debug("network_stub_delayed", alias=alias, delay_ms=stub.delay_ms)
        else:
            action()

    def _stub_body(self, stub: StubResponse) -> str:
        if stub.fixture is not None:
            return json.dumps(self.load_fixture(stub.fixture))
        if stub.body is None:
            return ""
        if isinstance(stub.body, str):
            return stub.body
        return json.dumps(stub.body)

    def load_fixture(self, name: str) -> Any:
        """Load a JSON response fixture by name (".json" optional)."""
        path = self.fixtures_dir / name
        if not path.suffix:
            path = path.with_suffix(".json")
        if not path.is_file():
            raise FixtureNotFoundError(f"Fixture not found: {path}")
        return json.loads(path.read_text(encoding="utf-8"))

    def install_default_stubs(self) -> None:
        """Serve the read endpoints the home page needs from fixtures."""
        api = self.api_url
        self.register("getArticles", "GET", f"{api}/articles*", StubResponse(fixture="articles"))
        self.register("getTags", "GET", f"{api}/tags", StubResponse(fixture="tags"))
        self.register("getUser", "GET", f"{api}/user", StubResponse(fixture="user"))

    # -------------------------------------------------------------------------
    # Waiting
    # -------------------------------------------------------------------------

    def pump(self, seconds: float) -> None:
        """Let the browser process events for a while.

        Every polling wait sleeps through here, so delayed stubs are released
        and page errors surface at each wait point.
        """
        self.release_due()
        self.page.wait_for_timeout(seconds * 1000)
        self.release_due()
        if self.page_errors is not None:
            self.page_errors.raise_if_errors()

    def release_due(self) -> None:
        now = self.clock()
        due = [item for item in self._delayed if item[0] <= now]
        if not due:
            return
        self._delayed = [item for item in self._delayed if item[0] > now]
        for _, action in due:
            action()

    def wait(self, alias: str, timeout: float | None = None) -> Interception:
        """Block until a request matching alias has completed."""
        expectation = self._expectations.get(alias)
        if expectation is None:
            raise NetworkExpectationError(
                alias, "no expectation registered; register it before the triggering action"
            )
        if expectation.consumed:
            raise NetworkExpectationError(
                alias, "already waited on; register it again to wait for another request"
            )

        try:
            request = self.waiter.until(
                lambda: expectation.completed[0] if expectation.completed else None,
                f"request matching {expectation.pattern}",
                timeout,
            )
        except ConditionTimeoutError as e:
            raise NetworkExpectationError(
                alias,
                f"no request matching {expectation.pattern} completed within {e.timeout:.2f}s",
            ) from None

        expectation.consumed = True
        interception = self._capture(alias, request)
        self._last[alias] = interception
        log.debug(
            "network_wait_resolved",
            alias=alias,
            url=interception.url,
            status_code=interception.status_code,
            failure=interception.failure,
        )
        return interception

    def call_count(self, alias: str) -> int:
        """Requests matched by alias since it was registered."""
        expectation = self._expectations.get(alias)
        if expectation is None:
            raise NetworkExpectationError(alias, "no expectation registered")
        return expectation.call_count

    def last(self, alias: str) -> Interception:
        """The interception returned by the most recent wait on alias."""
        try:
            return self._last[alias]
        except KeyError:
            raise NetworkExpectationError(alias, "has not been waited on") from None

    def _capture(self, alias: str, request: Request) -> Interception:
        failure = request.failure
        response = None if failure else request.response()
        return Interception(
            alias=alias,
            method=request.method,
            url=request.url,
            request_body=_parse_json(request.post_data),
            status_code=response.status if response is not None else None,
            response_body=_response_body(response),
            response_headers=dict(response.headers) if response is not None else {},
            failure=failure,
        )

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Release held routes, drop every stub and expectation."""
        delayed, self._delayed = self._delayed, []
        for _, action in delayed:
            with suppress(PlaywrightError):
                action()
        for matcher, handler in self._routes.values():
            with suppress(PlaywrightError):
                self.page.unroute(matcher, handler)
        self._routes.clear()
        self._expectations.clear()
        self._last.clear()
        self._in_flight.clear()


def _parse_json(text: str | None) -> Any:
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _response_body(response: Response | None) -> Any:
    if response is None:
        return None
    try:
        text = response.text()
    except PlaywrightError as e:
        # Redirects and aborted bodies have nothing to read
        log.debug("response_body_unavailable", url=response.url, error=str(e))
        return None
    return _parse_json(text) if text else None
