"""Tests for the fluent BasePage contract."""

from pathlib import Path

import pytest

from conduit_e2e.context import RunContext
from conduit_e2e.core.exceptions import AssertionMismatchError, SelectorNotFoundError
from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage, data_cy
from tests.support.fake_app import BASE_URL
from tests.support.fake_browser import FakeNode, FakePage, cy

pytestmark = pytest.mark.unit


class SamplePage(BasePage):
    path = "/sample"

    title = data_cy("article-title")
    count = data_cy("favorite-count")


class ChildPage(SamplePage):
    button = data_cy("publish-button")


@pytest.fixture
def sample(context: RunContext) -> SamplePage:
    return SamplePage(context)


# =============================================================================
# Declaration
# =============================================================================


class TestDeclaration:
    """Tests for data_cy element declarations."""

    def test_declared_elements_are_registered(self, sample: SamplePage) -> None:
        """
        Given: A page declaring two elements
        When: Inspecting its registry
        Then: Both test ids are registered
        """
        assert set(sample.registry) == {"article-title", "favorite-count"}

    def test_subclass_inherits_declarations(self, context: RunContext) -> None:
        """
        Given: A page subclass adding an element
        When: Inspecting its registry
        Then: Inherited and own elements are registered
        """
        page = ChildPage(context)

        assert set(page.registry) == {"article-title", "favorite-count", "publish-button"}

    def test_attribute_access_returns_fresh_element(self, sample: SamplePage) -> None:
        """
        Given: A declared element
        When: Reading the attribute twice
        Then: Two distinct Elements with the same query are returned
        """
        first, second = sample.title, sample.title

        assert isinstance(first, Element)
        assert first is not second
        assert first.query == second.query == '[data-cy="article-title"]'

    def test_class_access_returns_declaration(self) -> None:
        """
        Given: The page class
        When: Reading a declared attribute on the class
        Then: The declaration itself is returned
        """
        assert isinstance(SamplePage.title, data_cy)
        assert SamplePage.title.test_id == "article-title"


# =============================================================================
# Actions
# =============================================================================


class TestActions:
    """Actions return the page for chaining."""

    def test_visit_uses_path_and_base_url(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: A page with path /sample
        When: Visiting it
        Then: The browser goes to base_url + path
        """
        result = sample.visit()

        assert result is sample
        assert fake_page.visits == [f"{BASE_URL}/sample"]

    def test_visit_with_explicit_path(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: An explicit path
        When: Visiting
        Then: That path is used
        """
        sample.visit("login")

        assert fake_page.url == f"{BASE_URL}/login"

    def test_fill_and_click_by_name(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: An input and a button addressed by test id
        When: Chaining fill and click
        Then: Both interactions land
        """
        clicks: list[str] = []
        fake_page.render(
            cy("comment-input", tag="textarea"),
            cy("comment-submit-button", tag="button", on_click=lambda p: clicks.append("x")),
        )

        result = sample.fill("comment-input", "Nice").click("comment-submit-button")

        assert result is sample
        assert clicks == ["x"]
        assert sample.element("comment-input").value() == "Nice"

    def test_pause_advances_time(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: A page
        When: Pausing for one second
        Then: Virtual time moves by one second
        """
        sample.pause(1.0)

        assert fake_page.clock() == pytest.approx(1.0)

    def test_screenshot_is_written_under_artifacts(self, sample: SamplePage) -> None:
        """
        Given: A configured artifacts directory
        When: Taking a named screenshot
        Then: The file is written under screenshots/
        """
        path = sample.screenshot("home")

        assert path == sample.settings.artifacts_dir / "screenshots" / "home.png"
        assert Path(path).is_file()


# =============================================================================
# Assertions
# =============================================================================


class TestAssertions:
    """Assertions poll, then fail with a lookup or mismatch error."""

    def test_should_contain_passes_when_text_arrives_late(
        self, sample: SamplePage, fake_page: FakePage
    ) -> None:
        """
        Given: Text that renders after 500ms
        When: Asserting it is contained
        Then: The assertion passes once it appears
        """
        fake_page.render(cy("article-title", text="Loading"))
        fake_page.call_later(0.5, lambda: fake_page.render(cy("article-title", text="Hello")))

        assert sample.should_contain(sample.title, "Hello") is sample
        assert 0.5 <= fake_page.clock() < 1.0

    def test_missing_element_raises_selector_not_found(self, sample: SamplePage) -> None:
        """
        Given: No title on the page
        When: Asserting on its text
        Then: SelectorNotFoundError is raised, not a mismatch
        """
        with pytest.raises(SelectorNotFoundError) as exc_info:
            sample.should_contain(sample.title, "Hello")

        assert exc_info.value.name == "article-title"

    def test_wrong_text_raises_mismatch_with_actual(
        self, sample: SamplePage, fake_page: FakePage
    ) -> None:
        """
        Given: A title with other text
        When: Asserting on its text
        Then: AssertionMismatchError shows expected and actual
        """
        fake_page.render(cy("article-title", text="Goodbye"))

        with pytest.raises(AssertionMismatchError) as exc_info:
            sample.should_contain(sample.title, "Hello")

        assert exc_info.value.expected == "Hello"
        assert exc_info.value.actual == "Goodbye"

    def test_non_string_expected_is_stringified(
        self, sample: SamplePage, fake_page: FakePage
    ) -> None:
        """
        Given: A count rendered as text
        When: Asserting with an int
        Then: It is compared as text
        """
        fake_page.render(cy("favorite-count", text="3"))

        sample.should_contain(sample.count, 3)

    def test_should_not_exist_does_not_require_presence(self, sample: SamplePage) -> None:
        """
        Given: No title on the page
        When: Asserting it does not exist
        Then: The assertion passes
        """
        sample.should_not_exist(sample.title)

    def test_should_have_count(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: Three comments
        When: Asserting counts
        Then: Exact and greater-than checks pass, a wrong count fails
        """
        fake_page.render(*[cy("comment-item") for _ in range(3)])

        sample.should_have_count("comment-item", 3).should_have_count_greater_than(
            "comment-item", 2
        )
        with pytest.raises(AssertionMismatchError):
            sample.should_have_count("comment-item", 4)

    def test_value_attribute_and_class_checks(
        self, sample: SamplePage, fake_page: FakePage
    ) -> None:
        """
        Given: An input and a tab
        When: Chaining value, attribute and class assertions
        Then: All pass
        """
        fake_page.render(
            cy("email-input", tag="input", value="a@b.c", attrs={"type": "email"}),
            cy("global-feed-tab", tag="a", attrs={"class": "nav-link active"}),
        )

        (
            sample.should_have_value("email-input", "a@b.c")
            .should_have_attribute("email-input", "type", "email")
            .should_have_attribute("email-input", "type")
            .should_have_any_attribute("email-input", "aria-label", "type")
            .should_have_class("global-feed-tab", "active")
            .should_not_have_class("global-feed-tab", "disabled")
            .should_have_tag_name("email-input", "input")
        )

    def test_visibility_and_disabled_state(
        self, sample: SamplePage, fake_page: FakePage
    ) -> None:
        """
        Given: A visible enabled button and a disabled one
        When: Asserting their state
        Then: Each check matches
        """
        fake_page.render(
            cy("publish-button", tag="button"),
            cy("submit-button", FakeNode("button"), tag="fieldset", disabled=True),
        )

        sample.should_be_visible("publish-button").should_be_enabled("publish-button")
        sample.should_be_disabled("submit-button")
        with pytest.raises(AssertionMismatchError):
            sample.should_be_disabled("publish-button")

    def test_should_have_focus(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: A focused input
        When: Asserting focus
        Then: Only the focused element passes
        """
        fake_page.render(cy("email-input", tag="input"), cy("password-input", tag="input"))
        sample.element("email-input").focus()

        sample.should_have_focus("email-input")
        with pytest.raises(AssertionMismatchError):
            sample.should_have_focus("password-input")

    def test_url_assertions(self, sample: SamplePage) -> None:
        """
        Given: The browser on /login
        When: Asserting on the url
        Then: Contains, not-contains and exact checks behave
        """
        sample.visit("/login")

        sample.should_have_url_containing("/login").should_not_have_url_containing("/register")
        sample.should_be_at("/login")
        with pytest.raises(AssertionMismatchError):
            sample.should_be_at("/")

    def test_token_assertions(self, sample: SamplePage, fake_page: FakePage) -> None:
        """
        Given: A page with an http origin
        When: The token appears and disappears
        Then: should_have_token and should_not_have_token follow it
        """
        sample.visit("/login")
        sample.should_not_have_token()

        fake_page.local_storage["jwt"] = "abc"

        sample.should_have_token()
        with pytest.raises(AssertionMismatchError):
            sample.should_not_have_token()
