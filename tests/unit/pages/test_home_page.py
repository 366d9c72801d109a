"""Tests for the home page object."""

import pytest

from conduit_e2e.context import RunContext
from conduit_e2e.core.exceptions import AssertionMismatchError
from tests.fixtures.conduit_api_mock import ConduitBackend, slugify

pytestmark = pytest.mark.unit


@pytest.fixture
def seeded(conduit_backend: ConduitBackend) -> ConduitBackend:
    """Two articles by testuser2, the newest tagged "python"."""
    conduit_backend.seed_article("testuser2", "Older dragons", "Old", tag_list=["dragons"])
    conduit_backend.seed_article(
        "testuser2", "Newer python", "New", tag_list=["python", "dragons"]
    )
    return conduit_backend


class TestAnonymous:
    """Home page for a visitor without a token."""

    def test_banner_feed_and_tags(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: Two published articles
        When: Visiting home signed out
        Then: The banner, global feed, previews and popular tags are shown
        """
        (
            context.home_page.visit()
            .should_show_banner()
            .should_not_be_loading()
            .should_have_articles()
            .should_have_article_count(2)
            .should_have_active_tab("global-feed")
            .should_have_tags()
            .should_have_tag("python")
            .should_have_tag("dragons")
        )
        context.home_page.should_not_exist(context.home_page.your_feed_tab)

    def test_previews_are_newest_first(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: Two published articles
        When: Reading the previews by index
        Then: The newest comes first with its author, description and tags
        """
        home = context.home_page.visit()

        (
            home.should_contain(home.get_article_title(0), "Newer python")
            .should_contain(home.get_article_description(0), "New")
            .should_contain(home.get_article_author(0), "testuser2")
            .should_contain(home.get_article_tags(0), "python")
            .should_contain(home.get_favorite_count(0), "0")
            .should_contain(home.get_article_title(1), "Older dragons")
            .should_be_visible(home.get_article_date(1))
        )

    def test_empty_backend_shows_no_articles(self, context: RunContext) -> None:
        """
        Given: No articles
        When: Visiting home
        Then: The empty message is shown
        """
        context.home_page.visit().should_have_no_articles()

    def test_article_count_mismatch(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: Two articles
        When: Asserting three
        Then: AssertionMismatchError carries the real count
        """
        home = context.home_page.visit()

        with pytest.raises(AssertionMismatchError) as exc_info:
            home.should_have_article_count(3)

        assert exc_info.value.actual == 2


class TestNavigation:
    """Tabs, tags, pagination and previews."""

    def test_tag_filter(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: One article tagged python
        When: Clicking the python tag
        Then: A filter tab is shown with only that article
        """
        home = context.home_page.visit()
        home.expect_request("getArticles", "GET", "**/articles")

        home.click_tag("python")

        assert home.wait_for("getArticles").url.endswith("tag=python")
        (
            home.should_have_filtered_articles("python")
            .should_have_article_count(1)
            .should_not_have_class("global-feed-tab", "active")
        )

    def test_back_to_global_feed(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: A tag filter
        When: Clicking the global feed
        Then: Every article is listed again
        """
        home = context.home_page.visit().click_tag("python").should_have_article_count(1)

        home.click_global_feed().should_have_active_tab("global-feed").should_have_article_count(2)

    def test_your_feed_for_signed_in_user(
        self, context: RunContext, signed_in: str, seeded: ConduitBackend
    ) -> None:
        """
        Given: A signed-in user following nobody
        When: Opening their feed
        Then: The tab is active and no articles are shown
        """
        home = context.home_page.visit().should_not_show_banner()

        home.click_your_feed().should_have_active_tab("your-feed").should_have_no_articles()

    def test_your_feed_lists_followed_authors(
        self, context: RunContext, signed_in: str, seeded: ConduitBackend
    ) -> None:
        """
        Given: testuser follows testuser2
        When: Opening the feed
        Then: testuser2's articles are listed
        """
        seeded.follows.add(("testuser", "testuser2"))

        context.home_page.visit().click_your_feed().should_have_article_count(2)

    def test_pagination(self, context: RunContext, conduit_backend: ConduitBackend) -> None:
        """
        Given: Eleven articles and ten per page
        When: Moving to page two
        Then: Page two is active and holds the oldest article
        """
        for n in range(11):
            conduit_backend.seed_article("testuser2", f"Article number {n}")
        home = context.home_page.visit()

        home.should_have_pagination().should_have_active_page(1).should_have_article_count(10)
        home.click_pagination(2)

        (
            home.should_have_active_page(2)
            .should_have_article_count(1)
            .should_contain(home.get_article_title(0), "Article number 0")
        )

    def test_click_article_opens_it(self, context: RunContext, seeded: ConduitBackend) -> None:
        """
        Given: A preview
        When: Clicking its title
        Then: The article page is shown
        """
        context.home_page.visit().click_article("Older dragons")

        context.article_page.should_have_url_containing(
            f"/article/{slugify('Older dragons')}"
        ).should_have_title("Older dragons")

    def test_favorite_from_preview(
        self, context: RunContext, signed_in: str, seeded: ConduitBackend
    ) -> None:
        """
        Given: A signed-in user
        When: Favoriting from the preview
        Then: The favorite request succeeds
        """
        home = context.home_page.visit()
        home.expect_request("favoriteRequest", "POST", "**/articles/*/favorite")

        home.favorite_article("Newer python").should_receive_response("favoriteRequest", 200)

        assert "testuser" in seeded.favorites[slugify("Newer python")]
