"""Home screen: banner, feeds, popular tags and pagination."""

from typing import Self

from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage, data_cy


class HomePage(BasePage):
    path = "/"

    banner = data_cy("banner")
    tag_list = data_cy("tag-list")
    article_list = data_cy("article-list")
    article_preview = data_cy("article-preview")
    pagination = data_cy("pagination")
    global_feed_tab = data_cy("global-feed-tab")
    your_feed_tab = data_cy("your-feed-tab")
    feed_toggle = data_cy("feed-toggle")
    popular_tags = data_cy("popular-tags")
    loading_spinner = data_cy("loading")
    no_articles_message = data_cy("no-articles")

    def tag(self, tag: str) -> Element:
        return self.element(f"tag-{tag}")

    def page_link(self, page_number: int) -> Element:
        return self.element(f"page-{page_number}")

    def preview(self, title: str) -> Element:
        """The article preview whose text contains title."""
        return self.article_preview.containing(title)

    def _part(self, scope: Element, test_id: str) -> Element:
        return scope.child(self.registry.query(test_id), name=f"{scope.name} {test_id}")

    # -------------------------------------------------------------------------
    # Indexed accessors for preview content
    # -------------------------------------------------------------------------

    def get_article_title(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "article-title")

    def get_article_description(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "article-description")

    def get_article_author(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "article-author")

    def get_article_date(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "article-date")

    def get_article_tags(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "article-tags")

    def get_favorite_count(self, index: int = 0) -> Element:
        return self._part(self.article_preview.nth(index), "favorite-count")

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def click_global_feed(self) -> Self:
        self.global_feed_tab.click()
        return self

    def click_your_feed(self) -> Self:
        self.your_feed_tab.click()
        return self

    def click_tag(self, tag: str) -> Self:
        self.tag(tag).click()
        return self

    def click_article(self, title: str) -> Self:
        self._part(self.preview(title), "article-title").click()
        return self

    def favorite_article(self, title: str) -> Self:
        self._part(self.preview(title), "favorite-button").click()
        return self

    def click_pagination(self, page_number: int) -> Self:
        self.page_link(page_number).click()
        return self

    # -------------------------------------------------------------------------
    # Assertions
    # -------------------------------------------------------------------------

    def should_have_articles(self) -> Self:
        return self.should_exist(self.article_list).should_have_count_greater_than(
            self.article_preview, 0
        )

    def should_have_no_articles(self) -> Self:
        return self.should_be_visible(self.no_articles_message)

    def should_have_tags(self) -> Self:
        return self.should_exist(self.popular_tags).should_have_count_greater_than(
            self.tag_list, 0
        )

    def should_show_banner(self) -> Self:
        return self.should_be_visible(self.banner)

    def should_not_show_banner(self) -> Self:
        return self.should_not_exist(self.banner)

    def should_have_active_tab(self, tab_name: str) -> Self:
        return self.should_have_class(f"{tab_name}-tab", "active")

    def should_have_article_count(self, count: int) -> Self:
        return self.should_have_count(self.article_preview, count)

    def should_have_tag(self, tag: str) -> Self:
        return self.should_exist(self.tag(tag))

    def should_not_be_loading(self) -> Self:
        return self.should_not_exist(self.loading_spinner)

    def should_have_filtered_articles(self, tag: str) -> Self:
        return self.should_be_visible(f"tag-filter-{tag}")

    def should_have_pagination(self) -> Self:
        return self.should_exist(self.pagination)

    def should_have_active_page(self, page_number: int) -> Self:
        return self.should_have_class(self.page_link(page_number), "active")
