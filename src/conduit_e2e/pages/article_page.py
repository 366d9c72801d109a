"""Article reading screen (/article/<slug>)."""

from collections.abc import Iterable
from typing import Self

from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage, data_cy
from conduit_e2e.network.interceptor import StubResponse

FAVORITE_ALIAS = "favoriteRequest"
UNFAVORITE_ALIAS = "unfavoriteRequest"
FOLLOW_ALIAS = "followRequest"
UNFOLLOW_ALIAS = "unfollowRequest"
COMMENT_ALIAS = "commentRequest"
DELETE_COMMENT_ALIAS = "deleteCommentRequest"

# Button captions carrying toggle state
FAVORITED_TEXT = "Unfavorite"
NOT_FAVORITED_TEXT = "Favorite"
FOLLOWING_TEXT = "Unfollow"
NOT_FOLLOWING_TEXT = "Follow"

MARKDOWN_TAGS = "h1, h2, h3, strong, em, ul, ol"


class ArticlePage(BasePage):
    """Page object for a single article, its author actions and comments."""

    article_title = data_cy("article-title")
    article_body = data_cy("article-body")
    article_meta = data_cy("article-meta")
    article_author = data_cy("article-author")
    article_date = data_cy("article-date")
    article_tags = data_cy("article-tags")
    favorite_button = data_cy("favorite-button")
    favorite_count = data_cy("favorite-count")
    follow_button = data_cy("follow-button")
    edit_button = data_cy("edit-article-button")
    delete_button = data_cy("delete-article-button")
    delete_confirmation = data_cy("delete-confirmation")
    confirm_delete_button = data_cy("confirm-delete")
    cancel_delete_button = data_cy("cancel-delete")
    comment_section = data_cy("comment-section")
    comment_input = data_cy("comment-input")
    comment_submit_button = data_cy("comment-submit-button")
    comment_list = data_cy("comment-list")
    comment_item = data_cy("comment-item")
    comment_author = data_cy("comment-author")
    comment_date = data_cy("comment-date")
    comment_body = data_cy("comment-body")
    delete_comment_button = data_cy("delete-comment-button")
    author_avatar = data_cy("author-avatar")
    author_name = data_cy("author-name")
    loading_spinner = data_cy("loading")
    error_message = data_cy("error-message")
    markdown = data_cy("markdown-content")

    def tag(self, tag: str) -> Element:
        return self.element(f"tag-{tag}")

    def comment(self, text: str) -> Element:
        """The comment item whose text contains text."""
        items = self.comment_list.child(self.registry.query("comment-item"), name="comment-item")
        return items.containing(text)

    def _within(self, scope: Element, test_id: str) -> Element:
        return scope.child(self.registry.query(test_id), name=f"{scope.name} {test_id}")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def visit_article(self, slug: str) -> Self:
        return self.visit(f"/article/{slug}")

    # -------------------------------------------------------------------------
    # Article actions
    # -------------------------------------------------------------------------

    def favorite_article(self) -> Self:
        self.favorite_button.click()
        return self

    def unfavorite_article(self) -> Self:
        self.favorite_button.click()
        return self

    def follow_author(self) -> Self:
        self.follow_button.click()
        return self

    def unfollow_author(self) -> Self:
        self.follow_button.click()
        return self

    def edit_article(self) -> Self:
        self.edit_button.click()
        return self

    def delete_article(self) -> Self:
        self.delete_button.click()
        return self

    def confirm_delete(self) -> Self:
        self.confirm_delete_button.click()
        return self

    def cancel_delete(self) -> Self:
        self.cancel_delete_button.click()
        return self

    def click_author(self) -> Self:
        self.author_name.click()
        return self

    def click_tag(self, tag: str) -> Self:
        self.tag(tag).click()
        return self

    # -------------------------------------------------------------------------
    # Comment actions
    # -------------------------------------------------------------------------

    def add_comment(self, text: str) -> Self:
        self.comment_input.fill(text)
        self.comment_submit_button.click()
        return self

    def delete_comment(self, text: str) -> Self:
        self._within(self.comment(text), "delete-comment-button").click()
        return self

    # -------------------------------------------------------------------------
    # Content assertions
    # -------------------------------------------------------------------------

    def should_have_title(self, title: str) -> Self:
        return self.should_contain(self.article_title, title)

    def should_have_body(self, body: str) -> Self:
        return self.should_contain(self.article_body, body)

    def should_have_author(self, author: str) -> Self:
        return self.should_contain(self.article_author, author)

    def should_have_date(self) -> Self:
        return self.should_be_visible(self.article_date)

    def should_have_tag(self, tag: str) -> Self:
        return self.should_exist(self.tag(tag))

    def should_not_have_tag(self, tag: str) -> Self:
        return self.should_not_exist(self.tag(tag))

    def should_have_tags(self, tags: Iterable[str]) -> Self:
        for tag in tags:
            self.should_have_tag(tag)
        return self

    def should_have_markdown_rendered(self) -> Self:
        return self.should_exist(self.markdown.child(MARKDOWN_TAGS, name="rendered markdown"))

    def should_have_valid_markdown(self) -> Self:
        for tag in ("h1", "strong", "em", "ul"):
            self.should_exist(self.article_body.child(tag))
        return self

    def should_have_valid_metadata(self) -> Self:
        meta = self.article_meta
        self.should_have_attribute(self._within(meta, "author-avatar"), "src")
        self.should_not_have_empty_text(self._within(meta, "author-name"))
        return self.should_not_have_empty_text(self._within(meta, "article-date"))

    def should_not_have_empty_text(self, target: Element) -> Self:
        return self._assert(
            f"'{target.name}' not to be empty",
            target.text,
            lambda text: bool((text or "").strip()),
            "non-empty text",
            target,
        )

    def should_have_accessible_content(self) -> Self:
        return (
            self.should_have_attribute(self.article_title, "role", "heading")
            .should_have_attribute(self.favorite_button, "aria-label")
            .should_have_attribute(self.follow_button, "aria-label")
        )

    # -------------------------------------------------------------------------
    # Toggle state assertions
    # -------------------------------------------------------------------------

    def should_be_favorited(self) -> Self:
        return self.should_contain(self.favorite_button, FAVORITED_TEXT)

    def should_not_be_favorited(self) -> Self:
        return self.should_contain(self.favorite_button, NOT_FAVORITED_TEXT).should_not_contain(
            self.favorite_button, FAVORITED_TEXT
        )

    def should_have_favorite_count(self, count: int) -> Self:
        return self.should_contain(self.favorite_count, count)

    def should_be_following(self) -> Self:
        return self.should_contain(self.follow_button, FOLLOWING_TEXT)

    def should_not_be_following(self) -> Self:
        return self.should_contain(self.follow_button, NOT_FOLLOWING_TEXT).should_not_contain(
            self.follow_button, FOLLOWING_TEXT
        )

    # -------------------------------------------------------------------------
    # Ownership and state assertions
    # -------------------------------------------------------------------------

    def should_show_edit_button(self) -> Self:
        return self.should_be_visible(self.edit_button)

    def should_not_show_edit_button(self) -> Self:
        return self.should_not_exist(self.edit_button)

    def should_show_delete_button(self) -> Self:
        return self.should_be_visible(self.delete_button)

    def should_not_show_delete_button(self) -> Self:
        return self.should_not_exist(self.delete_button)

    def should_show_delete_confirmation(self) -> Self:
        return self.should_be_visible(self.delete_confirmation)

    def should_not_be_loading(self) -> Self:
        return self.should_not_exist(self.loading_spinner)

    def should_show_error(self, message: str) -> Self:
        return self.should_be_visible(self.error_message).should_contain(
            self.error_message, message
        )

    def should_have_author_avatar(self) -> Self:
        return self.should_be_visible(self.author_avatar)

    def should_redirect_to_profile(self) -> Self:
        return self.should_have_url_containing("/@")

    def should_redirect_to_editor(self) -> Self:
        return self.should_have_url_containing("/editor")

    def should_redirect_to_home(self) -> Self:
        return self.should_be_at("/")

    def should_redirect_to_login(self) -> Self:
        return self.should_have_url_containing("/login")

    # -------------------------------------------------------------------------
    # Comment assertions
    # -------------------------------------------------------------------------

    def should_have_comment(self, text: str) -> Self:
        return self.should_contain(self.comment_list, text)

    def should_not_have_comment(self, text: str) -> Self:
        return self.should_not_contain(self.comment_list, text)

    def should_have_comment_count(self, count: int) -> Self:
        items = self._within(self.comment_list, "comment-item")
        return self.should_have_count(items, count)

    def should_show_comment_section(self) -> Self:
        return self.should_be_visible(self.comment_section)

    def should_not_show_comment_section(self) -> Self:
        return self.should_not_exist(self.comment_section)

    def should_have_valid_comment_structure(self) -> Self:
        items = self._within(self.comment_list, "comment-item")
        for index in range(items.count()):
            item = items.nth(index)
            for part in ("comment-author", "comment-date", "comment-body"):
                self.should_exist(self._within(item, part))
        return self

    def should_have_comment_by_author(self, author: str, text: str) -> Self:
        return self.should_contain(self._within(self.comment(text), "comment-author"), author)

    def should_have_comment_delete_button(self, text: str) -> Self:
        return self.should_exist(self._within(self.comment(text), "delete-comment-button"))

    def should_not_have_comment_delete_button(self, text: str) -> Self:
        self.should_exist(self.comment(text))
        return self.should_not_exist(self._within(self.comment(text), "delete-comment-button"))

    # -------------------------------------------------------------------------
    # Network
    # -------------------------------------------------------------------------

    def should_make_favorite_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(FAVORITE_ALIAS, "POST", "**/articles/*/favorite", stub)

    def should_make_unfavorite_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(UNFAVORITE_ALIAS, "DELETE", "**/articles/*/favorite", stub)

    def should_make_follow_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(FOLLOW_ALIAS, "POST", "**/profiles/*/follow", stub)

    def should_make_unfollow_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(UNFOLLOW_ALIAS, "DELETE", "**/profiles/*/follow", stub)

    def should_make_comment_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(COMMENT_ALIAS, "POST", "**/articles/*/comments", stub)

    def should_make_delete_comment_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(
            DELETE_COMMENT_ALIAS, "DELETE", "**/articles/*/comments/*", stub
        )

    def should_receive_favorite_response(self) -> Self:
        return self.should_receive_response(FAVORITE_ALIAS, 200)

    def should_receive_unfavorite_response(self) -> Self:
        return self.should_receive_response(UNFAVORITE_ALIAS, 200)

    def should_receive_follow_response(self) -> Self:
        return self.should_receive_response(FOLLOW_ALIAS, 200)

    def should_receive_unfollow_response(self) -> Self:
        return self.should_receive_response(UNFOLLOW_ALIAS, 200)

    def should_receive_comment_response(self) -> Self:
        return self.should_receive_response(COMMENT_ALIAS, 200)

    def should_receive_delete_comment_response(self) -> Self:
        return self.should_receive_response(DELETE_COMMENT_ALIAS, 200)
