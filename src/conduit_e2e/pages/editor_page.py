"""Article editor screen (/editor and /editor/<slug>)."""

from collections.abc import Iterable
from typing import Self

from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage, data_cy
from conduit_e2e.dsl.selectors import data_cy_prefix_query
from conduit_e2e.network.interceptor import StubResponse

CREATE_ALIAS = "createRequest"
UPDATE_ALIAS = "updateRequest"

MARKDOWN_TAGS = "h1, h2, h3, strong, em, ul, ol"


class EditorPage(BasePage):
    """Page object for creating and editing articles."""

    path = "/editor"

    title_input = data_cy("article-title-input")
    description_input = data_cy("article-description-input")
    body_input = data_cy("article-body-input")
    tag_input = data_cy("tag-input")
    tag_list = data_cy("tag-list")
    publish_button = data_cy("publish-button")
    form = data_cy("editor-form")
    error_messages = data_cy("error-messages")
    loading_spinner = data_cy("loading")
    preview_button = data_cy("preview-button")
    preview_content = data_cy("preview-content")
    edit_button = data_cy("edit-button")
    character_count = data_cy("character-count")
    word_count = data_cy("word-count")
    auto_save_indicator = data_cy("auto-save-indicator")
    remove_tag_icon = data_cy("remove-tag")

    def tag(self, tag: str) -> Element:
        return self.element(f"tag-{tag}")

    def _input(self, field: str) -> Element:
        return self.element(f"{field}-input")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def visit_edit(self, slug: str) -> Self:
        return self.visit(f"/editor/{slug}")

    # -------------------------------------------------------------------------
    # Form actions
    # -------------------------------------------------------------------------

    def fill_title(self, title: str) -> Self:
        self.title_input.fill(title)
        return self

    def fill_description(self, description: str) -> Self:
        self.description_input.fill(description)
        return self

    def fill_body(self, body: str) -> Self:
        self.body_input.fill(body)
        return self

    def add_tag(self, tag: str) -> Self:
        """Type a tag after whatever is in the tag input and confirm it."""
        self.tag_input.append(tag)
        self.tag_input.press("Enter")
        return self

    def add_tags(self, tags: Iterable[str]) -> Self:
        for tag in tags:
            self.add_tag(tag)
        return self

    def remove_tag(self, tag: str) -> Self:
        self.tag(tag).child(self.registry.query("remove-tag"), name="remove-tag").click()
        return self

    def clear_form(self) -> Self:
        for field in (self.title_input, self.description_input, self.body_input, self.tag_input):
            field.clear()
        return self

    def fill_complete_form(
        self,
        title: str,
        description: str,
        body: str,
        tags: Iterable[str] = (),
    ) -> Self:
        return (
            self.fill_title(title)
            .fill_description(description)
            .fill_body(body)
            .add_tags(tags)
        )

    def publish(self) -> Self:
        self.publish_button.click()
        return self

    def publish_with_keyboard(self) -> Self:
        self.body_input.press("Control+Enter")
        return self

    def preview(self) -> Self:
        self.preview_button.click()
        return self

    def back_to_edit(self) -> Self:
        self.edit_button.click()
        return self

    def submit_empty_form(self) -> Self:
        return self.publish()

    def submit_partial_form(self, title: str, description: str) -> Self:
        return self.fill_title(title).fill_description(description).publish()

    # -------------------------------------------------------------------------
    # Assertions
    # -------------------------------------------------------------------------

    def should_be_on_editor_page(self) -> Self:
        return self.should_have_url_containing("/editor")

    def should_be_on_edit_page(self, slug: str) -> Self:
        return self.should_have_url_containing(f"/editor/{slug}")

    def should_have_empty_form(self) -> Self:
        for field in (self.title_input, self.description_input, self.body_input, self.tag_input):
            self.should_have_value(field, "")
        return self

    def should_have_filled_form(self, title: str, description: str, body: str) -> Self:
        return self.should_have_title(title).should_have_description(description).should_have_body(
            body
        )

    def should_have_title(self, title: str) -> Self:
        return self.should_have_value(self.title_input, title)

    def should_have_description(self, description: str) -> Self:
        return self.should_have_value(self.description_input, description)

    def should_have_body(self, body: str) -> Self:
        return self.should_have_value(self.body_input, body)

    def should_have_tag(self, tag: str) -> Self:
        return self.should_exist(self.tag(tag))

    def should_not_have_tag(self, tag: str) -> Self:
        return self.should_not_exist(self.tag(tag))

    def should_have_tags(self, tags: Iterable[str]) -> Self:
        for tag in tags:
            self.should_have_tag(tag)
        return self

    def should_have_tag_count(self, count: int) -> Self:
        chips = self.tag_list.child(
            data_cy_prefix_query("tag-", self.registry.attribute), name="tag chips"
        )
        return self.should_have_count(chips, count)

    def should_show_error_message(self, message: str) -> Self:
        return self.should_be_visible(self.error_messages).should_contain(
            self.error_messages, message
        )

    def should_not_show_error_message(self) -> Self:
        return self.should_not_exist(self.error_messages)

    def should_show_error_count(self, count: int) -> Self:
        """Check exactly count messages are listed."""
        return self.should_have_count(self.error_messages.child("li", name="error message"), count)

    def should_have_validation_error(self, field: str, message: str) -> Self:
        return self.should_contain(f"{field}-error", message)

    def should_be_loading(self) -> Self:
        return self.should_be_visible(self.loading_spinner).should_be_disabled(
            self.publish_button
        )

    def should_not_be_loading(self) -> Self:
        return self.should_not_exist(self.loading_spinner).should_be_enabled(
            self.publish_button
        )

    def should_redirect_to_article(self, slug: str = "") -> Self:
        return self.should_have_url_containing(f"/article/{slug}")

    def should_have_character_count(self, count: int) -> Self:
        return self.should_contain(self.character_count, count)

    def should_have_word_count(self, count: int) -> Self:
        return self.should_contain(self.word_count, count)

    def should_have_preview(self) -> Self:
        return self.should_be_visible(self.preview_content)

    def should_not_have_preview(self) -> Self:
        return self.should_not_exist(self.preview_content)

    def should_have_preview_content(self, content: str) -> Self:
        return self.should_contain(self.preview_content, content)

    def should_have_markdown_preview(self) -> Self:
        rendered = self.preview_content.child(MARKDOWN_TAGS, name="rendered markdown")
        return self.should_exist(rendered)

    def should_have_required_fields(self) -> Self:
        for field in (self.title_input, self.description_input, self.body_input):
            self.should_have_attribute(field, "required")
        return self

    def should_have_correct_placeholders(self) -> Self:
        return (
            self.should_have_attribute(self.title_input, "placeholder", "Article Title")
            .should_have_attribute(
                self.description_input, "placeholder", "What's this article about?"
            )
            .should_have_attribute(
                self.body_input, "placeholder", "Write your article (in markdown)"
            )
            .should_have_attribute(self.tag_input, "placeholder", "Enter tags")
        )

    def should_have_correct_input_types(self) -> Self:
        return (
            self.should_have_attribute(self.title_input, "type", "text")
            .should_have_attribute(self.description_input, "type", "text")
            .should_have_tag_name(self.body_input, "textarea")
            .should_have_attribute(self.tag_input, "type", "text")
        )

    def should_have_max_length(self, field: str, max_length: int) -> Self:
        return self.should_have_attribute(self._input(field), "maxlength", str(max_length))

    def should_have_min_length(self, field: str, min_length: int) -> Self:
        return self.should_have_attribute(self._input(field), "minlength", str(min_length))

    def should_have_valid_form_structure(self) -> Self:
        for test_id in (
            "article-title-input",
            "article-description-input",
            "article-body-input",
            "tag-input",
            "publish-button",
        ):
            self.should_exist(self.form.child(self.registry.query(test_id), name=test_id))
        return self

    def should_have_accessible_labels(self) -> Self:
        for field in (self.title_input, self.description_input, self.body_input, self.tag_input):
            self.should_have_any_attribute(field, "aria-label", "id")
        return self

    def should_have_accessible_errors(self) -> Self:
        return self.should_have_attribute(self.error_messages, "role", "alert")

    # -------------------------------------------------------------------------
    # Behaviour checks
    # -------------------------------------------------------------------------

    def should_save_form_data(self) -> Self:
        """Form content survives a reload."""
        title, description, body = "Test Title", "Test Description", "Test Body"
        self.fill_complete_form(title, description, body)
        self.reload()
        return self.should_have_filled_form(title, description, body)

    def should_prevent_duplicate_tags(self) -> Self:
        return self.add_tag("test").add_tag("test").should_have_tag_count(1)

    def should_limit_tag_count(self, max_tags: int) -> Self:
        self.add_tags(f"tag{i}" for i in range(max_tags + 1))
        return self.should_have_tag_count(max_tags)

    def should_support_keyboard_shortcuts(self) -> Self:
        self.title_input.press("Control+a")
        return self.should_have_value(self.title_input, "")

    def should_support_tab_navigation(self) -> Self:
        self.title_input.focus()
        self.title_input.press("Tab")
        return self.should_have_focus(self.description_input)

    def should_auto_save(self, settle: float = 3.0) -> Self:
        self.fill_title("Auto-save test")
        self.pause(settle)
        self.reload()
        return self.should_have_title("Auto-save test")

    def should_show_auto_save_indicator(self) -> Self:
        self.fill_title("Auto-save test")
        return self.should_be_visible(self.auto_save_indicator)

    # -------------------------------------------------------------------------
    # Network
    # -------------------------------------------------------------------------

    def should_make_create_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(CREATE_ALIAS, "POST", "**/articles", stub)

    def should_make_update_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(UPDATE_ALIAS, "PUT", "**/articles/*", stub)

    def should_receive_create_response(self) -> Self:
        return self.should_receive_response(CREATE_ALIAS, 200)

    def should_receive_update_response(self) -> Self:
        return self.should_receive_response(UPDATE_ALIAS, 200)

    def should_receive_error_response(self, status_code: int) -> Self:
        return self.should_receive_response(CREATE_ALIAS, status_code)

    def should_not_make_create_request(self) -> Self:
        return self.should_not_have_requested(CREATE_ALIAS)
