"""Profile screen (/@<username>)."""

from typing import Self

from conduit_e2e.dsl.page import BasePage, data_cy
from conduit_e2e.pages.article_page import FOLLOWING_TEXT, NOT_FOLLOWING_TEXT


class ProfilePage(BasePage):
    profile_username = data_cy("profile-username")
    follow_button = data_cy("follow-button")
    article_preview = data_cy("article-preview")

    def visit_profile(self, username: str) -> Self:
        return self.visit(f"/@{username}")

    def toggle_follow(self) -> Self:
        self.follow_button.click()
        return self

    def should_show_username(self, username: str) -> Self:
        return self.should_contain(self.profile_username, username)

    def should_be_following(self) -> Self:
        return self.should_contain(self.follow_button, FOLLOWING_TEXT)

    def should_not_be_following(self) -> Self:
        return self.should_contain(self.follow_button, NOT_FOLLOWING_TEXT).should_not_contain(
            self.follow_button, FOLLOWING_TEXT
        )
