"""Account settings screen (/settings)."""

from typing import Self

from conduit_e2e.dsl.page import BasePage, data_cy


class SettingsPage(BasePage):
    path = "/settings"

    logout_button = data_cy("logout-button")

    def logout(self) -> Self:
        self.logout_button.click()
        return self

    def should_be_on_settings_page(self) -> Self:
        return self.should_have_url_containing("/settings")
