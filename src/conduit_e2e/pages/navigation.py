"""Header navigation, mobile menu and sidebar, present on every screen."""

from typing import Self

from conduit_e2e.dsl.page import BasePage, data_cy


class NavigationBar(BasePage):
    """Links shared by every screen.

    Signed-in users see new-post, settings and profile links; anonymous
    users see login and register links.
    """

    home_link = data_cy("home-link")
    new_post_link = data_cy("new-post-link")
    settings_link = data_cy("settings-link")
    profile_link = data_cy("profile-link")
    user_nav = data_cy("user-nav")
    login_link = data_cy("login-link")
    register_link = data_cy("register-link")
    mobile_menu_toggle = data_cy("mobile-menu-toggle")
    mobile_menu = data_cy("mobile-menu")
    sidebar = data_cy("sidebar")

    def go_home(self) -> Self:
        self.home_link.click()
        return self

    def go_to_editor(self) -> Self:
        self.new_post_link.click()
        return self

    def go_to_settings(self) -> Self:
        self.settings_link.click()
        return self

    def go_to_profile(self) -> Self:
        self.profile_link.click()
        return self

    def go_to_login(self) -> Self:
        self.login_link.click()
        return self

    def go_to_register(self) -> Self:
        self.register_link.click()
        return self

    def open_mobile_menu(self) -> Self:
        self.mobile_menu_toggle.click()
        return self

    def should_show_signed_in_links(self) -> Self:
        return (
            self.should_be_visible(self.new_post_link)
            .should_be_visible(self.settings_link)
            .should_be_visible(self.profile_link)
        )

    def should_show_signed_out_links(self) -> Self:
        return (
            self.should_be_visible(self.login_link)
            .should_be_visible(self.register_link)
            .should_not_exist(self.user_nav)
        )

    def should_show_mobile_menu(self) -> Self:
        return self.should_be_visible(self.mobile_menu)

    def should_show_sidebar(self) -> Self:
        return self.should_be_visible(self.sidebar)

    def should_hide_sidebar(self) -> Self:
        return self._assert(
            "'sidebar' to be hidden",
            self.sidebar.is_visible,
            lambda visible: not visible,
            False,
        )
