"""Login and registration screens."""

from typing import Self

from conduit_e2e.dsl.page import BasePage, data_cy
from conduit_e2e.network.interceptor import StubResponse

LOGIN_ALIAS = "loginRequest"
REGISTER_ALIAS = "registerRequest"


class AuthPage(BasePage):
    """Page object for /login and /register.

    Both forms share the email, password, error and loading elements.
    """

    path = "/login"

    # Shared
    email_input = data_cy("email-input")
    password_input = data_cy("password-input")
    error_messages = data_cy("error-messages")
    submit_button = data_cy("submit-button")
    loading_spinner = data_cy("loading")

    # Login
    login_button = data_cy("login-button")
    login_form = data_cy("login-form")
    login_title = data_cy("login-title")
    sign_up_link = data_cy("signup-link")

    # Register
    username_input = data_cy("username-input")
    register_button = data_cy("register-button")
    register_form = data_cy("register-form")
    register_title = data_cy("register-title")
    sign_in_link = data_cy("signin-link")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def visit_login(self) -> Self:
        return self.visit("/login")

    def visit_register(self) -> Self:
        return self.visit("/register")

    def go_to_register_from_login(self) -> Self:
        self.sign_up_link.click()
        return self

    def go_to_login_from_register(self) -> Self:
        self.sign_in_link.click()
        return self

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def login(self, email: str, password: str) -> Self:
        self.visit_login()
        self.email_input.fill(email)
        self.password_input.fill(password)
        self.login_button.click()
        return self

    def login_with_enter(self, email: str, password: str) -> Self:
        self.visit_login()
        self.email_input.fill(email)
        self.password_input.fill(password)
        self.password_input.press("Enter")
        return self

    def register(self, username: str, email: str, password: str) -> Self:
        self.visit_register()
        self.username_input.fill(username)
        self.email_input.fill(email)
        self.password_input.fill(password)
        self.register_button.click()
        return self

    def register_with_enter(self, username: str, email: str, password: str) -> Self:
        self.visit_register()
        self.username_input.fill(username)
        self.email_input.fill(email)
        self.password_input.fill(password)
        self.password_input.press("Enter")
        return self

    def submit_empty_login(self) -> Self:
        self.visit_login()
        self.login_button.click()
        return self

    def submit_empty_register(self) -> Self:
        self.visit_register()
        self.register_button.click()
        return self

    def submit_partial_login(self, email: str) -> Self:
        self.visit_login()
        self.email_input.fill(email)
        self.login_button.click()
        return self

    def submit_partial_register(self, username: str, email: str) -> Self:
        self.visit_register()
        self.username_input.fill(username)
        self.email_input.fill(email)
        self.register_button.click()
        return self

    def clear_login_form(self) -> Self:
        self.email_input.clear()
        self.password_input.clear()
        return self

    def clear_register_form(self) -> Self:
        self.username_input.clear()
        self.email_input.clear()
        self.password_input.clear()
        return self

    # -------------------------------------------------------------------------
    # Assertions
    # -------------------------------------------------------------------------

    def should_be_on_login_page(self) -> Self:
        return self.should_have_url_containing("/login").should_be_visible(self.login_title)

    def should_be_on_register_page(self) -> Self:
        return self.should_have_url_containing("/register").should_be_visible(
            self.register_title
        )

    def should_redirect_to_home(self) -> Self:
        return self.should_be_at("/")

    def should_show_error_message(self, message: str) -> Self:
        return self.should_be_visible(self.error_messages).should_contain(
            self.error_messages, message
        )

    def should_not_show_error_message(self) -> Self:
        return self.should_not_exist(self.error_messages)

    def should_have_validation_error(self, field_name: str, message: str) -> Self:
        return self.should_contain(f"{field_name}-error", message)

    def should_be_loading(self) -> Self:
        return self.should_be_visible(self.loading_spinner).should_be_disabled(
            self.submit_button
        )

    def should_not_be_loading(self) -> Self:
        return self.should_not_exist(self.loading_spinner).should_be_enabled(self.submit_button)

    def should_have_required_fields(self) -> Self:
        return self.should_have_attribute(self.email_input, "required").should_have_attribute(
            self.password_input, "required"
        )

    def should_have_correct_input_types(self) -> Self:
        return self.should_have_attribute(
            self.email_input, "type", "email"
        ).should_have_attribute(self.password_input, "type", "password")

    def should_have_correct_placeholders(self) -> Self:
        return self.should_have_attribute(
            self.email_input, "placeholder", "Email"
        ).should_have_attribute(self.password_input, "placeholder", "Password")

    def should_have_working_links(self) -> Self:
        """Check the form links point at the other form.

        Each form renders only its own link, so at least one of the two must
        be present and every one present must have the right href.
        """
        links = ((self.sign_up_link, "#/register"), (self.sign_in_link, "#/login"))
        expected = {link.name: href for link, href in links}

        def rendered_hrefs() -> dict[str, str | None]:
            return {link.name: link.attribute("href") for link, _ in links if link.exists()}

        return self._assert(
            "form links to point at the other form",
            rendered_hrefs,
            lambda found: bool(found) and all(found[name] == expected[name] for name in found),
            expected,
        )

    def should_have_empty_form(self) -> Self:
        return self.should_have_value(self.email_input, "").should_have_value(
            self.password_input, ""
        )

    def should_have_filled_form(self, email: str, password: str) -> Self:
        return self.should_have_value(self.email_input, email).should_have_value(
            self.password_input, password
        )

    def should_have_filled_register_form(self, username: str, email: str, password: str) -> Self:
        self.should_have_value(self.username_input, username)
        return self.should_have_filled_form(email, password)

    def should_have_accessible_labels(self) -> Self:
        for field in (self.email_input, self.password_input):
            self.should_have_any_attribute(field, "aria-label", "id")
        return self

    def should_have_accessible_errors(self) -> Self:
        return self.should_have_attribute(self.error_messages, "role", "alert")

    # -------------------------------------------------------------------------
    # Network
    # -------------------------------------------------------------------------

    def should_make_login_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(LOGIN_ALIAS, "POST", "**/users/login", stub)

    def should_make_register_request(self, stub: StubResponse | None = None) -> Self:
        return self.expect_request(REGISTER_ALIAS, "POST", "**/users", stub)

    def should_receive_login_response(self) -> Self:
        return self.should_receive_response(LOGIN_ALIAS, 200)

    def should_receive_register_response(self) -> Self:
        return self.should_receive_response(REGISTER_ALIAS, 200)

    def should_receive_error_response(self, status_code: int) -> Self:
        return self.should_receive_response(LOGIN_ALIAS, status_code)
