"""
Page Objects

One fluent page object per Conduit screen.

Usage:
    from conduit_e2e.pages import AuthPage

    AuthPage(context).login(email, password).should_redirect_to_home()

Pattern:
    - One class per screen or shared component
    - Elements declared with data_cy("<test-id>")
    - Actions and assertions return self for chaining
"""

from conduit_e2e.pages.article_page import ArticlePage
from conduit_e2e.pages.auth_page import AuthPage
from conduit_e2e.pages.editor_page import EditorPage
from conduit_e2e.pages.home_page import HomePage
from conduit_e2e.pages.navigation import NavigationBar
from conduit_e2e.pages.profile_page import ProfilePage
from conduit_e2e.pages.settings_page import SettingsPage

__all__ = [
    "ArticlePage",
    "AuthPage",
    "EditorPage",
    "HomePage",
    "NavigationBar",
    "ProfilePage",
    "SettingsPage",
]
