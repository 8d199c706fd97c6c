"""
Page Object Model (POM) classes for the Dummy QA App.

This package contains page objects that encapsulate page-specific
locators and interactions. The POM pattern provides:
- Separation of test logic from page details
- Reusable page interactions
- Maintainable test code (changes to UI only require updates in one place)
"""

from tests.e2e.pages.dashboard_page import DashboardPage
from tests.e2e.pages.dev_tools_page import DevToolsPage
from tests.e2e.pages.login_page import LoginPage
from tests.e2e.pages.profile_page import ProfilePage
from tests.e2e.pages.user_modal import UserModal
from tests.e2e.pages.view import BrowserSession, DialogDecision, View, ViewDriver

__all__ = [
    "BrowserSession",
    "DashboardPage",
    "DevToolsPage",
    "DialogDecision",
    "LoginPage",
    "ProfilePage",
    "UserModal",
    "View",
    "ViewDriver",
]
