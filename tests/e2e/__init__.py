"""
Browser test package for the Dummy QA App.

This package contains Playwright-based browser tests and demonstrates:
- Page Object Model (POM) pattern built by composition
- Locator strategies using data-testid attributes
- Fragile versus stable locators under live UI changes
- User journeys across login, dashboard, profile and dev tools
"""
