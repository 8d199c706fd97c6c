"""
Test suite for the Dummy QA App.

This package contains:
- e2e/: Playwright browser tests (core checks, healing scenarios, journeys)
- unit/: Harness tests for page objects, test data and the runner
"""
