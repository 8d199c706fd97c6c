"""Support code for the Dummy QA App end-to-end suite: configuration, test data, app startup and the qa-suite runner."""
