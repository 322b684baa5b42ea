"""
Test suite for the HMS Scheduling Backend.

Contains unit tests for the authentication and referential-integrity core
and API tests against a temporary SQLite database.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
