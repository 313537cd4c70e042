"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment; these must be set before any
# container is built.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")  # bcrypt minimum, keeps tests fast

logfire.configure(send_to_logfire=False, console=False)
