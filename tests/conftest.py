"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment; tests sign tokens with a fixed secret
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

logfire.configure(send_to_logfire=False, console=False)
