"""Test configuration: point the app at in-memory SQLite before anything imports it."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("APP_ENV", "dev")

import app.core.security as security  # noqa: E402

# Minimum bcrypt cost keeps the suite fast; production uses the module default.
security.BCRYPT_ROUNDS = 4
