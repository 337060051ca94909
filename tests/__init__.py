"""Test package. Points the app at an in-memory database before anything imports it."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "dev"
os.environ.setdefault("JWT_SECRET", "unit-test-secret-0123456789abcdef-0123")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
