"""Test environment: runs before any `app` import so cached settings pick these values up."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-only-32b"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["TOKEN_CLEANUP_ENABLED"] = "true"
