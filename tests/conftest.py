"""Root conftest — shared test configuration."""

import os

# Required settings, so get_settings() works without a real .env
os.environ.setdefault("POSTGRESQL_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("OIDC_CLIENT_ID", "test-client-id")
os.environ.setdefault("OIDC_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("OIDC_PROVIDER_URL", "https://idp.test")
os.environ.setdefault("REDIRECT_URI", "http://test/callback")
