"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before any app import
os.environ.setdefault("TOKEN_SECRET", "test-secret-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_AUTO_CREATE", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "10000")
os.environ.setdefault("LOG_FORMAT", "text")
# Route tests key clients by X-Forwarded-For
os.environ.setdefault("TRUST_FORWARDED_FOR", "true")
