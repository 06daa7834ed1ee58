import os

# Settings are read at import time; keep tests off the real database and secret
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
