import sys
import os

# Set Env Vars BEFORE any imports to satisfy Pydantic Settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("SMTP_SERVER", None)
os.environ.pop("SENTRY_DSN", None)

# Add the project root to the python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), ".")))
