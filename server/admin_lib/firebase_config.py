"""
Configuration for the Waste Cycle admin scripts.

Values come from the process environment, optionally seeded from
server/.env. Process variables always win over the .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

SERVER_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = SERVER_ROOT / ".env"

# ── Credentials ──
SERVICE_ACCOUNT_ENV = "FIREBASE_SERVICE_ACCOUNT_PATH"
DEFAULT_SERVICE_ACCOUNT_FILE = SERVER_ROOT / "serviceAccountKey.json"

PROJECT_ID_ENV = "FIREBASE_PROJECT_ID"
CLIENT_EMAIL_ENV = "FIREBASE_CLIENT_EMAIL"
PRIVATE_KEY_ENV = "FIREBASE_PRIVATE_KEY"
EXPECTED_PROJECT_ID_ENV = "FIREBASE_EXPECTED_PROJECT_ID"

REQUIRED_SERVICE_ACCOUNT_FIELDS = ("project_id", "private_key", "client_email")
TOKEN_URI = "https://oauth2.googleapis.com/token"

# ── Firestore ──
PRODUCTS_COLLECTION = "products"
DEFAULT_BATCH_SIZE = 100
MAX_BATCH_WRITES = 500  # Firestore limit per WriteBatch


def load_env(env_file=None):
    """Load .env into os.environ without overriding what is already set."""
    path = Path(env_file) if env_file else ENV_FILE
    return load_dotenv(path, override=False)


def resolve_service_account_path(env=None) -> Path:
    """
    Where the service-account JSON is expected.

    FIREBASE_SERVICE_ACCOUNT_PATH wins when set. Values starting with "."
    are relative to the server/ directory, anything else is used as given.
    """
    env = os.environ if env is None else env
    override = (env.get(SERVICE_ACCOUNT_ENV) or "").strip()
    if not override:
        return DEFAULT_SERVICE_ACCOUNT_FILE
    if override.startswith("."):
        return (SERVER_ROOT / override).resolve()
    return Path(override)


def has_path_override(env=None) -> bool:
    env = os.environ if env is None else env
    return bool((env.get(SERVICE_ACCOUNT_ENV) or "").strip())
