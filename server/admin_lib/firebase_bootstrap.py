"""
Firebase Admin bootstrap for the admin scripts.

Loads and validates the service-account credential once, initialises the
Firebase app and hands back a ServiceClients bundle that every operation
receives explicitly.

Credential precedence:
  1. FIREBASE_SERVICE_ACCOUNT_PATH (must load if set)
  2. server/serviceAccountKey.json (if present)
  3. FIREBASE_PROJECT_ID / FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from firebase_admin import auth, credentials, firestore

from .firebase_config import (
    CLIENT_EMAIL_ENV,
    DEFAULT_SERVICE_ACCOUNT_FILE,
    EXPECTED_PROJECT_ID_ENV,
    PRIVATE_KEY_ENV,
    PROJECT_ID_ENV,
    REQUIRED_SERVICE_ACCOUNT_FIELDS,
    SERVICE_ACCOUNT_ENV,
    TOKEN_URI,
    has_path_override,
    resolve_service_account_path,
)

logger = logging.getLogger("wastecycle.firebase_bootstrap")

DEFAULT_APP_NAME = "[DEFAULT]"


class CredentialError(Exception):
    """The service-account credential is missing, unreadable or invalid."""


def _location_hint(path) -> str:
    return (
        f"Expected a service account key at {path}. "
        f"Place serviceAccountKey.json in the server/ directory or set "
        f"{SERVICE_ACCOUNT_ENV} (in the environment or server/.env)."
    )


@dataclass
class ServiceClients:
    """Authenticated handles shared by every admin operation."""
    app: firebase_admin.App
    project_id: str
    client_email: str
    auth: Any   # firebase_admin.auth.Client
    db: Any     # google.cloud.firestore.Client

    def close(self):
        firebase_admin.delete_app(self.app)


def load_service_account(path) -> dict:
    """Read and parse a service-account JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            info = json.load(fh)
    except FileNotFoundError as e:
        raise CredentialError(f"Service account file not found. {_location_hint(path)}") from e
    except OSError as e:
        raise CredentialError(f"Cannot read service account file: {e}. {_location_hint(path)}") from e
    except json.JSONDecodeError as e:
        raise CredentialError(f"Service account file is not valid JSON: {e}. {_location_hint(path)}") from e

    if not isinstance(info, dict):
        raise CredentialError(f"Service account file must hold a JSON object. {_location_hint(path)}")
    return info


def validate_service_account(info: dict, source=None) -> dict:
    """
    Check required fields and the private key markers.

    source is the file the credential was read from, if any; its location
    hint is appended to the error.
    """
    hint = f" {_location_hint(source)}" if source is not None else ""

    missing = [f for f in REQUIRED_SERVICE_ACCOUNT_FIELDS if not info.get(f)]
    if missing:
        raise CredentialError(
            f"Invalid service account: missing required fields ({', '.join(missing)}).{hint}"
        )

    key = info["private_key"]
    if "BEGIN PRIVATE KEY" not in key or "END PRIVATE KEY" not in key:
        raise CredentialError(f"Invalid service account: private_key format is incorrect.{hint}")
    return info


def service_account_from_env(env=None) -> Optional[dict]:
    """Build a credential dict from the inline FIREBASE_* variables, if all are set."""
    env = os.environ if env is None else env
    project_id = env.get(PROJECT_ID_ENV)
    client_email = env.get(CLIENT_EMAIL_ENV)
    private_key = env.get(PRIVATE_KEY_ENV)
    if not (project_id and client_email and private_key):
        return None

    return {
        "type": "service_account",
        "project_id": project_id,
        "client_email": client_email,
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": TOKEN_URI,
    }


def resolve_service_account(env=None) -> dict:
    """Find the credential following the documented precedence."""
    env = os.environ if env is None else env
    path = resolve_service_account_path(env)

    if has_path_override(env) or os.path.exists(path):
        logger.info(f"Loading service account from {path}")
        return validate_service_account(load_service_account(path), source=path)

    inline = service_account_from_env(env)
    if inline is not None:
        logger.info("Using service account from environment variables")
        return inline

    raise CredentialError(
        f"No Firebase credentials found. {_location_hint(DEFAULT_SERVICE_ACCOUNT_FILE)} "
        f"Alternatively set {PROJECT_ID_ENV}, {CLIENT_EMAIL_ENV} and {PRIVATE_KEY_ENV}."
    )


def _get_or_init_app(cred, app_name):
    try:
        return firebase_admin.get_app(app_name)
    except ValueError:
        return firebase_admin.initialize_app(cred, name=app_name)


def init_services(service_account=None, env=None, app_name=DEFAULT_APP_NAME) -> ServiceClients:
    """
    Initialise Firebase Admin and return the auth + Firestore handles.

    Raises CredentialError before any backend call if the credential
    cannot be loaded or is rejected by the SDK.
    """
    env = os.environ if env is None else env
    info = service_account or resolve_service_account(env)
    validate_service_account(info)

    try:
        cred = credentials.Certificate(info)
    except ValueError as e:
        raise CredentialError(f"Service account rejected by firebase_admin: {e}") from e

    app = _get_or_init_app(cred, app_name)
    project_id = info["project_id"]

    logger.info("Firebase Admin initialized successfully")
    logger.info(f"   Project ID: {project_id}")
    logger.info(f"   Service Account: {info['client_email']}")

    expected = env.get(EXPECTED_PROJECT_ID_ENV)
    if expected and expected != project_id:
        logger.warning(f"Project ID mismatch: expected {expected}, got {project_id}")

    return ServiceClients(
        app=app,
        project_id=project_id,
        client_email=info["client_email"],
        auth=auth.Client(app),
        db=firestore.client(app),
    )
