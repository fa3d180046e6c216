"""
Firebase Authentication account management.

Every function takes the firebase_admin.auth.Client from ServiceClients
as its first argument and performs a single request/response unit.
Only create_account_if_absent treats a missing account as normal flow;
all other failures are logged and re-raised unchanged.
"""

import json
import logging

from firebase_admin import auth, exceptions

from .admin_results import AccountNotFoundError, LookupResult, LookupStatus

logger = logging.getLogger("wastecycle.identity_admin")

# Errors the SDK raises for bad input (ValueError) or backend failures.
BACKEND_ERRORS = (exceptions.FirebaseError, ValueError)


def _error_code(error):
    return getattr(error, "code", None) or type(error).__name__


def default_display_name(email):
    """alice@example.com -> alice"""
    return email.split("@", 1)[0]


def lookup_account(auth_client, email) -> LookupResult:
    try:
        record = auth_client.get_user_by_email(email)
    except auth.UserNotFoundError:
        return LookupResult.not_found(email)
    except BACKEND_ERRORS as e:
        return LookupResult.failed(email, e)
    return LookupResult.found(email, record)


def create_account_if_absent(auth_client, email, password, display_name=None):
    """
    Create an account unless one already exists for this email.

    Returns the existing record untouched when found, otherwise the newly
    created record (email_verified=False, display name defaulting to the
    email's local part).
    """
    result = lookup_account(auth_client, email)

    if result.is_found:
        logger.info(f"User {email} already exists (UID: {result.record.uid}), nothing to do")
        return result.record

    if result.status is LookupStatus.FAILED:
        logger.error(f"Failed to create user {email}: {_error_code(result.error)} {result.error}")
        raise result.error

    logger.info(f"Creating new user: {email}")
    try:
        record = auth_client.create_user(
            email=email,
            password=password,
            display_name=display_name or default_display_name(email),
            email_verified=False,
        )
    except BACKEND_ERRORS as e:
        logger.error(f"Failed to create user {email}: {_error_code(e)} {e}")
        raise

    logger.info(f"User created: {record.email} (UID: {record.uid}, Display Name: {record.display_name or 'N/A'})")
    return record


def _resolve(auth_client, email, action):
    result = lookup_account(auth_client, email)
    try:
        return result.unwrap()
    except AccountNotFoundError:
        logger.error(f"Failed to {action} {email}: account does not exist")
        raise
    except BACKEND_ERRORS as e:
        logger.error(f"Failed to {action} {email}: {_error_code(e)} {e}")
        raise


def update_account_password(auth_client, email, new_password):
    record = _resolve(auth_client, email, "update password for")
    try:
        updated = auth_client.update_user(record.uid, password=new_password)
    except BACKEND_ERRORS as e:
        logger.error(f"Failed to update password for {email}: {_error_code(e)} {e}")
        raise
    logger.info(f"Password updated for {email}")
    return updated


def delete_account(auth_client, email):
    """Delete the account for email and return its uid."""
    record = _resolve(auth_client, email, "delete")
    try:
        auth_client.delete_user(record.uid)
    except BACKEND_ERRORS as e:
        logger.error(f"Failed to delete user {email}: {_error_code(e)} {e}")
        raise
    logger.info(f"User {email} deleted (UID: {record.uid})")
    return record.uid


def list_accounts(auth_client):
    """All accounts, following list_users pagination to the end."""
    try:
        return list(auth_client.list_users().iterate_all())
    except BACKEND_ERRORS as e:
        logger.error(f"Failed to list users: {_error_code(e)} {e}")
        raise


def load_seed_file(path):
    """
    Read accounts to create from a JSON list:

        [{"email": "a@example.com", "password": "...", "displayName": "User A"}]
    """
    with open(path, "r", encoding="utf-8") as fh:
        entries = json.load(fh)

    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a JSON list of accounts")

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("email") or not entry.get("password"):
            raise ValueError(f"{path}: entry {i} needs 'email' and 'password'")
    return entries


def seed_accounts(auth_client, accounts):
    """create_account_if_absent for each entry, in order."""
    records = []
    for entry in accounts:
        records.append(create_account_if_absent(
            auth_client,
            entry["email"],
            entry["password"],
            entry.get("displayName") or entry.get("display_name"),
        ))
    return records
