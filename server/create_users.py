"""
Manage Firebase Authentication users for Waste Cycle.

Usage:
  python server/create_users.py create a@gmail.com [PASSWORD] [--display-name "User A"]
  python server/create_users.py update-password a@gmail.com [PASSWORD]
  python server/create_users.py delete a@gmail.com
  python server/create_users.py list
  python server/create_users.py seed users.json

A password left off the command line is prompted for. After first login
the app creates the user's Firestore profile; this script only touches Auth.
"""

import argparse
import getpass
import logging
import sys

from firebase_admin import exceptions

from admin_lib.admin_results import AccountNotFoundError
from admin_lib.firebase_bootstrap import CredentialError, init_services
from admin_lib.firebase_config import load_env
from admin_lib.identity_admin import (
    create_account_if_absent,
    delete_account,
    list_accounts,
    load_seed_file,
    seed_accounts,
    update_account_password,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Firebase user management for Waste Cycle")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a user unless the email already exists")
    create.add_argument("email")
    create.add_argument("password", nargs="?", default=None)
    create.add_argument("--display-name", default=None,
                        help="Defaults to the part of the email before '@'")

    update = subparsers.add_parser("update-password", help="Replace a user's password")
    update.add_argument("email")
    update.add_argument("password", nargs="?", default=None)

    delete = subparsers.add_parser("delete", help="Delete a user")
    delete.add_argument("email")

    subparsers.add_parser("list", help="List every user")

    seed = subparsers.add_parser("seed", help="Create users from a JSON file, then list all users")
    seed.add_argument("file", help='JSON list of {"email", "password", "displayName"}')

    return parser.parse_args(argv)


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        if len(password) < 6:
            print("Password must be at least 6 characters long.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def print_users(users):
    print(f"\nTotal users: {len(users)}")
    for user in users:
        print(f"   - {user.email} (UID: {user.uid})")


def run_command(args, auth_client):
    if args.command == "create":
        password = args.password or prompt_for_password()
        user = create_account_if_absent(auth_client, args.email, password, args.display_name)
        print(f"{user.email} -> UID {user.uid} (Display Name: {user.display_name or 'N/A'})")

    elif args.command == "update-password":
        password = args.password or prompt_for_password()
        update_account_password(auth_client, args.email, password)
        print(f"Password updated for {args.email}")

    elif args.command == "delete":
        uid = delete_account(auth_client, args.email)
        print(f"User {args.email} deleted (UID: {uid})")

    elif args.command == "list":
        print_users(list_accounts(auth_client))

    elif args.command == "seed":
        entries = load_seed_file(args.file)
        print(f"Creating {len(entries)} users...\n")
        seed_accounts(auth_client, entries)
        print_users(list_accounts(auth_client))
        print("\nNext steps:")
        print("   1. Users can now login with their email and password")
        print("   2. After first login, the user profile is auto-created in Firestore")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    load_env()
    try:
        services = init_services()
    except CredentialError as e:
        print(f"Failed to initialize Firebase Admin: {e}", file=sys.stderr)
        return 1

    try:
        run_command(args, services.auth)
    except AccountNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (exceptions.FirebaseError, ValueError, OSError) as e:
        print(f"Script failed: {e}", file=sys.stderr)
        return 1
    finally:
        services.close()

    print("\nScript completed successfully!")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
