"""
Delete ALL posts from Firestore.

Counts the documents in the "products" collection, then deletes them in
atomic batches of --batch-size until the collection is empty.

Usage:
  python server/delete_all_posts.py                    # count, then delete
  python server/delete_all_posts.py --confirm          # ask before deleting
  python server/delete_all_posts.py --batch-size 250

WARNING: this permanently deletes every post in the database.
"""

import argparse
import logging
import sys
import traceback

from admin_lib.collection_purge import delete_collection
from admin_lib.collection_streamer import count_collection_safe
from admin_lib.firebase_bootstrap import CredentialError, init_services
from admin_lib.firebase_config import (
    DEFAULT_BATCH_SIZE,
    MAX_BATCH_WRITES,
    PRODUCTS_COLLECTION,
    load_env,
)

CONFIRM_WORD = "DELETE"


def batch_size_arg(value):
    size = int(value)
    if not 1 <= size <= MAX_BATCH_WRITES:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_BATCH_WRITES}, got {size}")
    return size


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Delete every document in a Firestore collection")
    parser.add_argument("--collection", default=PRODUCTS_COLLECTION,
                        help=f"Collection to purge (default: {PRODUCTS_COLLECTION})")
    parser.add_argument("--batch-size", type=batch_size_arg, default=DEFAULT_BATCH_SIZE,
                        help=f"Documents per batch commit (default: {DEFAULT_BATCH_SIZE})")
    parser.add_argument("--confirm", action="store_true",
                        help=f"Ask the operator to type {CONFIRM_WORD} before deleting")
    return parser.parse_args(argv)


def confirm(collection_name, total):
    try:
        answer = input(f"Type '{CONFIRM_WORD}' to delete {total} documents from '{collection_name}': ")
    except EOFError:
        return None
    return answer.strip() == CONFIRM_WORD


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    print("=" * 60)
    print("  DELETE ALL POSTS")
    print(f"  WARNING: every document in '{args.collection}' will be deleted.")
    print("  This action CANNOT be undone!")
    print("=" * 60)

    load_env()
    try:
        services = init_services()
    except CredentialError as e:
        print(f"\nFailed to initialize Firebase Admin: {e}", file=sys.stderr)
        return 1

    try:
        print("\nCounting existing posts...")
        total = count_collection_safe(services.db, args.collection)
        print(f"   Found {total} posts in database\n")

        if total == 0:
            print("No posts to delete. Database is already clean.")
            return 0

        if args.confirm:
            confirmed = confirm(args.collection, total)
            if confirmed is None:
                print("\nCannot confirm in non-interactive mode. No documents were deleted.")
                return 0
            if not confirmed:
                print("\nCancelled. No documents were deleted.")
                return 0

        print(f"Deleting all posts from '{args.collection}' collection...")
        deleted = delete_collection(services.db, args.collection, batch_size=args.batch_size)

        print(f"\nSuccessfully deleted {deleted} posts!")
        print("Database is now clean.")
        return 0
    except Exception as e:
        print(f"\nScript failed: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    finally:
        services.close()


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
