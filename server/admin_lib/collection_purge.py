"""
Batched purge of a single Firestore collection.

Fetches one bounded page at a time, deletes it in one WriteBatch and
commits before fetching the next page, so at most one page of snapshots
is held in memory.
"""

import logging

from .firebase_config import DEFAULT_BATCH_SIZE, MAX_BATCH_WRITES

logger = logging.getLogger("wastecycle.collection_purge")


def delete_collection(db, collection_name, batch_size=DEFAULT_BATCH_SIZE, progress=None):
    """
    Delete every document in collection_name, one page per batch commit.

    Args:
        db: Firestore client
        collection_name: str
        batch_size: documents per page / batch (1..500)
        progress: optional callable(deleted_count) after each commit

    Returns:
        int: number of documents deleted

    A short page (fewer than batch_size docs) ends the loop without a
    confirming fetch. Errors from get() or commit() propagate; batches
    committed before the failure stay deleted.
    """
    if not 1 <= batch_size <= MAX_BATCH_WRITES:
        raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_WRITES}, got {batch_size}")

    collection_ref = db.collection(collection_name)

    deleted_count = 0
    has_more = True

    while has_more:
        docs = list(collection_ref.limit(batch_size).get())

        if not docs:
            break

        batch = db.batch()
        for doc in docs:
            batch.delete(doc.reference)
        batch.commit()
        deleted_count += len(docs)

        logger.info(f"   Deleted {deleted_count} documents...")
        if progress is not None:
            progress(deleted_count)

        if len(docs) < batch_size:
            has_more = False

    return deleted_count
