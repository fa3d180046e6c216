"""
Stream Firestore collections in pages.
Never call db.collection(name).get() on an unbounded collection.
"""

import logging

from google.api_core.exceptions import GoogleAPICallError

logger = logging.getLogger("wastecycle.collection_streamer")


def stream_collection(db, collection_name, batch_size=500):
    """
    Yields pages of document snapshots, ordered by document id.

    Usage::

        for page in stream_collection(db, "products", batch_size=200):
            for doc in page:
                process(doc.to_dict())
    """
    collection_ref = db.collection(collection_name)
    query = collection_ref.order_by("__name__").limit(batch_size)

    while True:
        docs = list(query.get())

        if not docs:
            break

        yield docs

        if len(docs) < batch_size:
            break

        query = collection_ref.order_by("__name__").start_after(docs[-1]).limit(batch_size)


def count_collection_safe(db, collection_name):
    """
    Count documents without loading the collection into memory.

    Uses the count() aggregation; if the backend rejects it, falls back to
    streaming pages and counting them.
    """
    try:
        results = db.collection(collection_name).count(alias="total").get()
        for result in results:
            for agg_result in result:
                return int(agg_result.value)
        return 0
    except GoogleAPICallError as e:
        logger.warning(f"Count aggregation failed for {collection_name}, streaming instead: {e}")

    count = 0
    for page in stream_collection(db, collection_name, batch_size=1000):
        count += len(page)
    return count
