"""
Waste Cycle admin library
=========================

Firebase Admin helpers behind the server maintenance scripts.

Modules:
- firebase_config: environment (.env) and credential path settings
- firebase_bootstrap: service-account loading, ServiceClients
- admin_results: LookupResult / AccountNotFoundError
- identity_admin: Firebase Auth account operations
- collection_streamer: paged iteration and counting
- collection_purge: batched deletion of one collection

Usage:
    from admin_lib.firebase_bootstrap import init_services
    from admin_lib.identity_admin import create_account_if_absent
    from admin_lib.collection_purge import delete_collection
"""

from .admin_results import AccountNotFoundError, LookupResult, LookupStatus
from .collection_purge import delete_collection
from .collection_streamer import count_collection_safe, stream_collection
from .firebase_bootstrap import CredentialError, ServiceClients, init_services
from .identity_admin import (
    create_account_if_absent,
    default_display_name,
    delete_account,
    list_accounts,
    lookup_account,
    seed_accounts,
    update_account_password,
)
