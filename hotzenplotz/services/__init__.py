"""Cache engine services.

Leaf adapters (TransportAdapter, DurableStoreAdapter, item normalizer) feed
the two stateful components: CollectionCache and RevisionReconciler.
"""

from hotzenplotz.services.collection_cache import CollectionCache
from hotzenplotz.services.durable_store_adapter import DurableStoreAdapter
from hotzenplotz.services.item_normalizer import normalize_record, normalize_records
from hotzenplotz.services.revision_reconciler import RevisionReconciler
from hotzenplotz.services.transport_adapter import TransportAdapter

__all__ = [
    "CollectionCache",
    "DurableStoreAdapter",
    "RevisionReconciler",
    "TransportAdapter",
    "normalize_record",
    "normalize_records",
]
