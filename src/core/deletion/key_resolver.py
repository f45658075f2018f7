"""Resolution of external asset identifiers to metadata storage keys.

Upload-time key naming has changed over the service's history: some
assets are stored under the bare identifier, others under a typed prefix
such as ``img:`` or ``r2:``. The resolver absorbs that so the rest of the
deletion flow only ever sees the exact key a record lives under.
"""

from aws_lambda_powertools import Logger

from core.models.asset import ResolvedRecord
from core.repositories.metadata_repository import MetadataStoreRepository
from core.utils.constants import KNOWN_KEY_PREFIXES

logger = Logger(UTC=True)


def has_known_prefix(file_id: str) -> bool:
    """Return True if ``file_id`` already starts with a typed key prefix."""
    return any(prefix and file_id.startswith(prefix) for prefix in KNOWN_KEY_PREFIXES)


def candidate_keys(file_id: str) -> list[str]:
    """Return the storage keys to look up for ``file_id``, in lookup order."""
    if has_known_prefix(file_id):
        return [file_id]

    return [f"{prefix}{file_id}" for prefix in KNOWN_KEY_PREFIXES]


class KeyResolver:
    """Finds the metadata record and exact storage key for an identifier."""

    def __init__(self, metadata_store: MetadataStoreRepository) -> None:
        self._store = metadata_store

    def resolve(self, file_id: str) -> ResolvedRecord:
        """Try candidate keys in order and return the first record with metadata.

        Absence is a normal outcome: the returned ``ResolvedRecord`` is then
        not ``found`` and carries the last key tried.
        """
        kv_key = file_id

        for kv_key in candidate_keys(file_id):
            record = self._store.fetch_record(kv_key=kv_key)

            if record is not None and record.metadata is not None:
                logger.debug(
                    "Resolved storage key",
                    extra={"file_id": file_id, "kv_key": kv_key},
                )
                return ResolvedRecord(record=record, kv_key=kv_key)

        logger.info(
            "No metadata record found for identifier",
            extra={"file_id": file_id, "last_tried_key": kv_key},
        )
        return ResolvedRecord(record=None, kv_key=kv_key)
