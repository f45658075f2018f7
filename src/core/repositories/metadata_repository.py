"""Abstract contract for asset metadata persistence."""

from abc import ABC, abstractmethod

from core.models.asset import MetadataRecord


class MetadataStoreRepository(ABC):
    """Contract for reading and removing asset metadata records.

    Implementations could be DynamoDB, Workers KV, Redis, etc.
    The deletion flow depends on this interface, not the implementation.
    """

    @abstractmethod
    def fetch_record(self, *, kv_key: str) -> MetadataRecord | None:
        """Fetch the record stored under an exact storage key.

        Args:
            kv_key: Storage key, including any type prefix

        Returns:
            The stored record, or None if the key does not exist.
            A record whose metadata is missing or empty has ``metadata=None``.

        Raises:
            MetadataStoreError: If the lookup fails
            MetadataOperationFailedError: If the stored metadata is malformed
        """

    @abstractmethod
    def remove_record(self, *, kv_key: str) -> None:
        """Remove the record stored under an exact storage key.

        Args:
            kv_key: Storage key, including any type prefix

        Raises:
            MetadataStoreError: If deletion fails
        """
