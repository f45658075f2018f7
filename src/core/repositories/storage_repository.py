"""Abstract contract for object storage."""

from abc import ABC, abstractmethod


class ObjectStorageRepository(ABC):
    """Contract for removing asset payloads from blob storage.

    Implementations could be R2, S3, GCS, local disk, etc.
    """

    @abstractmethod
    def remove_object(self, *, key: str) -> None:
        """Delete an object by key.

        Args:
            key: Physical object key

        Raises:
            ObjectStorageError: If deletion fails
        """
