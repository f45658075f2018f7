"""Backend classification for resolved assets."""

from core.models.asset import AssetMetadata, Backend
from core.utils.constants import R2_KEY_PREFIX


def classify_backend(file_id: str, metadata: AssetMetadata) -> Backend:
    """Decide which backend owns the payload of a resolved asset.

    The object store wins if the identifier carries the ``r2:`` hint or
    either storage attribute says ``r2``. Everything else is treated as a
    Telegram-backed asset.
    """
    if file_id.startswith(R2_KEY_PREFIX) or metadata.is_object_store:
        return Backend.OBJECT_STORE

    return Backend.MESSAGING
