"""Abstract contract for payloads held as messages on a messaging platform."""

from abc import ABC, abstractmethod


class MessageRepository(ABC):
    """Contract for removing messages that carry asset payloads."""

    @abstractmethod
    def remove_message(self, *, message_id: int | str) -> bool:
        """Delete a message from the storage chat.

        Args:
            message_id: Identifier of the message holding the payload

        Returns:
            True only if the platform acknowledged the deletion.
            A reachable platform that refuses or does not acknowledge
            returns False.

        Raises:
            MessageDeletionError: If the platform could not be reached
        """
