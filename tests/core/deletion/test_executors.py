"""Unit tests for the backend-specific deletion executors."""

import pytest

from core.deletion.executors import (
    MessageDeletionExecutor,
    ObjectStoreDeletionExecutor,
    resolve_object_key,
)
from core.models.asset import AssetMetadata, Backend, DeletionTarget
from core.models.errors import (
    ConfigurationError,
    MetadataOperationFailedError,
    MetadataStoreError,
    ObjectStorageError,
)
from core.models.outcome import MessageDeletionOutcome, ObjectStoreDeletionOutcome
from core.utils.constants import (
    MESSAGE_R2_DELETED,
    MESSAGE_TELEGRAM_BEST_EFFORT,
    MESSAGE_TELEGRAM_DELETED,
    WARNING_TELEGRAM_NOT_DELETED,
)


def make_target(file_id: str, kv_key: str, **metadata) -> DeletionTarget:
    return DeletionTarget(
        file_id=file_id,
        kv_key=kv_key,
        metadata=AssetMetadata.model_validate(metadata),
    )


class TestResolveObjectKey:
    def test_explicit_r2_key_wins(self) -> None:
        target = make_target("r2:abc", "r2:abc", r2Key="uploads/2024/abc.png")
        assert resolve_object_key(target) == "uploads/2024/abc.png"

    def test_strips_prefix_from_storage_key(self) -> None:
        target = make_target("abc", "r2:abc", storageType="r2")
        assert resolve_object_key(target) == "abc"

    def test_strips_prefix_from_identifier(self) -> None:
        target = make_target("r2:abc", "img:r2:abc")
        assert resolve_object_key(target) == "abc"

    def test_falls_back_to_raw_identifier(self) -> None:
        target = make_target("abc", "img:abc", storage="r2")
        assert resolve_object_key(target) == "abc"

    def test_empty_r2_key_is_ignored(self) -> None:
        target = make_target("r2:abc", "r2:abc", r2Key="")
        assert resolve_object_key(target) == "abc"

    def test_bare_prefix_resolves_to_empty(self) -> None:
        target = make_target("r2:", "r2:")
        assert resolve_object_key(target) == ""


class TestObjectStoreDeletionExecutor:
    def test_deletes_object_then_record(self, fake_store, fake_objects, call_log) -> None:
        fake_store.put("r2:abc123", {"storageType": "r2"})
        executor = ObjectStoreDeletionExecutor(fake_store, fake_objects)

        outcome = executor.delete(make_target("r2:abc123", "r2:abc123", storageType="r2"))

        assert isinstance(outcome, ObjectStoreDeletionOutcome)
        assert outcome.success is True
        assert outcome.message == MESSAGE_R2_DELETED
        assert outcome.r2_key == "abc123"
        assert outcome.kv_key == "r2:abc123"
        assert outcome.backend is Backend.OBJECT_STORE
        assert call_log == [("r2.remove", "abc123"), ("kv.remove", "r2:abc123")]
        assert "r2:abc123" not in fake_store.records

    def test_failed_object_delete_keeps_record(self, fake_store, fake_objects, call_log) -> None:
        fake_store.put("r2:abc123", {"storageType": "r2"})
        fake_objects.fail = True
        executor = ObjectStoreDeletionExecutor(fake_store, fake_objects)

        with pytest.raises(ObjectStorageError):
            executor.delete(make_target("r2:abc123", "r2:abc123"))

        assert ("kv.remove", "r2:abc123") not in call_log
        assert "r2:abc123" in fake_store.records

    def test_missing_binding_aborts_before_mutation(self, fake_store, call_log) -> None:
        executor = ObjectStoreDeletionExecutor(fake_store, None)

        with pytest.raises(ConfigurationError, match="R2 bucket is not configured"):
            executor.delete(make_target("r2:abc", "r2:abc"))

        assert call_log == []

    def test_unresolvable_key_aborts_before_mutation(self, fake_store, fake_objects, call_log) -> None:
        executor = ObjectStoreDeletionExecutor(fake_store, fake_objects)

        with pytest.raises(MetadataOperationFailedError, match="Failed to resolve R2 key"):
            executor.delete(make_target("r2:", "r2:"))

        assert call_log == []


class TestMessageDeletionExecutor:
    def test_full_success(self, fake_store, fake_messages, call_log) -> None:
        fake_store.put("img:xyz", {"telegramMessageId": 42})
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        outcome = executor.delete(make_target("xyz", "img:xyz", telegramMessageId=42))

        assert isinstance(outcome, MessageDeletionOutcome)
        assert outcome.success is True
        assert outcome.message == MESSAGE_TELEGRAM_DELETED
        assert outcome.telegram_delete_attempted is True
        assert outcome.telegram_deleted is True
        assert outcome.warning == ""
        assert outcome.telegram_delete_error is None
        assert call_log == [("tg.remove", 42), ("kv.remove", "img:xyz")]

    def test_negative_ack_still_removes_record(self, fake_store, fake_messages, call_log) -> None:
        fake_messages.acknowledge = False
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        outcome = executor.delete(make_target("xyz", "img:xyz", telegramMessageId=42))

        assert outcome.success is True
        assert outcome.telegram_delete_attempted is True
        assert outcome.telegram_deleted is False
        assert outcome.telegram_delete_error is None
        assert outcome.warning == WARNING_TELEGRAM_NOT_DELETED
        assert outcome.message == MESSAGE_TELEGRAM_BEST_EFFORT
        assert call_log.count(("kv.remove", "img:xyz")) == 1

    def test_network_error_is_recorded_and_record_removed(
        self,
        fake_store,
        fake_messages,
        telegram_network_error,
        call_log,
    ) -> None:
        fake_messages.error = telegram_network_error
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        outcome = executor.delete(make_target("xyz", "img:xyz", telegramMessageId=42))

        assert outcome.success is True
        assert outcome.telegram_delete_attempted is True
        assert outcome.telegram_deleted is False
        assert outcome.telegram_delete_error == "Telegram request failed: connection reset"
        assert outcome.warning == WARNING_TELEGRAM_NOT_DELETED
        assert call_log == [("tg.remove", 42), ("kv.remove", "img:xyz")]

    def test_unexpected_exception_is_swallowed(self, fake_store, fake_messages, call_log) -> None:
        fake_messages.error = RuntimeError("boom")
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        outcome = executor.delete(make_target("xyz", "xyz", telegramMessageId="99"))

        assert outcome.telegram_deleted is False
        assert outcome.telegram_delete_error == "boom"
        assert call_log.count(("kv.remove", "xyz")) == 1

    def test_missing_message_id_skips_remote_delete(self, fake_store, fake_messages, call_log) -> None:
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        outcome = executor.delete(make_target("xyz", "vid:xyz", storageType="telegram"))

        assert outcome.success is True
        assert outcome.telegram_delete_attempted is False
        assert outcome.telegram_deleted is False
        assert outcome.warning == WARNING_TELEGRAM_NOT_DELETED
        assert call_log == [("kv.remove", "vid:xyz")]

    def test_missing_binding_counts_as_failed_attempt(self, fake_store, call_log) -> None:
        executor = MessageDeletionExecutor(fake_store, None)

        outcome = executor.delete(make_target("xyz", "xyz", telegramMessageId=42))

        assert outcome.telegram_delete_attempted is True
        assert outcome.telegram_deleted is False
        assert call_log == [("kv.remove", "xyz")]

    def test_record_delete_failure_propagates(self, fake_store, fake_messages, call_log, monkeypatch) -> None:
        def fail_remove(*, kv_key: str) -> None:
            call_log.append(("kv.remove", kv_key))
            raise MetadataStoreError(message="Unable to delete file metadata")

        monkeypatch.setattr(fake_store, "remove_record", fail_remove)
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        with pytest.raises(MetadataStoreError):
            executor.delete(make_target("xyz", "xyz", telegramMessageId=42))

        assert call_log == [("tg.remove", 42), ("kv.remove", "xyz")]

    def test_serialized_outcome_uses_client_field_names(self, fake_store, fake_messages) -> None:
        executor = MessageDeletionExecutor(fake_store, fake_messages)

        body = executor.delete(make_target("xyz", "img:xyz", telegramMessageId=42)).model_dump(
            by_alias=True
        )

        assert body == {
            "success": True,
            "message": MESSAGE_TELEGRAM_DELETED,
            "fileId": "xyz",
            "kvKey": "img:xyz",
            "telegramDeleteAttempted": True,
            "telegramDeleted": True,
            "warning": "",
            "telegramDeleteError": None,
        }
