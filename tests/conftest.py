"""
Pytest configuration and fixtures for asset deletion tests.
Provides AWS mocking plus metadata table and R2 bucket fixtures with cleanup.
"""

import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from core.models.asset import AssetMetadata, MetadataRecord
from core.models.errors import MessageDeletionError, ObjectStorageError
from core.repositories.message_repository import MessageRepository
from core.repositories.metadata_repository import MetadataStoreRepository
from core.repositories.storage_repository import ObjectStorageRepository

TEST_TABLE_NAME = "asset-metadata-test"
TEST_BUCKET_NAME = "asset-objects-test"

os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["ASSET_METADATA_TABLE_NAME"] = TEST_TABLE_NAME
os.environ["R2_BUCKET_NAME"] = TEST_BUCKET_NAME
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_SERVICE_NAME"] = "asset-deletion-test"

for _name in (
    "AWS_ENDPOINT_URL",
    "R2_ENDPOINT_URL",
    "TG_BOT_TOKEN",
    "TG_CHAT_ID",
    "TELEGRAM_API_BASE_URL",
    "TELEGRAM_TIMEOUT_SECONDS",
):
    os.environ.pop(_name, None)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def metadata_table(dynamodb_resource):
    """
    Create the key-value metadata table for testing.

    The table lives inside the moto context, so it disappears with it.
    """
    table = dynamodb_resource.create_table(
        TableName=os.getenv("ASSET_METADATA_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "kv_key", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "kv_key", "AttributeType": "S"}],
    )
    table.wait_until_exists()

    return table


@pytest.fixture
def kv_put_record(metadata_table) -> Callable[..., dict[str, Any]]:
    """
    Helper to store a record the way the upload path does.

    Usage:
        kv_put_record("img:abc", {"telegramMessageId": 42})
        kv_put_record("bare", None)  # entry without metadata
    """

    def _put(
        kv_key: str,
        metadata: dict[str, Any] | None,
        value: str = "",
    ) -> dict[str, Any]:
        item: dict[str, Any] = {"kv_key": kv_key, "value": value}
        if metadata is not None:
            item["metadata"] = metadata

        metadata_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def kv_get_item(metadata_table) -> Callable[[str], dict[str, Any] | None]:
    """
    Helper to read a raw item back from the metadata table.

    Usage:
        item = kv_get_item("img:abc")
    """

    def _get(kv_key: str) -> dict[str, Any] | None:
        response: dict[str, Any] = metadata_table.get_item(Key={"kv_key": kv_key})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client standing in for the R2 endpoint."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def r2_bucket(s3_client):
    """
    Create the R2 bucket for testing.
    """
    bucket_name = os.getenv("R2_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    return s3_client


@pytest.fixture
def s3_put_object(r2_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to the R2 bucket.

    Usage:
        s3_put_object("abc123", b"bytes")
    """

    def _put(key: str, body: bytes = b"data", content_type: str = "application/octet-stream"):
        return r2_bucket.put_object(
            Bucket=os.getenv("R2_BUCKET_NAME"),
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    return _put


@pytest.fixture
def s3_object_exists(r2_bucket) -> Callable[[str], bool]:
    """
    Helper to check whether an object is still in the R2 bucket.

    Usage:
        assert not s3_object_exists("abc123")
    """

    def _exists(key: str) -> bool:
        try:
            r2_bucket.head_object(Bucket=os.getenv("R2_BUCKET_NAME"), Key=key)
        except ClientError as exc:
            if exc.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound"):
                return False
            raise
        return True

    return _exists


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def delete_asset_event() -> Callable[[Any], dict[str, Any]]:
    """
    Build an API Gateway proxy event for DELETE /files/{file_id}.

    Usage:
        event = delete_asset_event("r2%3Aabc123")
    """

    def _event(file_id: Any) -> dict[str, Any]:
        return {
            "httpMethod": "DELETE",
            "path": f"/files/{file_id}",
            "pathParameters": {"file_id": file_id},
            "headers": {"x-api-key": "test-api-key"},
        }

    return _event


@pytest.fixture
def telegram_env(monkeypatch) -> dict[str, str]:
    """Configure Telegram credentials for the current test."""
    values = {"TG_BOT_TOKEN": "123:test-token", "TG_CHAT_ID": "-1001234567890"}
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


# ============================================================================
# In-memory repository doubles
# ============================================================================


class FakeMetadataStore(MetadataStoreRepository):
    """Dict-backed metadata store recording every call in a shared log."""

    def __init__(self, calls: list[tuple[str, Any]]) -> None:
        self.calls = calls
        self.records: dict[str, MetadataRecord] = {}

    def put(self, kv_key: str, metadata: dict[str, Any] | None, value: Any = "") -> None:
        self.records[kv_key] = MetadataRecord(
            value=value,
            metadata=AssetMetadata.model_validate(metadata) if metadata else None,
        )

    def fetch_record(self, *, kv_key: str) -> MetadataRecord | None:
        self.calls.append(("kv.fetch", kv_key))
        return self.records.get(kv_key)

    def remove_record(self, *, kv_key: str) -> None:
        self.calls.append(("kv.remove", kv_key))
        self.records.pop(kv_key, None)


class FakeObjectStorage(ObjectStorageRepository):
    """Object storage double that can be told to fail."""

    def __init__(self, calls: list[tuple[str, Any]]) -> None:
        self.calls = calls
        self.fail = False

    def remove_object(self, *, key: str) -> None:
        self.calls.append(("r2.remove", key))
        if self.fail:
            raise ObjectStorageError(message="Unable to delete file from R2", details={"r2_key": key})


class FakeMessages(MessageRepository):
    """Messaging double returning a fixed ack or raising a given error."""

    def __init__(self, calls: list[tuple[str, Any]]) -> None:
        self.calls = calls
        self.acknowledge = True
        self.error: Exception | None = None

    def remove_message(self, *, message_id: int | str) -> bool:
        self.calls.append(("tg.remove", message_id))
        if self.error is not None:
            raise self.error
        return self.acknowledge


@pytest.fixture
def call_log() -> list[tuple[str, Any]]:
    return []


@pytest.fixture
def fake_store(call_log) -> FakeMetadataStore:
    return FakeMetadataStore(call_log)


@pytest.fixture
def fake_objects(call_log) -> FakeObjectStorage:
    return FakeObjectStorage(call_log)


@pytest.fixture
def fake_messages(call_log) -> FakeMessages:
    return FakeMessages(call_log)


@pytest.fixture
def telegram_network_error() -> MessageDeletionError:
    return MessageDeletionError(message="Telegram request failed: connection reset")
