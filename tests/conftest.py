"""Shared test fixtures for upload service tests."""

import os
import tempfile
from typing import BinaryIO, Generator

import pytest
from fastapi.testclient import TestClient

from upload_service.config.settings import Settings
from upload_service.infrastructure.storage.client import MockObjectStore, StorageError
from upload_service.main import create_app


class RecordingObjectStore(MockObjectStore):
    """In-memory store that remembers every call it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.put_keys: list[str] = []
        self.list_prefixes: list[str] = []
        self.staged_paths: list[str] = []
        self.staged_existed: list[bool] = []

    async def put(self, key: str, body: BinaryIO) -> None:
        self.put_keys.append(key)
        self.staged_paths.append(body.name)
        self.staged_existed.append(os.path.exists(body.name))
        await super().put(key, body)

    async def list(self, prefix: str) -> list[str]:
        self.list_prefixes.append(prefix)
        return await super().list(prefix)


class FailingObjectStore:
    """Store whose every operation fails like an unreachable bucket."""

    def __init__(self) -> None:
        self.staged_paths: list[str] = []

    async def put(self, key: str, body: BinaryIO) -> None:
        self.staged_paths.append(body.name)
        raise StorageError("failed to upload to s3: AccessDenied")

    async def list(self, prefix: str) -> list[str]:
        raise StorageError("failed to list s3 objects: NoSuchBucket")


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the documented defaults, ignoring the environment."""
    return Settings(
        _env_file=None,
        aws_region="us-east-1",
        s3_bucket="my-bucket",
        s3_key_path="uploads/",
        port="8080",
        storage_mock_mode=False,
    )


@pytest.fixture
def staging_dir(tmp_path, monkeypatch) -> str:
    """Point tempfile at a private directory so staged files can be inspected."""
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return str(tmp_path)


@pytest.fixture
def store() -> RecordingObjectStore:
    return RecordingObjectStore()


@pytest.fixture
def client(settings, store, staging_dir) -> Generator[TestClient, None, None]:
    """Test client for an app wired to the recording store."""
    app = create_app(settings=settings, object_store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_store() -> FailingObjectStore:
    return FailingObjectStore()


@pytest.fixture
def failing_client(settings, failing_store, staging_dir) -> Generator[TestClient, None, None]:
    """Test client for an app whose store always fails."""
    app = create_app(settings=settings, object_store=failing_store)
    with TestClient(app) as c:
        yield c
