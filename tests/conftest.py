"""
Shared fixtures.

Apps are built through create_app with injected settings and stores,
so no test reads the real environment or talks to AWS.
"""

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from gps_gateway.config.settings import Settings
from gps_gateway.infrastructure.storage.client import MockObjectStore, S3ObjectStore
from gps_gateway.main import create_app

TEST_BUCKET = "test-gps-bucket"
TEST_REGION = "us-east-1"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line(
        "markers",
        "integration: tests that go through the HTTP app or moto S3",
    )


@pytest.fixture
def bucket_name() -> str:
    return TEST_BUCKET


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the test bucket, ignoring any .env file."""
    return Settings(
        _env_file=None,
        bucket_name=TEST_BUCKET,
        aws_region=TEST_REGION,
        storage_mock_mode=True,
    )


@pytest.fixture
def mock_store() -> MockObjectStore:
    return MockObjectStore(buckets=(TEST_BUCKET,))


@pytest.fixture
def client(settings, mock_store):
    """HTTP client for an app serving from the in-memory store."""
    app = create_app(settings=settings, object_store=mock_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never picks up real ones under moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def s3_client(aws_credentials):
    """Moto-backed S3 client with the test bucket created."""
    with mock_aws():
        s3 = boto3.client("s3", region_name=TEST_REGION)
        s3.create_bucket(Bucket=TEST_BUCKET)
        yield s3


@pytest.fixture
def s3_store(s3_client, tmp_path) -> S3ObjectStore:
    return S3ObjectStore(s3_client, buffer_dir=str(tmp_path))
