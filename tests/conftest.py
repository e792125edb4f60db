import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from minio import Minio
from minio.error import S3Error

# Add project root to sys.path to allow imports like 's3client...'
project_root = str(Path(__file__).parent.parent.resolve())
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def make_s3_error(code: str, object_name: str = "data/a.txt") -> S3Error:
    return S3Error(
        code,
        f"{code} message",
        f"/test-bucket/{object_name}",
        "request-id",
        "host-id",
        MagicMock(),
        bucket_name="test-bucket",
        object_name=object_name,
    )


def make_object(key: str, etag: str):
    return SimpleNamespace(object_name=key, etag=etag)


@pytest.fixture
def mock_minio():
    """Patch minio.Minio inside the client module; yields the instance mock"""
    with patch("s3client.client.Minio") as minio_cls:
        instance = MagicMock(spec=Minio)
        minio_cls.return_value = instance
        yield minio_cls
