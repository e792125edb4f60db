"""
S3-compatible bucket client.
Works with MinIO, AWS S3, GCS (S3-compatible API), and other S3-compatible storage.

Builds a configured minio client from a Kubernetes-style Bucket descriptor
and optional credential, certificate and proxy secrets, and adds
conditional fetch, bucket traversal and not-found detection on top of it.
"""
from .client import MinioClient, validate_secret, object_is_not_found, LIST_API_V1_HOSTS
from .errors import S3ClientError, InvalidSecretError, ClientConstructionError, ListObjectsError
from .models import Bucket, BucketProvider, Secret
from .transport import build_http_client, tls_config_from_secret, proxy_url_from_secret

__all__ = [
    'MinioClient',
    'validate_secret',
    'object_is_not_found',
    'LIST_API_V1_HOSTS',
    'S3ClientError',
    'InvalidSecretError',
    'ClientConstructionError',
    'ListObjectsError',
    'Bucket',
    'BucketProvider',
    'Secret',
    'build_http_client',
    'tls_config_from_secret',
    'proxy_url_from_secret'
]
