# s3client/errors.py
"""Errors raised by the bucket client adapter"""


class S3ClientError(Exception):
    """Base class for adapter errors"""


class InvalidSecretError(S3ClientError, ValueError):
    """A secret is missing fields the client needs"""


class ClientConstructionError(S3ClientError):
    """The transport or the minio client could not be created"""


class ListObjectsError(S3ClientError):
    """Listing a bucket failed part way through"""

    def __init__(self, bucket_name: str, cause: Exception):
        self.bucket_name = bucket_name
        super().__init__(f"listing objects from bucket '{bucket_name}' failed: {cause}")
