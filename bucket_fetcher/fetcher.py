# bucket_fetcher/fetcher.py
"""
Bucket Fetcher - mirrors a bucket prefix into a local directory.
"""
import logging
import os
from typing import Dict

from minio.error import S3Error

from s3client import Bucket, MinioClient

logger = logging.getLogger(__name__)


class BucketFetcher:
    """
    Fetches every object under the bucket prefix.
    Objects are listed first, then downloaded one by one with an etag guard.
    """

    def __init__(self, client: MinioClient, bucket: Bucket):
        """
        Initialize the fetcher.

        Args:
            client: Configured bucket client
            bucket: Bucket descriptor (bucket_name and prefix are used)
        """
        self.client = client
        self.bucket = bucket

    def build_index(self) -> Dict[str, str]:
        """
        List the objects under the prefix.

        Returns:
            Ordered mapping of object key to etag, directory markers excluded
        """
        index = {}

        def visit(key: str, etag: str):
            if key.endswith('/'):
                return
            index[key] = etag

        self.client.visit_objects(self.bucket.bucket_name, self.bucket.prefix, visit)
        logger.info(f"📋 Indexed {len(index)} objects in {self.bucket.bucket_name}/{self.bucket.prefix}")
        return index

    def fetch(self, output_dir: str) -> Dict[str, str]:
        """
        Download every indexed object below output_dir.

        Objects deleted between listing and download are skipped.

        Args:
            output_dir: Local directory to mirror into

        Returns:
            Mapping of fetched object key to etag

        Raises:
            ValueError: If an object key would be written outside output_dir
            S3Error: If a download fails for any reason other than a missing object
        """
        index = self.build_index()
        fetched = {}

        for key in index:
            local_path = safe_join(output_dir, key)
            try:
                etag = self.client.fget_object(self.bucket.bucket_name, key, local_path)
            except S3Error as e:
                if self.client.object_is_not_found(e):
                    logger.warning(f"Object vanished before fetch, skipping: {key}")
                    continue
                raise
            fetched[key] = etag
            logger.debug(f"Fetched: {key} -> {local_path}")

        logger.info(f"✅ Fetched {len(fetched)}/{len(index)} objects into {output_dir}")
        return fetched


def safe_join(root: str, key: str) -> str:
    """Join key onto root, refusing paths that escape root"""
    root = os.path.realpath(root)
    path = os.path.realpath(os.path.join(root, key.lstrip('/')))
    if os.path.commonpath([root, path]) != root or path == root:
        raise ValueError(f"Object key escapes output directory: {key}")
    return path
