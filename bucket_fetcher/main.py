# bucket_fetcher/main.py
import logging
import os
from typing import Optional

from s3client import (
    Bucket, MinioClient, Secret,
    proxy_url_from_secret, tls_config_from_secret, validate_secret
)

from . import config
from .fetcher import BucketFetcher
from .manifests import load_manifest

logger = logging.getLogger(__name__)


def load_secret(ref: Optional[str], path: str, kind: str) -> Optional[Secret]:
    """
    Load the secret a bucket references.

    Args:
        ref: Secret name referenced by the bucket, if any
        path: Manifest path configured for this kind of secret
        kind: Human-readable secret kind for messages

    Returns:
        The secret, or None if the bucket references none
    """
    if not path:
        if ref:
            raise ValueError(f"Bucket references {kind} secret '{ref}' but no manifest is configured")
        return None
    if not ref:
        logger.warning(f"Ignoring {kind} secret manifest {path}: bucket references no {kind} secret")
        return None

    secret = Secret.from_dict(load_manifest(path))
    if secret.name != ref:
        raise ValueError(f"Bucket references {kind} secret '{ref}', manifest holds '{secret.name}'")
    return secret


def build_client(bucket: Bucket) -> MinioClient:
    """Build the bucket client with all secrets the bucket references"""
    secret = load_secret(bucket.secret_ref, config.SECRET_MANIFEST, 'credential')
    validate_secret(secret)

    tls_config = None
    cert_secret = load_secret(bucket.cert_secret_ref, config.CERT_SECRET_MANIFEST, 'certificate')
    if cert_secret is not None:
        tls_config = tls_config_from_secret(cert_secret)

    proxy_url = None
    proxy_secret = load_secret(bucket.proxy_secret_ref, config.PROXY_SECRET_MANIFEST, 'proxy')
    if proxy_secret is not None:
        proxy_url = proxy_url_from_secret(proxy_secret)

    return MinioClient(bucket, secret=secret, tls_config=tls_config, proxy_url=proxy_url)


def main() -> int:
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))

    if not config.BUCKET_MANIFEST:
        logger.error("BUCKET_MANIFEST is not set")
        return 1

    try:
        bucket = Bucket.from_dict(load_manifest(config.BUCKET_MANIFEST))
        logger.info(f"📦 Fetching bucket: {bucket.bucket_name}")
        logger.info(f"   Endpoint: {bucket.endpoint}")
        logger.info(f"   Provider: {bucket.provider.value}")
        logger.info(f"   Prefix: {bucket.prefix or '(none)'}")

        os.makedirs(config.OUTPUT_DIR, exist_ok=True)
        with build_client(bucket) as client:
            fetched = BucketFetcher(client, bucket).fetch(config.OUTPUT_DIR)
    except Exception as e:
        logger.error(f"❌ Fetch failed: {e}", exc_info=True)
        return 1

    logger.info(f"🎉 Done: {len(fetched)} objects in {config.OUTPUT_DIR}")
    return 0

