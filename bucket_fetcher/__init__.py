"""
Bucket Fetcher Service

Mirrors the objects under a bucket prefix into a local directory.
Uses the base s3client package for object storage access.
"""
from .fetcher import BucketFetcher
from .manifests import load_manifest

__all__ = ['BucketFetcher', 'load_manifest']
