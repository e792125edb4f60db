# bucket_fetcher/manifests.py
"""Loading of Bucket and Secret manifests from disk"""
import json
import logging
import os

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('yaml', 'yml', 'json')


def load_manifest(path: str) -> dict:
    """
    Load a YAML or JSON manifest.

    Args:
        path: Path to a .yaml, .yml or .json file

    Returns:
        The parsed manifest

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the document is not a mapping
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Manifest not found: {path}")

    ext = path.rsplit('.', 1)[-1].lower()
    if ext not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported manifest format '{ext}', expected one of {SUPPORTED_FORMATS}")

    with open(path, 'r', encoding='utf-8') as f:
        if ext == 'json':
            doc = json.load(f)
        else:
            doc = yaml.safe_load(f)

    if not isinstance(doc, dict):
        raise ValueError(f"Manifest must be a mapping: {path}")

    logger.debug(f"Loaded {doc.get('kind', 'manifest')} from {path}")
    return doc
