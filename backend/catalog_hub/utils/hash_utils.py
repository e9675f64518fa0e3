"""
Hash utilities — content fingerprints for published snapshots.
Version: 1.0.0
"""

import hashlib
from typing import Union


def compute_content_hash(content: Union[str, bytes]) -> str:
    """
    SHA-256 fingerprint of serialized snapshot content.

    Used to tell written and read-back content apart in logs without
    dumping whole documents.

    Returns:
        First 16 hex chars of the digest
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:16]
