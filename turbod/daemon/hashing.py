"""Repository discriminator used to address a daemon.

The raw filesystem bytes of the path are hashed, so names that are not valid
UTF-8 still hash to the same value the daemon computes.

Unix domain socket paths are capped at roughly 108 bytes, so only the first
8 bytes of the SHA-256 digest are kept. With 64 bits the chance of two
repositories on one machine colliding stays around N^2 / 2^64.
"""

import hashlib
import os
from typing import Union

REPO_HASH_LENGTH = 16

PathArg = Union[str, "os.PathLike[str]"]


def get_repo_hash(repo_root: PathArg) -> str:
    """
    Return the 16 character lowercase hex discriminator for a repo root.

    Args:
        repo_root: Absolute path of the repository root

    Returns:
        Hex encoding of the first 8 bytes of sha256(repo_root)
    """
    digest = hashlib.sha256(os.fsencode(repo_root)).hexdigest()
    return digest[:REPO_HASH_LENGTH]
