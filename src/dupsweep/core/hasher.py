"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements content hashing with pluggable hash algorithms.

Files are streamed through the digest in fixed-size chunks, so memory use
does not depend on file size.
"""

import hashlib
import xxhash

from dupsweep.core.errors import HashComputeError
from dupsweep.core.interfaces import Hasher, HashAlgorithm, HashObject
from dupsweep.core.models import DEFAULT_CHUNK_SIZE, FileRecord, HashAlgorithmName


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    def new(self) -> HashObject:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh3_128"

    def new(self) -> HashObject:
        return xxhash.xxh3_128()


ALGORITHMS = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXHASH: XXHashAlgorithmImpl,
}


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    """Returns an algorithm instance for the given enum value."""
    return ALGORITHMS[name]()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Nothing is cached: every call reads the file again.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_full_hash(self, file: FileRecord) -> str:
        """
        Computes the hex digest of the entire file.

        Raises:
            HashComputeError: If the file cannot be opened or a read fails mid-stream
        """
        digest = self.algorithm.new()
        try:
            with open(file.path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b''):
                    digest.update(chunk)
        except OSError as e:
            raise HashComputeError(f"Failed to read {file.path}: {e}") from e
        return digest.hexdigest()
