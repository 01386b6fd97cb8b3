import hashlib
from pathlib import Path
from ..domain.interfaces import IHasher

# Read size per chunk; large transcodes never have to fit in memory
BLOCK_SIZE = 64 * 1024


class SHA256Hasher(IHasher):
    def calculate_sha256(self, file_path: Path) -> str:
        sha256_hash = hashlib.sha256()
        with open(file_path, "rb") as f:
            for byte_block in iter(lambda: f.read(BLOCK_SIZE), b""):
                sha256_hash.update(byte_block)
        return sha256_hash.hexdigest()
