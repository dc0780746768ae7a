import hashlib

from .errors import MalformedHash

HASH_SIZE = 32
ZERO_HASH = bytes(HASH_SIZE)

SHA1 = "sha1"
SHA256 = "sha256"
ALGORITHMS = [(SHA1, "SHA-1"), (SHA256, "SHA-256")]


def algorithm_for(sha256: bool) -> str:
    return SHA256 if sha256 else SHA1


def digest(algorithm: str, data: bytes) -> bytes:
    """Hash ``data`` and return it in a 32-byte slot.

    SHA-1 digests sit in the first 20 bytes and are followed by zeros.
    """
    if algorithm == SHA256:
        raw = hashlib.sha256(data).digest()
    elif algorithm == SHA1:
        raw = hashlib.sha1(data).digest()
    else:
        raise ValueError(f"unknown hash algorithm {algorithm!r}")
    return pad(raw)


def pad(raw: bytes) -> bytes:
    return raw + bytes(HASH_SIZE - len(raw))


def is_zero(value: bytes) -> bool:
    # A short all-zero digest pads to the sentinel too.
    return len(value) <= HASH_SIZE and not any(value)


def to_hex(value: bytes) -> str:
    return value.hex()


def from_hex(text: str) -> bytes:
    """Parse a 40 or 64 character hex hash into a 32-byte slot."""
    if not isinstance(text, str) or len(text) not in (40, 64):
        raise MalformedHash(text)
    try:
        raw = bytes.fromhex(text)
    except ValueError:
        raise MalformedHash(text) from None
    return pad(raw)
