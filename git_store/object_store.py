import logging

from django.db import transaction

from . import hashing
from .errors import EmptyHash, EmptyPayload, HashMismatch, ObjectAlreadyExists, ObjectNotFound
from .models import GitObject, Repository
from .signals import object_added

logger = logging.getLogger(__name__)


def put_object(repo: Repository, hash: bytes, data: bytes) -> None:
    """Store ``data`` under ``hash`` after checking it hashes to ``hash``."""
    if len(data) == 0:
        raise EmptyPayload()
    if hashing.is_zero(hash):
        raise EmptyHash()
    actual = hashing.digest(repo.hash_algorithm, data)
    if actual != hash:
        raise HashMismatch(hash, actual)
    if has_object(repo, hash):
        raise ObjectAlreadyExists(hash)

    GitObject.objects.create(repo=repo, hash=hashing.to_hex(hash), data=bytes(data))
    logger.info("object added repo=%s hash=%s size=%d", repo.name, hash.hex(), len(data))
    transaction.on_commit(
        lambda: object_added.send(sender=Repository, repository=repo, hash=hash)
    )


def get_object(repo: Repository, hash: bytes) -> bytes:
    obj = GitObject.objects.filter(repo=repo, hash=hashing.to_hex(hash)).first()
    if obj is None:
        raise ObjectNotFound(hash)
    return bytes(obj.data)


def has_object(repo: Repository, hash: bytes) -> bool:
    return GitObject.objects.filter(repo=repo, hash=hashing.to_hex(hash)).exists()


def list_object_hashes(repo: Repository) -> list:
    """Every stored hash, oldest first."""
    hexes = GitObject.objects.filter(repo=repo).order_by("id").values_list("hash", flat=True)
    return [bytes.fromhex(value) for value in hexes]
