"""Reference table for a repository.

Refs are listed by ``position``, which starts as insertion order. Deleting
a ref moves the last ref into the freed position, so the order is only
insertion order until the first delete.
"""
import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import Max

from . import hashing
from .errors import EmptyHash, InvalidName, NoReferences, ObjectNotFound, ReferenceNotFound
from .models import Reference, Repository
from .object_store import has_object
from .signals import reference_changed

logger = logging.getLogger(__name__)

HEAD = "HEAD"
OBJECT_FORMAT = "object-format"


@dataclass
class RefListing:
    normal: list = field(default_factory=list)
    symbolic: list = field(default_factory=list)
    key_value: list = field(default_factory=list)


def is_valid_name(name) -> bool:
    # Only emptiness is checked; ref name grammar is not enforced.
    return isinstance(name, str) and name != ""


def upsert_ref(repo: Repository, name: str, hash: bytes) -> bytes:
    """Point ``name`` at ``hash``. Returns the previous hash, zero if new."""
    if not is_valid_name(name):
        raise InvalidName(name)
    if hashing.is_zero(hash):
        raise EmptyHash()
    if not has_object(repo, hash):
        raise ObjectNotFound(hash)

    ref = Reference.objects.filter(repo=repo, name=name).first()
    if ref is None:
        previous = hashing.ZERO_HASH
        Reference.objects.create(
            repo=repo, name=name, hash=hashing.to_hex(hash), position=_last_position(repo) + 1
        )
    else:
        previous = bytes.fromhex(ref.hash)
        ref.hash = hashing.to_hex(hash)
        ref.save(update_fields=["hash"])

    _changed(repo, name, hash, previous)
    return previous


def delete_ref(repo: Repository, name: str) -> bytes:
    """Remove ``name`` and fill its slot with the last ref. Returns the removed hash."""
    last_position = _last_position(repo)
    if last_position == 0:
        raise NoReferences()
    ref = Reference.objects.filter(repo=repo, name=name).first()
    if ref is None:
        raise ReferenceNotFound(name)

    previous = bytes.fromhex(ref.hash)
    position = ref.position
    ref.delete()
    if position != last_position:
        Reference.objects.filter(repo=repo, position=last_position).update(position=position)

    _changed(repo, name, hashing.ZERO_HASH, previous)
    return previous


def get_ref(repo: Repository, name: str) -> bytes:
    value = Reference.objects.filter(repo=repo, name=name).values_list("hash", flat=True).first()
    if value is None:
        raise ReferenceNotFound(name)
    return bytes.fromhex(value)


def resolve_refs(repo: Repository, names) -> list:
    """Resolve each name to its hash; missing names resolve to the zero hash."""
    names = list(names)
    found = dict(
        Reference.objects.filter(repo=repo, name__in=names).values_list("name", "hash")
    )
    return [bytes.fromhex(found[name]) if name in found else hashing.ZERO_HASH for name in names]


def list_refs(repo: Repository) -> RefListing:
    rows = Reference.objects.filter(repo=repo).order_by("position").values_list("name", "hash")
    return RefListing(
        normal=[(name, bytes.fromhex(value)) for name, value in rows],
        symbolic=[(HEAD, repo.default_branch)],
        key_value=[(OBJECT_FORMAT, repo.hash_algorithm)],
    )


def _last_position(repo):
    return Reference.objects.filter(repo=repo).aggregate(last=Max("position"))["last"] or 0


def _changed(repo, name, hash, previous):
    logger.info(
        "ref changed repo=%s name=%s hash=%s previous=%s",
        repo.name, name, hash.hex(), previous.hex(),
    )
    transaction.on_commit(
        lambda: reference_changed.send(
            sender=Repository, repository=repo, name=name, hash=hash, previous_hash=previous
        )
    )
