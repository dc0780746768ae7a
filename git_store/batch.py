import logging

from django.db import transaction

from . import hashing
from .errors import NoData
from .models import Repository
from .object_store import put_object
from .references import delete_ref, upsert_ref

logger = logging.getLogger(__name__)


def push_objects_and_refs(repo: Repository, objects, refs) -> None:
    """Apply a push as one unit.

    ``objects`` is a sequence of ``(hash, data)`` pairs and ``refs`` a
    sequence of ``(name, hash)`` pairs. Objects go in first so refs in the
    same push can point at them. A ref with the zero hash is deleted. If
    anything fails, nothing from the push is kept.
    """
    objects = list(objects)
    refs = list(refs)
    if not objects and not refs:
        raise NoData()

    with transaction.atomic():
        for hash, data in objects:
            put_object(repo, hash, data)
        for name, hash in refs:
            if hashing.is_zero(hash):
                delete_ref(repo, name)
            else:
                upsert_ref(repo, name, hash)

    logger.info("push applied repo=%s objects=%d refs=%d", repo.name, len(objects), len(refs))
