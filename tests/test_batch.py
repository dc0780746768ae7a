import os

import pytest

from git_store import hashing
from git_store.batch import push_objects_and_refs
from git_store.errors import HashMismatch, NoData, ObjectNotFound, ReferenceNotFound
from git_store.object_store import get_object, list_object_hashes
from git_store.references import get_ref, list_refs, upsert_ref
from git_store.signals import object_added, reference_changed

from .conftest import make_object


def new_object(repo):
    data = os.urandom(64)
    return hashing.digest(repo.hash_algorithm, data), data


def test_empty_push(repo):
    with pytest.raises(NoData):
        push_objects_and_refs(repo, [], [])


def test_refs_can_use_objects_from_same_push(any_repo):
    hash, data = new_object(any_repo)
    push_objects_and_refs(any_repo, [(hash, data)], [("refs/heads/main", hash)])
    assert get_object(any_repo, hash) == data
    assert get_ref(any_repo, "refs/heads/main") == hash


def test_objects_only(repo):
    objects = [new_object(repo) for _ in range(3)]
    push_objects_and_refs(repo, objects, [])
    assert list_object_hashes(repo) == [hash for hash, _ in objects]


def test_zero_hash_deletes(repo):
    hash = make_object(repo)
    upsert_ref(repo, "refs/heads/old", hash)
    upsert_ref(repo, "refs/heads/keep", hash)
    push_objects_and_refs(repo, [], [("refs/heads/old", hashing.ZERO_HASH)])
    assert list_refs(repo).normal == [("refs/heads/keep", hash)]


def test_ref_to_missing_object_rolls_back_everything(repo):
    hash, data = new_object(repo)
    missing = hashing.digest(repo.hash_algorithm, b"never pushed")
    with pytest.raises(ObjectNotFound):
        push_objects_and_refs(repo, [(hash, data)], [("refs/heads/main", missing)])
    with pytest.raises(ObjectNotFound):
        get_object(repo, hash)
    assert list_refs(repo).normal == []


def test_bad_object_rolls_back_earlier_objects(repo):
    good, good_data = new_object(repo)
    bad, _ = new_object(repo)
    with pytest.raises(HashMismatch):
        push_objects_and_refs(repo, [(good, good_data), (bad, b"other")], [])
    assert list_object_hashes(repo) == []


def test_failed_delete_undoes_earlier_ref_updates(repo, two_objects):
    hash, other = two_objects
    upsert_ref(repo, "refs/heads/main", hash)
    with pytest.raises(ReferenceNotFound):
        push_objects_and_refs(
            repo, [], [("refs/heads/main", other), ("refs/heads/gone", hashing.ZERO_HASH)]
        )
    assert get_ref(repo, "refs/heads/main") == hash


def test_failed_push_sends_no_signals(repo, django_capture_on_commit_callbacks):
    hash, data = new_object(repo)
    missing = hashing.digest(repo.hash_algorithm, b"never pushed")
    received = []

    def handler(sender, **kwargs):
        received.append(kwargs)

    object_added.connect(handler)
    reference_changed.connect(handler)
    try:
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(ObjectNotFound):
                push_objects_and_refs(repo, [(hash, data)], [("refs/heads/main", missing)])
    finally:
        object_added.disconnect(handler)
        reference_changed.disconnect(handler)
    assert callbacks == []
    assert received == []


def test_short_zero_hash_deletes(sha1_repo):
    hash = make_object(sha1_repo)
    upsert_ref(sha1_repo, "refs/heads/old", hash)
    push_objects_and_refs(sha1_repo, [], [("refs/heads/old", bytes(20))])
    assert list_refs(sha1_repo).normal == []
