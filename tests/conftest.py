import os

import pytest

from git_store import hashing
from git_store.metadata import create_repository
from git_store.object_store import put_object


def make_object(repo, data=None):
    """Store ``data`` (random if omitted) in ``repo`` and return its hash."""
    data = os.urandom(100) if data is None else data
    hash = hashing.digest(repo.hash_algorithm, data)
    put_object(repo, hash, data)
    return hash


@pytest.fixture
def repo(db):
    return create_repository("demo", "alice", hashing.SHA256)


@pytest.fixture
def sha1_repo(db):
    return create_repository("legacy", "alice", hashing.SHA1)


@pytest.fixture(params=[hashing.SHA1, hashing.SHA256])
def any_repo(request, db):
    return create_repository(f"repo-{request.param}", "alice", request.param)


@pytest.fixture
def two_objects(repo):
    return make_object(repo), make_object(repo)
