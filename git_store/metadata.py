"""Repository creation, default branch and ownership."""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from .errors import (
    EmptyDefaultBranch,
    InvalidName,
    NoPendingOwner,
    NotOwner,
    RepositoryAlreadyExists,
    RepositoryNotFound,
)
from .hashing import SHA1, SHA256
from .models import Repository
from .references import is_valid_name

logger = logging.getLogger(__name__)

BRANCH_PREFIX = "refs/heads/"


def create_repository(name: str, owner: str, hash_algorithm: str = SHA256) -> Repository:
    """Create a repository. Its hash algorithm can never change afterwards."""
    if not is_valid_name(name):
        raise InvalidName(name)
    if hash_algorithm not in (SHA1, SHA256):
        raise ValueError(f"unknown hash algorithm {hash_algorithm!r}")
    try:
        with transaction.atomic():
            repo = Repository.objects.create(
                name=name,
                hash_algorithm=hash_algorithm,
                default_branch=BRANCH_PREFIX + settings.GIT_STORE_DEFAULT_BRANCH,
                owner=owner,
            )
    except IntegrityError:
        raise RepositoryAlreadyExists(name) from None
    logger.info("repository created name=%s algorithm=%s owner=%s", name, hash_algorithm, owner)
    return repo


def get_repository(name: str, for_update=False) -> Repository:
    queryset = Repository.objects.select_for_update() if for_update else Repository.objects
    try:
        return queryset.get(name=name)
    except Repository.DoesNotExist:
        raise RepositoryNotFound(name) from None


def set_default_branch(repo: Repository, short_name: str) -> None:
    if short_name == "":
        raise EmptyDefaultBranch()
    if not is_valid_name(short_name):
        raise InvalidName(short_name)
    repo.default_branch = BRANCH_PREFIX + short_name
    repo.save(update_fields=["default_branch"])
    logger.info("default branch set repo=%s branch=%s", repo.name, repo.default_branch)


def ensure_owner(repo: Repository, caller) -> None:
    if not caller or caller != repo.owner:
        raise NotOwner(caller)


def transfer_ownership(repo: Repository, caller, new_owner: str) -> None:
    """First step of a transfer; ``new_owner`` must accept it."""
    ensure_owner(repo, caller)
    if not is_valid_name(new_owner):
        raise InvalidName(new_owner)
    repo.pending_owner = new_owner
    repo.save(update_fields=["pending_owner"])
    logger.info("ownership transfer started repo=%s pending_owner=%s", repo.name, new_owner)


def accept_ownership(repo: Repository, caller) -> None:
    if not repo.pending_owner:
        raise NoPendingOwner()
    if not caller or caller != repo.pending_owner:
        raise NotOwner(caller)
    repo.owner = caller
    repo.pending_owner = ""
    repo.save(update_fields=["owner", "pending_owner"])
    logger.info("ownership transferred repo=%s owner=%s", repo.name, caller)
