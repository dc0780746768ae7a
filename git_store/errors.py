"""Errors raised by the object store, reference table and metadata calls.

Validation errors mean the caller sent bad input, state errors mean the
call does not fit the current repository contents, and authorization
errors mean the caller may not mutate the repository.
"""


class GitStoreError(Exception):
    status = 400


class GitStoreValidationError(GitStoreError):
    status = 400


class GitStoreStateError(GitStoreError):
    status = 409


class GitStoreAuthorizationError(GitStoreError):
    status = 403


class EmptyPayload(GitStoreValidationError):
    def __init__(self):
        super().__init__("Object is empty")


class EmptyHash(GitStoreValidationError):
    def __init__(self):
        super().__init__("Hash is empty")


class MalformedHash(GitStoreValidationError):
    def __init__(self, value):
        super().__init__(f"Hash is malformed: {value!r}")


class InvalidName(GitStoreValidationError):
    def __init__(self, name):
        super().__init__(f"Name is invalid: {name!r}")


class EmptyDefaultBranch(GitStoreValidationError):
    def __init__(self):
        super().__init__("Default branch is empty")


class NoData(GitStoreValidationError):
    def __init__(self):
        super().__init__("No objects or refs to push")


class HashMismatch(GitStoreStateError):
    def __init__(self, expected: bytes, actual: bytes):
        super().__init__(f"Hash mismatch: got {expected.hex()}, data hashes to {actual.hex()}")
        self.expected = expected
        self.actual = actual


class ObjectAlreadyExists(GitStoreStateError):
    def __init__(self, hash: bytes):
        super().__init__(f"Object already exists: {hash.hex()}")
        self.hash = hash


class ObjectNotFound(GitStoreStateError):
    status = 404

    def __init__(self, hash: bytes):
        super().__init__(f"Object not found: {hash.hex()}")
        self.hash = hash


class ReferenceNotFound(GitStoreStateError):
    status = 404

    def __init__(self, name):
        super().__init__(f"Ref not found: {name}")
        self.name = name


class NoReferences(GitStoreStateError):
    def __init__(self):
        super().__init__("No refs")


class RepositoryNotFound(GitStoreStateError):
    status = 404

    def __init__(self, name):
        super().__init__(f"Repository not found: {name}")


class RepositoryAlreadyExists(GitStoreStateError):
    def __init__(self, name):
        super().__init__(f"Repository already exists: {name}")


class NoPendingOwner(GitStoreStateError):
    def __init__(self):
        super().__init__("No ownership transfer is pending")


class NotOwner(GitStoreAuthorizationError):
    def __init__(self, caller):
        super().__init__(f"Unauthorized account: {caller!r}")
        self.caller = caller
