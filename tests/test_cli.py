import hashlib

import pytest

from git_store_cli import ZERO_HASH, RemoteError, RepositoryClient, format_refs, hash_object, main


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.auth = None

    def request(self, method, url, json=None):
        self.calls.append((method, url, json))
        return self.responses.pop(0)


def test_hash_object():
    assert hash_object(b"abc") == hashlib.sha256(b"abc").hexdigest()
    sha1 = hash_object(b"abc", sha256=False)
    assert sha1 == hashlib.sha1(b"abc").hexdigest() + "0" * 24
    assert len(sha1) == 64


def test_add_object_sends_hex():
    session = FakeSession(FakeResponse(201, {"hash": hash_object(b"abc")}))
    client = RepositoryClient("demo", base_url="http://remote/api/git/", session=session)
    assert client.add_object(b"abc") == hash_object(b"abc")
    assert session.calls == [
        ("POST", "http://remote/api/git/demo/objects", {"hash": hash_object(b"abc"), "data": "616263"}),
    ]


def test_push_payload():
    session = FakeSession(FakeResponse(200, {"status": "pushed"}))
    client = RepositoryClient("demo", base_url="http://remote", session=session)
    client.push({"aa" * 32: b"\x01"}, {"refs/heads/main": "aa" * 32, "refs/heads/old": ZERO_HASH})
    method, url, payload = session.calls[0]
    assert (method, url) == ("POST", "http://remote/demo/push")
    assert payload == {
        "objects": [{"hash": "aa" * 32, "data": "01"}],
        "refs": [
            {"name": "refs/heads/main", "hash": "aa" * 32},
            {"name": "refs/heads/old", "hash": ZERO_HASH},
        ],
    }


def test_error_response_raises():
    session = FakeSession(FakeResponse(404, {"error": "ReferenceNotFound", "detail": "Ref not found: x"}))
    client = RepositoryClient("demo", base_url="http://remote", session=session)
    with pytest.raises(RemoteError) as excinfo:
        client.get_ref("x")
    assert excinfo.value.status == 404
    assert excinfo.value.error == "ReferenceNotFound"


def test_auth_is_set_on_session():
    session = FakeSession()
    RepositoryClient("demo", session=session, auth=("alice", "secret"))
    assert session.auth == ("alice", "secret")


def test_format_refs():
    listing = {
        "normal": [{"name": "refs/heads/main", "hash": "ab" * 32}],
        "symbolic": [{"name": "HEAD", "target": "refs/heads/main"}],
        "kv": [{"key": "object-format", "value": "sha256"}],
    }
    assert format_refs(listing) == "\n".join([
        f"{'ab' * 32} refs/heads/main",
        "@refs/heads/main HEAD",
        ":object-format sha256",
    ])


def test_main_ls_refs(capsys):
    listing = {"normal": [], "symbolic": [{"name": "HEAD", "target": "refs/heads/main"}], "kv": []}
    client = RepositoryClient("demo", session=FakeSession(FakeResponse(200, listing)))
    assert main(["ls-refs", "-r", "demo"], client=client) == 0
    assert capsys.readouterr().out == "@refs/heads/main HEAD\n"


def test_main_add(tmp_path, capsys):
    path = tmp_path / "file.txt"
    path.write_bytes(b"hello")
    session = FakeSession(FakeResponse(201, {}))
    client = RepositoryClient("demo", session=session)
    assert main(["add", "-r", "demo", "-p", str(path), "--sha1"], client=client) == 0
    assert capsys.readouterr().out.strip() == hash_object(b"hello", sha256=False)


def test_main_reports_remote_errors(capsys):
    session = FakeSession(FakeResponse(403, {"error": "NotOwner", "detail": "Unauthorized account: None"}))
    client = RepositoryClient("demo", session=session)
    assert main(["set-default-branch", "-r", "demo", "-n", "x"], client=client) == 1
    assert "NotOwner" in capsys.readouterr().err


def test_main_requires_arguments():
    client = RepositoryClient("demo", session=FakeSession())
    with pytest.raises(SystemExit):
        main(["set-ref", "-r", "demo", "-n", "main"], client=client)


@pytest.mark.parametrize("name, path", [
    ("feature#1", "refs/feature%231"),
    ("refs/heads/a?b", "refs/refs/heads/a%3Fb"),
    ("100%", "refs/100%25"),
])
def test_ref_names_are_quoted(name, path):
    session = FakeSession(FakeResponse(200, {"previous": ZERO_HASH}), FakeResponse(200, {"previous": "ab" * 32}))
    client = RepositoryClient("demo", base_url="http://remote", session=session)
    client.upsert_ref(name, "ab" * 32)
    client.delete_ref(name)
    assert [url for _, url, _ in session.calls] == [f"http://remote/demo/{path}"] * 2


def test_repo_name_is_quoted():
    session = FakeSession(FakeResponse(200, {"hashes": []}))
    client = RepositoryClient("my repo/x", base_url="http://remote", session=session)
    client.list_objects()
    assert session.calls[0][1] == "http://remote/my%20repo%2Fx/objects"
