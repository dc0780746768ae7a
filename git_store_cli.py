import os
import hashlib
import argparse
import sys
from urllib.parse import quote

import requests

REMOTE_URL = os.environ.get("GIT_STORE_REMOTE_URL", "http://localhost:8000/api/git")
ZERO_HASH = "0" * 64


class RemoteError(Exception):
    def __init__(self, status, error, detail):
        super().__init__(f"{status} {error}: {detail}")
        self.status = status
        self.error = error
        self.detail = detail


def hash_object(data, sha256=True):
    """Hex hash of ``data`` padded to 32 bytes, as the store expects it."""
    if sha256:
        return hashlib.sha256(data).hexdigest()
    return hashlib.sha1(data).hexdigest() + "0" * 24


class RepositoryClient:
    def __init__(self, repo_name, base_url=REMOTE_URL, session=None, auth=None):
        self.repo_name = repo_name
        self.repo_path = quote(repo_name, safe="")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        if auth is not None:
            self.session.auth = auth

    def _ref_path(self, name):
        return f"{self.repo_path}/refs/" + quote(name, safe="/")

    def _call(self, method, path, payload=None):
        resp = self.session.request(method, f"{self.base_url}/{path}", json=payload)
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code >= 400:
            raise RemoteError(resp.status_code, body.get("error", "HTTPError"), body.get("detail", resp.text))
        return body

    def create(self, sha256=True):
        return self._call("POST", "repos", {"name": self.repo_name, "sha256": sha256})

    def add_object(self, data, sha256=True):
        sha = hash_object(data, sha256)
        self._call("POST", f"{self.repo_path}/objects", {"hash": sha, "data": data.hex()})
        return sha

    def get_object(self, sha):
        body = self._call("GET", f"{self.repo_path}/objects/{sha}")
        return bytes.fromhex(body["data"])

    def list_objects(self):
        return self._call("GET", f"{self.repo_path}/objects")["hashes"]

    def upsert_ref(self, name, sha):
        return self._call("PUT", self._ref_path(name), {"hash": sha})["previous"]

    def delete_ref(self, name):
        return self._call("DELETE", self._ref_path(name))["previous"]

    def get_ref(self, name):
        return self._call("GET", self._ref_path(name))["hash"]

    def resolve_refs(self, names):
        return self._call("POST", f"{self.repo_path}/resolve", {"names": list(names)})["hashes"]

    def list_refs(self):
        return self._call("GET", f"{self.repo_path}/refs")

    def push(self, objects, refs):
        """Push ``{sha: data}`` objects and ``{name: sha}`` refs in one call.

        A ref mapped to ``ZERO_HASH`` is deleted on the remote.
        """
        payload = {
            "objects": [{"hash": sha, "data": data.hex()} for sha, data in objects.items()],
            "refs": [{"name": name, "hash": sha} for name, sha in refs.items()],
        }
        return self._call("POST", f"{self.repo_path}/push", payload)

    def set_default_branch(self, name):
        return self._call("PUT", f"{self.repo_path}/default-branch", {"name": name})["default_branch"]


def format_refs(listing):
    lines = [f"{ref['hash']} {ref['name']}" for ref in listing["normal"]]
    lines += [f"@{ref['target']} {ref['name']}" for ref in listing["symbolic"]]
    lines += [f":{kv['key']} {kv['value']}" for kv in listing["kv"]]
    return "\n".join(lines)


def main(argv=None, client=None):
    parser = argparse.ArgumentParser(description="git store client")
    parser.add_argument('command', choices=['create', 'add', 'cat', 'set-ref', 'delete-ref', 'show-ref', 'ls-refs', 'set-default-branch'], help='git store commands')
    parser.add_argument('-r', '--repo_name', type=str, required=True, help='Repo name on the remote')
    parser.add_argument('-p', '--path', type=str, help='File to add as an object')
    parser.add_argument('-n', '--name', type=str, help='Ref or branch name')
    parser.add_argument('-H', '--hash', type=str, help='Object hash')
    parser.add_argument('--sha1', action='store_true', help='Use SHA-1 instead of SHA-256')

    args = parser.parse_args(argv)
    if client is None:
        auth = None
        if os.environ.get("GIT_STORE_USER"):
            auth = (os.environ["GIT_STORE_USER"], os.environ.get("GIT_STORE_PASSWORD", ""))
        client = RepositoryClient(args.repo_name, auth=auth)

    try:
        if args.command == 'create':
            repo = client.create(sha256=not args.sha1)
            print(f"Created {repo['name']} ({repo['hash_algorithm']})")
        elif args.command == 'add':
            if not args.path:
                parser.error('add requires a -p path')
            with open(args.path, 'rb') as f:
                content = f.read()
            print(client.add_object(content, sha256=not args.sha1))
        elif args.command == 'cat':
            if not args.hash:
                parser.error('cat requires a -H hash')
            sys.stdout.buffer.write(client.get_object(args.hash))
        elif args.command == 'set-ref':
            if not args.name or not args.hash:
                parser.error('set-ref requires -n name and -H hash')
            client.upsert_ref(args.name, args.hash)
            print(f"{args.name} -> {args.hash}")
        elif args.command == 'delete-ref':
            if not args.name:
                parser.error('delete-ref requires -n name')
            client.delete_ref(args.name)
            print(f"Deleted {args.name}")
        elif args.command == 'show-ref':
            if not args.name:
                parser.error('show-ref requires -n name')
            print(client.get_ref(args.name))
        elif args.command == 'ls-refs':
            print(format_refs(client.list_refs()))
        elif args.command == 'set-default-branch':
            if not args.name:
                parser.error('set-default-branch requires -n name')
            print(client.set_default_branch(args.name))
    except RemoteError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
