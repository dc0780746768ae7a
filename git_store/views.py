from django.http import JsonResponse, HttpRequest
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from django.contrib.auth import authenticate
from django.db import transaction
from functools import wraps
import base64
import binascii
import json
import logging

from . import hashing
from .batch import push_objects_and_refs
from .errors import GitStoreError, GitStoreValidationError
from .metadata import (
    accept_ownership,
    create_repository,
    ensure_owner,
    get_repository,
    set_default_branch,
    transfer_ownership,
)
from .object_store import get_object, list_object_hashes, put_object
from .references import delete_ref, get_ref, list_refs, resolve_refs, upsert_ref

logger = logging.getLogger(__name__)


class BadRequest(GitStoreValidationError):
    pass


def api_view(*methods):
    """Wrap a view in a transaction and turn store errors into JSON responses."""
    def decorator(view):
        @csrf_exempt
        @require_http_methods(list(methods))
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                with transaction.atomic():
                    return view(request, *args, **kwargs)
            except GitStoreError as exc:
                logger.warning("%s %s rejected: %s", request.method, request.path, exc)
                return JsonResponse(
                    {"error": type(exc).__name__, "detail": str(exc)}, status=exc.status
                )
        return wrapper
    return decorator


def _caller(request: HttpRequest):
    if request.user.is_authenticated:
        return request.user.get_username()
    header = request.META.get("HTTP_AUTHORIZATION", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "basic" or not credentials:
        return None
    try:
        username, _, password = base64.b64decode(credentials).decode().partition(":")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user = authenticate(request, username=username, password=password)
    return user.get_username() if user is not None else None


def _body(request: HttpRequest) -> dict:
    try:
        data = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Body is not valid JSON") from None
    if not isinstance(data, dict):
        raise BadRequest("Body must be a JSON object")
    return data


def _payload(text) -> bytes:
    try:
        return bytes.fromhex(text)
    except (TypeError, ValueError):
        raise BadRequest("Object data must be hex encoded") from None


def _items(data, key):
    items = data.get(key, [])
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise BadRequest(f"{key} must be a list of objects")
    return items


def _owned_repository(request, repo_name):
    repo = get_repository(repo_name, for_update=True)
    ensure_owner(repo, _caller(request))
    return repo


@api_view("POST")
def create_repo(request: HttpRequest) -> JsonResponse:
    data = _body(request)
    caller = _caller(request)
    if caller is None:
        return JsonResponse({"error": "NotAuthenticated", "detail": "Log in first"}, status=401)
    sha256 = data.get("sha256", True)
    if not isinstance(sha256, bool):
        raise BadRequest("sha256 must be true or false")
    algorithm = hashing.algorithm_for(sha256)
    repo = create_repository(data.get("name", ""), caller, algorithm)
    return JsonResponse(_repo_summary(repo), status=201)


@api_view("GET", "POST")
def objects(request: HttpRequest, repo_name: str) -> JsonResponse:
    if request.method == "GET":
        repo = get_repository(repo_name)
        return JsonResponse({"hashes": [h.hex() for h in list_object_hashes(repo)]})

    repo = _owned_repository(request, repo_name)
    data = _body(request)
    hash = hashing.from_hex(data.get("hash"))
    put_object(repo, hash, _payload(data.get("data")))
    return JsonResponse({"hash": hash.hex()}, status=201)


@api_view("GET")
def object_detail(request: HttpRequest, repo_name: str, hash: str) -> JsonResponse:
    repo = get_repository(repo_name)
    key = hashing.from_hex(hash)
    return JsonResponse({"hash": key.hex(), "data": get_object(repo, key).hex()})


@api_view("GET")
def refs(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = get_repository(repo_name)
    listing = list_refs(repo)
    return JsonResponse({
        "normal": [{"name": name, "hash": h.hex()} for name, h in listing.normal],
        "symbolic": [{"name": name, "target": target} for name, target in listing.symbolic],
        "kv": [{"key": key, "value": value} for key, value in listing.key_value],
    })


@api_view("GET", "PUT", "DELETE")
def ref_detail(request: HttpRequest, repo_name: str, name: str) -> JsonResponse:
    if request.method == "GET":
        repo = get_repository(repo_name)
        return JsonResponse({"name": name, "hash": get_ref(repo, name).hex()})

    repo = _owned_repository(request, repo_name)
    if request.method == "DELETE":
        previous = delete_ref(repo, name)
        return JsonResponse({"name": name, "previous": previous.hex()})

    data = _body(request)
    hash = hashing.from_hex(data.get("hash"))
    previous = upsert_ref(repo, name, hash)
    return JsonResponse({"name": name, "hash": hash.hex(), "previous": previous.hex()})


@api_view("POST")
def resolve(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = get_repository(repo_name)
    names = _body(request).get("names", [])
    if not isinstance(names, list):
        raise BadRequest("names must be a list")
    return JsonResponse({"hashes": [h.hex() for h in resolve_refs(repo, names)]})


@api_view("POST")
def push_objects(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = _owned_repository(request, repo_name)
    data = _body(request)
    objects = [
        (hashing.from_hex(obj.get("hash")), _payload(obj.get("data")))
        for obj in _items(data, "objects")
    ]
    ref_updates = [
        (ref.get("name"), hashing.from_hex(ref.get("hash")))
        for ref in _items(data, "refs")
    ]
    push_objects_and_refs(repo, objects, ref_updates)
    return JsonResponse({"status": "pushed", "objects": len(objects), "refs": len(ref_updates)})


@api_view("PUT")
def default_branch(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = _owned_repository(request, repo_name)
    set_default_branch(repo, _body(request).get("name", ""))
    return JsonResponse({"default_branch": repo.default_branch})


@api_view("POST")
def ownership_transfer(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = get_repository(repo_name, for_update=True)
    transfer_ownership(repo, _caller(request), _body(request).get("owner", ""))
    return JsonResponse({"owner": repo.owner, "pending_owner": repo.pending_owner})


@api_view("POST")
def ownership_accept(request: HttpRequest, repo_name: str) -> JsonResponse:
    repo = get_repository(repo_name, for_update=True)
    accept_ownership(repo, _caller(request))
    return JsonResponse({"owner": repo.owner, "pending_owner": repo.pending_owner})


def _repo_summary(repo):
    return {
        "name": repo.name,
        "hash_algorithm": repo.hash_algorithm,
        "default_branch": repo.default_branch,
        "owner": repo.owner,
    }
