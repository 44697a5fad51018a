"""
Tests for the bearer token gate in front of protected routes.
"""
import pytest
from fastapi import Depends

from account_platform.account_platform.account_service.auth import TokenIssuer
from account_platform.account_platform.account_service.dependencies import (
    Identity,
    extract_bearer_token,
    get_current_identity,
)
from account_platform.account_platform.account_service.errors import MissingTokenError

from .helpers import auth_header, register


@pytest.fixture
def handler_calls(app):
    """A protected route that records each time its handler runs."""
    calls = []

    @app.get("/protected")
    def protected(identity: Identity = Depends(get_current_identity)):
        calls.append(identity)
        return {"user_id": identity.user_id}

    return calls


# ---------------- Header parsing ----------------

@pytest.mark.parametrize("value", [None, "", "Bearer", "Bearer ", "Bearer    ", "Basic abc", "Token abc"])
def test_extract_rejects_missing_token(value):
    with pytest.raises(MissingTokenError):
        extract_bearer_token(value)


@pytest.mark.parametrize("value", ["Bearer abc.def", "bearer abc.def", "  Bearer abc.def  "])
def test_extract_returns_token(value):
    assert extract_bearer_token(value) == "abc.def"


# ---------------- Gate behaviour ----------------

def test_missing_header_is_401(client, handler_calls):
    r = client.get("/protected")
    assert r.status_code == 401
    assert r.json() == {"detail": "Access token is required"}
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert handler_calls == []


def test_empty_bearer_token_takes_missing_path(client, handler_calls):
    r = client.get("/protected", headers={"Authorization": "Bearer "})
    assert r.status_code == 401
    assert r.json() == {"detail": "Access token is required"}
    assert handler_calls == []


def test_other_scheme_is_401(client, handler_calls):
    r = client.get("/protected", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert r.status_code == 401
    assert handler_calls == []


def test_garbage_token_is_403(client, handler_calls):
    r = client.get("/protected", headers=auth_header("not-a-token"))
    assert r.status_code == 403
    assert r.json() == {"detail": "Invalid token"}
    assert handler_calls == []


def test_token_signed_with_other_secret_is_403(client, handler_calls):
    forged = TokenIssuer("attacker-secret-0123456789-abcdefghijkl").issue_for(1)
    r = client.get("/protected", headers=auth_header(forged))
    assert r.status_code == 403
    assert handler_calls == []


def test_valid_token_calls_handler_once_with_identity(client, handler_calls):
    token = register(client, "gate@example.com")
    r = client.get("/protected", headers=auth_header(token))
    assert r.status_code == 200
    assert len(handler_calls) == 1
    assert r.json() == {"user_id": handler_calls[0].user_id}


def test_gate_does_not_touch_the_datastore(client, app, handler_calls):
    # No user 999 exists; the gate only checks the signature
    token = app.state.token_issuer.issue_for(999)
    r = client.get("/protected", headers=auth_header(token))
    assert r.status_code == 200
    assert handler_calls == [Identity(user_id=999)]


@pytest.mark.parametrize("method,path", [
    ("get", "/user/me"),
    ("post", "/post/create"),
    ("get", "/posts"),
])
def test_protected_routes_require_token(client, method, path):
    kwargs = {"json": {"text": "hi"}} if method == "post" else {}
    missing = getattr(client, method)(path, **kwargs)
    assert missing.status_code == 401

    invalid = getattr(client, method)(path, headers=auth_header("bad.token.value"), **kwargs)
    assert invalid.status_code == 403


@pytest.mark.parametrize("method,path", [
    ("get", "/user/me"),
    ("post", "/post/create"),
    ("get", "/posts"),
])
def test_subject_beyond_id_range_is_403(client, app, method, path):
    # Signed correctly, but no users.id row could ever hold this subject
    token = app.state.token_issuer.issue_for(2 ** 70)
    kwargs = {"json": {"text": "hi"}} if method == "post" else {}
    r = getattr(client, method)(path, headers=auth_header(token), **kwargs)
    assert r.status_code == 403
    assert r.json() == {"detail": "Invalid token"}
