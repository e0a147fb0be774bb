from talenthub.core import security
from talenthub.core.security import create_access_token, decode_access_token, revoke_token


def test_revoked_token_no_longer_decodes():
    token = create_access_token({"sub": "u1"})
    assert decode_access_token(token)["sub"] == "u1"

    assert revoke_token(token) is True
    assert decode_access_token(token) is None
    assert revoke_token(token) is False


def test_revoking_drops_entries_for_expired_tokens(monkeypatch):
    monkeypatch.setattr(security, "_revoked_token_ids", {"stale": 0})
    token = create_access_token({"sub": "u1"})

    revoke_token(token)

    assert "stale" not in security._revoked_token_ids
    assert len(security._revoked_token_ids) == 1


def test_invalid_token_is_not_revocable():
    assert revoke_token("not-a-token") is False
