from datetime import timedelta

import pytest
from jose import JWTError

from marketplace.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed) is True
    assert verify_password("wrong-pass", hashed) is False


@pytest.mark.parametrize("hashed", [None, ""])
def test_verify_password_without_hash_fails(hashed):
    assert verify_password("anything", hashed) is False


def test_access_token_carries_subject_and_extra_claims():
    token = create_access_token(subject="user-1", extra_claims={"role": "OWNER"})

    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["role"] == "OWNER"
    assert "exp" in payload


def test_decode_rejects_expired_token():
    token = create_access_token(subject="user-1", expires_delta=timedelta(seconds=-1))

    with pytest.raises(JWTError):
        decode_access_token(token)
