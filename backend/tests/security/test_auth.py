"""
测试 app.security.auth - Bearer JWT 身份解析
"""
import pytest
from fastapi import HTTPException
from jose import jwt

from app.config import settings
from app.security.auth import create_access_token, decode_token


class TestToken:
    def test_round_trip(self):
        token = create_access_token("alice")
        assert decode_token(token)["sub"] == "alice"

    def test_expired_token_rejected(self):
        token = create_access_token("alice", expires_minutes=-1)
        with pytest.raises(HTTPException) as exc:
            decode_token(token)
        assert exc.value.status_code == 401

    def test_wrong_key_rejected(self):
        token = jwt.encode({"sub": "alice"}, "not-the-key", algorithm=settings.ALGORITHM)
        with pytest.raises(HTTPException):
            decode_token(token)


class TestPrincipalDependency:
    def test_missing_header(self, client):
        response = client.post("/guests", json={"name": "张三"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_token_without_subject(self, client):
        token = jwt.encode({"role": "owner"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        response = client.post("/guests", headers={"Authorization": f"Bearer {token}"},
                               json={"name": "张三"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid authentication credentials"

    def test_valid_token(self, client):
        headers = {"Authorization": f"Bearer {create_access_token('front-desk')}"}
        response = client.post("/guests", headers=headers, json={"name": "张三"})
        assert response.status_code == 200
