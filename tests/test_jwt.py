"""
Tests for token issuance and validation.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.errors import InvalidToken
from auth.jwt import Claims, TokenService
from database.models import Account

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def _account() -> Account:
    return Account(
        id=uuid.uuid4(),
        email="a@x.com",
        first_name="Jo",
        last_name="Doe",
        password_hash="$2b$04$irrelevant",
    )


def _service(**overrides) -> TokenService:
    params = dict(
        secret=TEST_SECRET,
        issuer="test-issuer",
        audience="test-audience",
        expiry_minutes=30,
    )
    params.update(overrides)
    return TokenService(**params)


class TestIssueAndValidate:
    def test_fresh_token_validates(self, token_service):
        account = _account()
        claims = token_service.validate(token_service.issue(account))

        assert isinstance(claims, Claims)
        assert claims.sub == str(account.id)
        assert claims.email == "a@x.com"
        assert claims.first_name == "Jo"
        assert claims.last_name == "Doe"
        assert claims.iss == "test-issuer"
        assert claims.aud == "test-audience"
        assert claims.exp - claims.iat == 30 * 60

    def test_extract_identity_returns_account_id(self, token_service):
        account = _account()
        claims = token_service.validate(token_service.issue(account))
        assert token_service.extract_identity(claims) == account.id

    def test_each_token_gets_its_own_jti(self, token_service):
        account = _account()
        first = token_service.validate(token_service.issue(account))
        second = token_service.validate(token_service.issue(account))
        assert first.jti != second.jti
        assert first.jti != str(account.id)


class TestRejection:
    def test_expired_token(self):
        issued_long_ago = datetime.now(timezone.utc) - timedelta(hours=2)
        old = _service(clock=lambda: issued_long_ago)
        token = old.issue(_account())

        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_just_expired_token_has_no_grace_by_default(self):
        # expired five seconds ago
        issued = datetime.now(timezone.utc) - timedelta(minutes=30, seconds=5)
        token = _service(clock=lambda: issued).issue(_account())

        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_configured_leeway_accepts_just_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(minutes=30, seconds=5)
        token = _service(clock=lambda: issued).issue(_account())

        claims = _service(leeway_seconds=60).validate(token)
        assert claims.exp < int(datetime.now(timezone.utc).timestamp())

    def test_leeway_comes_from_settings(self, settings):
        assert TokenService.from_settings(settings).leeway_seconds == 0
        relaxed = settings.model_copy(update={"jwt_leeway_seconds": 60})
        assert TokenService.from_settings(relaxed).leeway_seconds == 60

    def test_foreign_secret(self):
        token = _service(secret="some-other-secret-that-is-also-long-enough").issue(_account())
        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_wrong_audience(self):
        token = _service(audience="someone-else").issue(_account())
        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_wrong_issuer(self):
        token = _service(issuer="someone-else").issue(_account())
        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_all_failures_share_one_message(self):
        service = _service()
        tokens = [
            _service(secret="another-secret-value-of-decent-length").issue(_account()),
            _service(audience="x").issue(_account()),
            _service(issuer="x").issue(_account()),
            "garbage",
        ]
        messages = set()
        for token in tokens:
            with pytest.raises(InvalidToken) as excinfo:
                service.validate(token)
            messages.add(str(excinfo.value))
        assert len(messages) == 1

    @pytest.mark.parametrize("token", ["", None, "garbage", "a.b.c"])
    def test_malformed_tokens(self, token):
        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_missing_claim_is_invalid(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {
                "sub": str(uuid.uuid4()),
                "jti": "x",
                "iat": now,
                "exp": now + 600,
                "iss": "test-issuer",
                "aud": "test-audience",
            },
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            _service().validate(token)

    def test_non_uuid_subject_is_invalid(self):
        claims = Claims(
            sub="not-a-uuid",
            email="a@x.com",
            jti="x",
            firstName="Jo",
            lastName="Doe",
            iat=0,
            exp=1,
            iss="test-issuer",
            aud="test-audience",
        )
        with pytest.raises(InvalidToken):
            _service().extract_identity(claims)


class TestConstruction:
    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            _service(secret="")

    def test_non_positive_lifetime_refused(self):
        with pytest.raises(ValueError):
            _service(expiry_minutes=0)
