from __future__ import annotations

import base64
import binascii
import json
import logging
import secrets
from typing import Any, Callable, Optional, Sequence

from ..core.constants import CHALLENGE_BYTES, DEFAULT_WEBAUTHN_TIMEOUT_MS, WEBAUTHN_ALG_ES256
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import ProfileRepository
from ..users.service import SessionUser
from .model import BiometricCredential
from .repository import BiometricCredentialRepository

logger = logging.getLogger(__name__)

BIOMETRIC_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS biometric_credentials (
    id             CHAR(36)     NOT NULL PRIMARY KEY,
    user_id        CHAR(36)     NOT NULL,
    credential_id  VARCHAR(512) NOT NULL,
    public_key     TEXT         NOT NULL,
    sign_count     BIGINT       NOT NULL DEFAULT 0,
    created_at     DATETIME     NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at     DATETIME     NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
    UNIQUE KEY uq_biometric_credential (credential_id),
    KEY ix_biometric_user (user_id)
)
""".strip()


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def _as_bytes(value: Any) -> bytes:
    """Browser payloads carry binary fields either as int arrays or base64url text."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, list):
        if not all(isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in value):
            raise ValidationError("바이너리 필드 형식이 올바르지 않습니다")
        return bytes(value)
    if isinstance(value, str):
        try:
            return b64url_decode(value)
        except ValueError:
            raise ValidationError("바이너리 필드 형식이 올바르지 않습니다")
    raise ValidationError("바이너리 필드 형식이 올바르지 않습니다")


def _sign_count(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("서명 횟수 형식이 올바르지 않습니다")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValidationError("서명 횟수 형식이 올바르지 않습니다")
    if count < 0:
        raise ValidationError("서명 횟수 형식이 올바르지 않습니다")
    return count


def _as_text(value: Any) -> str:
    """Credential ids and keys are stored as text; int arrays become base64."""
    if isinstance(value, str):
        return value
    return base64.b64encode(_as_bytes(value)).decode("ascii")


class BiometricService:
    """WebAuthn request/response glue.

    Challenges are issued here and compared on the way back; signature
    verification is left to the platform authenticator.
    """

    def __init__(
        self,
        credentials: BiometricCredentialRepository,
        profiles: ProfileRepository,
        *,
        rp_id: str,
        rp_name: str,
        timeout_ms: int = DEFAULT_WEBAUTHN_TIMEOUT_MS,
        random_bytes: Optional[Callable[[int], bytes]] = None,
    ):
        self._credentials = credentials
        self._profiles = profiles
        self._rp_id = rp_id
        self._rp_name = rp_name
        self._timeout_ms = int(timeout_ms)
        self._random_bytes = random_bytes or secrets.token_bytes

    def new_challenge(self) -> list[int]:
        return list(self._random_bytes(CHALLENGE_BYTES))

    def registration_options(self, *, user_id: Optional[str], email: Optional[str]) -> dict:
        if not user_id or not email:
            raise ValidationError("필수 데이터가 누락되었습니다")
        user_bytes = list(str(user_id).encode("utf-8"))
        return {
            "challenge": self.new_challenge(),
            "userId": user_bytes,
            "rp": {"name": self._rp_name, "id": self._rp_id},
            "user": {"id": user_bytes, "name": email, "displayName": email},
            "pubKeyCredParams": [{"alg": WEBAUTHN_ALG_ES256, "type": "public-key"}],
            "authenticatorSelection": {
                "authenticatorAttachment": "platform",
                "userVerification": "required",
            },
            "timeout": self._timeout_ms,
        }

    def authentication_options(self) -> dict:
        return {
            "challenge": self.new_challenge(),
            "rpId": self._rp_id,
            "userVerification": "required",
            "timeout": self._timeout_ms,
        }

    @staticmethod
    def check_client_data(client_data: Any, *, expected_type: str, expected_challenge: Optional[Sequence[int]]) -> None:
        """Validate clientDataJSON type and challenge against the one issued to this session."""
        if client_data is None:
            raise AuthenticationError("인증 데이터가 누락되었습니다")
        try:
            parsed = json.loads(_as_bytes(client_data).decode("utf-8"))
        except (ValueError, binascii.Error, UnicodeDecodeError):
            raise AuthenticationError("인증 데이터 형식이 올바르지 않습니다")
        if not isinstance(parsed, dict):
            raise AuthenticationError("인증 데이터 형식이 올바르지 않습니다")

        if parsed.get("type") != expected_type:
            raise AuthenticationError("인증 요청 유형이 올바르지 않습니다")
        if expected_challenge is None:
            raise AuthenticationError("인증 요청이 만료되었습니다. 다시 시도해주세요")
        if parsed.get("challenge") != b64url_encode(bytes(expected_challenge)):
            raise AuthenticationError("인증 요청이 일치하지 않습니다")

    def complete_registration(
        self,
        *,
        user_id: Optional[str],
        credential: Optional[dict],
        expected_challenge: Optional[Sequence[int]] = None,
    ) -> BiometricCredential:
        if not user_id or not isinstance(credential, dict) or not credential:
            raise ValidationError("필수 데이터가 누락되었습니다")

        response = credential.get("response") or {}
        if not isinstance(response, dict):
            raise ValidationError("필수 데이터가 누락되었습니다")
        raw_id = credential.get("id") or credential.get("rawId")
        public_key = credential.get("publicKey") or response.get("publicKey")
        if not raw_id or not public_key:
            raise ValidationError("필수 데이터가 누락되었습니다")
        if response.get("clientDataJSON") is not None:
            self.check_client_data(
                response["clientDataJSON"], expected_type="webauthn.create", expected_challenge=expected_challenge
            )

        credential_id = _as_text(raw_id)
        if self._credentials.get_by_credential_id(credential_id):
            raise ConflictError("이미 등록된 생체 인식입니다")

        reported = _sign_count(credential.get("signCount", response.get("signCount")))
        saved = self._credentials.create_credential(
            user_id=str(user_id),
            credential_id=credential_id,
            public_key=_as_text(public_key),
            sign_count=reported or 0,
        )
        logger.info("biometric credential registered user_id=%s", user_id)
        return saved

    def verify_assertion(
        self,
        *,
        assertion: Optional[dict],
        expected_challenge: Optional[Sequence[int]] = None,
    ) -> SessionUser:
        """Log in from an assertion answering the challenge this session was issued.

        clientDataJSON and the session challenge are both required; a credential
        id alone identifies the user but proves nothing.
        """
        if not isinstance(assertion, dict) or not assertion:
            raise ValidationError("인증 데이터가 누락되었습니다")

        raw_id = assertion.get("id") or assertion.get("rawId")
        if not raw_id:
            raise ValidationError("인증 데이터가 누락되었습니다")
        response = assertion.get("response") or {}
        if not isinstance(response, dict):
            raise ValidationError("인증 데이터가 누락되었습니다")

        stored = self._credentials.get_by_credential_id(_as_text(raw_id))
        if not stored:
            raise AuthenticationError("등록되지 않은 생체 인식입니다")

        self.check_client_data(
            response.get("clientDataJSON"), expected_type="webauthn.get", expected_challenge=expected_challenge
        )

        profile = self._profiles.get_by_id(stored.user_id)
        if not profile:
            raise NotFoundError("프로필을 찾을 수 없습니다")

        reported = _sign_count(assertion.get("signCount", response.get("signCount")))
        if reported is not None and reported > stored.sign_count:
            self._credentials.update_sign_count(stored.id, sign_count=reported)

        logger.info("biometric login user_id=%s", profile.id)
        return SessionUser.from_profile(profile)

    def list_credentials(self, *, user_id: str) -> Sequence[BiometricCredential]:
        return self._credentials.list_for_user(user_id)

    def unregister(self, *, user_id: str) -> int:
        removed = self._credentials.delete_for_user(user_id)
        logger.info("biometric credentials removed user_id=%s count=%d", user_id, removed)
        return removed

    def table_status(self) -> dict:
        exists = self._credentials.table_exists()
        return {
            "exists": exists,
            "message": "테이블이 이미 존재합니다" if exists else "아래 SQL로 테이블을 생성하세요",
            "sql": None if exists else BIOMETRIC_TABLE_DDL,
        }
