from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name}을(를) 입력해주세요.")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name}는 최소 {min_len}자리 이상이어야 합니다.")
    return value


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "이메일").lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("올바른 이메일 주소를 입력해주세요.")
    return email
