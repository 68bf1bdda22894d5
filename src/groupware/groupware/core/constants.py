"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

CLOCK_IN_TITLE = "🌅 출근"
CLOCK_OUT_TITLE = "🌆 퇴근"
CLOCK_IN_DESCRIPTION = "출근 기록"
CLOCK_OUT_DESCRIPTION = "퇴근 기록"
AUTO_CREATED_SUFFIX = " - 자동 생성"
CLOCK_EVENT_MINUTES = 30

LUNCH_BREAK_MINUTES = 60

DEFAULT_WEEKLY_WORK_HOURS = 40
DEFAULT_WEEK_START = "월"
DEFAULT_WEEK_END = "금"
KOREAN_WEEKDAYS = ["일", "월", "화", "수", "목", "금", "토"]

DEFAULT_ANNUAL_LEAVE = 15

ACCEPT_CODE_LENGTH = 6
ACCEPT_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
MIN_PASSWORD_LENGTH = 6

CHALLENGE_BYTES = 32
WEBAUTHN_ALG_ES256 = -7
DEFAULT_WEBAUTHN_TIMEOUT_MS = 60000

RECENT_TRANSACTIONS_LIMIT = 10
