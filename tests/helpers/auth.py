from datetime import datetime, timedelta, timezone

from jose import jwt

TEST_JWT_KEY = "quild-test-session-signing-key"


def make_session_token(external_id: str, expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    payload = {
        "sub": external_id,
        "exp": datetime.now(timezone.utc) + expires_in,
        **claims,
    }
    return jwt.encode(payload, TEST_JWT_KEY, algorithm="HS256")
