from typing import Any, Dict

from jose import jwt

from quild.core.config import settings


def decode_session_token(token: str) -> Dict[str, Any]:
    """Verify a session token issued by the identity provider and return its claims.

    Raises ``jose.JWTError`` when the signature, expiry or audience do not check out.
    """
    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        settings.AUTH_JWT_KEY,
        algorithms=[settings.AUTH_JWT_ALGORITHM],
        audience=settings.AUTH_JWT_AUDIENCE,
        options=options,
    )
