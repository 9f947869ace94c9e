import os, bcrypt, jwt
from datetime import datetime, timedelta

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = "HS256"
JWT_EXP_DAYS = int(os.getenv("JWT_EXP_DAYS", "7"))
SESSION_COOKIE = "session"
COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

def hash_password(raw: str) -> str:
    return bcrypt.hashpw(raw.encode(), bcrypt.gensalt()).decode()

def verify_password(raw: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(raw.encode(), hashed.encode())
    except ValueError:
        # Malformed stored hash
        return False

def create_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    """Session token carrying the user id (sub) and role."""
    issued = datetime.utcnow()
    claims = {
        "sub": user_id,
        "role": role,
        "iat": issued,
        "exp": issued + (expires_delta or timedelta(days=JWT_EXP_DAYS)),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict:
    """Decode and validate a session token; raises jwt.PyJWTError when invalid or expired."""
    claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], options={"require": ["sub", "exp"]})
    if not isinstance(claims.get("sub"), str):
        raise jwt.InvalidTokenError("Token subject missing")
    return claims

def token_from_request(authorization: str | None, session_cookie: str | None) -> str | None:
    """Bearer header wins over the session cookie."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return session_cookie or None

def session_cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": COOKIE_SECURE,
        "samesite": "lax",
        "max_age": JWT_EXP_DAYS * 24 * 3600,
    }
