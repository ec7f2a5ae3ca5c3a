"""Web session utilities (in-memory)."""
import os
import secrets
from datetime import datetime, timezone, timedelta
from typing import Dict, Optional

SESSION_TTL_DAYS = int(os.environ.get("SESSION_TTL_DAYS", "7"))

_web_sessions: Dict[str, dict] = {}


def create_web_session(user_id: str, email: str, role: str) -> str:
    """Create a new web session and return the token."""
    session_token = secrets.token_urlsafe(32)
    now = datetime.now(timezone.utc)
    _web_sessions[session_token] = {
        "user_id": str(user_id),
        "email": email,
        "role": role,
        "created_at": now.isoformat(),
        "expires_at": (now + timedelta(days=SESSION_TTL_DAYS)).isoformat(),
    }
    return session_token


def verify_web_session_token(token: str) -> Optional[dict]:
    """Verify a web session token and return session data."""
    session = _web_sessions.get(token)
    if not session:
        return None

    expires_at = datetime.fromisoformat(session["expires_at"])
    if datetime.now(timezone.utc) > expires_at:
        del _web_sessions[token]
        return None

    return session


def revoke_web_session(token: str) -> bool:
    """Delete a session. Returns False if it did not exist."""
    return _web_sessions.pop(token, None) is not None


def revoke_user_sessions(user_id: str) -> int:
    """Delete every session of a user (role change, account removal)."""
    tokens = [t for t, s in _web_sessions.items() if s["user_id"] == str(user_id)]
    for token in tokens:
        del _web_sessions[token]
    return len(tokens)
