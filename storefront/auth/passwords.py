"""Password hashing with bcrypt."""
import bcrypt


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password`` as text."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, encoded: str | None) -> bool:
    """Check ``password`` against a hash_password() value. Malformed hashes never match."""
    if not encoded:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
    except ValueError:
        return False
