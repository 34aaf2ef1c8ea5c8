"""bcrypt password hashing, compatible with ``$2a$``/``$2b$`` hashes."""
import bcrypt

DEFAULT_ROUNDS = 10

# Compared against when the username does not exist, so both failure paths
# pay for one bcrypt check at the usual cost.
_DUMMY_HASH = bcrypt.hashpw(b"mitishirube", bcrypt.gensalt(rounds=DEFAULT_ROUNDS)).decode("utf-8")


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash, or a password over bcrypt's 72-byte limit
        return False


def burn_password_check(password: str) -> None:
    verify_password(password, _DUMMY_HASH)
