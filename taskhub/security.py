"""
TaskHub Backend — Password Digests
====================================

What:  One-way password digests with bcrypt.
How:   `hash_password` salts and digests a secret; `verify_password` checks a
       candidate against a stored digest in constant time.
Who:   AuthService during registration and login.

bcrypt is CPU-bound (tens of milliseconds at cost 10), so the async
wrappers run it in Starlette's threadpool to keep the event loop free.
"""

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 10) -> str:
    """Returns a bcrypt digest (`$2b$...`) of the password."""
    digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return digest.decode("ascii")


def verify_password(password: str, digest: str) -> bool:
    """
    True if `password` matches `digest`.

    A malformed digest counts as a mismatch rather than an error, so a
    corrupted row cannot turn a login attempt into a 500.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), digest.encode("ascii"))
    except ValueError:
        logger.warning("Stored password digest is malformed")
        return False


async def hash_password_async(password: str, rounds: int = 10) -> str:
    return await run_in_threadpool(hash_password, password, rounds)


async def verify_password_async(password: str, digest: str) -> bool:
    return await run_in_threadpool(verify_password, password, digest)
