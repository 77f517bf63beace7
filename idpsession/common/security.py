import hmac
import os
import random
import string

from .encoding import to_bytes

UNICODE_ASCII_CHARACTER_SET = string.ascii_letters + string.digits


def generate_token(length=48, chars=UNICODE_ASCII_CHARACTER_SET):
    rand = random.SystemRandom()
    return "".join(rand.choice(chars) for _ in range(length))


def is_secure_transport(uri):
    """Check if the uri is over ssl."""
    if os.getenv("IDPSESSION_INSECURE_TRANSPORT"):
        return True

    uri = uri.lower()
    return uri.startswith(("https://", "http://localhost:", "http://127.0.0.1:"))


def compare_constant_time(a, b):
    """Compare two strings without leaking the position of the first
    mismatching character. ``None`` never matches anything.
    """
    if a is None or b is None:
        return False
    return hmac.compare_digest(to_bytes(a), to_bytes(b))
