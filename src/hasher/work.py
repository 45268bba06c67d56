import base64
import hashlib

# Simulates an expensive hash. Not a tunable.
HASH_DELAY_SECONDS = 5.0


def compute_digest(password: str) -> str:
    """SHA-512 of the UTF-8 password, URL-safe base64 encoded (padding kept).

    hashlib releases the GIL for the digest, so this is safe to run via
    asyncio.to_thread() without stalling the event loop.
    """
    digest = hashlib.sha512(password.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")
