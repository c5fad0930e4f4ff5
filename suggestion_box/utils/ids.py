"""제안 ID 생성 유틸리티.

Client-side suggestion id generation for the local backend: ``SUG_<epoch ms>_<9 random chars>``.
"""

import secrets
import string
import time

_ID_ALPHABET: str = string.ascii_lowercase + string.digits


def generate_suggestion_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"SUG_{int(time.time() * 1000)}_{suffix}"
