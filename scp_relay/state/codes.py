"""Session code and connection identifier generation."""
import random
import string
from typing import Callable

from scp_relay.errors import CodeGenerationError

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 1000

CONNECTION_ID_ALPHABET = string.ascii_lowercase + string.digits
CONNECTION_ID_LENGTH = 9


def normalize_code(code: str) -> str:
    """Codes compare case-insensitively; the registry stores them upper-cased."""
    return code.upper()


def generate_code(
    is_taken: Callable[[str], bool],
    length: int = CODE_LENGTH,
    max_attempts: int = MAX_CODE_ATTEMPTS,
) -> str:
    """Return a random code for which ``is_taken`` is false.

    Raises:
        CodeGenerationError: If no free code was found in ``max_attempts``.
    """
    for _ in range(max_attempts):
        code = "".join(random.choices(CODE_ALPHABET, k=length))
        if not is_taken(code):
            return code
    raise CodeGenerationError(details={"attempts": max_attempts})


def generate_connection_id() -> str:
    return "".join(random.choices(CONNECTION_ID_ALPHABET, k=CONNECTION_ID_LENGTH))
