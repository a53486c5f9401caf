"""Identifier generation for canvas elements and person records."""

import itertools
import re
import secrets
import string
import uuid
from typing import Callable

IdGenerator = Callable[[], str]

CR_ID_PATTERN = re.compile(r"^[a-z]{3}-\d{3}-[a-z]{3}-\d{3}$")


def new_canvas_id() -> str:
    """Return a fresh 32-character hex id for a canvas node or edge."""
    return uuid.uuid4().hex


def sequential_ids(prefix: str = "id") -> IdGenerator:
    """
    Build a deterministic id generator yielding "{prefix}-1", "{prefix}-2", ...

    Useful when output must be reproducible, e.g. in tests or snapshots.
    """
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def generate_cr_id() -> str:
    """Generate a person id in the "abc-123-def-456" format."""
    letters = string.ascii_lowercase
    digits = string.digits

    def pick(alphabet: str) -> str:
        return "".join(secrets.choice(alphabet) for _ in range(3))

    return f"{pick(letters)}-{pick(digits)}-{pick(letters)}-{pick(digits)}"


def validate_cr_id(cr_id: str) -> bool:
    return bool(CR_ID_PATTERN.match(cr_id))
