"""Identifier pattern, validation, and generation.

Identifiers are 13-digit numeric strings.  They look like ISBN-13s but
carry no check digit and are never validated as ISBNs.

INVARIANT: Identifiers are permanent and unique within a catalog.
"""

from __future__ import annotations

import random
import re
import uuid
from collections.abc import Callable

IDENTIFIER_LENGTH = 13
IDENTIFIER_PATTERN = re.compile(rf"^\d{{{IDENTIFIER_LENGTH}}}$")


def validate_identifier(identifier: str) -> bool:
    """Check whether *identifier* is a 13-digit numeric string."""
    return IDENTIFIER_PATTERN.match(identifier) is not None


def random_identifier(rng: random.Random | None = None) -> str:
    """Draw one candidate identifier.

    Keeps the first 13 decimal digits of a random 128-bit UUID's hex form
    and pads with random digits when the UUID holds fewer than 13.
    """
    digits = [ch for ch in uuid.uuid4().hex if ch.isdigit()][:IDENTIFIER_LENGTH]
    pick = (rng or random).randrange
    while len(digits) < IDENTIFIER_LENGTH:
        digits.append(str(pick(10)))
    return "".join(digits)


def generate_identifier(
    exists: Callable[[str], bool],
    *,
    draw: Callable[[], str] = random_identifier,
) -> str:
    """Return a fresh identifier for which ``exists`` is False.

    There is no attempt cap: the loop ends only on a genuine miss.
    """
    candidate = draw()
    while exists(candidate):
        candidate = draw()
    return candidate
