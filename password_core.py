# -*- coding: utf-8 -*-
"""
Password generator core (no GUI dependencies).

Key features
- Validation of the raw "length" form field against an inclusive [min, max] bound.
- Alphabet assembly from four fixed character classes, always in the same order.
- Uniform sampling with replacement from that alphabet via an injectable random source.
- Entropy / strength estimate used by the live preview.

Error model
- User-input problems are returned as values (ValidationError / GenerationError),
  never raised. Callers branch with isinstance().
- Programming errors (inverted bounds) raise ValueError.
"""

from __future__ import annotations

import logging
import math
import random
import re
import secrets
import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol, Tuple, Union

# -------------------------
# Constants
# -------------------------

MIN_LENGTH = 4
MAX_LENGTH = 20

SYMBOL_CHARS = "!@#$%^&*()"

# Optional sign followed by decimal digits; anything else is rejected (no truncation of "8.5").
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

logger = logging.getLogger(__name__)


# =========================
#   CHARACTER CLASSES
# =========================

@dataclass(frozen=True)
class CharacterClass:
    name: str
    label: str
    characters: str


LOWER = CharacterClass("lower", "Lowercase (a–z)", string.ascii_lowercase)
UPPER = CharacterClass("upper", "Uppercase (A–Z)", string.ascii_uppercase)
DIGITS = CharacterClass("digits", "Digits (0–9)", string.digits)
SYMBOLS = CharacterClass("symbols", "Symbols (!@#$...)", SYMBOL_CHARS)

# Fixed alphabet order.
CHARACTER_CLASSES: Tuple[CharacterClass, ...] = (LOWER, UPPER, DIGITS, SYMBOLS)

CLASSES_BY_NAME = {cc.name: cc for cc in CHARACTER_CLASSES}


def build_alphabet(classes: Iterable[CharacterClass]) -> str:
    """
    Concatenate the characters of every enabled class.

    Order is always lower, upper, digits, symbols regardless of the order (or
    container) the classes are passed in. Characters are not deduplicated.
    """
    enabled = set(classes)
    return "".join(cc.characters for cc in CHARACTER_CLASSES if cc in enabled)


# =========================
#   ERRORS (as values)
# =========================

class ValidationErrorKind(Enum):
    MISSING = "missing"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


class GenerationErrorKind(Enum):
    EMPTY_ALPHABET = "empty_alphabet"
    INVALID_LENGTH = "invalid_length"


@dataclass(frozen=True)
class ValidationError:
    kind: ValidationErrorKind
    message: str


@dataclass(frozen=True)
class GenerationError:
    kind: GenerationErrorKind
    message: str


# =========================
#   RANDOM SOURCES
# =========================

class RandomSource(Protocol):
    """Anything able to pick an index in [0, n)."""

    def randbelow(self, n: int) -> int:
        ...


class SystemRandomSource:
    """OS entropy (secrets.SystemRandom). Safe to share between threads."""

    def __init__(self) -> None:
        self._rng = secrets.SystemRandom()

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)


class SeededRandomSource:
    """
    Reproducible source backed by random.Random.

    Not thread-safe in any useful sense: give each thread its own instance.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)


_default_rng: RandomSource = SystemRandomSource()


# =========================
#   VALIDATION
# =========================

def validate(
    raw_length: Optional[str],
    min_length: int = MIN_LENGTH,
    max_length: int = MAX_LENGTH,
) -> Union[int, ValidationError]:
    """
    Parse and bound-check the raw length typed into the form.

    Surrounding whitespace is ignored. Non-integer numbers ("8.5", "8.0", "1e3")
    are rejected as MISSING rather than truncated.

    Raises:
        ValueError if min_length > max_length.
    """
    if min_length > max_length:
        raise ValueError(f"min_length ({min_length}) is greater than max_length ({max_length}).")

    text = (raw_length or "").strip()
    if not text:
        logger.debug("Length rejected: empty.")
        return ValidationError(ValidationErrorKind.MISSING, "length is required")

    if not _INTEGER_RE.fullmatch(text):
        logger.debug("Length rejected: not an integer (%r).", text)
        return ValidationError(ValidationErrorKind.MISSING, "length must be a whole number")

    # Magnitudes wider than either bound are out of range; also keeps int() under its digit limit.
    negative = text.startswith("-")
    digits = text.lstrip("+-").lstrip("0")
    if len(digits) > max(len(str(abs(min_length))), len(str(abs(max_length)))):
        if negative:
            logger.debug("Length rejected: %d-digit negative value.", len(digits))
            return ValidationError(ValidationErrorKind.TOO_SHORT, f"should be min of {min_length} characters")
        logger.debug("Length rejected: %d-digit value.", len(digits))
        return ValidationError(ValidationErrorKind.TOO_LONG, f"should be max of {max_length} characters")

    value = int(digits or "0")
    if negative:
        value = -value
    if value < min_length:
        logger.debug("Length rejected: %d < %d.", value, min_length)
        return ValidationError(ValidationErrorKind.TOO_SHORT, f"should be min of {min_length} characters")
    if value > max_length:
        logger.debug("Length rejected: %d > %d.", value, max_length)
        return ValidationError(ValidationErrorKind.TOO_LONG, f"should be max of {max_length} characters")

    return value


# =========================
#   GENERATION
# =========================

@dataclass(frozen=True)
class GenerationRequest:
    length: int
    use_lower: bool = True
    use_upper: bool = False
    use_digits: bool = False
    use_symbols: bool = False

    def enabled_classes(self) -> Tuple[CharacterClass, ...]:
        flags = (self.use_lower, self.use_upper, self.use_digits, self.use_symbols)
        return tuple(cc for cc, on in zip(CHARACTER_CLASSES, flags) if on)


def generate(
    length: int,
    classes: Iterable[CharacterClass],
    rng: Optional[RandomSource] = None,
) -> Union[str, GenerationError]:
    """
    Build a password of exactly `length` characters.

    Each position is drawn independently and uniformly (with replacement) from
    the alphabet of the enabled classes.

    Returns:
        The password, or a GenerationError when the length is negative or the
        alphabet is empty while length > 0.
    """
    if length < 0:
        return GenerationError(GenerationErrorKind.INVALID_LENGTH, "Password length cannot be negative.")

    alphabet = build_alphabet(classes)
    if length == 0:
        return ""
    if not alphabet:
        logger.debug("Generation refused: no character class enabled.")
        return GenerationError(
            GenerationErrorKind.EMPTY_ALPHABET,
            "Select at least one character class.",
        )

    source = rng if rng is not None else _default_rng
    size = len(alphabet)
    password = "".join(alphabet[source.randbelow(size)] for _ in range(length))

    logger.debug("Generated a %d-character password from a %d-character alphabet.", length, size)
    return password


def generate_for_request(
    request: GenerationRequest,
    rng: Optional[RandomSource] = None,
) -> Union[str, GenerationError]:
    return generate(request.length, request.enabled_classes(), rng)


# =========================
#   STRENGTH ESTIMATE
# =========================

@dataclass(frozen=True)
class StrengthEstimate:
    alphabet_size: int
    entropy_bits: float
    label: str


def estimate_entropy_bits(length: int, alphabet_size: int) -> float:
    """Return Shannon entropy (bits) for a uniformly random password from an alphabet."""
    if length <= 0 or alphabet_size <= 1:
        return 0.0
    return float(length) * math.log2(float(alphabet_size))


def classify_strength(entropy_bits: float) -> str:
    """Human-friendly strength label from entropy estimate."""
    if entropy_bits < 40:
        return "Very weak"
    if entropy_bits < 60:
        return "Weak"
    if entropy_bits < 80:
        return "Reasonable"
    if entropy_bits < 100:
        return "Strong"
    return "Very strong"


def estimate_strength(length: int, classes: Iterable[CharacterClass]) -> StrengthEstimate:
    alphabet_size = len(set(build_alphabet(classes)))
    bits = estimate_entropy_bits(length, alphabet_size)
    return StrengthEstimate(alphabet_size=alphabet_size, entropy_bits=bits, label=classify_strength(bits))
