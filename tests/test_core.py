import string

import pytest

from password_core import (
    CHARACTER_CLASSES,
    DIGITS,
    LOWER,
    SYMBOLS,
    UPPER,
    GenerationError,
    GenerationErrorKind,
    GenerationRequest,
    SeededRandomSource,
    SystemRandomSource,
    ValidationError,
    ValidationErrorKind,
    build_alphabet,
    classify_strength,
    estimate_entropy_bits,
    estimate_strength,
    generate,
    generate_for_request,
    validate,
)


# ---------- validate ----------

def test_validate_accepts_in_range_length():
    assert validate("8") == 8


@pytest.mark.parametrize("raw", ["4", "20", " 12 ", "+7"])
def test_validate_accepts_bounds_and_whitespace(raw):
    assert validate(raw) == int(raw.strip())


def test_validate_too_short():
    result = validate("2")
    assert isinstance(result, ValidationError)
    assert result.kind is ValidationErrorKind.TOO_SHORT
    assert "4" in result.message


def test_validate_too_long():
    result = validate("25")
    assert isinstance(result, ValidationError)
    assert result.kind is ValidationErrorKind.TOO_LONG
    assert "20" in result.message


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_validate_missing(raw):
    result = validate(raw)
    assert isinstance(result, ValidationError)
    assert result.kind is ValidationErrorKind.MISSING
    assert result.message == "length is required"


@pytest.mark.parametrize("raw", ["abc", "8.5", "8.0", "1e3", "8 chars", "--8"])
def test_validate_rejects_non_integers(raw):
    result = validate(raw)
    assert isinstance(result, ValidationError)
    assert result.kind is ValidationErrorKind.MISSING


def test_validate_negative_is_too_short():
    result = validate("-3")
    assert result.kind is ValidationErrorKind.TOO_SHORT


def test_validate_custom_bounds():
    assert validate("30", min_length=10, max_length=40) == 30
    assert validate("5", min_length=10, max_length=40).kind is ValidationErrorKind.TOO_SHORT


def test_validate_inverted_bounds_is_a_programming_error():
    with pytest.raises(ValueError):
        validate("8", min_length=10, max_length=5)


# ---------- alphabet ----------

def test_character_class_tables():
    assert LOWER.characters == string.ascii_lowercase
    assert UPPER.characters == string.ascii_uppercase
    assert DIGITS.characters == "0123456789"
    assert SYMBOLS.characters == "!@#$%^&*()"
    assert CHARACTER_CLASSES == (LOWER, UPPER, DIGITS, SYMBOLS)


def test_alphabet_uses_fixed_order_regardless_of_input_order():
    assert build_alphabet([SYMBOLS, LOWER]) == build_alphabet({LOWER, SYMBOLS})
    assert build_alphabet([DIGITS, LOWER]) == string.ascii_lowercase + "0123456789"


def test_alphabet_is_empty_without_classes():
    assert build_alphabet([]) == ""


def test_alphabet_construction_is_repeatable():
    classes = {UPPER, DIGITS, SYMBOLS}
    assert build_alphabet(classes) == build_alphabet(classes)


# ---------- generate ----------

def test_generate_lower_and_digits():
    pwd = generate(8, {LOWER, DIGITS})
    assert isinstance(pwd, str)
    assert len(pwd) == 8
    assert set(pwd) <= set("abcdefghijklmnopqrstuvwxyz0123456789")


def test_generate_empty_alphabet():
    result = generate(5, set())
    assert isinstance(result, GenerationError)
    assert result.kind is GenerationErrorKind.EMPTY_ALPHABET


def test_generate_zero_length_returns_empty_string():
    assert generate(0, set()) == ""
    assert generate(0, {LOWER}) == ""


def test_generate_negative_length():
    result = generate(-1, {LOWER})
    assert isinstance(result, GenerationError)
    assert result.kind is GenerationErrorKind.INVALID_LENGTH


def test_generate_every_length_and_selection_stays_in_alphabet():
    rng = SeededRandomSource(1234)
    selections = [
        {LOWER},
        {UPPER, SYMBOLS},
        {DIGITS},
        set(CHARACTER_CLASSES),
    ]
    for classes in selections:
        alphabet = set(build_alphabet(classes))
        for length in range(4, 21):
            pwd = generate(length, classes, rng)
            assert len(pwd) == length
            assert set(pwd) <= alphabet


def test_generate_indexes_alphabet_with_injected_source(sequence_rng):
    rng = sequence_rng([0, 25, 26, 35])
    assert generate(4, [DIGITS, LOWER], rng) == "az09"
    assert rng.calls == [36, 36, 36, 36]


def test_seeded_sources_are_reproducible():
    first = generate(16, set(CHARACTER_CLASSES), SeededRandomSource(42))
    second = generate(16, set(CHARACTER_CLASSES), SeededRandomSource(42))
    assert first == second


def test_system_source_stays_in_range():
    rng = SystemRandomSource()
    assert all(0 <= rng.randbelow(10) < 10 for _ in range(200))


def test_generate_for_request_uses_flags():
    request = GenerationRequest(length=10, use_lower=False, use_upper=True, use_digits=False, use_symbols=True)
    assert request.enabled_classes() == (UPPER, SYMBOLS)
    pwd = generate_for_request(request, SeededRandomSource(7))
    assert len(pwd) == 10
    assert set(pwd) <= set(string.ascii_uppercase + "!@#$%^&*()")


def test_generate_for_request_with_nothing_enabled():
    request = GenerationRequest(length=6, use_lower=False)
    result = generate_for_request(request)
    assert result.kind is GenerationErrorKind.EMPTY_ALPHABET


# ---------- strength ----------

def test_entropy_bits():
    assert estimate_entropy_bits(8, 1) == 0.0
    assert estimate_entropy_bits(0, 26) == 0.0
    assert estimate_entropy_bits(10, 32) == pytest.approx(50.0)


@pytest.mark.parametrize(
    "bits,label",
    [(10, "Very weak"), (40, "Weak"), (60, "Reasonable"), (80, "Strong"), (100, "Very strong")],
)
def test_classify_strength(bits, label):
    assert classify_strength(bits) == label


def test_estimate_strength_for_all_classes():
    estimate = estimate_strength(16, set(CHARACTER_CLASSES))
    assert estimate.alphabet_size == 72
    assert estimate.label == "Strong"


def test_estimate_strength_without_classes():
    estimate = estimate_strength(8, [])
    assert estimate.alphabet_size == 0
    assert estimate.entropy_bits == 0.0


def test_validate_oversized_digit_strings_are_out_of_range():
    too_long = validate("9" * 5000)
    assert too_long.kind is ValidationErrorKind.TOO_LONG

    too_short = validate("-" + "9" * 5000)
    assert too_short.kind is ValidationErrorKind.TOO_SHORT


def test_validate_leading_zeros_do_not_count_as_digits():
    assert validate("0" * 5000 + "8") == 8
