"""Tests for identifier validation and generation."""

import random

import pytest

from shelfctl.domain.ids import (
    IDENTIFIER_LENGTH,
    generate_identifier,
    random_identifier,
    validate_identifier,
)


class TestValidateIdentifier:
    @pytest.mark.parametrize("identifier", ["0000000000000", "9788535910663"])
    def test_valid(self, identifier: str) -> None:
        assert validate_identifier(identifier)

    @pytest.mark.parametrize(
        "identifier",
        [
            "978853591066",  # 12 digits
            "97885359106630",  # 14 digits
            "978-853591066",  # hyphen
            "97885359106a3",  # letter
            "",
        ],
    )
    def test_invalid(self, identifier: str) -> None:
        assert not validate_identifier(identifier)


class TestRandomIdentifier:
    def test_shape(self) -> None:
        for _ in range(200):
            candidate = random_identifier()
            assert len(candidate) == IDENTIFIER_LENGTH
            assert validate_identifier(candidate)

    def test_pads_when_uuid_has_few_digits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class _FewDigits:
            hex = "abc1def2abcdefabcdefabcdefabcdef"

        monkeypatch.setattr("shelfctl.domain.ids.uuid.uuid4", lambda: _FewDigits())
        candidate = random_identifier(random.Random(7))
        assert candidate.startswith("12")
        assert validate_identifier(candidate)

    def test_keeps_first_thirteen_digits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class _ManyDigits:
            hex = "1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d"

        monkeypatch.setattr("shelfctl.domain.ids.uuid.uuid4", lambda: _ManyDigits())
        assert random_identifier() == "1234567890123"


class TestGenerateIdentifier:
    def test_retries_until_unused(self) -> None:
        draws = iter(["1111111111111", "2222222222222", "3333333333333"])
        taken = {"1111111111111", "2222222222222"}
        result = generate_identifier(taken.__contains__, draw=lambda: next(draws))
        assert result == "3333333333333"

    def test_first_draw_used_when_free(self) -> None:
        result = generate_identifier(lambda _: False, draw=lambda: "4444444444444")
        assert result == "4444444444444"

    def test_many_unique(self) -> None:
        seen: set[str] = set()
        for _ in range(10_000):
            seen.add(generate_identifier(seen.__contains__))
        assert len(seen) == 10_000
