"""Tests for title normalization."""

import pytest

from shelfctl.domain.normalize import normalize


class TestNormalize:
    def test_lowercases(self) -> None:
        assert normalize("Dom Casmurro") == "dom casmurro"

    @pytest.mark.parametrize("text", ["Sé", "Se", "SÉ", "se", "SE"])
    def test_diacritic_and_case_insensitive(self, text: str) -> None:
        assert normalize(text) == "se"

    def test_strips_many_marks(self) -> None:
        assert normalize("Memórias Póstumas de Brás Cubas") == "memorias postumas de bras cubas"
        assert normalize("Ação à Çedilha") == "acao a cedilha"

    def test_precomposed_and_decomposed_agree(self) -> None:
        assert normalize("\u00e9") == normalize("e\u0301") == "e"

    def test_keeps_punctuation_and_spacing(self) -> None:
        assert normalize("  Hello, World!  ") == "  hello, world!  "

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input(self, text: str | None) -> None:
        assert normalize(text) == ""
