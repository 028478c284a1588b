from __future__ import annotations

import pytest

from tangofinder.domain.normalization import normalize, same_name


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("José García", "jose garcia"),
        ("  DI SARLI ", "di sarli"),
        ("D'Arienzo", "darienzo"),
        ("Carlos   Di\tSarli", "carlos di sarli"),
        ("Ñoño-Pérez", "nono-perez"),
        ("Orquesta Típica Victor!", "orquesta tipica victor"),
        ("", ""),
        ("'", ""),
    ],
)
def test_normalize_examples(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["José García", " ' Juan", "Maria (Mar) ", "  D'  Arienzo  ", "Ana – Martínez"],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)

    assert normalize(once) == once
    assert once == once.strip()


def test_same_name_ignores_accents_case_and_punctuation() -> None:
    assert same_name("JOSÉ GARCÍA", "jose garcia")
    assert same_name("Di Sarli", "DI SARLI ")
    assert not same_name("Juan", "Juana")
