"""Tests for summary message catalogs."""

from __future__ import annotations

import pytest

from filtex.expression.locales import CATALOGS, message, resolve_locale


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("en_US", "en"),
        ("de-AT", "de"),
        ("FR", "fr"),
        (" es ", "es"),
        ("xx", "en"),
        ("", "en"),
        (None, "en"),
    ],
)
def test_resolve_locale(tag: str | None, expected: str) -> None:
    assert resolve_locale(tag) == expected


def test_message_formats_template() -> None:
    assert message("en", "is", values="5") == "is 5"
    assert message("de", "is", values="5") == "ist 5"


def test_message_falls_back_to_english_key() -> None:
    """A key missing from a catalog uses the English template."""
    assert "field" not in CATALOGS["fr"]
    assert message("fr", "field", field="Prix", summary="est 5") == "Prix est 5"


def test_field_placement_follows_locale() -> None:
    """German puts the field label after the summary."""
    assert message("en", "field", field="Price", summary="is 5") == "Price is 5"
    assert message("de", "field", field="Preis", summary="ist 5") == "ist 5 (Preis)"


def test_catalog_keys_are_known() -> None:
    """Every translated key exists in the English catalog."""
    english = set(CATALOGS["en"])
    for catalog in CATALOGS.values():
        assert set(catalog) <= english
