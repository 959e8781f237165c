from __future__ import annotations

import pytest
from pydantic import ValidationError

from icons.schemas import Icon, display_name, slugify


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("My Icon!", "my-icon"),
        ("Coffee Cup", "coffee-cup"),
        ("  padded   name ", "-padded-name-"),
        ("Rocket_Ship 2", "rocketship-2"),
        ("ÄÖÜ star", "-star"),
        ("already-a-slug", "already-a-slug"),
        ("", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


@pytest.mark.parametrize("name", ["My Icon!", "Tab\tand\nnewline", "x  y", "Émoji 🚀 rocket"])
def test_slugify_is_idempotent(name):
    once = slugify(name)
    assert slugify(once) == once


def test_display_name_capitalizes_first_letter_only():
    assert display_name("coffee cup") == "Coffee cup"
    assert display_name("iPhone") == "IPhone"
    assert display_name("") == ""


def test_icon_serializes_generated_at_camel_case():
    icon = Icon(id="cup", name="Cup", path="M2 2 L4 4", generated=True, generated_at=123)

    data = icon.to_json()

    assert data["generatedAt"] == 123
    assert "generated_at" not in data


def test_icon_defaults():
    icon = Icon.model_validate({"id": "cup", "path": "M2 2", "category": None, "tags": None})

    assert icon.category == "objects"
    assert icon.tags == []
    assert icon.generated is False
    assert icon.generated_at is None


@pytest.mark.parametrize("data", [{"id": "", "path": "M2 2"}, {"id": "cup", "path": ""}, {"id": "cup"}])
def test_icon_requires_id_and_path(data):
    with pytest.raises(ValidationError):
        Icon.model_validate(data)


def test_as_generated_returns_stamped_copy():
    icon = Icon(id="cup", path="M2 2")

    stamped = icon.as_generated(at=42)

    assert stamped.generated is True
    assert stamped.generated_at == 42
    assert icon.generated is False


def test_as_generated_keeps_timestamp_of_generated_record():
    icon = Icon(id="cup", path="M2 2", generated=True, generated_at=123)

    assert icon.as_generated().generated_at == 123
    assert icon.as_generated(at=9).generated_at == 9


def test_as_generated_stamps_curated_record_with_fresh_time():
    icon = Icon(id="cup", path="M2 2", generated=False, generated_at=5)

    assert icon.as_generated().generated_at > 5
