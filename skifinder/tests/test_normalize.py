from __future__ import annotations

import pytest

from skifinder.catalog.normalize import normalize_records
from skifinder.recommendations.matcher import rank
from skifinder.recommendations.models import PreferenceSet

AIRTABLE_FIELDS = {
    "Artikelomschrijving": "Blizzard Rustler 9",
    "Fabrikant": "Blizzard",
    "Url image": "https://cdn.example.com/rustler9.jpg",
    "Url": "https://shop.example.com/rustler9",
    "Verkoopprijs": 649.95,
    "Gender": "Unisex",
    "Ability": ["Advanced", "Expert"],
    "Piste": "Off-piste",
    "Snelheid": "Fast",
    "Bochten": "Long",
}

BASEROW_ROW = {
    "id": 12,
    "order": "1.00000000000000000000",
    "Artikelomschrijving": "Atomic Cloud Q9",
    "Fabrikant": "Atomic",
    "Url image": None,
    "Url": "https://shop.example.com/cloud-q9",
    "Verkoopprijs": "499.00",
    "Gender": {"id": 3, "value": "Female", "color": "blue"},
    "Ability": [
        {"id": 7, "value": "Intermediate", "color": "green"},
        {"id": 8, "value": "Advanced", "color": "red"},
    ],
    "Piste": {"id": 9, "value": "On-piste", "color": "light-blue"},
    "Snelheid": None,
    "Bochten": [],
}


def test_airtable_fields_map_to_catalog_item():
    [item] = normalize_records([AIRTABLE_FIELDS])
    assert item.description == "Blizzard Rustler 9"
    assert item.manufacturer == "Blizzard"
    assert item.image_url == "https://cdn.example.com/rustler9.jpg"
    assert item.product_url == "https://shop.example.com/rustler9"
    assert item.sale_price == 649.95
    assert item.gender == "Unisex"
    assert item.ability == ["Advanced", "Expert"]
    assert item.speed == "Fast"
    assert item.turns == "Long"


def test_baserow_select_options_are_flattened():
    [item] = normalize_records([BASEROW_ROW])
    assert item.gender == "Female"
    assert item.ability == ["Intermediate", "Advanced"]
    assert item.piste == "On-piste"
    assert item.speed is None
    assert item.turns == []
    assert item.sale_price == 499.0


def test_missing_display_fields_get_placeholders():
    [item] = normalize_records([{"Gender": "Male"}])
    assert item.description == "N/A"
    assert item.manufacturer == "N/A"
    assert item.product_url == "#"
    assert item.image_url is None
    assert item.sale_price is None


def test_non_numeric_price_becomes_none():
    [item] = normalize_records([{"Verkoopprijs": "on request"}])
    assert item.sale_price is None


def test_comma_decimal_price():
    [item] = normalize_records([{"Verkoopprijs": "€ 649,00"}])
    assert item.sale_price == 649.0


def test_mixed_records_keep_order_and_skip_garbage():
    items = normalize_records([AIRTABLE_FIELDS, "not a record", {"Artikelomschrijving": "Second"}])
    assert [i.description for i in items] == ["Blizzard Rustler 9", "Second"]


def test_empty_input():
    assert normalize_records([]) == []


@pytest.mark.parametrize("raw, expected", [
    ("1.299,00", 1299.0),
    ("€ 1.299,00", 1299.0),
    ("1,299.00", 1299.0),
    ("12.499,95", 12499.95),
    ("899", 899.0),
])
def test_prices_with_thousands_separators(raw, expected):
    [item] = normalize_records([{"Verkoopprijs": raw}])
    assert item.sale_price == pytest.approx(expected)


def test_european_formatted_price_stays_eligible_for_price_range():
    items = normalize_records([{"Artikelomschrijving": "Stöckli Stormrider", "Verkoopprijs": "1.299,00"}])
    results = rank(items, PreferenceSet(height=180, price="800-1500"))
    assert [r.description for r in results] == ["Stöckli Stormrider"]
    assert results[0].relevance_score == 1
