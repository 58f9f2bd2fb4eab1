import pytest

from places.attributes import (
    ATTRIBUTE_KEYS,
    ATTRIBUTES,
    BOOL,
    CHOICE,
    applicable_keys,
    category_schema,
    sanitize,
    validate,
)
from places.exceptions import ValidationError
from places.models import Place

CATEGORIES = Place.Category.values


def _everything_set():
    values = {}
    for key, attr in ATTRIBUTES.items():
        if attr.kind == BOOL:
            values[key] = True
        elif attr.kind == CHOICE:
            values[key] = attr.choices[0]
        else:
            values[key] = "some text"
    return values


def _valid_draft(category, **attrs):
    draft = {"title": "Moda Sahili", "category": category, "city": "İstanbul", "district": "Kadıköy"}
    draft.update(attrs)
    return draft


# ── applicability ────────────────────────────────────────────────────────


def test_food_attributes_only_for_restaurant_and_cafe():
    for category in CATEGORIES:
        has_food = "breakfast" in applicable_keys(category)
        assert has_food == (category in ("RESTAURANT", "CAFE"))


def test_alcohol_excludes_mall_but_family_flags_include_it():
    assert "is_family_friendly" in applicable_keys("MALL")
    assert "has_smoking_area" in applicable_keys("MALL")
    assert "alcohol_status" not in applicable_keys("MALL")
    assert "alcohol_status" in applicable_keys("BEACH")


def test_paid_entry_categories():
    paid = {c for c in CATEGORIES if "is_paid" in applicable_keys(c)}
    assert paid == {"BEACH", "MUSEUM", "OTHER", "BAR", "CLUB"}
    assert {c for c in CATEGORIES if "entrance_fee" in applicable_keys(c)} == paid


def test_shared_parking_and_wifi():
    assert {c for c in CATEGORIES if "parking" in applicable_keys(c)} == {"HOTEL", "MALL"}
    assert {c for c in CATEGORIES if "wifi" in applicable_keys(c)} == {"HOTEL", "MALL"}


def test_single_category_groups():
    assert {"blue_flag", "sunbed", "shower"} <= applicable_keys("BEACH")
    assert {"tent_rental", "electricity", "fire_allowed", "caravan_access"} <= applicable_keys("CAMPING")
    assert {"pet_friendly", "playground", "large_area", "free_entry"} <= applicable_keys("PARK")
    assert {"pool", "gym", "noise_level"} <= applicable_keys("HOTEL")
    assert {"food_court", "baby_care"} <= applicable_keys("MALL")
    assert applicable_keys("ACTIVITY") == {"duration", "reservation_required", "best_time"}
    assert applicable_keys("BAR") == applicable_keys("CLUB")
    assert {"music_type", "dam_allowed"} <= applicable_keys("BAR")


def test_unknown_category_has_no_attributes():
    assert applicable_keys("SPA") == frozenset()
    assert applicable_keys(None) == frozenset()


def test_category_schema_matches_applicable_keys():
    schema = category_schema()
    assert set(schema) == set(CATEGORIES)
    for category, keys in schema.items():
        assert set(keys) == applicable_keys(category)


# ── sanitize ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize("category", CATEGORIES)
def test_sanitize_resets_everything_outside_category(category):
    cleaned = sanitize(category, _everything_set())
    allowed = applicable_keys(category)
    for key in ATTRIBUTE_KEYS:
        if key not in allowed:
            assert cleaned[key] == ATTRIBUTES[key].default, key
        else:
            assert cleaned[key] == _everything_set()[key], key


@pytest.mark.parametrize("category", CATEGORIES + ["SPA", None])
def test_sanitize_is_idempotent(category):
    once = sanitize(category, _everything_set())
    assert sanitize(category, once) == once


def test_sanitize_fills_missing_keys_and_keeps_other_fields():
    cleaned = sanitize("PARK", {"title": "Yıldız Parkı", "pet_friendly": True})
    assert cleaned["title"] == "Yıldız Parkı"
    assert cleaned["pet_friendly"] is True
    assert cleaned["playground"] is False
    assert cleaned["price_range"] is None
    assert cleaned["entrance_fee"] == ""
    assert set(ATTRIBUTE_KEYS) <= set(cleaned)


def test_sanitize_coerces_blank_choice_and_none_text():
    cleaned = sanitize("RESTAURANT", {"price_range": "", "alcohol_status": None, "breakfast": None})
    assert cleaned["price_range"] is None
    assert cleaned["alcohol_status"] is None
    assert cleaned["breakfast"] is False

    cleaned = sanitize("ACTIVITY", {"duration": None, "best_time": "  gün batımı "})
    assert cleaned["duration"] == ""
    assert cleaned["best_time"] == "gün batımı"


@pytest.mark.parametrize("raw,expected", [("false", False), ("0", False), ("", False), ("true", True), (" True ", True), ("1", True)])
def test_sanitize_parses_boolean_strings(raw, expected):
    assert sanitize("PARK", {"pet_friendly": raw})["pet_friendly"] is expected


def test_sanitize_does_not_mutate_input():
    attrs = {"breakfast": True}
    sanitize("HOTEL", attrs)
    assert attrs == {"breakfast": True}


# ── validate ─────────────────────────────────────────────────────────────


def test_validate_accepts_valid_draft():
    draft = sanitize("RESTAURANT", _valid_draft("RESTAURANT", price_range="CHEAP", alcohol_status="BOTH"))
    assert validate("RESTAURANT", draft) is draft


@pytest.mark.parametrize("field", ["title", "category", "city", "district"])
def test_validate_requires_base_fields(field):
    draft = _valid_draft("PARK")
    draft[field] = "   "
    with pytest.raises(ValidationError) as exc:
        validate(draft["category"], draft)
    assert exc.value.field == field


def test_validate_reports_first_violation():
    draft = _valid_draft("CAFE", title="", city="", price_range="FREE")
    with pytest.raises(ValidationError) as exc:
        validate("CAFE", draft)
    assert exc.value.field == "title"


def test_validate_rejects_unknown_category():
    with pytest.raises(ValidationError) as exc:
        validate("SPA", _valid_draft("SPA"))
    assert exc.value.field == "category"


@pytest.mark.parametrize(
    "key,value",
    [("price_range", "FREE"), ("alcohol_status", "SOMETIMES"), ("noise_level", "DEAFENING")],
)
def test_validate_rejects_bad_enum_values(key, value):
    with pytest.raises(ValidationError) as exc:
        validate("HOTEL", _valid_draft("HOTEL", **{key: value}))
    assert exc.value.field == key
    assert exc.value.status_code == 400


def test_validate_allows_null_enums():
    draft = _valid_draft("HOTEL", price_range=None, alcohol_status=None, noise_level=None)
    assert validate("HOTEL", draft) == draft
