"""
카테고리별 속성 스키마.

장소 속성이 어떤 카테고리에 해당하는지는 이 모듈의 ATTRIBUTE_GROUPS 한 곳에서만
정의한다. 생성/수정/관리자 수정 경로와 화면용 스키마 API 모두 여기를 참조한다.
카테고리에 해당하지 않는 속성은 항상 기본값(False / None / "")으로 저장된다.
"""
from dataclasses import dataclass

from rest_framework.serializers import BooleanField

from .exceptions import ValidationError
from .models import Place

BOOL = "bool"
CHOICE = "choice"
TEXT = "text"

_DEFAULTS = {BOOL: False, CHOICE: None, TEXT: ""}

REQUIRED_FIELDS = ("title", "category", "city", "district")

C = Place.Category


@dataclass(frozen=True)
class Attribute:
    key: str
    kind: str
    choices: tuple = ()

    @property
    def default(self):
        return _DEFAULTS[self.kind]

    def coerce(self, value):
        if self.kind == BOOL:
            # "false" 같은 문자열은 DRF 와 같은 규칙으로 해석
            if isinstance(value, str):
                return value.strip() in BooleanField.TRUE_VALUES
            return bool(value)
        if self.kind == TEXT:
            return "" if value is None else str(value).strip()
        # 빈 문자열은 선택 안 함으로 취급
        if value is None or value == "":
            return None
        return value


def _bools(*keys):
    return tuple(Attribute(k, BOOL) for k in keys)


def _choice(key, choices_cls):
    return Attribute(key, CHOICE, tuple(choices_cls.values))


# (속성들, 해당 카테고리들)
ATTRIBUTE_GROUPS = (
    (
        (_choice("price_range", Place.PriceRange),)
        + _bools("breakfast", "lunch", "dinner", "dessert", "snack", "vegan_option", "outdoor_seating"),
        {C.RESTAURANT, C.CAFE},
    ),
    (_bools("is_family_friendly", "has_smoking_area"), {C.RESTAURANT, C.CAFE, C.MALL, C.BEACH}),
    ((_choice("alcohol_status", Place.AlcoholStatus),), {C.RESTAURANT, C.CAFE, C.BEACH}),
    (_bools("blue_flag", "sunbed", "shower"), {C.BEACH}),
    (
        _bools("is_paid") + (Attribute("entrance_fee", TEXT),),
        {C.BEACH, C.MUSEUM, C.OTHER, C.BAR, C.CLUB},
    ),
    (_bools("tent_rental", "electricity", "fire_allowed", "caravan_access"), {C.CAMPING}),
    (_bools("museum_card_accepted", "photography"), {C.MUSEUM, C.OTHER}),
    (_bools("pet_friendly", "playground", "large_area", "free_entry"), {C.PARK}),
    (_bools("pool", "gym") + (_choice("noise_level", Place.NoiseLevel),), {C.HOTEL}),
    (_bools("parking", "wifi"), {C.HOTEL, C.MALL}),
    (_bools("food_court", "baby_care"), {C.MALL}),
    (
        (Attribute("duration", TEXT),) + _bools("reservation_required") + (Attribute("best_time", TEXT),),
        {C.ACTIVITY},
    ),
    ((Attribute("music_type", TEXT),) + _bools("dam_allowed"), {C.BAR, C.CLUB}),
)

ATTRIBUTES = {attr.key: attr for attrs, _ in ATTRIBUTE_GROUPS for attr in attrs}
ATTRIBUTE_KEYS = tuple(ATTRIBUTES)

MEAL_KEYS = ("breakfast", "lunch", "dinner", "dessert", "snack")


def _build_applicability():
    table = {category: set() for category in C.values}
    for attrs, categories in ATTRIBUTE_GROUPS:
        for category in categories:
            table[category.value].update(attr.key for attr in attrs)
    return {category: frozenset(keys) for category, keys in table.items()}


_APPLICABLE = _build_applicability()


def applicable_keys(category):
    return _APPLICABLE.get(category, frozenset())


def sanitize(category, attrs):
    """해당 카테고리에 없는 속성은 기본값으로 되돌린 사본을 반환한다. 실패하지 않는다."""
    allowed = applicable_keys(category)
    cleaned = dict(attrs)
    for key, attr in ATTRIBUTES.items():
        if key in allowed:
            cleaned[key] = attr.coerce(attrs.get(key, attr.default))
        else:
            cleaned[key] = attr.default
    return cleaned


def validate(category, attrs):
    """첫 번째로 어긋난 조건에서 ValidationError 를 던진다."""
    for field in REQUIRED_FIELDS:
        value = attrs.get(field)
        if value is None or not str(value).strip():
            raise ValidationError("필수 항목이 비어 있습니다 (이름, 카테고리, 도시, 구)", field=field)

    if category not in C.values:
        raise ValidationError(f"알 수 없는 카테고리: {category}", field="category")

    for key, attr in ATTRIBUTES.items():
        if attr.kind != CHOICE:
            continue
        value = attrs.get(key)
        if value is not None and value not in attr.choices:
            raise ValidationError(f"{key} 값이 올바르지 않습니다: {value}", field=key)

    return attrs


def category_schema():
    """화면에서 카테고리별로 보여줄 속성 목록."""
    return {
        category: [key for key in ATTRIBUTE_KEYS if key in applicable_keys(category)]
        for category in C.values
    }
