"""
자동완성 검색.

터키어 등 현지 문자를 기본 라틴 문자로 접어서 영문 키보드로 입력한 검색어도
매칭되도록 한다. 승인된 장소 전체를 매 요청마다 메모리에서 스캔한다.
"""

MIN_QUERY_LENGTH = 2
MAX_CITIES = 3
MAX_CATEGORIES = 3
MAX_PLACES = 5

# lower() 전에 접어야 "İ".lower() 가 결합 문자로 바뀌는 것을 피할 수 있다
_FOLD_TABLE = str.maketrans({
    "İ": "i",
    "I": "i",
    "ı": "i",
    "Ğ": "g",
    "ğ": "g",
    "Ü": "u",
    "ü": "u",
    "Ş": "s",
    "ş": "s",
    "Ö": "o",
    "ö": "o",
    "Ç": "c",
    "ç": "c",
})


def normalize(text):
    if not text:
        return ""
    return str(text).translate(_FOLD_TABLE).lower()


def _field(entry, name):
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def empty_suggestions():
    return {"cities": [], "categories": [], "places": []}


def suggest(query, entries, max_cities=MAX_CITIES, max_categories=MAX_CATEGORIES, max_places=MAX_PLACES):
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return empty_suggestions()

    needle = normalize(query)
    cities, categories, places = [], [], []

    for entry in entries:
        city = _field(entry, "city") or ""
        category = _field(entry, "category") or ""
        title = _field(entry, "title") or ""

        if needle in normalize(city) and city not in cities and len(cities) < max_cities:
            cities.append(city)

        if needle in normalize(category) and category not in categories and len(categories) < max_categories:
            categories.append(category)

        # 같은 이름이라도 도시가 다르면 별개의 제안이라 중복 제거하지 않음
        if needle in normalize(title) and len(places) < max_places:
            places.append({
                "id": _field(entry, "id"),
                "title": title,
                "city": city,
                "category": category,
            })

    return {"cities": cities, "categories": categories, "places": places}
