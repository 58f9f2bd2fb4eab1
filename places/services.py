import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg, Count, FloatField, Prefetch, Q, Value
from django.db.models.functions import Coalesce

from . import attributes
from .exceptions import AuthorizationError, NotFoundError, PersistenceError
from .images import check_image_count, reconcile_images
from .models import Favorite, Place, PlaceImage

logger = logging.getLogger(__name__)

BASE_FIELDS = (
    "title", "description", "category", "city", "district",
    "address", "latitude", "longitude", "editor_note",
)
EDITABLE_FIELDS = BASE_FIELDS + attributes.ATTRIBUTE_KEYS


def is_admin(actor):
    return bool(actor and getattr(actor, "is_staff", False))


def ensure_owner_or_admin(owner_id, actor):
    if is_admin(actor):
        return
    if actor is None or owner_id != actor.pk:
        raise AuthorizationError()


def get_place(place_id):
    try:
        return Place.objects.get(pk=place_id)
    except (Place.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("장소를 찾을 수 없습니다.")


def _clean(draft):
    category = draft.get("category")
    cleaned = attributes.sanitize(category, draft)
    return attributes.validate(category, cleaned)


def _model_values(cleaned):
    values = {key: cleaned[key] for key in EDITABLE_FIELDS if key in cleaned}
    for key in ("description", "address", "editor_note"):
        if key in values and values[key] is None:
            values[key] = ""
    return values


def create_place(owner, draft):
    cleaned = _clean(draft)
    images = check_image_count(draft.get("images"), settings.PLACE_IMAGE_LIMIT)

    try:
        with transaction.atomic():
            place = Place.objects.create(owner=owner, is_approved=False, **_model_values(cleaned))
            PlaceImage.objects.bulk_create([PlaceImage(place=place, url=url) for url in images])
    except DatabaseError:
        logger.exception("장소 생성 실패 (owner=%s)", owner.pk)
        raise PersistenceError()

    logger.info("장소 생성: id=%s owner=%s category=%s", place.pk, owner.pk, place.category)
    return place


def update_place(place_id, actor, patch):
    place = get_place(place_id)
    ensure_owner_or_admin(place.owner_id, actor)

    merged = {key: getattr(place, key) for key in EDITABLE_FIELDS}
    merged.update({key: value for key, value in patch.items() if key in EDITABLE_FIELDS})
    cleaned = _clean(merged)

    images = patch.get("images")
    if images is not None:
        images = check_image_count(images, settings.PLACE_IMAGE_LIMIT)

    try:
        with transaction.atomic():
            for key, value in _model_values(cleaned).items():
                setattr(place, key, value)
            place.save()
            if images is not None:
                reconcile_images(place.images, images, settings.PLACE_IMAGE_LIMIT)
    except DatabaseError:
        logger.exception("장소 수정 실패 (id=%s)", place_id)
        raise PersistenceError()

    logger.info("장소 수정: id=%s actor=%s", place.pk, actor.pk)
    return place


def delete_place(place_id, actor):
    place = get_place(place_id)
    ensure_owner_or_admin(place.owner_id, actor)

    try:
        with transaction.atomic():
            # 이미지/리뷰/즐겨찾기는 FK cascade 로 함께 삭제
            place.delete()
    except DatabaseError:
        logger.exception("장소 삭제 실패 (id=%s)", place_id)
        raise PersistenceError()

    logger.info("장소 삭제: id=%s actor=%s", place_id, actor.pk)


def set_approval(place_id, actor, is_approved):
    if not is_admin(actor):
        raise AuthorizationError("관리자만 승인할 수 있습니다.")

    place = get_place(place_id)
    place.is_approved = bool(is_approved)
    place.save(update_fields=["is_approved"])

    logger.info("장소 승인 변경: id=%s approved=%s", place.pk, place.is_approved)
    return place


@dataclass
class PlaceFilter:
    city: str = ""
    category: str = ""
    q: str = ""
    price: str = ""
    meals: list = field(default_factory=list)

    @classmethod
    def from_query_params(cls, params):
        meals = params.get("meals") or ""
        return cls(
            city=(params.get("city") or "").strip(),
            category=(params.get("category") or "").strip(),
            q=(params.get("q") or "").strip(),
            price=(params.get("price") or "").strip(),
            meals=[m.strip() for m in meals.split(",") if m.strip()],
        )

    def apply(self, qs):
        if self.city:
            qs = qs.filter(city__icontains=self.city)

        # 알 수 없는 카테고리는 무시
        if self.category in Place.Category.values:
            qs = qs.filter(category=self.category)

        if self.price:
            qs = qs.filter(price_range=self.price)

        # 선택한 식사 옵션은 모두 만족해야 함 (AND)
        for meal in self.meals:
            if meal in attributes.MEAL_KEYS:
                qs = qs.filter(**{meal: True})

        if self.q:
            qs = qs.filter(
                Q(title__icontains=self.q)
                | Q(description__icontains=self.q)
                | Q(city__icontains=self.q)
            )
        return qs


def with_rating_summary(qs):
    return qs.annotate(
        rating_average=Coalesce(Avg("reviews__rating"), Value(0.0), output_field=FloatField()),
        review_count=Count("reviews", distinct=True),
    )


def list_places(filters=None, include_unapproved=False, limit=None):
    qs = Place.objects.all()
    if not include_unapproved:
        qs = qs.filter(is_approved=True)
    if filters is not None:
        qs = filters.apply(qs)

    qs = with_rating_summary(qs)
    qs = qs.select_related("owner").prefetch_related(
        Prefetch("images", queryset=PlaceImage.objects.order_by("id"))
    ).order_by("-created_at", "-id")

    if limit:
        qs = qs[:limit]
    return qs


def rating_summary(place):
    agg = place.reviews.aggregate(average=Avg("rating"), count=Count("id"))
    average = float(agg["average"]) if agg["average"] is not None else 0.0
    return average, agg["count"]


def category_counts():
    rows = (
        Place.objects.filter(is_approved=True)
        .values("category")
        .annotate(count=Count("id"))
        .order_by("category")
    )
    return {row["category"]: row["count"] for row in rows}


def find_existing_place(title, city):
    if not title or not city:
        return None
    return Place.objects.filter(title__iexact=title.strip(), city__iexact=city.strip()).only("id", "title").first()


def catalog_stats():
    return {
        "total_places": Place.objects.count(),
        "pending_places": Place.objects.filter(is_approved=False).count(),
        "total_users": get_user_model().objects.count(),
    }


def _remove_favorite(user, place):
    deleted, _ = Favorite.objects.filter(user=user, place=place).delete()
    return deleted > 0


def toggle_favorite(user, place_id):
    """
    즐겨찾기 토글. 추가되면 True, 해제되면 False.

    동시에 같은 토글이 들어오면 (user, place) 유니크 제약이 중복 생성을 막는다.
    IntegrityError 는 이미 즐겨찾기된 상태로 보고 True 를 반환한다.
    """
    place = get_place(place_id)

    if _remove_favorite(user, place):
        return False

    try:
        with transaction.atomic():
            Favorite.objects.create(user=user, place=place)
    except IntegrityError:
        logger.info("즐겨찾기 중복 생성 무시: user=%s place=%s", user.pk, place.pk)
    return True


def favorite_place_ids(user, place_ids):
    if user is None or not user.is_authenticated:
        return set()
    return set(
        Favorite.objects.filter(user=user, place_id__in=list(place_ids)).values_list("place_id", flat=True)
    )


def places_for_user(user):
    return with_rating_summary(Place.objects.filter(owner=user)).prefetch_related("images").order_by("-created_at", "-id")


def favorites_for_user(user):
    return Favorite.objects.filter(user=user).select_related("place").order_by("-created_at", "-id")


def users_with_counts():
    return (
        get_user_model().objects
        .annotate(place_count=Count("places", distinct=True), review_count=Count("reviews", distinct=True))
        .order_by("-date_joined", "-id")
    )
