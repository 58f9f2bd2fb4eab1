import logging

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Q

from places.exceptions import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from places.images import check_image_count, reconcile_images
from places.services import ensure_owner_or_admin, get_place

from .models import Review, ReviewImage

logger = logging.getLogger(__name__)


def parse_rating(value):
    message = "별점은 1~5 사이의 정수여야 합니다."
    # True/4.7 같은 값이 1/4 로 잘려 저장되지 않도록
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(message, field="rating")
    try:
        rating = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message, field="rating")
    if rating < 1 or rating > 5:
        raise ValidationError(message, field="rating")
    return rating


def get_review(review_id):
    try:
        return Review.objects.get(pk=review_id)
    except (Review.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("리뷰를 찾을 수 없습니다.")


def create_review(place_id, author, rating, comment_text="", images=None):
    place = get_place(place_id)
    rating = parse_rating(rating)
    images = check_image_count(images, settings.REVIEW_IMAGE_LIMIT)

    try:
        with transaction.atomic():
            review = Review.objects.create(
                place=place,
                author=author,
                rating=rating,
                comment_text=comment_text or "",
            )
            ReviewImage.objects.bulk_create([ReviewImage(review=review, url=url) for url in images])
    except DatabaseError:
        logger.exception("리뷰 생성 실패 (place=%s author=%s)", place.pk, author.pk)
        raise PersistenceError()

    logger.info("리뷰 생성: id=%s place=%s rating=%s", review.pk, place.pk, rating)
    return review


def update_review(review_id, actor, rating, comment_text, images=None):
    review = get_review(review_id)
    # 수정은 작성자 본인만
    if actor is None or review.author_id != actor.pk:
        raise AuthorizationError()

    if rating in (None, "") or not (comment_text or "").strip():
        raise ValidationError("별점과 내용을 모두 입력해 주세요.")
    rating = parse_rating(rating)
    if images is not None:
        images = check_image_count(images, settings.REVIEW_IMAGE_LIMIT)

    try:
        with transaction.atomic():
            review.rating = rating
            review.comment_text = comment_text
            review.save(update_fields=["rating", "comment_text", "updated_at"])
            if images is not None:
                reconcile_images(review.images, images, settings.REVIEW_IMAGE_LIMIT)
    except DatabaseError:
        logger.exception("리뷰 수정 실패 (id=%s)", review_id)
        raise PersistenceError()

    logger.info("리뷰 수정: id=%s actor=%s", review.pk, actor.pk)
    return review


def delete_review(review_id, actor):
    review = get_review(review_id)
    ensure_owner_or_admin(review.author_id, actor)

    try:
        with transaction.atomic():
            review.delete()
    except DatabaseError:
        logger.exception("리뷰 삭제 실패 (id=%s)", review_id)
        raise PersistenceError()

    logger.info("리뷰 삭제: id=%s actor=%s", review_id, actor.pk)


def reviews_for_place(place_id):
    place = get_place(place_id)
    return place.reviews.select_related("author").prefetch_related("images").order_by("-created_at", "-id")


def reviews_by_author(user):
    return Review.objects.filter(author=user).select_related("place").prefetch_related("images").order_by("-created_at", "-id")


def search_reviews(search=""):
    qs = Review.objects.select_related("author", "place").prefetch_related("images")
    search = (search or "").strip()
    if search:
        qs = qs.filter(
            Q(comment_text__icontains=search)
            | Q(author__username__icontains=search)
            | Q(place__title__icontains=search)
        )
    return qs.order_by("-created_at", "-id")
