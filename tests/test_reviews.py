from unittest.mock import patch

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from places.exceptions import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from reviews import services
from reviews.admin import ReviewImageInline
from reviews.models import Review, ReviewImage

pytestmark = pytest.mark.django_db


# ── create ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize("value,expected", [(1, 1), (5, 5), ("4", 4)])
def test_parse_rating_accepts_one_to_five(value, expected):
    assert services.parse_rating(value) == expected


@pytest.mark.parametrize("value", [0, 6, -1, "abc", None, "", 4.7, "4.7", True, False])
def test_parse_rating_rejects_non_integers_and_out_of_range(value):
    with pytest.raises(ValidationError) as exc:
        services.parse_rating(value)
    assert exc.value.field == "rating"


def test_create_review_with_images(make_place, stranger):
    place = make_place()

    review = services.create_review(place.pk, stranger, "5", "Manzara harika", ["https://img/a.jpg", "https://img/b.jpg"])

    assert review.rating == 5
    assert review.author == stranger
    assert list(review.images.values_list("url", flat=True)) == ["https://img/a.jpg", "https://img/b.jpg"]


def test_create_review_rejects_bad_rating(make_place, stranger):
    place = make_place()
    with pytest.raises(ValidationError):
        services.create_review(place.pk, stranger, 6, "çok iyi")
    assert Review.objects.count() == 0


def test_create_review_rejects_too_many_images(make_place, stranger):
    place = make_place()
    with pytest.raises(ValidationError) as exc:
        services.create_review(place.pk, stranger, 4, "güzel", [f"u{i}" for i in range(5)])
    assert exc.value.field == "images"
    assert Review.objects.count() == 0


def test_create_review_rejects_single_string_for_images(make_place, stranger):
    place = make_place()
    with pytest.raises(ValidationError) as exc:
        services.create_review(place.pk, stranger, 5, "ok", "ab")
    assert exc.value.field == "images"
    assert ReviewImage.objects.count() == 0


def test_review_admin_inline_respects_image_limit(settings):
    assert ReviewImageInline.max_num == settings.REVIEW_IMAGE_LIMIT == 4


def test_create_review_unknown_place(stranger):
    with pytest.raises(NotFoundError):
        services.create_review(4242, stranger, 3, "yok")


def test_rating_check_constraint_in_database(make_place, stranger):
    place = make_place()
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Review.objects.create(place=place, author=stranger, rating=6)


# ── update ───────────────────────────────────────────────────────────────


def test_update_review_by_author(make_place, stranger):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder", ["a", "b"])

    services.update_review(review.pk, stranger, 4, "aslında iyi", ["b", "c"])

    review.refresh_from_db()
    assert review.rating == 4
    assert review.comment_text == "aslında iyi"
    assert set(review.images.values_list("url", flat=True)) == {"b", "c"}


def test_update_review_without_images_keeps_them(make_place, stranger):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder", ["a"])

    services.update_review(review.pk, stranger, 3, "fena değil")

    assert list(review.images.values_list("url", flat=True)) == ["a"]


@pytest.mark.parametrize("user_fixture", ["owner", "staff"])
def test_update_review_only_by_author(make_place, stranger, request, user_fixture):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder")
    other = request.getfixturevalue(user_fixture)

    with pytest.raises(AuthorizationError):
        services.update_review(review.pk, other, 5, "değiştirildi")

    review.refresh_from_db()
    assert review.rating == 2


@pytest.mark.parametrize("rating,comment", [(None, "yorum"), (4, ""), (4, "   "), ("", "yorum")])
def test_update_review_requires_rating_and_comment(make_place, stranger, rating, comment):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder")
    with pytest.raises(ValidationError):
        services.update_review(review.pk, stranger, rating, comment)


def test_update_review_rejects_too_many_images(make_place, stranger):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder", ["a"])
    with pytest.raises(ValidationError):
        services.update_review(review.pk, stranger, 3, "yorum", list("bcdef"))
    review.refresh_from_db()
    assert review.rating == 2
    assert list(review.images.values_list("url", flat=True)) == ["a"]


# ── delete ───────────────────────────────────────────────────────────────


def test_delete_review_by_admin(make_place, stranger, staff):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder", ["a"])

    services.delete_review(review.pk, staff)

    assert Review.objects.count() == 0
    assert ReviewImage.objects.count() == 0


def test_delete_review_by_other_user_is_forbidden(make_place, stranger, owner):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder")
    with pytest.raises(AuthorizationError):
        services.delete_review(review.pk, owner)
    assert Review.objects.filter(pk=review.pk).exists()


def test_delete_review_storage_failure_keeps_review(make_place, stranger):
    review = services.create_review(make_place().pk, stranger, 2, "idare eder", ["a"])

    with patch.object(Review, "delete", side_effect=DatabaseError("locked")):
        with pytest.raises(PersistenceError):
            services.delete_review(review.pk, stranger)

    assert Review.objects.filter(pk=review.pk).exists()
    assert ReviewImage.objects.count() == 1


def test_delete_unknown_review(stranger):
    with pytest.raises(NotFoundError):
        services.delete_review(777, stranger)


# ── listing / search ─────────────────────────────────────────────────────


def test_reviews_for_place_newest_first(make_place, stranger):
    place = make_place()
    first = services.create_review(place.pk, stranger, 3, "ilk")
    second = services.create_review(place.pk, stranger, 5, "ikinci")

    assert [r.pk for r in services.reviews_for_place(place.pk)] == [second.pk, first.pk]


def test_search_reviews_matches_comment_author_or_place(make_place, stranger, owner):
    tower = make_place(title="Galata Kulesi")
    park = make_place(title="Gülhane Parkı")
    by_comment = services.create_review(park.pk, owner, 4, "Lale bahçesi çok güzel")
    by_place = services.create_review(tower.pk, owner, 5, "manzara")
    by_author = services.create_review(park.pk, stranger, 3, "kalabalık")

    assert [r.pk for r in services.search_reviews("lale")] == [by_comment.pk]
    assert [r.pk for r in services.search_reviews("galata")] == [by_place.pk]
    assert [r.pk for r in services.search_reviews("strang")] == [by_author.pk]
    assert len(services.search_reviews("")) == 3


def test_reviews_by_author_newest_first(make_place, stranger, owner):
    place = make_place()
    older = services.create_review(place.pk, stranger, 3, "ilk")
    services.create_review(place.pk, owner, 4, "başkası")
    newer = services.create_review(place.pk, stranger, 5, "ikinci")

    assert [r.pk for r in services.reviews_by_author(stranger)] == [newer.pk, older.pk]
