import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import DatabaseError, transaction

from .exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    added: list = field(default_factory=list)
    removed: list = field(default_factory=list)
    kept: list = field(default_factory=list)

    @property
    def changed(self):
        return bool(self.added or self.removed)


def dedupe_urls(urls):
    """공백 제거 후 처음 등장한 순서대로 중복 없는 URL 목록."""
    seen = set()
    result = []
    for url in urls or []:
        url = (url or "").strip()
        if url and url not in seen:
            seen.add(url)
            result.append(url)
    return result


def check_image_count(urls, max_images=None):
    if max_images is None:
        max_images = settings.PLACE_IMAGE_LIMIT
    # 문자열 하나를 글자 단위 URL 목록으로 취급하지 않는다
    if isinstance(urls, (str, bytes)):
        raise ValidationError("이미지는 URL 목록으로 보내야 합니다.", field="images")
    urls = dedupe_urls(urls)
    if len(urls) > max_images:
        raise ValidationError(f"이미지는 최대 {max_images}장까지 업로드 가능합니다.", field="images")
    return urls


def reconcile_images(manager, desired_urls, max_images=None):
    """
    manager(place.images / review.images)의 URL 집합을 desired_urls 에 맞춘다.

    현재에만 있는 URL 은 삭제, 요청에만 있는 URL 은 추가, 양쪽에 있는 행은 건드리지 않는다.
    삭제와 추가는 하나의 트랜잭션으로 처리된다.
    """
    desired = check_image_count(desired_urls, max_images)
    desired_set = set(desired)

    try:
        with transaction.atomic():
            current = list(manager.values_list("url", flat=True))
            current_set = set(current)

            result = ReconcileResult(
                added=[url for url in desired if url not in current_set],
                removed=[url for url in current if url not in desired_set],
                kept=[url for url in current if url in desired_set],
            )

            if result.removed:
                manager.filter(url__in=result.removed).delete()
            for url in result.added:
                manager.create(url=url)
    except DatabaseError:
        logger.exception("이미지 동기화 실패 (owner=%s)", getattr(manager, "instance", None))
        raise PersistenceError()

    if result.changed:
        logger.info(
            "이미지 동기화: owner=%s 추가 %d건, 삭제 %d건, 유지 %d건",
            manager.instance.pk, len(result.added), len(result.removed), len(result.kept),
        )
    return result
