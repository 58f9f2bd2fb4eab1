from django.conf import settings
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from reviews import services as review_services
from reviews.serializers import ReviewSerializer, ReviewWriteSerializer

from . import services
from .attributes import category_schema
from .exceptions import CatalogError
from .models import Place
from .search import suggest
from .serializers import FavoriteSerializer, PlaceListSerializer, PlaceWriteSerializer, UserSummarySerializer


def api_response(status_str, message, code, data):
    return Response(
        {
            "status": status_str,
            "message": message,
            "code": code,
            "data": data,
        },
        status=code,
    )


def error_response(exc):
    return api_response("error", exc.message, exc.status_code, exc.as_data())


def invalid_input_response(errors):
    return api_response("error", "유효하지 않은 입력", status.HTTP_400_BAD_REQUEST, errors)


class PlaceViewSet(viewsets.ViewSet):
    admin_actions = ("approve", "admin_list", "stats", "users")
    authenticated_actions = ("create", "partial_update", "destroy", "favorite", "me")

    def get_permissions(self):
        if self.action in self.admin_actions:
            return [IsAdminUser()]
        if self.action in self.authenticated_actions:
            return [IsAuthenticated()]
        if self.action == "reviews" and self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def _serialize(self, places, many=True, **context):
        places = list(places) if many else places
        ids = [p.pk for p in places] if many else [places.pk]
        context["favorite_ids"] = services.favorite_place_ids(self.request.user, ids)
        return PlaceListSerializer(places, many=many, context=context).data

    def list(self, request):
        filters = services.PlaceFilter.from_query_params(request.query_params)
        places = services.list_places(filters, limit=settings.PUBLIC_LIST_LIMIT)
        items = self._serialize(places)

        return api_response(
            "success",
            "장소 목록 조회 성공",
            status.HTTP_200_OK,
            {"items": items, "count": len(items)},
        )

    def retrieve(self, request, pk=None):
        try:
            place = services.get_place(pk)
        except CatalogError as e:
            return error_response(e)

        # 미승인 장소는 작성자/관리자만 조회
        user = request.user if request.user.is_authenticated else None
        if not place.is_approved and not (services.is_admin(user) or (user and user.pk == place.owner_id)):
            return api_response("error", "장소를 찾을 수 없습니다.", status.HTTP_404_NOT_FOUND, {})

        data = self._serialize(place, many=False, rating_summary=services.rating_summary(place))
        return api_response("success", "장소 상세 조회 성공", status.HTTP_200_OK, data)

    def create(self, request):
        serializer = PlaceWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        try:
            place = services.create_place(request.user, serializer.validated_data)
        except CatalogError as e:
            return error_response(e)

        data = self._serialize(place, many=False, rating_summary=(0.0, 0))
        return api_response("success", "장소 등록 완료 (승인 대기)", status.HTTP_201_CREATED, data)

    def partial_update(self, request, pk=None):
        serializer = PlaceWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        try:
            place = services.update_place(pk, request.user, serializer.validated_data)
        except CatalogError as e:
            return error_response(e)

        data = self._serialize(place, many=False, rating_summary=services.rating_summary(place))
        return api_response("success", "장소 수정 완료", status.HTTP_200_OK, data)

    def destroy(self, request, pk=None):
        try:
            services.delete_place(pk, request.user)
        except CatalogError as e:
            return error_response(e)
        return api_response("success", "장소 삭제 완료", status.HTTP_200_OK, {"id": int(pk)})

    @action(detail=False, methods=["get"], url_path="suggestions")
    def suggestions(self, request):
        query = request.query_params.get("q", "")
        # 매 요청마다 새로 스캔 (캐시 없음)
        entries = Place.objects.filter(is_approved=True).order_by("id").values("id", "title", "city", "category")
        return api_response("success", "검색어 제안 조회 성공", status.HTTP_200_OK, suggest(query, entries))

    @action(detail=False, methods=["get"], url_path="schema")
    def schema(self, request):
        return api_response("success", "카테고리 스키마 조회 성공", status.HTTP_200_OK, category_schema())

    @action(detail=False, methods=["get"], url_path="categories")
    def categories(self, request):
        return api_response("success", "카테고리별 개수 조회 성공", status.HTTP_200_OK, services.category_counts())

    @action(detail=False, methods=["get"], url_path="check-existence")
    def check_existence(self, request):
        place = services.find_existing_place(
            request.query_params.get("title"),
            request.query_params.get("city"),
        )
        if place:
            data = {"exists": True, "place_id": place.id, "message": "이미 등록된 장소입니다."}
        else:
            data = {"exists": False}
        return api_response("success", "중복 확인 완료", status.HTTP_200_OK, data)

    @action(detail=True, methods=["post"], url_path="favorite")
    def favorite(self, request, pk=None):
        try:
            is_favorite = services.toggle_favorite(request.user, pk)
        except CatalogError as e:
            return error_response(e)
        return api_response("success", "즐겨찾기 변경 완료", status.HTTP_200_OK, {"is_favorite": is_favorite})

    @action(detail=True, methods=["get", "post"], url_path="reviews")
    def reviews(self, request, pk=None):
        if request.method == "GET":
            try:
                qs = review_services.reviews_for_place(pk)
            except CatalogError as e:
                return error_response(e)
            items = ReviewSerializer(qs, many=True).data
            return api_response("success", "리뷰 목록 조회 성공", status.HTTP_200_OK, {"items": items, "count": len(items)})

        serializer = ReviewWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        data = serializer.validated_data
        try:
            review = review_services.create_review(
                pk,
                request.user,
                data["rating"],
                data["comment_text"],
                data.get("images"),
            )
        except CatalogError as e:
            return error_response(e)
        return api_response("success", "리뷰 등록 완료", status.HTTP_201_CREATED, ReviewSerializer(review).data)

    @action(detail=True, methods=["patch"], url_path="approve")
    def approve(self, request, pk=None):
        try:
            is_approved = serializers.BooleanField().to_internal_value(request.data.get("is_approved", False))
        except serializers.ValidationError as e:
            return invalid_input_response({"is_approved": e.detail})

        try:
            place = services.set_approval(pk, request.user, is_approved)
        except CatalogError as e:
            return error_response(e)
        return api_response(
            "success",
            "승인 상태 변경 완료",
            status.HTTP_200_OK,
            {"id": place.id, "is_approved": place.is_approved},
        )

    @action(detail=False, methods=["get"], url_path="admin")
    def admin_list(self, request):
        filters = services.PlaceFilter.from_query_params(request.query_params)
        places = services.list_places(filters, include_unapproved=True)
        items = self._serialize(places)
        return api_response("success", "전체 장소 조회 성공", status.HTTP_200_OK, {"items": items, "count": len(items)})

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        return api_response("success", "통계 조회 성공", status.HTTP_200_OK, services.catalog_stats())

    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):
        places = self._serialize(services.places_for_user(request.user))
        favorites = FavoriteSerializer(services.favorites_for_user(request.user), many=True).data
        reviews = ReviewSerializer(review_services.reviews_by_author(request.user), many=True).data
        return api_response(
            "success",
            "내 장소 조회 성공",
            status.HTTP_200_OK,
            {"places": places, "favorites": favorites, "reviews": reviews},
        )

    @action(detail=False, methods=["get"], url_path="admin/users")
    def users(self, request):
        items = UserSummarySerializer(services.users_with_counts(), many=True).data
        return api_response("success", "사용자 목록 조회 성공", status.HTTP_200_OK, {"items": items, "count": len(items)})
