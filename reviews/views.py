from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated

from places.exceptions import CatalogError
from places.views import api_response, error_response, invalid_input_response

from . import services
from .serializers import AdminReviewSerializer, ReviewSerializer, ReviewWriteSerializer


class ReviewViewSet(viewsets.ViewSet):

    def get_permissions(self):
        if self.action == "admin_list":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def update(self, request, pk=None):
        serializer = ReviewWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        data = serializer.validated_data
        try:
            review = services.update_review(
                pk,
                request.user,
                data["rating"],
                data["comment_text"],
                data.get("images"),
            )
        except CatalogError as e:
            return error_response(e)
        return api_response("success", "리뷰 수정 완료", status.HTTP_200_OK, ReviewSerializer(review).data)

    def destroy(self, request, pk=None):
        try:
            services.delete_review(pk, request.user)
        except CatalogError as e:
            return error_response(e)
        return api_response("success", "리뷰 삭제 완료", status.HTTP_200_OK, {"id": int(pk)})

    @action(detail=False, methods=["get"], url_path="admin")
    def admin_list(self, request):
        qs = services.search_reviews(request.query_params.get("search", ""))
        items = AdminReviewSerializer(qs, many=True).data
        return api_response("success", "리뷰 목록 조회 성공", status.HTTP_200_OK, {"items": items, "count": len(items)})
