from rest_framework import serializers

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    author = serializers.CharField(source="author.username", read_only=True)
    images = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = ["id", "place", "author", "rating", "comment_text", "images", "created_at", "updated_at"]

    def get_images(self, obj):
        return [img.url for img in obj.images.all()]


class AdminReviewSerializer(ReviewSerializer):
    place_title = serializers.CharField(source="place.title", read_only=True)
    author_email = serializers.CharField(source="author.email", read_only=True)

    class Meta(ReviewSerializer.Meta):
        fields = ReviewSerializer.Meta.fields + ["place_title", "author_email"]


class ReviewWriteSerializer(serializers.Serializer):
    """작성/수정 입력 형태 검사. 수정 시 내용 필수 여부는 services 에서 판단한다."""

    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment_text = serializers.CharField(required=False, allow_blank=True, default="")
    images = serializers.ListField(child=serializers.CharField(), required=False)
