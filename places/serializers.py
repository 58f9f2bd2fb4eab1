from rest_framework import serializers

from .attributes import ATTRIBUTE_KEYS
from .models import Favorite, Place

PLACE_BASE_FIELDS = [
    "id", "title", "description", "category", "city", "district",
    "address", "latitude", "longitude", "editor_note",
]


class PlaceWriteSerializer(serializers.ModelSerializer):
    """
    입력 형태(타입)만 검사한다. 필수 항목과 카테고리별 속성 규칙은
    places.attributes 에서 검사하므로 모든 필드를 선택 입력으로 둔다.
    """

    images = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)

    class Meta:
        model = Place
        fields = [f for f in PLACE_BASE_FIELDS if f != "id"] + list(ATTRIBUTE_KEYS) + ["images"]
        extra_kwargs = {
            "title": {"required": False, "allow_blank": True},
            "category": {"required": False},
            "city": {"required": False, "allow_blank": True},
            "district": {"required": False, "allow_blank": True},
            "price_range": {"required": False, "allow_null": True, "allow_blank": True},
            "alcohol_status": {"required": False, "allow_null": True, "allow_blank": True},
            "noise_level": {"required": False, "allow_null": True, "allow_blank": True},
        }


class PlaceListSerializer(serializers.ModelSerializer):
    images = serializers.SerializerMethodField()
    cover_image = serializers.SerializerMethodField()
    rating_average = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()
    owner = serializers.CharField(source="owner.username", read_only=True)
    is_favorite = serializers.SerializerMethodField()

    class Meta:
        model = Place
        fields = PLACE_BASE_FIELDS + list(ATTRIBUTE_KEYS) + [
            "owner",
            "is_approved",
            "images",
            "cover_image",
            "rating_average",
            "review_count",
            "is_favorite",
            "created_at",
        ]

    def get_images(self, obj):
        return [img.url for img in obj.images.all()]

    def get_cover_image(self, obj):
        return obj.cover_image

    def get_rating_average(self, obj):
        value = getattr(obj, "rating_average", None)
        if value is None:
            value = self.context.get("rating_summary", (0.0, 0))[0]
        return round(float(value), 2)

    def get_review_count(self, obj):
        value = getattr(obj, "review_count", None)
        if value is None:
            value = self.context.get("rating_summary", (0.0, 0))[1]
        return value

    def get_is_favorite(self, obj):
        return obj.pk in self.context.get("favorite_ids", set())


class FavoriteSerializer(serializers.ModelSerializer):
    place_id = serializers.IntegerField(source="place.id", read_only=True)
    title = serializers.CharField(source="place.title", read_only=True)
    city = serializers.CharField(source="place.city", read_only=True)
    category = serializers.CharField(source="place.category", read_only=True)

    class Meta:
        model = Favorite
        fields = ["id", "place_id", "title", "city", "category", "created_at"]


class UserSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    is_staff = serializers.BooleanField(read_only=True)
    date_joined = serializers.DateTimeField(read_only=True)
    place_count = serializers.IntegerField(read_only=True)
    review_count = serializers.IntegerField(read_only=True)
