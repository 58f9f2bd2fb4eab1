from django.conf import settings
from django.db import models


class Place(models.Model):
    class Category(models.TextChoices):
        CAFE = "CAFE", "Cafe"
        RESTAURANT = "RESTAURANT", "Restaurant"
        MUSEUM = "MUSEUM", "Museum"
        HOTEL = "HOTEL", "Hotel"
        MALL = "MALL", "Mall"
        PARK = "PARK", "Park"
        BEACH = "BEACH", "Beach"
        CAMPING = "CAMPING", "Camping"
        ACTIVITY = "ACTIVITY", "Activity"
        BAR = "BAR", "Bar"
        CLUB = "CLUB", "Club"
        OTHER = "OTHER", "Other"

    class PriceRange(models.TextChoices):
        CHEAP = "CHEAP", "저렴"
        MODERATE = "MODERATE", "보통"
        EXPENSIVE = "EXPENSIVE", "비쌈"
        VERY_EXPENSIVE = "VERY_EXPENSIVE", "매우 비쌈"

    class AlcoholStatus(models.TextChoices):
        NONE = "NONE", "주류 없음"
        ALCOHOLIC = "ALCOHOLIC", "주류 판매"
        BOTH = "BOTH", "둘 다"

    class NoiseLevel(models.TextChoices):
        QUIET = "QUIET", "조용함"
        MODERATE = "MODERATE", "보통"
        LOUD = "LOUD", "시끄러움"

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices)
    city = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    address = models.CharField(max_length=500, blank=True, default="")
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="places")
    is_approved = models.BooleanField(default=False)
    editor_note = models.TextField(blank=True, default="")

    # 음식점/카페
    price_range = models.CharField(max_length=20, choices=PriceRange.choices, blank=True, null=True)
    breakfast = models.BooleanField(default=False)
    lunch = models.BooleanField(default=False)
    dinner = models.BooleanField(default=False)
    dessert = models.BooleanField(default=False)
    snack = models.BooleanField(default=False)
    vegan_option = models.BooleanField(default=False)
    outdoor_seating = models.BooleanField(default=False)

    # 음식점/카페/몰/해변 공통
    is_family_friendly = models.BooleanField(default=False)
    has_smoking_area = models.BooleanField(default=False)
    alcohol_status = models.CharField(max_length=20, choices=AlcoholStatus.choices, blank=True, null=True)

    # 해변
    blue_flag = models.BooleanField(default=False)
    sunbed = models.BooleanField(default=False)
    shower = models.BooleanField(default=False)

    # 유료 입장 (해변/박물관/기타/바/클럽)
    is_paid = models.BooleanField(default=False)
    entrance_fee = models.CharField(max_length=100, blank=True, default="")

    # 캠핑
    tent_rental = models.BooleanField(default=False)
    electricity = models.BooleanField(default=False)
    fire_allowed = models.BooleanField(default=False)
    caravan_access = models.BooleanField(default=False)

    # 박물관/기타
    museum_card_accepted = models.BooleanField(default=False)
    photography = models.BooleanField(default=False)

    # 공원
    pet_friendly = models.BooleanField(default=False)
    playground = models.BooleanField(default=False)
    large_area = models.BooleanField(default=False)
    free_entry = models.BooleanField(default=False)

    # 호텔/몰
    pool = models.BooleanField(default=False)
    gym = models.BooleanField(default=False)
    noise_level = models.CharField(max_length=20, choices=NoiseLevel.choices, blank=True, null=True)
    parking = models.BooleanField(default=False)
    wifi = models.BooleanField(default=False)
    food_court = models.BooleanField(default=False)
    baby_care = models.BooleanField(default=False)

    # 액티비티
    duration = models.CharField(max_length=100, blank=True, default="")
    reservation_required = models.BooleanField(default=False)
    best_time = models.CharField(max_length=100, blank=True, default="")

    # 바/클럽
    music_type = models.CharField(max_length=100, blank=True, default="")
    dam_allowed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_approved", "-created_at"], name="place_approved_created_idx"),
            models.Index(fields=["city"], name="place_city_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_category_display()})"

    @property
    def cover_image(self):
        # 가장 먼저 저장된 이미지가 대표 이미지
        images = list(self.images.all())
        return images[0].url if images else None


class PlaceImage(models.Model):
    place = models.ForeignKey(Place, on_delete=models.CASCADE, related_name="images")
    url = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["place", "url"], name="uniq_place_image_url"),
        ]

    def __str__(self):
        return f"{self.place.title} - {self.url}"


class Favorite(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="favorites")
    place = models.ForeignKey(Place, on_delete=models.CASCADE, related_name="favorites")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "place"], name="uniq_favorite_user_place"),
        ]

    def __str__(self):
        return f"{self.user} ♥ {self.place}"
