from django.conf import settings
from django.contrib import admin
from django.utils.html import format_html

from .attributes import ATTRIBUTE_KEYS, sanitize
from .models import Favorite, Place, PlaceImage


class PlaceImageInline(admin.TabularInline):
    model = PlaceImage
    extra = 0
    max_num = settings.PLACE_IMAGE_LIMIT
    readonly_fields = ("created_at",)


@admin.register(Place)
class PlaceAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "city", "district", "owner", "is_approved", "cover_preview", "created_at")
    list_filter = ("is_approved", "category", "city")
    search_fields = ("title", "description", "city", "address")
    inlines = [PlaceImageInline]
    actions = ["approve_places", "unapprove_places"]

    def cover_preview(self, obj):
        if obj.cover_image:
            return format_html('<img src="{}" style="max-height: 60px;"/>', obj.cover_image)
        return "-"
    cover_preview.short_description = "대표 이미지"

    def save_model(self, request, obj, form, change):
        # 관리자 수정도 카테고리 스키마를 그대로 따른다
        values = sanitize(obj.category, {key: getattr(obj, key) for key in ATTRIBUTE_KEYS})
        for key in ATTRIBUTE_KEYS:
            setattr(obj, key, values[key])
        super().save_model(request, obj, form, change)

    def approve_places(self, request, queryset):
        updated = queryset.update(is_approved=True)
        self.message_user(request, f"{updated}건이 승인되었습니다.")
    approve_places.short_description = "선택된 장소 승인"

    def unapprove_places(self, request, queryset):
        updated = queryset.update(is_approved=False)
        self.message_user(request, f"{updated}건의 승인이 취소되었습니다.")
    unapprove_places.short_description = "선택된 장소 승인 취소"


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "place", "created_at")
    search_fields = ("user__username", "place__title")
