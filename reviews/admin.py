from django.conf import settings
from django.contrib import admin
from .models import Review, ReviewImage


class ReviewImageInline(admin.TabularInline):
    model = ReviewImage
    extra = 0
    max_num = settings.REVIEW_IMAGE_LIMIT
    readonly_fields = ("created_at",)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "place", "author", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("comment_text", "author__username", "place__title")
    inlines = [ReviewImageInline]
