import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Place",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.CharField(choices=[("CAFE", "Cafe"), ("RESTAURANT", "Restaurant"), ("MUSEUM", "Museum"), ("HOTEL", "Hotel"), ("MALL", "Mall"), ("PARK", "Park"), ("BEACH", "Beach"), ("CAMPING", "Camping"), ("ACTIVITY", "Activity"), ("BAR", "Bar"), ("CLUB", "Club"), ("OTHER", "Other")], max_length=20)),
                ("city", models.CharField(max_length=100)),
                ("district", models.CharField(max_length=100)),
                ("address", models.CharField(blank=True, default="", max_length=500)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                ("is_approved", models.BooleanField(default=False)),
                ("editor_note", models.TextField(blank=True, default="")),
                ("price_range", models.CharField(blank=True, choices=[("CHEAP", "저렴"), ("MODERATE", "보통"), ("EXPENSIVE", "비쌈"), ("VERY_EXPENSIVE", "매우 비쌈")], max_length=20, null=True)),
                ("breakfast", models.BooleanField(default=False)),
                ("lunch", models.BooleanField(default=False)),
                ("dinner", models.BooleanField(default=False)),
                ("dessert", models.BooleanField(default=False)),
                ("snack", models.BooleanField(default=False)),
                ("vegan_option", models.BooleanField(default=False)),
                ("outdoor_seating", models.BooleanField(default=False)),
                ("is_family_friendly", models.BooleanField(default=False)),
                ("has_smoking_area", models.BooleanField(default=False)),
                ("alcohol_status", models.CharField(blank=True, choices=[("NONE", "주류 없음"), ("ALCOHOLIC", "주류 판매"), ("BOTH", "둘 다")], max_length=20, null=True)),
                ("blue_flag", models.BooleanField(default=False)),
                ("sunbed", models.BooleanField(default=False)),
                ("shower", models.BooleanField(default=False)),
                ("is_paid", models.BooleanField(default=False)),
                ("entrance_fee", models.CharField(blank=True, default="", max_length=100)),
                ("tent_rental", models.BooleanField(default=False)),
                ("electricity", models.BooleanField(default=False)),
                ("fire_allowed", models.BooleanField(default=False)),
                ("caravan_access", models.BooleanField(default=False)),
                ("museum_card_accepted", models.BooleanField(default=False)),
                ("photography", models.BooleanField(default=False)),
                ("pet_friendly", models.BooleanField(default=False)),
                ("playground", models.BooleanField(default=False)),
                ("large_area", models.BooleanField(default=False)),
                ("free_entry", models.BooleanField(default=False)),
                ("pool", models.BooleanField(default=False)),
                ("gym", models.BooleanField(default=False)),
                ("noise_level", models.CharField(blank=True, choices=[("QUIET", "조용함"), ("MODERATE", "보통"), ("LOUD", "시끄러움")], max_length=20, null=True)),
                ("parking", models.BooleanField(default=False)),
                ("wifi", models.BooleanField(default=False)),
                ("food_court", models.BooleanField(default=False)),
                ("baby_care", models.BooleanField(default=False)),
                ("duration", models.CharField(blank=True, default="", max_length=100)),
                ("reservation_required", models.BooleanField(default=False)),
                ("best_time", models.CharField(blank=True, default="", max_length=100)),
                ("music_type", models.CharField(blank=True, default="", max_length=100)),
                ("dam_allowed", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="places", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["is_approved", "-created_at"], name="place_approved_created_idx"),
                    models.Index(fields=["city"], name="place_city_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PlaceImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("url", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("place", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="images", to="places.place")),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(fields=("place", "url"), name="uniq_place_image_url"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Favorite",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("place", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="favorites", to="places.place")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="favorites", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "place"), name="uniq_favorite_user_place"),
                ],
            },
        ),
    ]
