from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/places/', include('places.urls', namespace='places')),
    path('api/v1/reviews/', include('reviews.urls', namespace='reviews')),
]
