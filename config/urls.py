"""URL configuration for VillaStay.

Routes the Django admin, the OpenAPI schema and the versioned REST API
of each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # API schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/units/', include('apps.units.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/reschedule-requests/', include('apps.reschedules.urls')),
    path('api/v1/feedback/', include('apps.feedback.urls')),
    path('api/v1/notifications/', include('apps.notifications.urls')),
]
