"""
URL configuration for the blood donation doctor backend.

The doctor API lives under ``/api/doctor``; the Django admin, the health
probe, Prometheus metrics and the OpenAPI documentation (``/swagger/``
and ``/redoc/``) are mounted alongside it.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from doctor.views.health import healthz

api_info = openapi.Info(
    title="Blood Donation Doctor API",
    default_version='v1',
    description="Medical report review endpoints for senior doctors.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('healthz', healthz, name='healthz'),
    path('', include('django_prometheus.urls')),
    path('api/doctor/', include('doctor.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
