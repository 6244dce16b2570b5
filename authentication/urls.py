from authentication.api.urls.auth_urls import urlpatterns  # noqa: F401
