"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.catalog.views import ItemViewSet

router = DefaultRouter(trailing_slash=True)
router.register("items", ItemViewSet, basename="item")

urlpatterns = router.urls
