"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from bonuses import bonus_views as bonus_api_views

router = DefaultRouter()
router.register(r'admin-targets', bonus_api_views.AdminTargetSettingViewSet, basename='admin-target')
router.register(r'admin-income', bonus_api_views.AdminIncomeViewSet, basename='admin-income')


app_name = 'api'
urlpatterns = [
    # Admin bonus recap
    path('admin-recap/', bonus_api_views.AdminRecapView.as_view(), name='admin-recap'),
    path('admin-recap/export/', bonus_api_views.AdminRecapExportView.as_view(), name='admin-recap-export'),
    path('admin-recap/<uuid:recap_id>/mark-paid/', bonus_api_views.AdminRecapMarkPaidView.as_view(), name='admin-recap-mark-paid'),

    path('', include(router.urls)),

    # Auth endpoints
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
