from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'sales', views.SaleRecordViewSet, basename='sale')
router.register(r'codes', views.RedemptionTokenViewSet, basename='code')

urlpatterns = [
    # Public submission, ahead of the router so "submit" is not read as a sale id
    path('sales/submit/', views.submit_sale, name='sale-submit'),
    path('', include(router.urls)),
]
