from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'', views.BookViewSet, basename='book')

urlpatterns = [
    # GET    /api/books/        - List catalog (?class=5A&is_book=true)
    # GET    /api/books/{id}/   - Get one item
    path('', include(router.urls)),
]
