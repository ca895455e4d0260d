from django.urls import include, path

from testproject.testapp import views

urlpatterns = [
    path("tables/", include("django_datatables.urls")),
    path("products/", views.products_page, name="products_page"),
]
