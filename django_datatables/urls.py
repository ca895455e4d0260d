from django.urls import path

from django_datatables import views

app_name = "datatables"

urlpatterns = [
    path("<str:table_id>/", views.render_table, name="render_table"),
    path("<str:table_id>/data/", views.table_data, name="table_data"),
]
