from django.urls import path

from . import views

app_name = "schedule"

urlpatterns = [
    path("", views.agenda, name="agenda"),
    path("entries/add/", views.add_entry, name="add_entry"),
    path("entries/<int:pk>/edit/", views.edit_entry, name="edit_entry"),
    path("entries/<int:pk>/delete/", views.delete_entry, name="delete_entry"),
    path("observations/<str:day>/", views.save_observation, name="save_observation"),
    path("export/<str:fmt>/", views.agenda_export, name="agenda_export"),
    path("twilight/", views.twilight, name="twilight"),
]
