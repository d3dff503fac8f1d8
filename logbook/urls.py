from django.urls import path

from . import views

app_name = "logbook"

urlpatterns = [
    path("history/", views.unified_history, name="unified_history"),
    path(
        "history/export/<str:fmt>/",
        views.unified_history_export,
        name="unified_history_export",
    ),
    path("billing/", views.billing_report, name="billing_report"),
    path("billing/export/<str:fmt>/", views.billing_export, name="billing_export"),
    path("stats/", views.flight_stats_report, name="flight_stats"),
    path("aircraft/", views.aircraft_activity_report, name="aircraft_activity"),
    path(
        "aircraft/export/<str:fmt>/",
        views.aircraft_activity_export,
        name="aircraft_activity_export",
    ),
    path("<str:kind>/", views.flight_list, name="flight_list"),
    path("<str:kind>/add/", views.add_flight, name="add_flight"),
    path("<str:kind>/<int:pk>/edit/", views.edit_flight, name="edit_flight"),
    path("<str:kind>/<int:pk>/delete/", views.delete_flight, name="delete_flight"),
]
