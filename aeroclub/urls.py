###################################################################################
# URL configuration for the aeroclub project.
#
# Each app owns its URLs under a prefix; authentication uses the stock
# django.contrib.auth views with templates/registration/login.html.
###################################################################################

from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from pilots import views as pilots_views

urlpatterns = [
    path("", pilots_views.home, name="home"),
    path("admin/", admin.site.urls),
    path("login/", auth_views.LoginView.as_view(), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("logbook/", include("logbook.urls")),
    path("agenda/", include("schedule.urls")),
]

handler403 = "django.views.defaults.permission_denied"
