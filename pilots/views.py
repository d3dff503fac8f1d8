from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.utils.timezone import localdate

from logbook.maintenance import maintenance_warnings

from .utils import pilot_for_user


@login_required
def home(request):
    pilot = pilot_for_user(request.user)
    today = localdate()
    upcoming = []
    if pilot:
        upcoming = pilot.schedule_entries.filter(date__gte=today).select_related(
            "aircraft"
        )[:5]
    return render(
        request,
        "home.html",
        {
            "pilot": pilot,
            "upcoming": upcoming,
            "maintenance": maintenance_warnings(today),
        },
    )
