import logging
from datetime import date, timedelta
from urllib.parse import urlencode

from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.timezone import localdate
from django.views.decorators.http import require_POST

from logbook.exceptions import ReportError
from pilots.decorators import admin_required, pilot_required
from pilots.utils import is_club_admin, pilot_for_user
from siteconfig.models import SiteConfiguration

from .agenda import build_agenda_days
from .exports import agenda_csv, agenda_pdf, agenda_text, agenda_title
from .forms import AgendaRangeForm, DailyObservationForm, ScheduleEntryForm
from .grouping import grouped
from .models import DailyObservation, ScheduleEntry
from .twilight import twilight_times

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("text", "csv", "pdf")


def _selected_date(request):
    value = request.GET.get("date")
    if value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            messages.error(request, f"Invalid date: {value}")
    return localdate()


def _agenda_url(day):
    return f"{reverse('schedule:agenda')}?date={day.isoformat()}"


def _twilight_for(day):
    config = SiteConfiguration.current()
    if config is None:
        return None
    return twilight_times(day, config.latitude, config.longitude, config.timezone_name)


def _can_change(user, entry):
    if is_club_admin(user):
        return True
    pilot = pilot_for_user(user)
    return pilot is not None and entry.pilot_id == pilot.pk


@pilot_required
def agenda(request):
    day = _selected_date(request)
    agenda_day = None
    try:
        agenda_day = build_agenda_days(day, day)[0]
    except ReportError as e:
        messages.error(request, e.message)

    is_admin = is_club_admin(request.user)
    own_pilot = None if is_admin else pilot_for_user(request.user)
    observation = DailyObservation.objects.filter(date=day).first()

    context = {
        "day": day,
        "previous_day": day - timedelta(days=1),
        "next_day": day + timedelta(days=1),
        "agenda_day": agenda_day,
        "rows": list(grouped(agenda_day.entries)) if agenda_day else [],
        "entry_form": ScheduleEntryForm(initial={"date": day}, pilot=own_pilot),
        "observation_form": DailyObservationForm(instance=observation),
        "range_form": AgendaRangeForm(initial={"start_date": day, "end_date": day}),
        "twilight": _twilight_for(day),
        "is_admin": is_admin,
        "own_pilot": own_pilot,
    }
    return render(request, "schedule/agenda.html", context)


@require_POST
@pilot_required
def add_entry(request):
    own_pilot = None if is_club_admin(request.user) else pilot_for_user(request.user)
    form = ScheduleEntryForm(request.POST, pilot=own_pilot)
    if form.is_valid():
        entry = form.save(commit=False)
        entry.created_by = request.user
        entry.save()
        logger.info("Schedule entry %s added by %s", entry.pk, request.user)
        messages.success(request, "Slot added to the agenda.")
        return redirect(_agenda_url(entry.date))

    for field, errors in form.errors.items():
        for error in errors:
            messages.error(request, error if field == "__all__" else f"{field}: {error}")
    return redirect(_agenda_url(form.cleaned_data.get("date") or localdate()))


@pilot_required
def edit_entry(request, pk):
    entry = get_object_or_404(ScheduleEntry, pk=pk)
    if not _can_change(request.user, entry):
        return render(request, "403.html", status=403)
    own_pilot = None if is_club_admin(request.user) else pilot_for_user(request.user)

    if request.method == "POST":
        form = ScheduleEntryForm(request.POST, instance=entry, pilot=own_pilot)
        if form.is_valid():
            form.save()
            messages.success(request, "Slot updated.")
            return redirect(_agenda_url(entry.date))
        messages.error(request, "Please correct the errors below.")
    else:
        form = ScheduleEntryForm(instance=entry, pilot=own_pilot)

    return render(request, "schedule/entry_form.html", {"form": form, "entry": entry})


@require_POST
@pilot_required
def delete_entry(request, pk):
    entry = get_object_or_404(ScheduleEntry, pk=pk)
    if not _can_change(request.user, entry):
        return render(request, "403.html", status=403)
    day = entry.date
    entry.delete()
    logger.info("Schedule entry %s deleted by %s", pk, request.user)
    messages.success(request, "Slot removed from the agenda.")
    return redirect(_agenda_url(day))


@require_POST
@admin_required
def save_observation(request, day):
    try:
        obs_date = date.fromisoformat(day)
    except ValueError:
        raise Http404("Invalid date")
    observation, _ = DailyObservation.objects.get_or_create(date=obs_date)
    form = DailyObservationForm(request.POST, instance=observation)
    if form.is_valid():
        observation = form.save(commit=False)
        observation.updated_by = request.user
        observation.save()
        messages.success(request, "Observations saved.")
    else:
        messages.error(request, "Could not save the observations.")
    return redirect(_agenda_url(obs_date))


@pilot_required
def agenda_export(request, fmt):
    if fmt not in EXPORT_FORMATS:
        raise Http404("Unknown export format")
    form = AgendaRangeForm(request.GET)
    if not form.is_valid():
        for error in form.non_field_errors():
            messages.error(request, error)
        if not form.non_field_errors():
            messages.error(request, "Select a valid date range before exporting.")
        return redirect("schedule:agenda")

    start = form.cleaned_data["start_date"]
    end = form.cleaned_data["end_date"]
    try:
        days = build_agenda_days(start, end)
        if fmt == "text":
            return render(
                request,
                "schedule/share.html",
                {
                    "title": agenda_title(start, end),
                    "text": agenda_text(days, start, end),
                    "back_url": _agenda_url(start),
                },
            )
        if fmt == "csv":
            response = HttpResponse(
                agenda_csv(days, start, end), content_type="text/csv; charset=utf-8"
            )
            filename = f"agenda_{start:%Y-%m-%d}_to_{end:%Y-%m-%d}.csv"
        else:
            response = HttpResponse(
                agenda_pdf(days, start, end), content_type="application/pdf"
            )
            filename = f"agenda_{start:%Y-%m-%d}_to_{end:%Y-%m-%d}.pdf"
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
    except ReportError as e:
        messages.error(request, e.message)
    return redirect(f"{reverse('schedule:agenda')}?{urlencode({'date': start.isoformat()})}")


@pilot_required
def twilight(request):
    day = _selected_date(request)
    config = SiteConfiguration.current()
    days = []
    if config is None:
        messages.info(request, "Set the airfield coordinates in the site configuration.")
    else:
        days = [_twilight_for(day + timedelta(days=offset)) for offset in range(7)]
    return render(
        request,
        "schedule/twilight.html",
        {"day": day, "days": days, "config": config},
    )
