import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.db.models import Q
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.timezone import localdate
from django.views.decorators.http import require_POST

from pilots.decorators import pilot_required
from pilots.utils import is_club_admin, pilot_for_user

from .aggregation import ReferenceData, aggregate, aircraft_activity, format_hours
from .billing import billing_report as build_billing_report
from .exceptions import ReportError
from .exports import (
    billing_csv,
    billing_pdf,
    export_filename,
    history_csv,
    history_pdf,
)
from .forms import (
    AircraftActivityForm,
    BillingFilterForm,
    EngineFlightForm,
    GliderFlightForm,
    HistoryFilterForm,
)
from .models import EngineFlight, GliderFlight
from .repository import DjangoFlightRepository, fetch_range
from .stats import flight_stats

logger = logging.getLogger(__name__)

FLIGHT_KINDS = {
    "engine": (EngineFlight, EngineFlightForm, "Engine flight"),
    "glider": (GliderFlight, GliderFlightForm, "Glider flight"),
}
NO_RECORDS_MESSAGE = "No records found for the selected filters."
EXPORT_FORMATS = ("csv", "pdf")


def _flight_kind(kind):
    try:
        return FLIGHT_KINDS[kind]
    except KeyError:
        raise Http404("Unknown flight type")


def _can_edit(user, flight):
    if is_club_admin(user):
        return True
    pilot = pilot_for_user(user)
    return flight.created_by_id == user.pk or (
        pilot is not None and flight.pilot_id == pilot.pk
    )


def _period(start, end):
    return f"Period: {start:%d/%m/%y} - {end:%d/%m/%y}"


def _default_range_initial(user):
    today = localdate()
    initial = {"start_date": today.replace(day=1), "end_date": today}
    pilot = pilot_for_user(user)
    if pilot:
        initial["pilot"] = pilot.pk
    return initial


def _restricted_pilot(user):
    """Non-admin pilots only ever see their own records."""
    if is_club_admin(user):
        return None
    return pilot_for_user(user)


#########################
# Flight CRUD


@pilot_required
def flight_list(request, kind):
    model, _, label = _flight_kind(kind)
    aircraft_field = f"{kind}_aircraft"
    flights = model.objects.select_related("pilot", "instructor", aircraft_field)
    own = _restricted_pilot(request.user)
    if own is not None:
        flights = flights.filter(Q(pilot=own) | Q(instructor=own))
    return render(
        request,
        "logbook/flight_list.html",
        {
            "flights": flights[:200],
            "kind": kind,
            "label": label,
            "aircraft_field": aircraft_field,
        },
    )


@pilot_required
def add_flight(request, kind):
    model, form_class, label = _flight_kind(kind)
    initial = {"date": localdate()}
    pilot = pilot_for_user(request.user)
    if pilot:
        initial["pilot"] = pilot.pk

    if request.method == "POST":
        form = form_class(request.POST)
        if form.is_valid():
            flight = form.save(commit=False)
            flight.created_by = request.user
            flight.save()
            logger.info("%s %s logged by %s", label, flight.pk, request.user)
            messages.success(request, f"{label} logged.")
            for warning in form.warnings:
                messages.warning(request, warning)
            return redirect("logbook:flight_list", kind=kind)
        messages.error(request, "Please correct the errors below.")
    else:
        form = form_class(initial=initial)

    return render(
        request,
        "logbook/flight_form.html",
        {"form": form, "kind": kind, "label": label, "is_edit": False},
    )


@pilot_required
def edit_flight(request, kind, pk):
    model, form_class, label = _flight_kind(kind)
    flight = get_object_or_404(model, pk=pk)
    if not _can_edit(request.user, flight):
        return render(request, "403.html", status=403)

    if request.method == "POST":
        form = form_class(request.POST, instance=flight)
        if form.is_valid():
            form.save()
            messages.success(request, f"{label} updated.")
            for warning in form.warnings:
                messages.warning(request, warning)
            return redirect("logbook:flight_list", kind=kind)
        messages.error(request, "Please correct the errors below.")
    else:
        form = form_class(instance=flight)

    return render(
        request,
        "logbook/flight_form.html",
        {"form": form, "kind": kind, "label": label, "is_edit": True, "flight": flight},
    )


@require_POST
@pilot_required
def delete_flight(request, kind, pk):
    model, _, label = _flight_kind(kind)
    flight = get_object_or_404(model, pk=pk)
    if not _can_edit(request.user, flight):
        return render(request, "403.html", status=403)
    flight.delete()
    logger.info("%s %s deleted by %s", label, pk, request.user)
    messages.success(request, f"{label} deleted.")
    return redirect("logbook:flight_list", kind=kind)


#########################
# Reports


def _run_history(form):
    data = form.cleaned_data
    pilot = data.get("pilot")
    pilot_id = pilot.pk if pilot else None
    engine, glider = fetch_range(
        DjangoFlightRepository(), data["start_date"], data["end_date"], pilot_id=pilot_id
    )
    return aggregate(engine, glider, ReferenceData.load(), focus_pilot_id=pilot_id)


def _history_title(form):
    pilot = form.cleaned_data.get("pilot")
    name = pilot.display_name if pilot else "All pilots"
    return f"Unified flight history: {name}", name


def _redirect_back(view_name, request):
    url = reverse(view_name)
    if request.GET:
        url = f"{url}?{urlencode(request.GET)}"
    return redirect(url)


def _file_response(content, content_type, filename):
    response = HttpResponse(content, content_type=content_type)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


@pilot_required
def unified_history(request):
    restrict_to = _restricted_pilot(request.user)
    history = None
    if request.GET:
        form = HistoryFilterForm(request.GET, restrict_to=restrict_to)
        if form.is_valid():
            try:
                history = _run_history(form)
            except ReportError as e:
                messages.error(request, e.message)
            else:
                if history.is_empty:
                    logger.info("Unified history empty for %s", request.GET.dict())
                    messages.info(request, NO_RECORDS_MESSAGE)
    else:
        form = HistoryFilterForm(
            initial=_default_range_initial(request.user), restrict_to=restrict_to
        )

    return render(
        request,
        "logbook/unified_history.html",
        {
            "form": form,
            "history": history,
            "engine_total": format_hours(history.totals["engine"]) if history else None,
            "glider_total": format_hours(history.totals["glider"]) if history else None,
            "query": request.GET.urlencode(),
        },
    )


@pilot_required
def unified_history_export(request, fmt):
    if fmt not in EXPORT_FORMATS:
        raise Http404("Unknown export format")
    form = HistoryFilterForm(request.GET, restrict_to=_restricted_pilot(request.user))
    if not form.is_valid():
        messages.error(request, "Select a valid date range before exporting.")
        return _redirect_back("logbook:unified_history", request)

    try:
        history = _run_history(form)
        title, subject = _history_title(form)
        filename = export_filename("unified_history", subject, localdate(), fmt)
        if fmt == "csv":
            return _file_response(
                history_csv(history), "text/csv; charset=utf-8", filename
            )
        subtitle = _period(form.cleaned_data["start_date"], form.cleaned_data["end_date"])
        return _file_response(
            history_pdf(history, title, subtitle), "application/pdf", filename
        )
    except ReportError as e:
        messages.error(request, e.message)
    return _redirect_back("logbook:unified_history", request)


def _run_billing(form):
    data = form.cleaned_data
    pilot = data["pilot"]
    engine, glider = fetch_range(
        DjangoFlightRepository(), data["start_date"], data["end_date"], pilot_id=pilot.pk
    )
    return build_billing_report(engine, glider, pilot.pk, ReferenceData.load())


@pilot_required
def billing_report(request):
    restrict_to = _restricted_pilot(request.user)
    report = None
    if request.GET:
        form = BillingFilterForm(request.GET, restrict_to=restrict_to)
        if form.is_valid():
            try:
                report = _run_billing(form)
            except ReportError as e:
                messages.error(request, e.message)
            else:
                if report.is_empty:
                    messages.info(request, NO_RECORDS_MESSAGE)
    else:
        form = BillingFilterForm(
            initial=_default_range_initial(request.user), restrict_to=restrict_to
        )

    return render(
        request,
        "logbook/billing_report.html",
        {"form": form, "report": report, "query": request.GET.urlencode()},
    )


@pilot_required
def billing_export(request, fmt):
    if fmt not in EXPORT_FORMATS:
        raise Http404("Unknown export format")
    form = BillingFilterForm(request.GET, restrict_to=_restricted_pilot(request.user))
    if not form.is_valid():
        messages.error(request, "Select a pilot and a valid date range before exporting.")
        return _redirect_back("logbook:billing_report", request)

    pilot = form.cleaned_data["pilot"]
    try:
        report = _run_billing(form)
        filename = export_filename("billing", pilot.display_name, localdate(), fmt)
        if fmt == "csv":
            return _file_response(
                billing_csv(report), "text/csv; charset=utf-8", filename
            )
        subtitle = _period(form.cleaned_data["start_date"], form.cleaned_data["end_date"])
        return _file_response(
            billing_pdf(report, f"Billing report: {pilot.display_name}", subtitle),
            "application/pdf",
            filename,
        )
    except ReportError as e:
        messages.error(request, e.message)
    return _redirect_back("logbook:billing_report", request)


@pilot_required
def flight_stats_report(request):
    restrict_to = _restricted_pilot(request.user)
    stats = None
    if request.GET:
        form = HistoryFilterForm(request.GET, restrict_to=restrict_to)
        if form.is_valid():
            data = form.cleaned_data
            pilot = data.get("pilot")
            pilot_id = pilot.pk if pilot else None
            try:
                engine, glider = fetch_range(
                    DjangoFlightRepository(),
                    data["start_date"],
                    data["end_date"],
                    pilot_id=pilot_id,
                )
            except ReportError as e:
                messages.error(request, e.message)
            else:
                stats = flight_stats(engine, glider, pilot_id=pilot_id)
                if stats.is_empty:
                    messages.info(request, NO_RECORDS_MESSAGE)
    else:
        form = HistoryFilterForm(
            initial=_default_range_initial(request.user), restrict_to=restrict_to
        )

    return render(
        request, "logbook/flight_stats.html", {"form": form, "stats": stats}
    )


def _run_activity(form):
    data = form.cleaned_data
    engine, glider = fetch_range(
        DjangoFlightRepository(),
        data["start_date"],
        data["end_date"],
        aircraft_id=data["aircraft"].pk,
    )
    return aircraft_activity(engine, glider, ReferenceData.load())


@pilot_required
def aircraft_activity_report(request):
    activity = None
    if request.GET:
        form = AircraftActivityForm(request.GET)
        if form.is_valid():
            try:
                activity = _run_activity(form)
            except ReportError as e:
                messages.error(request, e.message)
            else:
                if activity.history.is_empty:
                    messages.info(request, NO_RECORDS_MESSAGE)
    else:
        today = localdate()
        form = AircraftActivityForm(
            initial={"start_date": today.replace(day=1), "end_date": today}
        )

    return render(
        request,
        "logbook/aircraft_activity.html",
        {
            "form": form,
            "activity": activity,
            "total": format_hours(activity.total_hours) if activity else None,
            "query": request.GET.urlencode(),
        },
    )


@pilot_required
def aircraft_activity_export(request, fmt):
    if fmt not in EXPORT_FORMATS:
        raise Http404("Unknown export format")
    form = AircraftActivityForm(request.GET)
    if not form.is_valid():
        messages.error(request, "Select an aircraft and a valid date range before exporting.")
        return _redirect_back("logbook:aircraft_activity", request)

    aircraft = form.cleaned_data["aircraft"]
    try:
        activity = _run_activity(form)
        filename = export_filename("aircraft_activity", aircraft.name, localdate(), fmt)
        if fmt == "csv":
            return _file_response(
                history_csv(activity.history), "text/csv; charset=utf-8", filename
            )
        subtitle = "{} - Total: {}".format(
            _period(form.cleaned_data["start_date"], form.cleaned_data["end_date"]),
            format_hours(activity.total_hours),
        )
        return _file_response(
            history_pdf(activity.history, f"Aircraft activity: {aircraft.name}", subtitle),
            "application/pdf",
            filename,
        )
    except ReportError as e:
        messages.error(request, e.message)
    return _redirect_back("logbook:aircraft_activity", request)
