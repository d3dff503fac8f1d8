from functools import wraps

from django.shortcuts import redirect, render

from .utils import is_club_admin, pilot_for_user


def pilot_required(view_func):
    """Logged in, and either linked to a pilot or a club administrator."""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user

        if not user.is_authenticated:
            return redirect("login")

        if not is_club_admin(user) and pilot_for_user(user) is None:
            return render(request, "403.html", status=403)

        return view_func(request, *args, **kwargs)

    return wrapper


def admin_required(view_func):
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user

        if not user.is_authenticated:
            return redirect("login")

        if not is_club_admin(user):
            return render(request, "403.html", status=403)

        return view_func(request, *args, **kwargs)

    return wrapper
