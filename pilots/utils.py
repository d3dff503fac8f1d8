from .models import Pilot


def pilot_for_user(user):
    """Return the Pilot linked to ``user``, or None."""
    if not user or not getattr(user, "is_authenticated", False):
        return None
    return Pilot.objects.filter(user=user).first()


def is_club_admin(user):
    """Superusers and pilots flagged as administrators."""
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if user.is_superuser:
        return True
    pilot = pilot_for_user(user)
    return bool(pilot and pilot.is_admin)
