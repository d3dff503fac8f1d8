from dataclasses import dataclass
from zoneinfo import ZoneInfo

from astral import Observer
from astral import sun as astral_sun


@dataclass(frozen=True)
class TwilightTimes:
    date: object
    dawn: object
    sunrise: object
    sunset: object
    dusk: object


def _event(func, observer, day, tzinfo):
    # astral raises ValueError when the sun never reaches the required
    # elevation on that day (polar day or night)
    try:
        return func(observer, date=day, tzinfo=tzinfo)
    except ValueError:
        return None


def twilight_times(day, latitude, longitude, tz):
    """Civil dawn, sunrise, sunset and civil dusk for ``day`` at a place."""
    observer = Observer(latitude=float(latitude), longitude=float(longitude))
    tzinfo = ZoneInfo(tz) if isinstance(tz, str) else tz
    return TwilightTimes(
        date=day,
        dawn=_event(astral_sun.dawn, observer, day, tzinfo),
        sunrise=_event(astral_sun.sunrise, observer, day, tzinfo),
        sunset=_event(astral_sun.sunset, observer, day, tzinfo),
        dusk=_event(astral_sun.dusk, observer, day, tzinfo),
    )
