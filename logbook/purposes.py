from django.db import models


class FlightPurpose(models.TextChoices):
    TRAINING = "training", "Training"
    REFRESHER = "refresher", "Refresher"
    SPORT = "sport", "Sport"
    INSTRUCTION_RECEIVED = "instruction_received", "Instruction (Received)"
    INSTRUCTION_GIVEN = "instruction_given", "Instruction (Given)"
    TOW = "tow", "Tow"
    LOCAL = "local", "Local"
    TRIP = "trip", "Cross-country"


GLIDER_PURPOSES = (
    FlightPurpose.TRAINING,
    FlightPurpose.REFRESHER,
    FlightPurpose.SPORT,
    FlightPurpose.INSTRUCTION_RECEIVED,
    FlightPurpose.INSTRUCTION_GIVEN,
)

ENGINE_PURPOSES = (
    FlightPurpose.TRAINING,
    FlightPurpose.REFRESHER,
    FlightPurpose.TOW,
    FlightPurpose.INSTRUCTION_RECEIVED,
    FlightPurpose.INSTRUCTION_GIVEN,
    FlightPurpose.LOCAL,
    FlightPurpose.TRIP,
)

INSTRUCTION_PURPOSES = frozenset(
    {FlightPurpose.INSTRUCTION_RECEIVED, FlightPurpose.INSTRUCTION_GIVEN}
)

PURPOSE_DISPLAY = dict(FlightPurpose.choices)


def purpose_choices(purposes):
    return [(p.value, p.label) for p in purposes]


def purpose_name(code):
    """Display name for a purpose code; unknown codes are shown as stored."""
    return PURPOSE_DISPLAY.get(code, code)


def is_instruction(code):
    return code in INSTRUCTION_PURPOSES
