# Category names with business meaning. The agenda groups slots under
# these and the share/export warnings look for them.
INSTRUCTOR_CATEGORY = "Instructor"
TOW_PILOT_CATEGORY = "Tow pilot"

# Flight forms only accept a pilot in command holding one of these
AIRPLANE_PILOT_CATEGORY = "Airplane pilot"
GLIDER_PILOT_CATEGORY = "Glider pilot"

UNKNOWN_PILOT = "Unknown Pilot"
