"""
Report errors.

Every failure in the report pipeline is surfaced to the user with a
message; none of them is retried automatically. An empty result is not an
error and has no exception here.
"""


class ReportError(Exception):
    default_message = "The report could not be generated."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(ReportError):
    """Missing dates or an end date before the start date."""

    default_message = "Select a valid date range."


class FetchFailure(ReportError):
    """The flight store could not be read. Partial results are discarded."""

    default_message = "Could not load the flights. Try again."


class ExportFailure(ReportError):
    """A CSV/PDF file could not be produced. The on-screen report is unaffected."""

    default_message = "The export could not be generated."
