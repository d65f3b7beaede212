class PaisaTrackError(Exception):
    """Base class for errors raised by the tracker."""


class ValidationError(PaisaTrackError, ValueError):
    """Rejected user input: bad amount, blank field, inverted range, duplicate budget."""


class ParseError(PaisaTrackError, ValueError):
    """Persisted data that cannot be read back into records."""


class DateParseError(ParseError):
    pass


class NotFoundError(PaisaTrackError, LookupError):
    pass
