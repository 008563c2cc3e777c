class GpxThinError(Exception):
    """Base class for all errors raised by gpxthin."""


class EmptyTrackError(GpxThinError, ValueError):
    """A track has no points to reduce."""


class InvalidParameterError(GpxThinError, ValueError):
    """A configuration value is outside its documented range."""


class InvalidPointError(GpxThinError, ValueError):
    """A track point has a coordinate that cannot be processed (NaN or infinite)."""
