"""Error taxonomy for Enso API calls."""


class EnsoError(Exception):
    """Base class for failures talking to the Enso API"""
    pass


class TransportFailure(EnsoError):
    """Connectivity or HTTP-level failure (no usable response)"""
    pass


class DecodeFailure(EnsoError):
    """Response arrived but its payload did not have the expected shape"""
    pass
