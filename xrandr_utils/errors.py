class XrandrUtilsError(RuntimeError):
    pass


class UsageError(XrandrUtilsError):
    pass


class InputError(XrandrUtilsError):
    """Topology text or monitor listing could not be obtained."""


class DisplayLookupError(XrandrUtilsError):
    pass


class ValidationError(XrandrUtilsError):
    pass


class DecodeError(XrandrUtilsError):
    pass


class ReconfigureError(XrandrUtilsError):
    pass
