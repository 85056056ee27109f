"""
Pipeline Errors
One exception type per failure kind; every message is a full sentence naming
the offending value and the constraint it broke
"""


class ImgrError(Exception):
    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeFailure(ImgrError):
    """Input could not be read or is not a decodable image"""
    kind = "DecodeFailure"


class InvalidParameter(ImgrError):
    """Caller-supplied value is out of range or malformed"""
    kind = "InvalidParameter"


class InvalidDimensions(ImgrError):
    """Source or computed dimensions are non-positive or above the hard limit"""
    kind = "InvalidDimensions"


class RegionOutOfBounds(ImgrError):
    """Clip region extends past the source image"""
    kind = "RegionOutOfBounds"


class EncodeFailure(ImgrError):
    """Output could not be written or encoded"""
    kind = "EncodeFailure"
