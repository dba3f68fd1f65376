"""
Predictor Errors
================
Error taxonomy shared by the matrix layer, the network and the engine
"""


class PredictorError(Exception):
    """Base class for every error raised by the predictor"""


class ShapeMismatchError(PredictorError, ValueError):
    """Two matrix operands have incompatible dimensions"""


class DimensionMismatchError(PredictorError, ValueError):
    """An input or target vector does not match the configured layer sizes"""


class InvalidConfigError(PredictorError, ValueError):
    """A construction parameter is out of range"""
