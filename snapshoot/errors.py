"""
Exceptions raised by the SnapShoot shot pipeline.

Both are expected outcomes of ordinary play: the controller catches
them, drops the gesture and returns to idle.
"""


class ShotPipelineError(Exception):
    """Base class for structural shot pipeline failures."""
    pass


class InsufficientInputError(ShotPipelineError):
    """The gesture has fewer than two points and cannot be normalized."""
    pass


class InvalidShotError(ShotPipelineError):
    """The gesture was classified INVALID, so no launch velocity exists.

    Attributes:
        analysis: The ShotAnalysis that was rejected, for diagnostics.
    """

    def __init__(self, message: str, analysis=None):
        super().__init__(message)
        self.analysis = analysis
