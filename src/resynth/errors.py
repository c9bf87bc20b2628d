"""Exception types raised by resynth."""


class ResynthError(Exception):
    """Base class for all resynth errors."""


class InputError(ResynthError):
    """The source audio is missing, corrupt, or in an unsupported format."""


class ConfigurationError(ResynthError):
    """The instrument patch or program selection is unusable."""


class SynthesisError(ResynthError):
    """The synthesis engine failed while rendering notes."""
