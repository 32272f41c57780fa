class PaperbakError(Exception):
    """Base class for every error that stops a print job."""


class ConfigurationError(PaperbakError, ValueError):
    pass


class GeometryError(PaperbakError, ValueError):
    pass


class ResourceError(PaperbakError, MemoryError):
    pass


class BitmapWriteError(PaperbakError, OSError):
    pass


class InputError(PaperbakError, ValueError):
    pass
