class SpacetimeHashError(Exception):
    """Base class for errors raised while producing spacetime hash tokens."""

    code = "SPACETIME_HASH_ERROR"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidArgument(SpacetimeHashError, ValueError):
    """A record or quantization parameter is out of its valid range."""

    code = "INVALID_ARGUMENT"


class ConfigurationError(SpacetimeHashError, RuntimeError):
    """The hasher cannot run with the configuration it was given (e.g. no key)."""

    code = "HASH_KEY_MISSING"
