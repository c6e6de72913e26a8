"""Exceptions raised by lazy-clone services and caught at the CLI boundary."""


class LazyCloneError(RuntimeError):
    """Fatal setup failure; aborts the run with a non-zero exit."""


class ConfigError(LazyCloneError):
    pass


class AuthError(LazyCloneError):
    pass


class NamespaceError(LazyCloneError):
    pass


class EnumerationError(LazyCloneError):
    pass


class DispatchError(LazyCloneError):
    pass
