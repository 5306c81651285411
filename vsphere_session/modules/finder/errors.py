"""Errors raised while resolving inventory paths."""


class FinderError(Exception):
    """Base class for inventory resolution failures."""

    def __init__(self, kind: str, path: str = ""):
        self.kind = kind
        self.path = path
        super().__init__(self._message())

    def _message(self) -> str:
        raise NotImplementedError


class NotFoundError(FinderError):
    """No object of the requested kind matches the path."""

    def _message(self) -> str:
        return f"{self.kind} '{self.path}' not found"


class MultipleFoundError(FinderError):
    """The path matches more than one object of the requested kind."""

    def _message(self) -> str:
        return f"path '{self.path}' resolves to multiple {self.kind}s"


class DefaultNotFoundError(FinderError):
    """No path was given and no object of the requested kind exists."""

    def _message(self) -> str:
        return f"no default {self.kind} found"


class DefaultMultipleFoundError(FinderError):
    """No path was given and more than one candidate exists."""

    def _message(self) -> str:
        return f"default {self.kind} resolves to multiple instances, please specify"
