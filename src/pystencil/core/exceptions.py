import inspect
from typing import Any, Callable, Optional

ROOT_HINT = (
    "  Are you trying to specify props for the root instance of the template? "
    "Try the following instead:\n"
    "  {pystencil.ROOT: {'YourProp': 'Your Value'}}"
)


class StencilError(Exception):
    """Base class for all pystencil errors."""

    pass


class UnknownSourceType(StencilError):
    """Raised when a source node's class has no reflection metadata."""

    def __init__(self, class_name: str, source: Any = None):
        self.class_name = class_name
        self.source = source
        super().__init__(f"Unknown instance type '{class_name}'")


class InvalidSourceNode(StencilError, TypeError):
    """Raised when something other than a source node is handed to the builder."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Expected a source node for instance argument, got {type(value).__name__}"
        )


class InvalidSelectorsMap(StencilError, TypeError):
    """Raised when the selectors argument is neither a mapping nor pairs."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            "Expected a mapping {Selector: Changes} or None for selectors, got "
            f"{type(value).__name__}"
        )


class InvalidSelectorType(StencilError, TypeError):
    """Raised on a selector that is not a name, ROOT or a predicate."""

    def __init__(self, selector: Any):
        self.selector = selector
        super().__init__(
            f"Unknown Selector type {type(selector).__name__} "
            "(expected str | callable | pystencil.ROOT)\n" + ROOT_HINT
        )


class InvalidChangesType(StencilError, TypeError):
    """Raised on a changes value that is neither a mapping nor a callback."""

    def __init__(self, changes: Any, hint: bool = True):
        self.changes = changes
        message = (
            f"Unknown Changes type {type(changes).__name__} "
            "(expected mapping | callable)"
        )
        if hint:
            message += "\n" + ROOT_HINT
        super().__init__(message)


def describe_callable(fn: Callable[..., Any]) -> str:
    """Return ``file:line: qualname`` for a callable, as far as it is known."""
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    try:
        source_file: Optional[str] = inspect.getsourcefile(fn)
    except TypeError:
        source_file = None
    code = getattr(fn, "__code__", None)
    line = code.co_firstlineno if code is not None else None
    return f"{source_file or '[unknown]'}:{line or 'unknown'}: {name or 'unknown'}"


class InvalidCallbackResult(StencilError, TypeError):
    """Raised when a ChangesCallback returns something other than a mapping."""

    def __init__(self, callback: Callable[..., Any], result: Any, source: Any = None):
        self.callback = callback
        self.result = result
        self.source = source
        self.location = describe_callable(callback)
        super().__init__(
            f"Expected a mapping from ChangesCallback, got {type(result).__name__}. "
            f"Callback: {self.location}"
        )
