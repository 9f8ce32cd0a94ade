from typing import Any, Protocol


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaConfiguration = dict[str, Any]


class Clipboard(Protocol):
    """External byte-copy capability (e.g. a browser or OS clipboard bridge)."""

    def __call__(self, text: str) -> None: ...
