"""
Logger Port

Architectural Intent:
- Diagnostic sink channels report warnings and failures to
- A stdlib logging.Logger satisfies this protocol as-is
- Registries cascade a replacement sink to every live channel
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
