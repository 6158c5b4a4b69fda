from typing import Any, Final

EMPTY: Final[Any] = object()  # pyright: ignore[reportExplicitAny]
