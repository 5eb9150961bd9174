"""Read-only, case-insensitive request headers.

Built from the raw ``(name, value)`` byte pairs of an ASGI scope.
Names are lowered once at construction; values decode lazily.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive view over raw ASGI header pairs.

    ``headers["Content-Type"]`` returns the first value for that name.
    ``get_list`` returns every value (repeated headers are legal).
    """

    __slots__ = ("_lowered", "_raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw
        self._lowered = tuple(
            (name.decode("latin-1").lower(), value) for name, value in raw
        )

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._lowered:
            if name == wanted:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._lowered)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._lowered))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._lowered))

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in arrival order."""
        wanted = key.lower()
        return [value.decode("latin-1") for name, value in self._lowered if name == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The original byte pairs, untouched."""
        return self._raw
