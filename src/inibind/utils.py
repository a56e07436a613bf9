from typing import Any, Iterable


class CaseInsensitiveKey:
    def __init__(self, key: str) -> None:
        self.key = key

    def __hash__(self) -> int:
        return hash(self.key.casefold())

    def __eq__(self, other: object) -> bool:
        match other:
            case CaseInsensitiveKey():
                return self.key.casefold() == other.key.casefold()
            case str():
                return self.key.casefold() == other.casefold()
            case _:
                return NotImplemented

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        return repr(self.key)


class CaseInsensitiveDict(dict[CaseInsensitiveKey, Any]):
    """`dict` whose string keys compare without regard to case.

    The original spelling of a key is kept and is what iteration yields
    (wrapped in a `CaseInsensitiveKey`).
    """

    @classmethod
    def first_wins(cls, items: Iterable[tuple[str, Any]]) -> "CaseInsensitiveDict":
        """Build from `items`, ignoring keys that fold onto an earlier one."""
        d = cls()

        for key, value in items:
            if key not in d:
                d[key] = value

        return d

    def __setitem__(self, key: "str | CaseInsensitiveKey", value: Any) -> None:
        super().__setitem__(_wrap(key), value)

    def __getitem__(self, key: "str | CaseInsensitiveKey") -> Any:
        return super().__getitem__(_wrap(key))

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = CaseInsensitiveKey(key)

        return super().__contains__(key)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default


def _wrap(key: "str | CaseInsensitiveKey") -> CaseInsensitiveKey:
    if isinstance(key, CaseInsensitiveKey):
        return key

    return CaseInsensitiveKey(key)
