from typing import Any, Dict, Iterable, Optional, Type, TypeVar, Union

T = TypeVar("T", bound=Type)

_MISSING = object()


def props(cls: T) -> T:
    """Decorator to mark a class as a component's props definition.

    Annotated names are the declared props; class-level values are the
    defaults used when a parent does not bind the prop.

    Usage:
        @props
        class Props:
            Title: str
            Count: int = 0
    """
    setattr(cls, "_pyvue_props", True)
    return cls


def is_props_class(obj: Any) -> bool:
    return isinstance(obj, type) and getattr(obj, "_pyvue_props", False)


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


class PropSpec:
    """Declared props of a component, with their defaults."""

    def __init__(self, source: Union[Type, Iterable[str], None] = None) -> None:
        self.defaults: Dict[str, Any] = {}
        self.names: Dict[str, str] = {}  # casefolded -> declared
        if source is None:
            return
        if is_props_class(source):
            for name in getattr(source, "__annotations__", {}):
                self._declare(name, getattr(source, name, _MISSING))
        elif isinstance(source, type):
            raise TypeError(f"{source.__name__} is not decorated with @props")
        else:
            for name in source:
                self._declare(name, _MISSING)

    def _declare(self, name: str, default: Any) -> None:
        declared = capitalize(name)
        self.names[declared.casefold()] = declared
        if default is not _MISSING:
            self.defaults[declared] = default

    def resolve(self, name: str) -> Optional[str]:
        """Declared prop name for a bind key, or None.

        Matching ignores case because HTML parsing lowercases attribute names.
        """
        return self.names.get(capitalize(name).casefold())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self):
        return iter(self.names.values())

    def __len__(self) -> int:
        return len(self.names)
