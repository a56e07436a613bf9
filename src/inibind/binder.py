"""Bind a section tree onto typed records.

Targets are dataclass instances (the top-level target may also be any object
whose class carries annotations). Every public field is matched, without
regard to case, first against the section's options and then against its
children:

* an option is converted to the field's annotation and assigned;
* a child section fills a nested dataclass field, built fresh;
* a child section fills a `list[SomeDataclass]` field with one record per
  grandchild, in declaration order;
* `dict`/`Mapping` fields without a matching option are left alone.

Options holding a string are handed to a converter when the field's type has
one: either a `from_string` classmethod (see `Parsable`) or an entry of the
binder's converter registry.

In strict mode the first missing field or type mismatch aborts the bind;
fields assigned before that keep their new values. Otherwise those fields
are skipped and logged at debug level. Converter failures always abort,
unless another arm of a union field accepts the value.
"""

import collections.abc
import dataclasses
import datetime
import decimal
import enum
import logging
import pathlib
import types
from typing import (
    Any,
    Callable,
    ClassVar,
    Mapping,
    Optional,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from .errors import (
    BindError,
    CapabilityError,
    MissingFieldError,
    SectionNotFoundError,
    TypeMismatchError,
)
from .section import Section
from .utils import CaseInsensitiveDict
from .value import Bool, Float, Int, List, Map, Null, String, Value

logger = logging.getLogger(__name__)

DEFAULT_STRICT = False

Converter = Callable[[str], Any]

DEFAULT_CONVERTERS: dict[type, Converter] = {
    datetime.datetime: datetime.datetime.fromisoformat,
    datetime.date: datetime.date.fromisoformat,
    datetime.time: datetime.time.fromisoformat,
    pathlib.Path: pathlib.Path,
    decimal.Decimal: decimal.Decimal,
}

_SEQUENCES = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPINGS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNIONS = (Union, types.UnionType)


@runtime_checkable
class Parsable(Protocol):
    """A type able to build itself from the string form of an option."""

    @classmethod
    def from_string(cls, text: str) -> Any:
        ...


class Shape(enum.Enum):
    SCALAR = enum.auto()
    RECORD = enum.auto()
    RECORDS = enum.auto()
    MAPPING = enum.auto()


class Binder:
    def __init__(
        self,
        strict: bool = DEFAULT_STRICT,
        converters: Optional[Mapping[type, Converter]] = None,
    ) -> None:
        self.strict = strict
        self.converters: dict[type, Converter] = {
            **DEFAULT_CONVERTERS,
            **(converters or {}),
        }

    def bind(self, section: Section, target: Any) -> None:
        """Assign the options and children of `section` onto `target`."""
        if isinstance(target, type):
            raise TypeError(
                f"expected a record instance, got the class {target.__name__}"
            )

        self._bind(section, target)

    def bind_section(self, tree: Section, name: str, target: Any) -> None:
        """Find the section called `name` anywhere in `tree` and bind it."""
        section = tree.find(name)

        if section is None:
            raise SectionNotFoundError(name)

        self.bind(section, target)

    def converter(self, tp: Any) -> Optional[Converter]:
        if not isinstance(tp, type):
            return None
        elif tp in self.converters:
            return self.converters[tp]
        elif isinstance(tp, Parsable):
            return tp.from_string

        for base in tp.__mro__[1:]:
            if base in self.converters:
                return self.converters[base]

        return None

    def _bind(self, section: Section, target: Any) -> None:
        options = CaseInsensitiveDict.first_wins(section.options.items())
        children = CaseInsensitiveDict.first_wins(section.children.items())

        for name, annotation in fields_of(type(target)):
            value = section.options.get(name) or options.get(name)

            if value is not None:
                try:
                    converted = self._convert(value, annotation, name)
                except TypeMismatchError as exc:
                    self._fail(exc)
                else:
                    setattr(target, name, converted)

                continue

            shape, tp = shape_of(annotation)
            child = section.children.get(name) or children.get(name)

            match shape:
                case Shape.MAPPING:
                    logger.debug("mapping field %r left as is", name)
                case Shape.RECORD if child is not None:
                    record = new_record(tp)
                    self._bind(child, record)
                    setattr(target, name, record)
                case Shape.RECORDS if child is not None:
                    records = list(getattr(target, name, None) or ())
                    setattr(target, name, records)

                    for grandchild in child:
                        record = new_record(tp)
                        self._bind(grandchild, record)
                        records.append(record)
                case _:
                    self._fail(MissingFieldError(name, section.name))

    def _fail(self, exc: BindError) -> None:
        if self.strict:
            raise exc

        logger.debug("skipping field: %s", exc)

    def _convert(self, value: Value, tp: Any, field: str) -> Any:
        if tp is Any:
            return value.unwrap()

        origin = get_origin(tp)
        args = get_args(tp)

        if origin in _UNIONS:
            return self._convert_union(value, tp, field)

        if isinstance(value, String) and (convert := self.converter(tp)):
            try:
                return convert(value.text)
            except Exception as exc:
                raise CapabilityError(field, str(exc)) from exc

        match value:
            case String(text) if tp is str:
                return text
            case Bool(flag) if tp is bool:
                return flag
            case Int(number) if tp is int:
                return number
            case Float(number) if tp is float:
                return number
            case Null() if tp is None or tp is types.NoneType:
                return None
            case List(items) if tp in _SEQUENCES or origin in _SEQUENCES:
                return self._convert_sequence(items, origin or tp, args, field)
            case Map(items) if tp in _MAPPINGS or origin in _MAPPINGS:
                return self._convert_mapping(items, tp, args, field)

        raise TypeMismatchError(describe(tp), value.kind, field)

    def _convert_union(self, value: Value, tp: Any, field: str) -> Any:
        arms = get_args(tp)

        if isinstance(value, Null) and types.NoneType in arms:
            return None

        failure: Optional[CapabilityError] = None

        for arm in arms:
            if arm is types.NoneType:
                continue

            try:
                return self._convert(value, arm, field)
            except TypeMismatchError:
                continue
            except CapabilityError as exc:
                failure = exc

        if failure is not None:
            raise failure

        raise TypeMismatchError(describe(tp), value.kind, field)

    def _convert_sequence(
        self,
        items: list[Value],
        container: Any,
        args: tuple[Any, ...],
        field: str,
    ) -> Any:
        if container is tuple and args and args[-1] is not Ellipsis:
            if len(args) != len(items):
                raise TypeMismatchError(
                    f"{len(args)} items", f"{len(items)} items", field
                )

            return tuple(
                self._convert(item, arg, field) for item, arg in zip(items, args)
            )

        element = args[0] if args else Any
        converted = [self._convert(item, element, field) for item in items]

        if container in (tuple, set, frozenset):
            return container(converted)

        return converted

    def _convert_mapping(
        self,
        items: dict[str, Value],
        tp: Any,
        args: tuple[Any, ...],
        field: str,
    ) -> dict[str, Any]:
        key, element = args if args else (str, Any)

        if key is not str and key is not Any:
            raise TypeMismatchError(describe(tp), Map.kind, field)

        return {
            name: self._convert(value, element, field)
            for name, value in items.items()
        }


def fields_of(cls: type) -> list[tuple[str, Any]]:
    """Public fields of `cls` with their resolved annotations, in order."""
    hints = get_type_hints(cls)

    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        names = list(hints)

    return [
        (name, hints[name])
        for name in names
        if not name.startswith("_") and get_origin(hints[name]) is not ClassVar
    ]


def is_record(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def shape_of(annotation: Any) -> tuple[Shape, Any]:
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin in _UNIONS:
        arms = [arm for arm in args if arm is not types.NoneType]

        if len(arms) == 1:
            return shape_of(arms[0])

        return Shape.SCALAR, annotation
    elif is_record(annotation):
        return Shape.RECORD, annotation
    elif origin in _SEQUENCES and args and is_record(args[0]):
        return Shape.RECORDS, args[0]
    elif annotation in _MAPPINGS or origin in _MAPPINGS:
        return Shape.MAPPING, annotation

    return Shape.SCALAR, annotation


def new_record(cls: type) -> Any:
    """Instantiate the dataclass `cls`, zero-filling fields without defaults."""
    hints = get_type_hints(cls)
    kwargs = {
        f.name: zero_value(hints[f.name])
        for f in dataclasses.fields(cls)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }

    return cls(**kwargs)


def zero_value(tp: Any) -> Any:
    origin = get_origin(tp) or tp

    if origin in _UNIONS:
        return None
    elif is_record(tp):
        return new_record(tp)
    elif origin in (str, int, float, bool, list, tuple, set, frozenset, dict):
        return origin()
    elif origin in _SEQUENCES:
        return []
    elif origin in _MAPPINGS:
        return {}

    return None


def describe(tp: Any) -> str:
    if get_origin(tp) is None and hasattr(tp, "__name__"):
        return tp.__name__

    return repr(tp)
