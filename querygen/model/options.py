"""Options that adjust generated model fields and methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Optional

from querygen.model.base import Field

FIELD_TYPE = "field"
METHOD_TYPE = "method"

FieldOperator = Callable[[Optional[Field]], Optional[Field]]


class Option:
    """Base of all model options."""

    OPTION_TYPE: ClassVar[str] = ""

    def option_type(self) -> str:
        return self.OPTION_TYPE


@dataclass(frozen=True)
class ModifyFieldOpt(Option):
    """Changes a generated field."""

    func: FieldOperator
    OPTION_TYPE: ClassVar[str] = FIELD_TYPE

    def operator(self) -> FieldOperator:
        return self.func

    def __call__(self, field: Optional[Field]) -> Optional[Field]:
        return self.func(field)


class FilterFieldOpt(ModifyFieldOpt):
    """Drops a field when its operator returns None."""


class CreateFieldOpt(ModifyFieldOpt):
    """Adds a new field; its operator is called with None."""


@dataclass(frozen=True)
class AddMethodOpt(Option):
    """Supplies custom methods to attach to a model."""

    func: Callable[[], Iterable[Any]]
    OPTION_TYPE: ClassVar[str] = METHOD_TYPE

    def methods(self) -> list[Any]:
        return list(self.func())


def sort_options(
    opts: Iterable[Option],
) -> tuple[list[ModifyFieldOpt], list[FilterFieldOpt], list[CreateFieldOpt], list[AddMethodOpt]]:
    """Split options by kind: modify, filter, create and method options."""
    modify: list[ModifyFieldOpt] = []
    filters: list[FilterFieldOpt] = []
    creates: list[CreateFieldOpt] = []
    methods: list[AddMethodOpt] = []
    for opt in opts:
        if isinstance(opt, FilterFieldOpt):
            filters.append(opt)
        elif isinstance(opt, CreateFieldOpt):
            creates.append(opt)
        elif isinstance(opt, ModifyFieldOpt):
            modify.append(opt)
        elif isinstance(opt, AddMethodOpt):
            methods.append(opt)
    return modify, filters, creates, methods