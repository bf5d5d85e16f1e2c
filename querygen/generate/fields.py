"""Checks and options applied to generated model fields."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from querygen.generate.utils import GenerateError
from querygen.model.base import Field
from querygen.model.options import ModifyFieldOpt

_MODEL_NAME = re.compile(r"\w+", re.ASCII)


def check_struct_name(name: str) -> None:
    """Raise if ``name`` is not a valid exported model name; an empty name passes."""
    if not name:
        return
    if not _MODEL_NAME.fullmatch(name):
        raise GenerateError("model name cannot contains invalid character")
    if not "A" <= name[0] <= "Z":
        raise GenerateError("model name must be initial capital")


def filter_field(field: Field, opts: Iterable[ModifyFieldOpt]) -> Optional[Field]:
    """Return ``field``, or None if any option filters it out."""
    for opt in opts:
        if opt.operator()(field) is None:
            return None
    return field


def modify_field(field: Optional[Field], opts: Iterable[ModifyFieldOpt]) -> Optional[Field]:
    """Pass ``field`` through every option in turn."""
    for opt in opts:
        field = opt.operator()(field)
    return field