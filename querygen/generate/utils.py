"""Small string helpers shared by the code generator."""

from __future__ import annotations


class GenerateError(Exception):
    """Raised when a query method or its SQL template is invalid."""


def is_capitalize(s: str) -> bool:
    """Return True if ``s`` starts with an ASCII capital letter."""
    return bool(s) and "A" <= s[0] <= "Z"


def is_end(ch: str) -> bool:
    """Return True if ``ch`` cannot be part of a SQL variable name."""
    if ch.isascii() and (ch.isalnum() or ch in "-_."):
        return False
    return True


def del_pointer_sym(name: str) -> str:
    """Strip leading pointer markers from a type name."""
    return name.lstrip("*")


def get_package_name(full_name: str) -> str:
    """Return the package part of a qualified type name such as ``*model.User``."""
    return del_pointer_sym(full_name).split(".")[0]


def get_pure_name(s: str) -> str:
    """Return the lower-cased first letter of a type name, ignoring pointer markers."""
    return del_pointer_sym(s).lower()[0]


def get_struct_name(t: str) -> str:
    """Return the last dotted element of a qualified type name."""
    return t.split(".")[-1]


def uncapitalize(s: str) -> str:
    """Lower-case the first character of ``s``."""
    if not s:
        return ""
    return s[:1].lower() + s[1:]


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _go_quote(text: str) -> str:
    """Return ``text`` as a double-quoted string literal of the generated code."""
    out = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
            continue
        code = ord(ch)
        if ch.isprintable() and code != 0x7F:
            out.append(ch)
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)