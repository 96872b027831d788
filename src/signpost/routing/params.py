"""Path parameter converters.

Built-in converters for placeholder segments like ``{id:int}``.
Untyped placeholders (``:name`` or ``{name}``) use ``str``.
"""

import re

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
}

_COMPILED: dict[str, re.Pattern[str]] = {
    name: re.compile(pattern) for name, (pattern, _) in CONVERTERS.items()
}


def param_matches(value: str, param_type: str) -> bool:
    """True if *value* is a non-empty segment accepted by *param_type*."""
    return bool(value) and _COMPILED[param_type].fullmatch(value) is not None


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)
