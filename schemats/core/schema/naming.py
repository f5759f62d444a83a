# ============================================================================
# CUSTOM TYPE NAMING
# ============================================================================
# STATUS: Core - Identifier transforms for custom types and domains
# PURPOSE: Turn raw catalog type/domain names into legal TS identifiers
# CREATED: 19 OCT 2026
# EXPORTS: NameTransform, PassThroughTransform, CamelCaseTransform,
#          UnderscoreTransform, CallableTransform, resolve_name_transform
# ============================================================================
"""
Custom Type Naming Strategies.

A strategy is chosen once when the configuration is loaded:

    Setting       Raw name "validated_json"   Raw name "my-type"
    ----------    -------------------------   ------------------
    my_type       validated_json              mytype
    PgMyType      PgValidatedJson             PgMytype
    PgMy_type     PgValidated_json            PgMy_type

or a user-supplied function (a Python callable, or a "module:function"
import path in a config file). User results are not validated.
"""

import importlib
import re
from abc import ABC, abstractmethod
from typing import Callable, Union

# JS-style \W: anything outside [A-Za-z0-9_]
_NON_WORD = re.compile(r'\W+', re.ASCII)
_UNDERSCORE_PAIR = re.compile(r'_[^_]')


class NameTransform(ABC):
    """Deterministic raw-name -> identifier transform."""

    name: str = ""

    @abstractmethod
    def __call__(self, raw_name: str) -> str:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class PassThroughTransform(NameTransform):
    """Strip non-word characters only."""

    name = "my_type"

    def __call__(self, raw_name: str) -> str:
        return _NON_WORD.sub('', raw_name)


class CamelCaseTransform(NameTransform):
    """Strip non-word characters, prefix Pg_, then camel-join on underscores."""

    name = "PgMyType"

    def __call__(self, raw_name: str) -> str:
        legalised = 'Pg_' + _NON_WORD.sub('', raw_name)
        return _UNDERSCORE_PAIR.sub(lambda m: m.group(0)[1].upper(), legalised)


class UnderscoreTransform(NameTransform):
    """Non-word runs become underscores; prefix Pg and capitalise."""

    name = "PgMy_type"

    def __call__(self, raw_name: str) -> str:
        underscored = _NON_WORD.sub('_', raw_name)
        return 'Pg' + underscored[:1].upper() + underscored[1:]


class CallableTransform(NameTransform):
    """Delegate to a user-supplied function."""

    def __init__(self, func: Callable[[str], str], name: str = ""):
        self.func = func
        self.name = name or getattr(func, "__qualname__", repr(func))

    def __call__(self, raw_name: str) -> str:
        return self.func(raw_name)


_BUILTIN_TRANSFORMS = {
    transform.name: transform
    for transform in (PassThroughTransform(), CamelCaseTransform(), UnderscoreTransform())
}


def _import_callable(path: str) -> Callable[[str], str]:
    """Import "package.module:function"."""
    module_name, _, attr = path.partition(':')
    if not module_name or not attr:
        raise ValueError(f"Invalid import path for custom type transform: {path!r}")
    module = importlib.import_module(module_name)
    func = getattr(module, attr, None)
    if not callable(func):
        raise ValueError(f"Custom type transform {path!r} is not callable")
    return func


def resolve_name_transform(
    setting: Union[str, Callable[[str], str], NameTransform],
) -> NameTransform:
    """
    Resolve a configuration value to a NameTransform.

    Args:
        setting: "my_type", "PgMyType", "PgMy_type", "module:function",
                 a callable, or an existing NameTransform

    Raises:
        ValueError: Unknown strategy name or unimportable function
    """
    if isinstance(setting, NameTransform):
        return setting
    if isinstance(setting, str):
        if setting in _BUILTIN_TRANSFORMS:
            return _BUILTIN_TRANSFORMS[setting]
        if ':' in setting:
            return CallableTransform(_import_callable(setting), name=setting)
        raise ValueError(
            f"Unknown custom type transform {setting!r}. "
            f"Expected one of {sorted(_BUILTIN_TRANSFORMS)} or 'module:function'"
        )
    if callable(setting):
        return CallableTransform(setting)
    raise ValueError(f"Unsupported custom type transform: {setting!r}")


__all__ = [
    "NameTransform",
    "PassThroughTransform",
    "CamelCaseTransform",
    "UnderscoreTransform",
    "CallableTransform",
    "resolve_name_transform",
]
