from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

# Platform-width placeholder produced for `size_t`; the C# emitter marshals it
# through IntPtr and exposes it as long.
NATIVE_INT = "nint"

DEFAULT_IGNORED_NAMES = (
    "iterator::scopeindex_t",
    "simdjson",
    "ParsedJson::InvalidJSON",
    "basic_ostream",
    "padded_string",
)

@dataclass(frozen=True)
class RenameRule:
    """Renames a generated API member. `static_only` limits it to static functions."""
    api_name: str
    replacement: str
    static_only: bool = False

    def applies(self, api_name: str, is_static: bool) -> bool:
        if api_name != self.api_name:
            return False
        return is_static or not self.static_only

DEFAULT_RENAME_RULES = (
    # the instance method of the same native name would clash with it
    RenameRule("IsObjectOrArray", "IsObjectOrArrayStatic", static_only=True),
    # object.GetType() exists on every C# object
    RenameRule("GetType", "GetTokenType"),
)

@dataclass(frozen=True)
class GeneratorConfig:
    ignored_names: Tuple[str, ...] = DEFAULT_IGNORED_NAMES
    main_class_name: str = "SimdJsonN"
    namespace: str = "SimdJsonSharp"
    header_include: str = "simdjson.h"
    type_aliases: Tuple[Tuple[str, str], ...] = (
        ("iterator", "ParsedJsonIteratorN"),
        ("ParsedJson", "ParsedJsonN"),
    )
    rename_rules: Tuple[RenameRule, ...] = DEFAULT_RENAME_RULES
    first_constructor_only: bool = True

    @property
    def native_lib_expr(self) -> str:
        return f"{self.main_class_name}.NativeLib"

    def with_overrides(self, **changes) -> 'GeneratorConfig':
        return replace(self, **changes)


class TypeMapper:
    """Maps native type names to C# type names."""

    PRIMITIVES = {
        "uint8_t": "byte",
        "uint16_t": "ushort",
        "uint32_t": "uint",
        "uint64_t": "ulong",
        "int8_t": "sbyte",
        "int16_t": "short",
        "int32_t": "int",
        "int64_t": "long",
        "size_t": NATIVE_INT,
        # C# has no one-byte char
        "const char": "sbyte",
        "char": "sbyte",
    }

    def __init__(self, config: GeneratorConfig):
        self.type_mappings: Dict[str, str] = dict(self.PRIMITIVES)
        self.type_mappings.update(config.type_aliases)

    def map(self, native_type: str) -> str:
        if native_type.endswith("*"):
            return self.map(native_type[:-1]) + "*"
        if native_type.endswith("&"):
            native_type = native_type[:-1]
        return self.type_mappings.get(native_type, native_type)

    @staticmethod
    def is_native_int(cs_type: str) -> bool:
        return cs_type == NATIVE_INT


class IgnoreFilter:
    """Denylist of native names that are not bound."""

    def __init__(self, config: GeneratorConfig):
        self.names = frozenset(config.ignored_names)
        # sorted so the substring test reports the same culprit every run
        self._ordered = tuple(sorted(self.names))

    def is_ignored(self, name: str) -> bool:
        return name in self.names

    def contains_ignored(self, type_name: str) -> bool:
        return self.find_ignored(type_name) is not None

    def find_ignored(self, type_name: str) -> Optional[str]:
        for name in self._ordered:
            if name in type_name:
                return name
        return None


def class_name_of(type_name: str) -> str:
    """Bare class name named by a parameter type: `const Document::Node&` -> `Node`"""
    name = type_name.rstrip("*&").strip()
    if name.startswith("const "):
        name = name[len("const "):]
    if name.endswith(" const"):
        name = name[:-len(" const")]
    return name.strip().rsplit("::", 1)[-1]


def to_camel_case(name: str) -> str:
    """snake_case -> CamelCase, e.g. is_valid -> IsValid"""
    return "".join(part[0].upper() + part[1:] for part in name.split("_") if part)


class NamingPolicy:
    def __init__(self, config: GeneratorConfig, type_mapper: TypeMapper):
        self.config = config
        self.type_mapper = type_mapper

    def host_class_name(self, native_name: str) -> str:
        return self.type_mapper.map(native_name)

    def export_name(self, class_name: str, func_name: str, is_static: bool, overload: int = 0) -> str:
        """Class_function for members, Class_s_function for statics.

        Overloads after the first get a `_<n>` suffix, C exports cannot share a name.
        """
        prefix = f"{class_name}_s_" if is_static else f"{class_name}_"
        name = prefix + func_name
        if overload:
            name += f"_{overload}"
        return name

    def dispose_name(self, class_name: str) -> str:
        return f"{class_name}_Dispose"

    def api_name(self, func_name: str, is_static: bool = False, is_constructor: bool = False,
                 class_name: Optional[str] = None) -> str:
        if is_constructor:
            if class_name is None:
                return self.config.main_class_name
            return self.host_class_name(class_name)

        api_name = to_camel_case(func_name)
        for rule in self.config.rename_rules:
            if rule.applies(api_name, is_static):
                return rule.replacement
        return api_name

    @staticmethod
    def is_property(func_name: str, param_count: int, is_constructor: bool = False) -> bool:
        return func_name.startswith("is") and param_count == 0 and not is_constructor
