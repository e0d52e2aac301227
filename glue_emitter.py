"""
C glue generation: one `extern "C"` export per bound constructor/method, plus a
`<Class>_Dispose` export per class, each forwarding into the C++ object model.
"""
from typing import Iterable, List, Optional

from code_builder import CodeBuilder
from out_types import ClassDecl, FunctionDecl, GlueFunction
from rules import GeneratorConfig, IgnoreFilter, NamingPolicy, class_name_of

SKIP_OPERATOR = "operator"
SKIP_IGNORED_PARAMETER = "ignored-parameter"
SKIP_UNSUPPORTED_REFERENCE = "unsupported-reference"


class GlueEmitter:
    def __init__(self, config: GeneratorConfig, ignore_filter: IgnoreFilter, naming: NamingPolicy,
                 class_names: Iterable[str] = ()):
        self.config = config
        self.ignore_filter = ignore_filter
        self.naming = naming
        # short names of the classes that get a wrapper
        self.class_names = frozenset(class_names)

    def header_lines(self) -> List[str]:
        return [
            "// THIS FILE IS AUTOGENERATED!",
            f'#include "{self.config.header_include}"',
            "",
            "#if (defined WIN32 || defined _WIN32)",
            '#define EXPORTS(returntype) extern "C" __declspec(dllexport) returntype __cdecl',
            "#else",
            '#define EXPORTS(returntype) extern "C" __attribute__((visibility("default"))) returntype',
            "#endif",
        ]

    def class_lines(self, cls: ClassDecl, functions: List[GlueFunction]) -> List[str]:
        lines = ["", f"/* {cls.qualified_name} */"]
        lines.extend(f.render() for f in functions)
        return lines

    def document(self, sections: List[List[str]]) -> str:
        code = CodeBuilder()
        code.fragment(self.header_lines())
        for section in sections:
            code.fragment(section)
        return code.output()

    def skip_reason(self, func: FunctionDecl) -> Optional[str]:
        """Decides whether `func` can be bound before anything is emitted for it."""
        if func.is_operator:
            return SKIP_OPERATOR
        for param in func.parameters:
            if self.ignore_filter.contains_ignored(param.type.display_name):
                return SKIP_IGNORED_PARAMETER
        for param in func.parameters:
            # only references to bound classes can cross as pointers to their handles
            if param.type.is_rvalue_reference:
                return SKIP_UNSUPPORTED_REFERENCE
            if param.type.is_reference and class_name_of(param.type.display_name) not in self.class_names:
                return SKIP_UNSUPPORTED_REFERENCE
        return None

    def emit_function(self, cls: ClassDecl, func: FunctionDecl, overload: int = 0) -> GlueFunction:
        class_name = cls.qualified_name
        is_static = func.is_static and not func.is_constructor

        param_defs = []
        invocations = []
        if not func.is_constructor and not is_static:
            param_defs.append(f"{class_name}* target")

        for param in func.parameters:
            native_type = param.type.display_name
            invocation = param.name
            # references cross the C boundary as pointers
            if param.type.is_reference:
                native_type = native_type[:-1] + "*"
                invocation = "*" + invocation
            param_defs.append(f"{native_type} {param.name}")
            invocations.append(invocation)

        args = ", ".join(invocations)
        if func.is_constructor:
            return_type = f"{class_name}*"
            body = f"return new {class_name}({args});"
        else:
            return_type = func.return_type.display_name
            call_target = f"{class_name}::" if is_static else "target->"
            result = "" if func.return_type.is_void else "return "
            body = f"{result}{call_target}{func.name}({args});"

        return GlueFunction(
            name=self.naming.export_name(cls.name, func.name, is_static, overload),
            return_type=return_type,
            parameters=param_defs,
            body=body,
        )

    def emit_dispose(self, cls: ClassDecl) -> GlueFunction:
        return GlueFunction(
            name=self.naming.dispose_name(cls.name),
            return_type="void",
            parameters=[f"{cls.qualified_name}* target"],
            body="delete target;",
        )
