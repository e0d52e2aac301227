"""
C# binding generation.

Every glue export gets a `[DllImport]` declaration with the exact same name and an
API member on the owning wrapper class. Wrapper classes own a single native handle
and release it through the class's `_Dispose` export.
"""
from typing import Iterable, List, Optional

from code_builder import CodeBuilder
from out_types import BindingClass, BindingDeclaration, ClassDecl, FunctionDecl
from rules import GeneratorConfig, NamingPolicy, TypeMapper, class_name_of

HANDLE = "void*"
NULL_HANDLE = "(void*) IntPtr.Zero"

CSHARP_KEYWORDS = frozenset("""
abstract as base bool break byte case catch char checked class const continue decimal
default delegate do double else enum event explicit extern false finally fixed float
for foreach goto if implicit in int interface internal is lock long namespace new null
object operator out override params private protected public readonly ref return sbyte
sealed short sizeof stackalloc static string struct switch this throw true try typeof
uint ulong unchecked unsafe ushort using virtual void volatile while
""".split())


def escape_identifier(name: str) -> str:
    """`out` -> `@out`; keywords are only valid C# identifiers with the @ prefix."""
    return f"@{name}" if name in CSHARP_KEYWORDS else name


class CSharpEmitter:
    def __init__(self, config: GeneratorConfig, type_mapper: TypeMapper, naming: NamingPolicy,
                 wrapper_classes: Iterable[str] = ()):
        self.config = config
        self.type_mapper = type_mapper
        self.naming = naming
        # native short names of every class that gets a wrapper
        self.wrapper_classes = frozenset(wrapper_classes)

    def _dll_import(self) -> str:
        return f"[DllImport({self.config.native_lib_expr}, CallingConvention = CallingConvention.Cdecl)]"

    def _wrapper_for(self, native_type: str) -> Optional[str]:
        name = class_name_of(native_type)
        if name in self.wrapper_classes:
            return self.naming.host_class_name(name)
        return None

    def summary_lines(self, comment: str) -> List[str]:
        lines = ["/// <summary>"]
        if comment and comment.strip():
            lines.extend(f"/// {line}".rstrip() for line in comment.split("\n"))
        lines.append("/// </summary>")
        return lines

    def emit_function(self, cls: Optional[ClassDecl], func: FunctionDecl, export_name: str) -> BindingDeclaration:
        is_static = func.is_static and not func.is_constructor

        import_params = []
        api_params = []
        call_args = []
        if not func.is_constructor and not is_static:
            import_params.append(f"{HANDLE} target")
            call_args.append("this.Handle")

        for param in func.parameters:
            native_type = param.type.display_name
            param_name = escape_identifier(param.name)
            cs_type = self.type_mapper.map(native_type)
            wrapper = self._wrapper_for(native_type)
            if wrapper is not None:
                import_params.append(f"{HANDLE} {param_name}")
                api_params.append(f"{wrapper} {param_name}")
                call_args.append(f"{param_name}.Handle")
            elif TypeMapper.is_native_int(cs_type):
                import_params.append(f"IntPtr {param_name}")
                api_params.append(f"long {param_name}")
                call_args.append(f"(IntPtr){param_name}")
            else:
                import_params.append(f"{cs_type} {param_name}")
                api_params.append(f"{cs_type} {param_name}")
                call_args.append(param_name)

        call = f"{export_name}({', '.join(call_args)})"
        api_type = None
        if func.is_constructor:
            import_type = HANDLE
            call = f"this.Handle = {call}"
        else:
            import_type = api_type = self.type_mapper.map(func.return_type.display_name)
            if TypeMapper.is_native_int(import_type):
                import_type, api_type = "IntPtr", "long"
                call = f"(long){call}"
            elif import_type == "bool":
                # bool is not blittable
                import_type = "byte"
                call = f"{call} > 0"

        api_name = self.naming.api_name(
            func.name, is_static=is_static, is_constructor=func.is_constructor,
            class_name=cls.name if cls is not None else None)
        modifiers = "public static" if is_static else "public"
        if func.is_constructor:
            signature = f"public {api_name}({', '.join(api_params)})"
        elif NamingPolicy.is_property(func.name, len(func.parameters)):
            signature = f"{modifiers} {api_type} {api_name}"
        else:
            signature = f"{modifiers} {api_type} {api_name}({', '.join(api_params)})"

        return BindingDeclaration(
            export_name=export_name,
            import_lines=[
                self._dll_import(),
                f"private static extern {import_type} {export_name}({', '.join(import_params)});",
            ],
            api_lines=self.summary_lines(func.comment) + [f"{signature} => {call};"],
        )

    def class_lines(self, binding: BindingClass) -> List[str]:
        name = binding.name
        dispose = self.naming.dispose_name(binding.native_name)
        code = CodeBuilder()
        with code.block(f"public unsafe partial class {name} : IDisposable"):
            code.fragment(self.summary_lines("Pointer to the underlying native object"))
            code.line(f"public {HANDLE} Handle {{ get; private set; }}")
            code.line()
            code.fragment(self.summary_lines(f"Create {name} from a native pointer"))
            code.line(f"public {name}({HANDLE} handle) => this.Handle = handle;")
            code.line()
            for decl in binding.declarations:
                code.fragment(decl.api_lines)
                code.line()
            code.line("#region DllImports")
            for decl in binding.declarations:
                code.fragment(decl.import_lines)
            code.line("#endregion")
            code.line()
            code.line("private readonly object disposeSync = new object();")
            code.line()
            with code.block("public void Dispose()"):
                with code.block(f"if (Handle != {NULL_HANDLE})"):
                    with code.block("lock (disposeSync)"):
                        with code.block(f"if (Handle != {NULL_HANDLE})"):
                            code.line(f"{dispose}(Handle);")
                            code.line(f"Handle = {NULL_HANDLE};")
            code.line()
            code.line(f"~{name}() => Dispose();")
            code.line()
            code.line(self._dll_import())
            code.line(f"private static extern void {dispose}({HANDLE} target);")
        return code.output().rstrip("\n").split("\n")

    def document(self, classes: List[BindingClass]) -> str:
        code = CodeBuilder()
        code.lines(
            "// THIS FILE IS AUTOGENERATED!",
            "",
            "using System;",
            "using System.Runtime.InteropServices;",
            "",
        )
        with code.block(f"namespace {self.config.namespace}"):
            for i, binding in enumerate(classes):
                if i:
                    code.line()
                code.fragment(self.class_lines(binding))
        return code.output()
