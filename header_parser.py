import os
import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

# Ensure libclang is installed:
# pip install libclang
from clang.cindex import (AccessSpecifier, Config, Cursor, CursorKind, Diagnostic,
                          Index, TranslationUnit)

if os.getenv("LIBCLANG_PATH"):
    Config.set_library_file(os.getenv("LIBCLANG_PATH"))

from out_types import ClassDecl, FunctionDecl, ParameterDecl, TypeDescriptor

RECORD_KINDS = (CursorKind.CLASS_DECL, CursorKind.STRUCT_DECL)
SCOPE_KINDS = (CursorKind.NAMESPACE, CursorKind.LINKAGE_SPEC, CursorKind.UNEXPOSED_DECL)


class HeaderParseError(RuntimeError):
    """Raised when clang cannot produce a usable translation unit."""

    def __init__(self, header_path: str, errors: List[str]):
        self.header_path = header_path
        self.errors = errors
        super().__init__(f"Failed to parse {header_path}:\n" + "\n".join(errors))


@dataclass(frozen=True)
class ParserOptions:
    # x86-64 with the MSVC ABI
    target: str = "x86_64-pc-windows-msvc"
    std: str = "c++17"
    parse_macros: bool = True
    include_dirs: Tuple[str, ...] = ()
    extra_args: Tuple[str, ...] = ()

    def clang_args(self) -> List[str]:
        args = ["-x", "c++-header", f"-std={self.std}", f"--target={self.target}"]
        args.extend(f"-I{d}" for d in self.include_dirs)
        args.extend(self.extra_args)
        return args

    def parse_flags(self) -> int:
        flags = TranslationUnit.PARSE_SKIP_FUNCTION_BODIES
        if self.parse_macros:
            flags |= TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD
        return flags


def display_name(spelling: str) -> str:
    """'const char *' -> 'const char*', 'ParsedJson &' -> 'ParsedJson&'"""
    return re.sub(r"\s+([*&])", r"\1", spelling.strip())


def _is_public(cursor: Cursor) -> bool:
    return cursor.access_specifier in (AccessSpecifier.PUBLIC, AccessSpecifier.NONE,
                                       AccessSpecifier.INVALID)


class HeaderParser:
    """Builds the ClassDecl forest of a C++ header using libclang."""

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()
        self.classes: List[ClassDecl] = []
        self._processed_cursors: Set[Cursor] = set()
        self._header_path = ""

    def parse(self, header_path: str) -> List[ClassDecl]:
        if not os.path.exists(header_path):
            raise FileNotFoundError(f"Header file not found: {header_path}")

        print(f"Parsing header: {header_path}")
        self._header_path = os.path.abspath(header_path)
        index = Index.create()
        tu = index.parse(header_path, args=self.options.clang_args(),
                         options=self.options.parse_flags())
        if not tu:
            raise HeaderParseError(header_path, ["clang returned no translation unit"])

        errors = [self._format_diagnostic(d) for d in tu.diagnostics
                  if d.severity >= Diagnostic.Error]
        if errors:
            raise HeaderParseError(header_path, errors)

        self._visit_scope(tu.cursor)
        return self.classes

    @staticmethod
    def _format_diagnostic(diag: Diagnostic) -> str:
        loc = diag.location
        file_name = loc.file.name if loc.file else "<unknown>"
        return f"{file_name}:{loc.line}:{loc.column}: {diag.spelling}"

    def _in_header(self, cursor: Cursor) -> bool:
        loc_file = cursor.location.file
        return loc_file is not None and os.path.abspath(loc_file.name) == self._header_path

    def _visit_scope(self, cursor: Cursor):
        for child in cursor.get_children():
            if not self._in_header(child):
                continue
            if child.kind in SCOPE_KINDS:
                self._visit_scope(child)
            elif child.kind in RECORD_KINDS:
                decl = self._handle_class(child, None)
                if decl is not None:
                    self.classes.append(decl)

    def _handle_class(self, cursor: Cursor, enclosing: Optional[ClassDecl]) -> Optional[ClassDecl]:
        if not cursor.is_definition() or not cursor.spelling:
            return None
        if cursor in self._processed_cursors:
            return None
        self._processed_cursors.add(cursor)

        decl = ClassDecl(name=cursor.spelling, enclosing=enclosing)
        print(f"Found Class: {decl.qualified_name}")

        for child in cursor.get_children():
            if not _is_public(child):
                continue
            if child.kind == CursorKind.CONSTRUCTOR:
                decl.constructors.append(self._handle_function(child, is_constructor=True))
            elif child.kind == CursorKind.CXX_METHOD:
                decl.functions.append(self._handle_function(child))
            elif child.kind in RECORD_KINDS:
                nested = self._handle_class(child, decl)
                if nested is not None:
                    decl.classes.append(nested)
        return decl

    def _handle_function(self, cursor: Cursor, is_constructor: bool = False) -> FunctionDecl:
        params = tuple(
            ParameterDecl(name=p.spelling or f"arg{i}", type=TypeDescriptor(display_name(p.type.spelling)))
            for i, p in enumerate(cursor.get_arguments())
        )
        return_type = "void" if is_constructor else display_name(cursor.result_type.spelling)
        return FunctionDecl(
            name=cursor.spelling,
            return_type=TypeDescriptor(return_type),
            parameters=params,
            is_static=cursor.is_static_method(),
            is_constructor=is_constructor,
            comment=clean_comment(cursor.raw_comment),
        )


def clean_comment(raw: Optional[str]) -> str:
    """Strips comment markers, keeping one line of text per source line."""
    if not raw:
        return ""
    lines = []
    for line in raw.strip().splitlines():
        line = line.strip()
        line = re.sub(r"^(///?|/\*\*?|\*/|\*)", "", line)
        line = re.sub(r"\*/$", "", line).strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


def parse_header(header_path: str, options: Optional[ParserOptions] = None) -> List[ClassDecl]:
    return HeaderParser(options).parse(header_path)
