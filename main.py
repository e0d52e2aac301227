#!/usr/bin/env python3
import argparse
import os
import sys
from typing import Iterable, List, Optional

from csharp_emitter import CSharpEmitter
from glue_emitter import GlueEmitter
from out_types import BindingClass, ClassDecl, GenerationResult, SkippedDecl
from rules import GeneratorConfig, IgnoreFilter, NamingPolicy, TypeMapper

SKIP_IGNORED_CLASS = "ignored-class"
SKIP_EXTRA_CONSTRUCTOR = "extra-constructor"

# Fixed locations of the simdjson native project, relative to the working directory
DEFAULT_HEADER = "../../src/BindingsForNativeLib/SimdJsonNative/simdjson.h"
DEFAULT_GLUE_OUTPUT = "../../src/BindingsForNativeLib/SimdJsonNative/bindings.cpp"
DEFAULT_BINDINGS_OUTPUT = "../../src/BindingsForNativeLib/SimdJsonSharp.Bindings/Bindings.Generated.cs"


def collect_classes(roots: Iterable[ClassDecl]) -> List[ClassDecl]:
    """Depth-first, pre-order: every class comes before its nested classes."""
    result: List[ClassDecl] = []

    def visit(cls: ClassDecl):
        result.append(cls)
        for nested in cls.classes:
            visit(nested)

    for root in roots:
        visit(root)
    return result


class BindingGenerator:
    """
    Generates the C glue (bindings.cpp) and the C# bindings for a parsed C++ class
    hierarchy. Both documents are built in the same pass so a function skipped for
    one of them never shows up in the other.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.type_mapper = TypeMapper(self.config)
        self.ignore_filter = IgnoreFilter(self.config)
        self.naming = NamingPolicy(self.config, self.type_mapper)

    def generate(self, roots: Iterable[ClassDecl]) -> GenerationResult:
        all_classes = collect_classes(roots)
        skipped: List[SkippedDecl] = []

        classes = []
        for cls in all_classes:
            if self.ignore_filter.is_ignored(cls.qualified_name):
                skipped.append(SkippedDecl("class", cls.qualified_name, SKIP_IGNORED_CLASS))
            else:
                classes.append(cls)

        class_names = [c.name for c in classes]
        glue = GlueEmitter(self.config, self.ignore_filter, self.naming, class_names=class_names)
        csharp = CSharpEmitter(self.config, self.type_mapper, self.naming, wrapper_classes=class_names)

        glue_sections = []
        binding_classes = []
        exports = []
        for cls in classes:
            constructors = cls.constructors
            if self.config.first_constructor_only:
                constructors = cls.constructors[:1]
                for extra in cls.constructors[1:]:
                    skipped.append(SkippedDecl("constructor", f"{cls.qualified_name}::{extra.name}",
                                               SKIP_EXTRA_CONSTRUCTOR))

            functions = []
            binding = BindingClass(name=self.naming.host_class_name(cls.name), native_name=cls.name)
            # later constructors are numbered so every export name stays unique
            members = [(func, i) for i, func in enumerate(constructors)] + [(func, 0) for func in cls.functions]
            for func, overload in members:
                reason = glue.skip_reason(func)
                if reason is not None:
                    skipped.append(SkippedDecl("function", f"{cls.qualified_name}::{func.name}", reason))
                    continue
                glue_func = glue.emit_function(cls, func, overload)
                functions.append(glue_func)
                binding.declarations.append(csharp.emit_function(cls, func, glue_func.name))

            functions.append(glue.emit_dispose(cls))
            exports.extend(f.name for f in functions)
            glue_sections.append(glue.class_lines(cls, functions))
            binding_classes.append(binding)

        return GenerationResult(
            glue_source=glue.document(glue_sections),
            bindings_source=csharp.document(binding_classes),
            classes=[c.qualified_name for c in classes],
            exports=exports,
            skipped=skipped,
        )

    def generate_from_header(self, header_path: str, options=None) -> GenerationResult:
        from header_parser import parse_header
        return self.generate(parse_header(header_path, options))


def print_summary(result: GenerationResult):
    print("\n--- Generation Summary ---")
    print(f"Classes: {len(result.classes)}, Exports: {len(result.exports)}, Skipped: {len(result.skipped)}")
    for skipped in result.skipped:
        print(f"  skipped {skipped}")
    print("--------------------------")


# --- Main Execution ---
def main(argv: Optional[List[str]] = None):
    """Command-line interface for the binding generator."""
    parser = argparse.ArgumentParser(
        description="Generate a C glue layer and C# bindings from a C++ header file."
    )
    parser.add_argument("header", nargs="?", default=os.path.join(os.getcwd(), DEFAULT_HEADER),
                        help="Path to the C++ header file to parse.")
    parser.add_argument("-c", "--glue-output", default=os.path.join(os.getcwd(), DEFAULT_GLUE_OUTPUT),
                        help="Path to the generated C glue source.")
    parser.add_argument("-o", "--bindings-output", default=os.path.join(os.getcwd(), DEFAULT_BINDINGS_OUTPUT),
                        help="Path to the generated C# bindings.")
    parser.add_argument("-I", dest="include_dirs", action="append", default=[],
                        help="Add a directory to the Clang include path.")
    parser.add_argument("--std", default="c++17", help="C++ language standard (default: c++17).")
    parser.add_argument("--target", default="x86_64-pc-windows-msvc",
                        help="Clang target triple (default: x86_64-pc-windows-msvc).")
    parser.add_argument("--namespace", default=None, help="C# namespace of the generated classes.")
    parser.add_argument("--main-class", default=None, help="C# class holding NativeLib.")

    args = parser.parse_args(argv)

    overrides = {}
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.main_class:
        overrides["main_class_name"] = args.main_class
    config = GeneratorConfig().with_overrides(
        header_include=os.path.basename(args.header), **overrides)

    generator = BindingGenerator(config)
    try:
        from header_parser import ParserOptions
        options = ParserOptions(target=args.target, std=args.std,
                                include_dirs=tuple(args.include_dirs))
        result = generator.generate_from_header(args.header, options)
        print_summary(result)

        with open(args.glue_output, "w") as f:
            f.write(result.glue_source)
        with open(args.bindings_output, "w") as f:
            f.write(result.bindings_source)

        print(f"\nSuccessfully generated {args.glue_output} and {args.bindings_output}")

    except (FileNotFoundError, RuntimeError) as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
