import pytest

from conftest import constructor, method, param
from glue_emitter import SKIP_IGNORED_PARAMETER, SKIP_OPERATOR, SKIP_UNSUPPORTED_REFERENCE, GlueEmitter
from out_types import ClassDecl
from rules import GeneratorConfig, IgnoreFilter, NamingPolicy, TypeMapper


@pytest.fixture
def glue():
    config = GeneratorConfig()
    return GlueEmitter(config, IgnoreFilter(config), NamingPolicy(config, TypeMapper(config)),
                       class_names=["Foo", "Thing", "Node"])


def test_constructor(glue, foo_class):
    func = glue.emit_function(foo_class, foo_class.constructors[0])
    assert func.render() == "EXPORTS(Foo*) Foo_Foo() { return new Foo(); }"


def test_instance_method_gets_target(glue, foo_class):
    func = glue.emit_function(foo_class, foo_class.functions[0])
    assert func.render() == "EXPORTS(int) Foo_bar(Foo* target) { return target->bar(); }"


def test_void_method_has_no_return(glue):
    cls = ClassDecl(name="Widget")
    func = glue.emit_function(cls, method("reset", "void", [param("count", "int")]))
    assert func.render() == "EXPORTS(void) Widget_reset(Widget* target, int count) { target->reset(count); }"


def test_reference_becomes_pointer(glue):
    cls = ClassDecl(name="Widget")
    func = glue.emit_function(cls, method("set", "void", [param("t", "Thing&")]))
    assert func.parameters == ["Widget* target", "Thing* t"]
    assert func.body == "target->set(*t);"


def test_static_method_on_nested_class(glue):
    outer = ClassDecl(name="Outer")
    inner = outer.add_class(ClassDecl(name="Inner"))
    func = glue.emit_function(inner, method("is_ready", "bool", is_static=True))
    assert func.render() == "EXPORTS(bool) Inner_s_is_ready() { return Outer::Inner::is_ready(); }"


def test_constructor_with_reference_argument(glue):
    cls = ClassDecl(name="iterator")
    func = glue.emit_function(cls, constructor("iterator", [param("pj", "ParsedJson&")]))
    assert func.render() == "EXPORTS(iterator*) iterator_iterator(ParsedJson* pj) { return new iterator(*pj); }"


def test_dispose(glue):
    outer = ClassDecl(name="Outer")
    inner = outer.add_class(ClassDecl(name="Inner"))
    assert glue.emit_dispose(inner).render() == \
        "EXPORTS(void) Inner_Dispose(Outer::Inner* target) { delete target; }"


def test_skip_reasons(glue):
    assert glue.skip_reason(method("operator==", "bool", [param("o", "Foo&")])) == SKIP_OPERATOR
    assert glue.skip_reason(method("load", "void", [param("s", "const padded_string&")])) == SKIP_IGNORED_PARAMETER
    assert glue.skip_reason(method("load", "void", [param("s", "const char*")])) is None


def test_references_to_non_classes_are_unsupported(glue):
    assert glue.skip_reason(method("read", "void", [param("out", "uint64_t&")])) == SKIP_UNSUPPORTED_REFERENCE
    assert glue.skip_reason(method("load", "void", [param("s", "const std::string&")])) == SKIP_UNSUPPORTED_REFERENCE
    assert glue.skip_reason(constructor("Foo", [param("other", "Foo&&")])) == SKIP_UNSUPPORTED_REFERENCE


def test_references_to_bound_classes_are_accepted(glue):
    assert glue.skip_reason(method("set", "void", [param("t", "Thing&")])) is None
    assert glue.skip_reason(constructor("Foo", [param("other", "const Foo&")])) is None
    assert glue.skip_reason(method("visit", "void", [param("n", "Document::Node&")])) is None


def test_later_overloads_get_numbered_exports(glue):
    cls = ClassDecl(name="Pair")
    first = glue.emit_function(cls, constructor("Pair"))
    second = glue.emit_function(cls, constructor("Pair", [param("a", "int")]), overload=1)
    assert first.name == "Pair_Pair"
    assert second.render() == "EXPORTS(Pair*) Pair_Pair_1(int a) { return new Pair(a); }"


def test_document_layout(glue, foo_class):
    functions = [glue.emit_function(foo_class, f) for f in foo_class.constructors + foo_class.functions]
    functions.append(glue.emit_dispose(foo_class))
    source = glue.document([glue.class_lines(foo_class, functions)])
    assert source == (
        "// THIS FILE IS AUTOGENERATED!\n"
        '#include "simdjson.h"\n'
        "\n"
        "#if (defined WIN32 || defined _WIN32)\n"
        '#define EXPORTS(returntype) extern "C" __declspec(dllexport) returntype __cdecl\n'
        "#else\n"
        '#define EXPORTS(returntype) extern "C" __attribute__((visibility("default"))) returntype\n'
        "#endif\n"
        "\n"
        "/* Foo */\n"
        "EXPORTS(Foo*) Foo_Foo() { return new Foo(); }\n"
        "EXPORTS(int) Foo_bar(Foo* target) { return target->bar(); }\n"
        "EXPORTS(void) Foo_Dispose(Foo* target) { delete target; }\n"
    )
