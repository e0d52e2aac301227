import pytest

from out_types import ClassDecl, FunctionDecl, ParameterDecl, TypeDescriptor


def param(name, type_name):
    return ParameterDecl(name=name, type=TypeDescriptor(type_name))


def method(name, return_type="void", params=(), is_static=False, comment=""):
    return FunctionDecl(name=name, return_type=TypeDescriptor(return_type),
                        parameters=tuple(params), is_static=is_static, comment=comment)


def constructor(class_name, params=()):
    return FunctionDecl(name=class_name, return_type=TypeDescriptor("void"),
                        parameters=tuple(params), is_constructor=True)


@pytest.fixture
def foo_class():
    return ClassDecl(
        name="Foo",
        constructors=[constructor("Foo")],
        functions=[method("bar", "int")],
    )


@pytest.fixture
def simdjson_tree():
    """A reduced version of the simdjson ParsedJson hierarchy."""
    parsed_json = ClassDecl(
        name="ParsedJson",
        constructors=[constructor("ParsedJson")],
        functions=[
            method("allocate_capacity", "bool", [param("len", "size_t"), param("maxdepth", "size_t")],
                   comment="if needed, allocate memory so that the object\nis able to process JSON documents"),
            method("is_valid", "bool"),
            method("get_error_code", "int"),
            method("print_json", "bool", [param("os", "std::basic_ostream<char>&")]),
            method("operator=", "ParsedJson&", [param("p", "ParsedJson&&")]),
        ],
    )
    iterator = parsed_json.add_class(ClassDecl(
        name="iterator",
        constructors=[constructor("iterator", [param("pj", "ParsedJson&")]),
                      constructor("iterator", [param("o", "const iterator&")])],
        functions=[
            method("is_ok", "bool"),
            method("get_tape_location", "size_t"),
            method("get_type", "uint8_t"),
            method("get_string", "const char*"),
            method("is_object_or_array", "bool"),
            method("is_object_or_array", "bool", [param("type", "uint8_t")], is_static=True),
            method("move_to_key", "bool", [param("key", "const char*")]),
            method("move_to", "void", [param("index", "iterator::scopeindex_t")]),
        ],
    ))
    iterator.add_class(ClassDecl(name="scopeindex_t"))
    parsed_json.add_class(ClassDecl(name="InvalidJSON", functions=[method("what", "const char*")]))
    padded = ClassDecl(name="padded_string", functions=[method("size", "size_t")])
    return [parsed_json, padded]
