from code_builder import CodeBuilder


def test_block_indents_body():
    code = CodeBuilder()
    with code.block("class A"):
        code.line("int x;")
        code.line()
        with code.block("void f()"):
            code.line("x = 1;")
    assert code.output() == (
        "class A\n"
        "{\n"
        "    int x;\n"
        "\n"
        "    void f()\n"
        "    {\n"
        "        x = 1;\n"
        "    }\n"
        "}\n"
    )


def test_fragment_is_reindented():
    code = CodeBuilder()
    code.indent()
    code.fragment(["a", "", "    b"])
    code.dedent()
    code.dedent()
    code.line("c")
    assert code.output() == "    a\n\n        b\nc\n"
    assert len(code) == 4
