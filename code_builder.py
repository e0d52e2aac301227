from typing import List


class CodeBuilder:
    """Line-oriented document builder with indentation support."""

    def __init__(self, indent_str: str = "    "):
        self._lines: List[str] = []
        self._indent = 0
        self._indent_str = indent_str

    def line(self, text: str = ""):
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append("")

    def lines(self, *texts: str):
        for text in texts:
            self.line(text)

    def fragment(self, texts: List[str]):
        """Append a pre-rendered fragment at the current indentation."""
        for text in texts:
            self.line(text)

    def indent(self):
        self._indent += 1

    def dedent(self):
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = "}", opener: str = "{"):
        """`header`, `{`, indented body, `footer`."""
        return _BlockContext(self, header, opener, footer)

    def output(self) -> str:
        return "\n".join(self._lines) + "\n"

    def __len__(self) -> int:
        return len(self._lines)


class _BlockContext:
    def __init__(self, builder: CodeBuilder, header: str, opener: str, footer: str):
        self._builder = builder
        self._header = header
        self._opener = opener
        self._footer = footer

    def __enter__(self):
        self._builder.line(self._header)
        if self._opener:
            self._builder.line(self._opener)
        self._builder.indent()
        return self

    def __exit__(self, *args):
        self._builder.dedent()
        self._builder.line(self._footer)
