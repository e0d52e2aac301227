from dataclasses import dataclass, field
from typing import List, Optional

# --- Declarations handed over by the header parser ---

@dataclass(frozen=True)
class TypeDescriptor:
    display_name: str

    @property
    def is_reference(self) -> bool:
        return self.display_name.endswith("&")

    @property
    def is_rvalue_reference(self) -> bool:
        return self.display_name.endswith("&&")

    @property
    def is_void(self) -> bool:
        return self.display_name == "void"

    def __str__(self) -> str:
        return self.display_name

@dataclass(frozen=True)
class ParameterDecl:
    name: str
    type: TypeDescriptor

@dataclass(frozen=True)
class FunctionDecl:
    name: str
    return_type: TypeDescriptor
    parameters: tuple = ()
    is_static: bool = False
    is_constructor: bool = False
    comment: str = ""

    @property
    def is_operator(self) -> bool:
        return self.name.startswith("operator")

@dataclass(eq=False)
class ClassDecl:
    name: str
    constructors: List[FunctionDecl] = field(default_factory=list)
    functions: List[FunctionDecl] = field(default_factory=list)
    classes: List['ClassDecl'] = field(default_factory=list)
    enclosing: Optional['ClassDecl'] = field(default=None, repr=False)

    @property
    def qualified_name(self) -> str:
        """`Outer::Inner` for nested classes, the plain name otherwise.

        Only the directly enclosing class is prepended; the ignore list and the
        generated glue both rely on this two-part form.
        """
        if self.enclosing is None:
            return self.name
        return f"{self.enclosing.name}::{self.name}"

    def add_class(self, nested: 'ClassDecl') -> 'ClassDecl':
        nested.enclosing = self
        self.classes.append(nested)
        return nested

# --- Generated artifacts ---

@dataclass
class GlueFunction:
    name: str
    return_type: str
    parameters: List[str]
    body: str

    def render(self) -> str:
        return f"EXPORTS({self.return_type}) {self.name}({', '.join(self.parameters)}) {{ {self.body} }}"

@dataclass
class BindingDeclaration:
    """A DllImport signature plus the API member that calls it."""
    export_name: str
    import_lines: List[str]
    api_lines: List[str]

@dataclass
class BindingClass:
    name: str
    native_name: str
    declarations: List[BindingDeclaration] = field(default_factory=list)

@dataclass
class SkippedDecl:
    kind: str
    name: str
    reason: str

    def __str__(self) -> str:
        return f"{self.kind} {self.name} ({self.reason})"

@dataclass
class GenerationResult:
    glue_source: str
    bindings_source: str
    classes: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    skipped: List[SkippedDecl] = field(default_factory=list)
