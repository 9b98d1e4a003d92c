# --- Data models for method declarations and their PHPDoc ------------------
from dataclasses import dataclass, field, replace
from typing import Optional, Union


@dataclass
class ClassConstantReference:
    """A class constant fetch such as `Company::class`."""
    class_name: str  # as written, e.g. "Company", "\\App\\Models\\Post", "static"
    constant: str  # e.g. "class"


@dataclass
class StringLiteral:
    """A string literal without interpolation."""
    value: str


@dataclass
class OtherExpression:
    """Any expression shape the resolver does not look into."""
    kind: str  # tree-sitter node type, e.g. "variable_name"
    text: str


@dataclass
class CallExpression:
    """A method call, linked to the call it was chained onto via `receiver`."""
    name: Optional[str]  # None for dynamic calls like $this->{$name}()
    arguments: list["Expression"] = field(default_factory=list)
    receiver: Optional["Expression"] = None


Expression = Union[CallExpression, ClassConstantReference, StringLiteral, OtherExpression]


@dataclass
class ReturnStatement:
    expression: Optional[Expression]


@dataclass
class OtherStatement:
    kind: str


Statement = Union[ReturnStatement, OtherStatement]


@dataclass(frozen=True)
class GenericAnnotation:
    """A PHPDoc type expression: `Base` or `Base<A, B>`."""
    base: str
    arguments: tuple[str, ...] = ()

    def render(self) -> str:
        if not self.arguments:
            return self.base
        return f"{self.base}<{', '.join(self.arguments)}>"


@dataclass(frozen=True)
class ReturnTag:
    """The `@return` tag of a doc comment."""
    annotation: Optional[GenericAnnotation]  # None when the type is not a name or a generic name
    raw_type: str
    span: Optional[tuple[int, int]] = None  # offsets of raw_type inside the comment text; None until written

    def with_annotation(self, annotation: GenericAnnotation) -> "ReturnTag":
        return replace(self, annotation=annotation, raw_type=annotation.render())


@dataclass
class DocComment:
    """A `/** ... */` comment attached to a method declaration."""
    text: str
    start_byte: int
    end_byte: int


@dataclass
class MethodDeclaration:
    """A method declaration as seen by the rule."""
    name: str  # e.g. "company"
    return_type: Optional[str]  # plain (possibly qualified) type name, None otherwise
    statements: Optional[list[Statement]]  # top-level body statements, None without a body
    start_byte: int
    line: int
    col: int
    indent: str = ""  # whitespace preceding the declaration on its line
    class_name: Optional[str] = None  # enclosing class, trait, interface or enum
    doc_comment: Optional[DocComment] = None
    return_tag: Optional[ReturnTag] = None
