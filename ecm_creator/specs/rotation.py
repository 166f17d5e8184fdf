"""
Rotation parsing for elliptical patches.

A ``<rotation>`` element holds either a plain number or an arithmetic
expression in pi:

    <rotation>30</rotation>                 30 degrees
    <rotation units="deg">30</rotation>     30 degrees
    <rotation>pi/6</rotation>               pi/6 radians
    <rotation units="rad">0.5</rotation>    0.5 radians
    <rotation>-2π/3</rotation>              -2pi/3 radians

Without a ``units`` attribute the value is in radians exactly when it mentions
pi (or π). A ``units`` value starting with "rad" selects radians, anything
else selects degrees; combining pi with degrees is an error.

Expressions are evaluated by a small dedicated parser that only knows pi,
numeric literals, parentheses, unary signs and + - * /. Juxtaposition such as
``2pi`` is read as multiplication binding tighter than * and /, so
``1/2pi`` is 1/(2pi).
"""

from typing import Any, Dict, List, Optional, Tuple, Union
import math
import re

from ..core.errors import RotationParseError, RotationUnitsConflictError


PI_NAMES = ("pi", "π")

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<pi>pi|π)"
    r"|(?P<op>[-+*/()])"
    r")"
)

UNITS_HINT = """Solutions:
- Omit the units attribute: <rotation>pi/6</rotation> (read as radians)
- Specify radians: <rotation units="rad">pi/6</rotation> (any units starting with "rad")
- Convert to degrees: <rotation units="deg">30</rotation> or <rotation>30</rotation>"""

AstNode = Union[float, str, Dict[str, Any]]


def uses_pi(text: str) -> bool:
    return any(name in text for name in PI_NAMES)


def tokenize(text: str) -> List[Tuple[str, str]]:
    """Split an expression into (kind, value) tokens."""
    tokens = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise RotationParseError(
                f"Unexpected character {text[pos]!r} at position {pos} in rotation '{text}'. "
                "Only numbers, pi, parentheses and + - * / are allowed."
            )
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return tokens


class _Parser:
    """
    Recursive descent parser producing a JSON-style AST.

    Grammar:
        expr   := term (("+" | "-") term)*
        term   := unary (("*" | "/") unary)*
        unary  := ("+" | "-") unary | juxtaposed
        juxtaposed := primary (pi | "(" expr ")")*
        primary:= number | pi | "(" expr ")"
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def peek(self) -> Optional[Tuple[str, str]]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def take(self) -> Tuple[str, str]:
        token = self.peek()
        if token is None:
            raise RotationParseError(f"Unexpected end of rotation expression '{self.text}'")
        self.pos += 1
        return token

    def parse(self) -> AstNode:
        if not self.tokens:
            raise RotationParseError("Empty rotation expression")
        node = self.expr()
        if self.peek() is not None:
            raise RotationParseError(
                f"Unexpected token '{self.peek()[1]}' in rotation expression '{self.text}'"
            )
        return node

    def expr(self) -> AstNode:
        node = self.term()
        while self.peek() in (("op", "+"), ("op", "-")):
            op = self.take()[1]
            node = {"op": op, "args": [node, self.term()]}
        return node

    def term(self) -> AstNode:
        node = self.unary()
        while self.peek() in (("op", "*"), ("op", "/")):
            op = self.take()[1]
            node = {"op": op, "args": [node, self.unary()]}
        return node

    def unary(self) -> AstNode:
        token = self.peek()
        if token == ("op", "-"):
            self.take()
            return {"op": "neg", "args": [self.unary()]}
        if token == ("op", "+"):
            self.take()
            return self.unary()
        return self.juxtaposed()

    def juxtaposed(self) -> AstNode:
        # A number or parenthesised factor directly followed by pi or "(".
        token = self.peek()
        node = self.primary()
        while token is not None and token[0] != "pi":
            token = self.peek()
            if token is None or not (token[0] == "pi" or token == ("op", "(")):
                break
            node = {"op": "*", "args": [node, self.primary()]}
        return node

    def primary(self) -> AstNode:
        kind, value = self.take()
        if kind == "number":
            return float(value)
        if kind == "pi":
            return "pi"
        if value == "(":
            node = self.expr()
            if self.take() != ("op", ")"):
                raise RotationParseError(f"Missing ')' in rotation expression '{self.text}'")
            return node
        raise RotationParseError(f"Unexpected token '{value}' in rotation expression '{self.text}'")


def _safe_eval_ast(ast: AstNode) -> float:
    """
    Evaluate an AST produced by the rotation parser.

    Supported operations:
        - Arithmetic: +, -, *, /, neg
        - Constants: numeric literals, pi
    """
    if isinstance(ast, float):
        return ast

    if isinstance(ast, str):
        if ast == "pi":
            return math.pi
        raise RotationParseError(f"Unknown constant '{ast}'")

    op = ast["op"]
    args = [_safe_eval_ast(a) for a in ast["args"]]

    if op == "+":
        return args[0] + args[1]
    elif op == "-":
        return args[0] - args[1]
    elif op == "*":
        return args[0] * args[1]
    elif op == "/":
        if args[1] == 0:
            raise RotationParseError("Division by zero in rotation expression")
        return args[0] / args[1]
    elif op == "neg":
        return -args[0]
    raise RotationParseError(f"Unknown operation '{op}'")


def evaluate_expression(text: str) -> float:
    """Evaluate an arithmetic expression in pi."""
    return _safe_eval_ast(_Parser(text).parse())


def parse_rotation(text: Optional[str], units: Optional[str] = None) -> float:
    """
    Convert rotation text and optional units attribute to radians.

    Parameters
    ----------
    text : str or None
        Element text. None or empty means no rotation.
    units : str, optional
        Value of the ``units`` attribute.

    Returns
    -------
    float
        Rotation in radians, counter-clockwise.

    Raises
    ------
    RotationUnitsConflictError
        If the text uses pi but units request degrees.
    RotationParseError
        If the text cannot be evaluated.
    """
    if text is None or not text.strip():
        return 0.0
    text = text.strip()

    has_pi = uses_pi(text)
    if units is None:
        is_radians = has_pi
    else:
        is_radians = units.strip().lower().startswith("rad")

    if has_pi and not is_radians:
        raise RotationUnitsConflictError(
            f"Rotation '{text}' uses pi but units=\"{units}\" requests degrees. "
            "If you use pi or π, you cannot specify that the units are degrees.\n" + UNITS_HINT
        )

    if has_pi:
        try:
            return evaluate_expression(text)
        except RotationParseError as e:
            raise RotationParseError(
                f"The rotation ({text}) had pi or π but could not be parsed as a number: {e}\n"
                "Try, for example, <rotation>π/6</rotation>, or give degrees: "
                "<rotation units=\"deg\">30</rotation>"
            ) from e

    try:
        value = float(text)
    except ValueError:
        raise RotationParseError(
            f"Rotation '{text}' is not a number. Expected a number (degrees unless "
            "units=\"rad\") or an expression in pi such as pi/6."
        ) from None

    return value if is_radians else math.radians(value)
