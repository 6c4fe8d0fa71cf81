"""Free identifier detection.

Parses an expression with the full grammar but resolves nothing: it only
reports which parameter names the expression refers to.
"""

from booleval.expressions.parser import Identifier, iter_children, parse


def detect_identifiers(expression: str) -> tuple[str, ...]:
    """Return the distinct identifiers referenced by an expression.

    Names are returned once each, in the order they first appear in the
    source. Keywords (true, false, null, and, or, not) are never reported.

    Raises:
        MalformedExpression: If the expression cannot be parsed
    """
    names: dict[str, None] = {}
    stack = [parse(expression)]
    while stack:
        node = stack.pop()
        if isinstance(node, Identifier):
            names.setdefault(node.name, None)
        else:
            # reversed so the leftmost child is visited first
            stack.extend(reversed(list(iter_children(node))))
    return tuple(names)
