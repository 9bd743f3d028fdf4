from ..expr import Compound, Expr, Literal, Variable


def debug_repr(expr: Expr) -> str:
    """Shows the structure of expr, not just its text.

    (x + 2) prints as Compound(+, [Variable(x), Literal(2.0)]). Useful when two exprs print
    the same but you want to see what they're made of.
    """
    if isinstance(expr, Variable):
        return f"Variable({expr.name})"
    if isinstance(expr, Literal):
        return f"Literal({expr.value!r})"
    if isinstance(expr, Compound):
        return f"Compound({expr.op.value}, [" + ", ".join(debug_repr(o) for o in expr.operands) + "])"
    return repr(expr)


def print_tree(expr: Expr, func=print, _depth: int = 0) -> None:
    """One node per line, indented by depth."""
    label = expr.op.value if isinstance(expr, Compound) else repr(expr)
    func("  " * _depth + label)
    for child in expr.children():
        print_tree(child, func=func, _depth=_depth + 1)
