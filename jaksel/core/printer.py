"""Renders syntax trees in a parenthesized prefix form, mostly for debugging the parser.

```
1 + 2 * (3 - x)          ->  (+ 1 (* 2 (group (- 3 x))))
literally y itu 10       ->  (literally y 10)
kalo a ... kalogak ...   ->  (kalo a (then ...) (kalogak ...))
```
"""

from jaksel.core.evaluator import stringify
from jaksel.core.tree import ExprVisitor, StmtVisitor


class AstPrinter(ExprVisitor, StmtVisitor):

    def print(self, node):
        return node.accept(self)

    def print_all(self, statements):
        """One line per statement. Statements that failed to parse show up as <error>."""
        return "\n".join("<error>" if stmt is None else self.print(stmt) for stmt in statements)

    def visit_literal(self, expr):
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return stringify(expr.value)

    def visit_grouping(self, expr):
        return self._parenthesize("group", expr.expression)

    def visit_unary(self, expr):
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary(self, expr):
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable(self, expr):
        return expr.name.lexeme

    def visit_assign(self, expr):
        return self._parenthesize(f"itu {expr.name.lexeme}", expr.value)

    def visit_expression(self, stmt):
        return self._parenthesize(";", stmt.expression)

    def visit_print(self, stmt):
        return self._parenthesize("spill", stmt.expression)

    def visit_var(self, stmt):
        if stmt.initializer is None:
            return f"(literally {stmt.name.lexeme})"
        return self._parenthesize(f"literally {stmt.name.lexeme}", stmt.initializer)

    def visit_if(self, stmt):
        parts = [f"(kalo {self.print(stmt.condition)}", self._parenthesize("then", *stmt.then_branch)]
        for condition, branch in stmt.elif_branches:
            parts.append(self._parenthesize(f"perhaps {self.print(condition)}", *branch))
        if stmt.else_branch is not None:
            parts.append(self._parenthesize("kalogak", *stmt.else_branch))
        return " ".join(parts) + ")"

    def _parenthesize(self, name, *nodes):
        return "(" + " ".join([name, *(self.print(node) for node in nodes)]) + ")"
