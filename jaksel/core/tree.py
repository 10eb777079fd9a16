"""Abstract syntax tree for the Jaksel language.

The node set is closed: expressions (Literal, Grouping, Unary, Binary, Variable, Assign) and statements (Expression,
Print, Var, If). Nodes carry data only. Anything that walks the tree (evaluation, printing) is written as a visitor, and
each node's accept method dispatches to the visitor method named after it:

```
node.accept(visitor)  ->  visitor.visit_<node>(node)
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from jaksel.core.token import Token


class ExprVisitor(ABC):
    """Operation over every expression node kind."""

    @abstractmethod
    def visit_literal(self, expr): ...

    @abstractmethod
    def visit_grouping(self, expr): ...

    @abstractmethod
    def visit_unary(self, expr): ...

    @abstractmethod
    def visit_binary(self, expr): ...

    @abstractmethod
    def visit_variable(self, expr): ...

    @abstractmethod
    def visit_assign(self, expr): ...


class StmtVisitor(ABC):
    """Operation over every statement node kind."""

    @abstractmethod
    def visit_expression(self, stmt): ...

    @abstractmethod
    def visit_print(self, stmt): ...

    @abstractmethod
    def visit_var(self, stmt): ...

    @abstractmethod
    def visit_if(self, stmt): ...


class Expr(ABC):
    """Superclass for expression nodes."""

    @abstractmethod
    def accept(self, visitor: ExprVisitor):
        """Calls the visit method for this node on visitor and returns its result unchanged."""


class Stmt(ABC):
    """Superclass for statement nodes."""

    @abstractmethod
    def accept(self, visitor: StmtVisitor):
        """Calls the visit method for this node on visitor and returns its result unchanged."""


# --- expressions ---

@dataclass
class Literal(Expr):
    value: object

    def accept(self, visitor):
        return visitor.visit_literal(self)


@dataclass
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping(self)


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary(self)


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary(self)


@dataclass
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable(self)


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign(self)


# --- statements ---

@dataclass
class Expression(Stmt):
    """Expression evaluated for its side effects; the value is discarded."""
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression(self)


@dataclass
class Print(Stmt):
    """'spill' statement."""
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print(self)


@dataclass
class Var(Stmt):
    """'literally' declaration. A missing initializer binds hampa."""
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_var(self)


@dataclass
class If(Stmt):
    """kalo/perhaps/kalogak/udahan chain. elif_branches holds (condition, statements) pairs in source order."""
    condition: Expr
    then_branch: List[Stmt]
    else_branch: Optional[List[Stmt]] = None
    elif_branches: List[Tuple[Expr, List[Stmt]]] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_if(self)
