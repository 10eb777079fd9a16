"""Recursive descent parser for the Jaksel language.

```
program     ::= (NEWLINE | declaration)* EOF
declaration ::= "literally" IDENTIFIER ("itu" expression)? (NEWLINE | EOF)
              | statement
statement   ::= if_stmt | spill_stmt | expr_stmt
if_stmt     ::= "kalo" expression block ("perhaps" expression block)* ("kalogak" block)? "udahan" (NEWLINE | EOF)
block       ::= NEWLINE (declaration | NEWLINE)*          ; up to the next perhaps/kalogak/udahan
spill_stmt  ::= "spill" expression (NEWLINE | EOF)
expr_stmt   ::= expression (NEWLINE | EOF)

expression  ::= assignment
assignment  ::= equality ("itu" assignment)?              ; right-associative, target must be a variable
equality    ::= comparison (("!=" | "==") comparison)*
comparison  ::= term ((">" | ">=" | "<" | "<=") term)*
term        ::= factor (("-" | "+") factor)*
factor      ::= unary (("*" | "/" | "%") unary)*
unary       ::= ("!" | "-") unary | primary
primary     ::= "ril" | "impossible" | "hampa" | NUMBER | STRING | IDENTIFIER | "(" expression ")"
```

A syntax error is reported to the error handler and unwinds (as a ParseError) to the enclosing declaration, which skips
ahead to the next statement boundary and yields None in place of the broken statement.
"""

from jaksel.core import tree
from jaksel.core.token import TokenType
from jaksel.lang.error import ParseError


TERMINATORS = (TokenType.NEWLINE, TokenType.EOF)
BLOCK_ENDS = (TokenType.PERHAPS, TokenType.KALOGAK, TokenType.UDAHAN)

# tokens that may start a statement; synchronization stops in front of them
SYNC_POINTS = (
    TokenType.NEWLINE,
    TokenType.LITERALLY,
    TokenType.SPILL,
    TokenType.KALO,
    TokenType.PERHAPS,
    TokenType.KALOGAK,
    TokenType.UDAHAN,
    TokenType.FOMO,
    TokenType.SO,
    TokenType.SERIOUSLY,
    TokenType.WHICHIS,
    TokenType.THATS,
    TokenType.CALL,
)


class Parser:
    """Builds statement trees from the token list produced by the Scanner."""

    def __init__(self, tokens, error_handler):
        self.tokens = tokens
        self.error_handler = error_handler
        self._current = 0

    def parse(self):
        """Returns a list of statements. A statement that failed to parse is represented by None."""
        statements = []
        while not self._is_at_end():
            if self._match(TokenType.NEWLINE):
                continue
            statements.append(self._declaration())
        return statements

    # --- statements ---

    def _declaration(self):
        try:
            if self._match(TokenType.LITERALLY):
                return self._var_declaration()
            return self._statement()
        except ParseError:
            self._synchronize()
            return None
        except RecursionError:
            self._error(self._peek(), "Expression nested too deeply.")
            self._synchronize()
            return None

    def _var_declaration(self):
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.ITU):
            initializer = self._expression()

        self._consume(TERMINATORS, "Expect newline after variable declaration.")
        return tree.Var(name, initializer)

    def _statement(self):
        if self._match(TokenType.KALO):
            return self._if_statement()
        if self._match(TokenType.SPILL):
            return self._spill_statement()
        return self._expression_statement()

    def _if_statement(self):
        condition = self._expression()
        then_branch = self._block()

        elif_branches = []
        while self._match(TokenType.PERHAPS):
            elif_condition = self._expression()
            elif_branches.append((elif_condition, self._block()))

        else_branch = None
        if self._match(TokenType.KALOGAK):
            else_branch = self._block()

        self._consume(TokenType.UDAHAN, "Expect 'udahan' after if statement.")
        self._consume(TERMINATORS, "Expect newline after 'udahan'.")
        return tree.If(condition, then_branch, else_branch, elif_branches)

    def _block(self):
        """Statements up to the next perhaps/kalogak/udahan. Broken statements are reported and left out."""
        self._consume(TokenType.NEWLINE, "Expect newline before block.")

        statements = []
        while not self._is_at_end() and self._peek().type not in BLOCK_ENDS:
            if self._match(TokenType.NEWLINE):
                continue
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def _spill_statement(self):
        value = self._expression()
        self._consume(TERMINATORS, "Expect newline after value.")
        return tree.Print(value)

    def _expression_statement(self):
        expr = self._expression()
        self._consume(TERMINATORS, "Expect newline after expression.")
        return tree.Expression(expr)

    # --- expressions ---

    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._equality()

        if self._match(TokenType.ITU):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, tree.Variable):
                return tree.Assign(expr.name, value)

            # reported, not raised: the statement itself is still well-formed
            self._error(equals, "Invalid assignment target.")

        return expr

    def _equality(self):
        return self._binary(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary(self._term, TokenType.GREATER, TokenType.GREATER_EQUAL,
                            TokenType.LESS, TokenType.LESS_EQUAL)

    def _term(self):
        return self._binary(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self):
        return self._binary(self._unary, TokenType.STAR, TokenType.SLASH, TokenType.PERCENT)

    def _binary(self, operand, *operators):
        """Left-associative chain of operand separated by any of operators."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = tree.Binary(expr, operator, right)
        return expr

    def _unary(self):
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            return tree.Unary(operator, self._unary())
        return self._primary()

    def _primary(self):
        if self._match(TokenType.FALSE):
            return tree.Literal(False)
        if self._match(TokenType.TRUE):
            return tree.Literal(True)
        if self._match(TokenType.NIL):
            return tree.Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return tree.Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return tree.Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return tree.Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # --- helpers ---

    def _synchronize(self):
        """Discards tokens up to the next statement boundary. Always makes progress unless it is already on a newline,
        which the caller skips anyway.
        """
        if self._check(TokenType.NEWLINE):
            return

        self._advance()
        while not self._is_at_end():
            if self._peek().type in SYNC_POINTS:
                return
            self._advance()

    def _consume(self, types, message):
        """Consumes the next token if it is of (one of) types, else reports message and raises ParseError. An EOF in
        types matches the end of input.
        """
        if isinstance(types, TokenType):
            types = (types,)

        if TokenType.EOF in types and self._is_at_end():
            return self._peek()
        for kind in types:
            if self._check(kind):
                return self._advance()

        raise self._error(self._peek(), message)

    def _error(self, token, message):
        self.error_handler.parse_error(token, message)
        return ParseError(message)

    def _match(self, *types):
        for kind in types:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _check(self, kind):
        if self._is_at_end():
            return False
        return self._peek().type == kind

    def _advance(self):
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _is_at_end(self):
        return self._peek().type == TokenType.EOF

    def _peek(self):
        return self.tokens[self._current]

    def _previous(self):
        return self.tokens[self._current - 1]
