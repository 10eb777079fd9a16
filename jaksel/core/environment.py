"""Variable scopes. Every block gets its own Environment, linked to the one it is nested in."""

from jaksel.lang.error import UndefinedVariable


class Environment:
    """Bindings of one scope plus a link to the enclosing scope (None for the global scope).

    define always binds in this scope, so it both re-declares and shadows. get and assign walk outward and fail with
    UndefinedVariable if no scope in the chain has the name; assign never creates a binding.
    """

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        """Binds name to value in this scope."""
        self.values[name] = value

    def get(self, name):
        """Value of the nearest binding of name (a Token)."""
        return self._resolve(name).values[name.lexeme]

    def assign(self, name, value):
        """Rebinds the nearest existing binding of name (a Token) to value."""
        self._resolve(name).values[name.lexeme] = value

    def child(self):
        """New scope nested in this one."""
        return Environment(self)

    def _resolve(self, name):
        scope = self
        while scope is not None:
            if name.lexeme in scope.values:
                return scope
            scope = scope.enclosing
        raise UndefinedVariable(name)

    def __repr__(self):
        names = ", ".join(self.values) if self.values else "none"
        parent = "has parent" if self.enclosing else "global"
        return f"<Environment({parent}) vars=[{names}]>"
