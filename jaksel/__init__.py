"""Jaksel language interpreter.

Program flow:
    1. Scanner (core/scanner.py): source text -> tokens, newlines included
    2. Parser (core/parser.py): tokens -> statement trees (core/tree.py), recovering from syntax errors per statement
    3. Evaluator (core/evaluator.py): walks the trees, keeping variables in nested Environments (core/environment.py)

lang/ holds everything around the pipeline: error reporting, sessions and the interactive shell.
"""
