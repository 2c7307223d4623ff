# Core type aliases for risp's data model.
# Values are plain Python types where one fits (bool, float, str, list) and
# small classes otherwise (Symbol, SpecialForm, Native, Lambda, Macro).
# The same objects represent code (forms) and runtime values.
#
# Naming guidance:
# - SExpression: use in reader/printer/trace code to denote syntactic forms.
# - Value:       use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; they are interchangeable.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
Value = Any
# Forms alias (used interchangeably with Value)
SExpression = Value

# Native primitive: receives the bound positional vector
NativeFn = Callable[[list], Value]
