"""Composable Validation Engine

Declare per-field constraints, conditional applicability, nested and
collection traversal, reusable constraint bundles and cross-field
invariants, then run them against one in-memory object to get an ordered,
path-addressed error report.

Key Features:
- Field validators with ordered rules and per-rule conditions
- ``when``/``otherwise`` gating of exactly one following rule
- Nested (``a.b``) and indexed (``items[2]``) field paths
- Reusable composite validators with a default condition
- Two-field invariants with replaceable error reporting
- Eager or lazy validator factories, post-hoc plugins, validation groups

Usage:
    from fieldrules.validation import ValidationBuilder, CompositeValidator

    address_rules = CompositeValidator().add(lambda v: v.not_null())

    builder = ValidationBuilder(user)
    builder.rule_for("name", lambda u: u.name).not_null()
    builder.rule_for("addresses", lambda u: u.addresses).for_each(
        "", Address, lambda a: a.compose(address_rules),
    )
    result = builder.validate()
"""

from .conditions import Condition, always, both, negate, never
from .context import ValidationContext, index_path, join_path
from .errors import FieldError, ValidationError
from .result import ValidationResult
from .rules import ValidationRule
from .messages import MessageSource, StaticMessageSource, DictMessageSource
from .validator import Validator, ConditionalRules, UNBOUND
from .composite import CompositeValidator
from .cross_field import CrossFieldValidator
from .factory import (
    Deferred,
    ValidatorFactory,
    DefaultValidatorFactory,
    LazyLoadingValidator,
    LazyLoadingValidatorFactory,
)
from .plugins import ValidatorPlugin, RulePlugin, PluginIncompatibleError
from .groups import GroupValidator
from .builder import ValidationBuilder

__all__ = [
    # Conditions
    "Condition",
    "always",
    "never",
    "both",
    "negate",
    # Context and paths
    "ValidationContext",
    "join_path",
    "index_path",
    # Results
    "FieldError",
    "ValidationError",
    "ValidationResult",
    "ValidationRule",
    # Messages
    "MessageSource",
    "StaticMessageSource",
    "DictMessageSource",
    # Validators
    "Validator",
    "ConditionalRules",
    "UNBOUND",
    "CompositeValidator",
    "CrossFieldValidator",
    # Factories
    "Deferred",
    "ValidatorFactory",
    "DefaultValidatorFactory",
    "LazyLoadingValidator",
    "LazyLoadingValidatorFactory",
    # Extension
    "ValidatorPlugin",
    "RulePlugin",
    "PluginIncompatibleError",
    "GroupValidator",
    # Entry point
    "ValidationBuilder",
]
