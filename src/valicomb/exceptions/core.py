"""
Exception classes for valicomb rule definition and message catalogs.

Validation failures never raise: they are collected in the validator's error
map. The exceptions here signal programming mistakes (unknown rules, bad rule
parameters, broken patterns, unusable language catalogs) that must surface
during development rather than on user input.
"""


class ValicombError(Exception):
    """Base exception for all valicomb errors."""

    pass


class RuleDefinitionError(ValicombError):
    """Raised when a rule is registered or invoked with an invalid definition."""

    def __init__(self, rule_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            rule_name: Name of the rule whose definition is invalid
            reason: Why the definition is invalid
        """
        self.rule_name = rule_name
        self.reason = reason
        super().__init__(f"Rule '{rule_name}': {reason}")


class UnknownRuleError(RuleDefinitionError):
    """Raised when a rule name is neither registered nor built in."""

    def __init__(self, rule_name: str, validator_name: str = "Validator"):
        """
        Initialize the exception.

        Params:
            rule_name: The rule name that could not be resolved
            validator_name: Class name of the validator used in the hint
        """
        self.validator_name = validator_name
        super().__init__(
            rule_name,
            f"has not been registered with {validator_name}.add_rule()",
        )


class RuleParameterError(RuleDefinitionError):
    """Raised when a built-in rule receives a missing or malformed parameter."""

    pass


class InvalidPatternError(RuleDefinitionError):
    """Raised when a regex rule is given a pattern that does not compile."""

    def __init__(self, pattern: str, reason: str):
        """
        Initialize the exception.

        Params:
            pattern: The offending pattern
            reason: Compiler message describing the problem
        """
        self.pattern = pattern
        super().__init__("regex", f"invalid pattern {pattern!r}: {reason}")


class PatternExhaustionError(RuleDefinitionError):
    """Raised when a pattern exceeds the regex engine's size or recursion limits.

    Kept apart from InvalidPatternError: the pattern compiles, but is too
    dangerous to evaluate.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__("regex", f"pattern {pattern!r} exhausted engine limits: {reason}")


class LanguageError(ValicombError):
    """Raised when a message catalog cannot be selected or loaded."""

    def __init__(self, message: str):
        """
        Initialize the exception.

        Params:
            message: Description of the catalog failure
        """
        super().__init__(message)
