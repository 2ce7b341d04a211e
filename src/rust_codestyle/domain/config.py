"""Rule options: which rules run, resolved from defaults and overrides."""

from dataclasses import dataclass
from typing import Mapping, Union

from rust_codestyle.domain.errors import ConfigurationError
from rust_codestyle.domain.rules import ALL_RULES, Rule, RuleName

OptionValue = Union[bool, str]

_TRUE = frozenset({"true"})
_FALSE = frozenset({"false"})


def parse_bool(name: str, value: OptionValue) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"invalid value {value!r} for `{name}`: expected true or false")


def rule_name(name: str) -> RuleName:
    try:
        return RuleName(name)
    except ValueError:
        known = ", ".join(r.value for r in RuleName)
        raise ConfigurationError(f"unknown rule `{name}` (known rules: {known})") from None


@dataclass(frozen=True)
class RuleOptions:
    """
    Complete mapping of every rule to its enabled flag.

    Built once per run and never mutated; shared across worker threads.
    """

    enabled: Mapping[RuleName, bool]

    @classmethod
    def defaults(cls) -> "RuleOptions":
        return cls({rule.name: rule.default_enabled for rule in ALL_RULES})

    @classmethod
    def resolve(cls, *layers: Mapping[str, OptionValue]) -> "RuleOptions":
        """
        Apply override layers over the defaults, lowest precedence first.

        Raises ConfigurationError for unknown rule names or non-boolean values.
        """
        enabled = dict(cls.defaults().enabled)
        for layer in layers:
            for name, value in layer.items():
                key = rule_name(name)
                enabled[key] = parse_bool(name, value)
        return cls(enabled)

    def is_enabled(self, name: RuleName) -> bool:
        return self.enabled[name]

    def active_rules(self) -> tuple[Rule, ...]:
        """Enabled rules in registry order."""
        return tuple(rule for rule in ALL_RULES if self.enabled[rule.name])
