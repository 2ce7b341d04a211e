"""The closed set of style rules."""

from rust_codestyle.domain.rules.base import Rule, RuleName
from rust_codestyle.domain.rules.embed_simple_vars import EmbedSimpleVarsRule
from rust_codestyle.domain.rules.impl_follows_type import ImplFollowsTypeRule
from rust_codestyle.domain.rules.instrument import InstrumentRule
from rust_codestyle.domain.rules.insta_inline_snapshot import InstaInlineSnapshotRule
from rust_codestyle.domain.rules.loops import LoopsRule

# Registry order is the order fixes are applied in.
ALL_RULES: tuple[Rule, ...] = (
    InstrumentRule(),
    LoopsRule(),
    ImplFollowsTypeRule(),
    EmbedSimpleVarsRule(),
    InstaInlineSnapshotRule(),
)

RULES_BY_NAME: dict[RuleName, Rule] = {rule.name: rule for rule in ALL_RULES}

__all__ = [
    "ALL_RULES",
    "EmbedSimpleVarsRule",
    "ImplFollowsTypeRule",
    "InstaInlineSnapshotRule",
    "InstrumentRule",
    "LoopsRule",
    "RULES_BY_NAME",
    "Rule",
    "RuleName",
]
