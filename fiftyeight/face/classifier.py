# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Digit classification: which glyph family renders each digit of a field.

The policy is an ordered table of rules. Each rule names the fields it
applies to, a predicate over the field and its context, and the families
for the tens and ones digits. The first matching rule wins; when nothing
matches the narrowest available family is used, so classification never
fails. New policies are new tables, the layout code does not change.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from .glyphs import GlyphFamily, narrowest_family


class FieldRole(Enum):
    HOUR = "hour"
    MINUTE = "minute"


class DigitRole(Enum):
    HOUR_TENS = "hour_tens"
    HOUR_ONES = "hour_ones"
    MINUTE_TENS = "minute_tens"
    MINUTE_ONES = "minute_ones"


DIGIT_ROLES = {
    FieldRole.HOUR: (DigitRole.HOUR_TENS, DigitRole.HOUR_ONES),
    FieldRole.MINUTE: (DigitRole.MINUTE_TENS, DigitRole.MINUTE_ONES),
}


@dataclass(frozen=True)
class DigitField:
    """A two-digit number split into tens and ones.

    The tens digit is absent only when it is zero and the field is allowed
    to drop its leading zero (12-hour hours).
    """
    value: int
    tens: int
    ones: int
    tens_present: bool = True

    @classmethod
    def split(cls, value: int, drop_leading_zero: bool = False) -> 'DigitField':
        tens, ones = divmod(value, 10)
        return cls(value, tens, ones, tens_present=not (drop_leading_zero and tens == 0))

    @property
    def single_digit(self) -> bool:
        return not self.tens_present


@dataclass(frozen=True)
class FieldContext:
    """Everything a rule may look at when classifying one field."""
    role: FieldRole
    field: DigitField
    # Set on the minute field once the hour field has been classified
    hour_single_digit: bool = False


@dataclass(frozen=True)
class FieldClassification:
    """Families chosen for one field; tens is None when the digit is absent."""
    tens: Optional[GlyphFamily]
    ones: GlyphFamily
    rule: str


Predicate = Callable[[FieldContext], bool]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    roles: FrozenSet[FieldRole]
    predicate: Predicate
    tens: Optional[GlyphFamily]
    ones: GlyphFamily

    def matches(self, ctx: FieldContext) -> bool:
        if ctx.role not in self.roles:
            return False
        # A rule for absent tens only fits fields that are single-digit
        if (self.tens is None) != ctx.field.single_digit:
            return False
        return self.predicate(ctx)

    def families(self) -> FrozenSet[GlyphFamily]:
        return frozenset(f for f in (self.tens, self.ones) if f is not None)


@dataclass(frozen=True)
class RuleTable:
    """An ordered, immutable classification policy."""
    name: str
    rules: Tuple[ClassificationRule, ...]
    fallback: Optional[GlyphFamily] = None

    def classify(self, ctx: FieldContext,
                 available: Optional[Iterable[GlyphFamily]] = None) -> FieldClassification:
        """Pick families for the field described by ctx.

        Args:
            ctx: Field value and flags.
            available: Families that can actually be drawn. Rules needing
                anything else are skipped. None means all families.

        Raises:
            ValueError: available is empty.
        """
        available = frozenset(available) if available is not None else frozenset(GlyphFamily)
        if not available:
            raise ValueError("No glyph families available to classify with")

        for rule in self.rules:
            if rule.families() <= available and rule.matches(ctx):
                return FieldClassification(rule.tens, rule.ones, rule.name)

        fallback = self.fallback if self.fallback in available else narrowest_family(available)
        tens = None if ctx.field.single_digit else fallback
        return FieldClassification(tens, fallback, "fallback")


HOUR = frozenset({FieldRole.HOUR})
MINUTE = frozenset({FieldRole.MINUTE})
ANY_FIELD = frozenset(FieldRole)


def _always(ctx: FieldContext) -> bool:
    return True


SINGLE_DIGIT_HOUR = ClassificationRule(
    "single_digit_hour", HOUR, _always,
    None, GlyphFamily.PRIORITY,
)

EQUAL_DIGIT_HOUR = ClassificationRule(
    "equal_digit_hour", HOUR,
    lambda ctx: ctx.field.tens == ctx.field.ones,
    GlyphFamily.SUBPRIORITY, GlyphFamily.SUBPRIORITY,
)

MIXED_WIDTH_TEEN_HOUR = ClassificationRule(
    "mixed_width_teen_hour", HOUR,
    lambda ctx: ctx.field.tens == 1 and ctx.field.ones != 1,
    GlyphFamily.LEAST, GlyphFamily.PRIORITY,
)

TRAILING_ZERO_MINUTE = ClassificationRule(
    "trailing_zero_minute", MINUTE,
    lambda ctx: ctx.field.ones == 0 and ctx.hour_single_digit,
    GlyphFamily.SUBPRIORITY, GlyphFamily.LEAST,
)

LEADING_ZERO_MINUTE = ClassificationRule(
    "leading_zero_minute", MINUTE,
    lambda ctx: ctx.field.tens == 0 and ctx.field.ones > 0,
    GlyphFamily.LESSER, GlyphFamily.SUBPRIORITY,
)

TWO_DIGIT_DEFAULT = ClassificationRule(
    "two_digit_default", ANY_FIELD, _always,
    GlyphFamily.SUBPRIORITY, GlyphFamily.SUBPRIORITY,
)

UNIFORM_SINGLE_DIGIT = ClassificationRule(
    "uniform_single_digit", ANY_FIELD, _always,
    None, GlyphFamily.SUBPRIORITY,
)

# Wide lone hour digit, balanced by demoting a trailing minute zero
BALANCED_RULES = RuleTable("balanced", (
    SINGLE_DIGIT_HOUR,
    EQUAL_DIGIT_HOUR,
    MIXED_WIDTH_TEEN_HOUR,
    TRAILING_ZERO_MINUTE,
    LEADING_ZERO_MINUTE,
    TWO_DIGIT_DEFAULT,
), fallback=GlyphFamily.LEAST)

# Same as balanced, without the trailing-zero demotion
CLASSIC_RULES = RuleTable("classic", (
    SINGLE_DIGIT_HOUR,
    EQUAL_DIGIT_HOUR,
    MIXED_WIDTH_TEEN_HOUR,
    LEADING_ZERO_MINUTE,
    TWO_DIGIT_DEFAULT,
), fallback=GlyphFamily.LEAST)

# Every digit the same width
UNIFORM_RULES = RuleTable("uniform", (
    UNIFORM_SINGLE_DIGIT,
    TWO_DIGIT_DEFAULT,
), fallback=GlyphFamily.SUBPRIORITY)

DEFAULT_RULES = BALANCED_RULES

# Registry of available digit policies
DIGIT_POLICIES: Dict[str, RuleTable] = {
    'balanced': BALANCED_RULES,
    'classic': CLASSIC_RULES,
    'uniform': UNIFORM_RULES,
}


def get_policy(name: str) -> RuleTable:
    """Look up a policy by name, falling back to the default table."""
    return DIGIT_POLICIES.get(name, DEFAULT_RULES)
