"""
Stochastic L-system rewriting.

A sentence is expanded from its axiom through N generations. In each
generation every non-bracket symbol with matching rules is replaced by the
production of one rule, picked with probability proportional to its odds.

Parameters (segment length, rotation angle) are attached when a symbol is
created, using the bracket depth at the point of substitution:

    length = base_length * length_falloff^depth * jitter
    angle  = branch_angle * jitter
    jitter = 1 + variability * (r - 0.5) * 2        (1 when variability = 0)

Randomness is drawn from a single SeededRandom in scan order (left to right,
production characters in order), so a (lsystem, iterations, seed) triple
always expands to the same sentence.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

from treegen.rng import SeededRandom
from treegen.symbols import BRACKETS, FORWARD, LEAF, POP, PUSH, ROTATIONS, Symbol

if TYPE_CHECKING:
    from treegen.config import LSystem, LSystemConfig

ProduceFn = Callable[..., list[Symbol]]


# =============================================================================
# PRODUCTIONS
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """Production given as a string; each character becomes a new symbol."""
    text: str

    def expand(
        self,
        symbol: Symbol,
        depth: int,
        config: LSystemConfig,
        rng: SeededRandom,
    ) -> list[Symbol]:
        return parse_production(self.text, rng, config, depth)


@dataclass(frozen=True)
class Generator:
    """
    Production computed by a function.

    The function is called with keyword arguments ``symbol``, ``depth``,
    ``config`` and ``rng`` and must return a list of Symbols, which is spliced
    into the output unchanged.
    """
    fn: ProduceFn

    def expand(
        self,
        symbol: Symbol,
        depth: int,
        config: LSystemConfig,
        rng: SeededRandom,
    ) -> list[Symbol]:
        produced = list(self.fn(symbol=symbol, depth=depth, config=config, rng=rng))
        for item in produced:
            if not isinstance(item, Symbol):
                raise TypeError(
                    f"Generator for '{symbol.char}' returned {type(item).__name__}, "
                    "expected Symbol"
                )
        return produced


Production = Literal | Generator


@dataclass(frozen=True)
class Rule:
    """Rewrite `match` into `produce`, weighted by `odds` among its siblings."""
    match: str
    odds: float
    produce: Production


def validate_rules(rules: Iterable[Rule]) -> None:
    """
    Reject rule sets the engine cannot sample from.

    Raises:
        ValueError: On a match that is not a single non-bracket character,
            negative or non-finite odds, or a match group whose odds sum to
            zero.
    """
    totals: dict[str, float] = {}
    for rule in rules:
        if len(rule.match) != 1:
            raise ValueError(f"Rule match must be a single character, got {rule.match!r}")
        if rule.match in BRACKETS:
            raise ValueError("Brackets are structural and cannot be rewritten")
        if not math.isfinite(rule.odds) or rule.odds < 0:
            raise ValueError(f"Rule odds must be finite and nonnegative, got {rule.odds}")
        if not isinstance(rule.produce, (Literal, Generator)):
            raise ValueError(f"Rule for '{rule.match}' needs a Literal or Generator production")
        totals[rule.match] = totals.get(rule.match, 0.0) + rule.odds

    for match, total in totals.items():
        if total <= 0:
            raise ValueError(f"Rules matching '{match}' have zero total odds")


# =============================================================================
# REWRITING
# =============================================================================

def select_rule(rules: list[Rule], rng: SeededRandom) -> Rule:
    """
    Pick one rule from a group sharing the same match.

    A single candidate is returned without drawing. Otherwise one draw is
    scaled by the group's total odds and compared against the running sum;
    if rounding leaves the draw past every bound, the last rule wins.
    """
    if len(rules) == 1:
        return rules[0]

    total_odds = sum(rule.odds for rule in rules)
    threshold = rng.random() * total_odds

    accumulated = 0.0
    for rule in rules:
        accumulated += rule.odds
        if threshold < accumulated:
            return rule

    return rules[-1]


def variability_factor(config: LSystemConfig, rng: SeededRandom) -> float:
    """Uniform multiplier in [1 - v, 1 + v]; one draw unless v is zero."""
    if config.variability == 0:
        return 1.0
    return 1 + config.variability * (rng.random() - 0.5) * 2


def create_symbol(
    char: str,
    rng: SeededRandom,
    config: LSystemConfig,
    depth: int,
) -> Symbol:
    """Create a parameterised symbol for `char` at bracket depth `depth`."""
    if char == FORWARD:
        base = config.base_length * math.pow(config.length_falloff, depth)
        return Symbol(char, length=base * variability_factor(config, rng))

    if char in ROTATIONS:
        return Symbol(char, angle=config.branch_angle * variability_factor(config, rng))

    if char == LEAF:
        return Symbol(char, size=1.0)

    return Symbol(char)


def parse_production(
    text: str,
    rng: SeededRandom,
    config: LSystemConfig,
    depth: int,
) -> list[Symbol]:
    """Turn every character of `text` into a fresh symbol at one depth."""
    return [create_symbol(char, rng, config, depth) for char in text]


def group_rules(rules: Iterable[Rule]) -> dict[str, list[Rule]]:
    """Rules keyed by match character, keeping declaration order."""
    groups: dict[str, list[Rule]] = {}
    for rule in rules:
        groups.setdefault(rule.match, []).append(rule)
    return groups


def apply_rules(
    sentence: list[Symbol],
    rules: list[Rule] | tuple[Rule, ...],
    rng: SeededRandom,
    config: LSystemConfig,
) -> list[Symbol]:
    """
    Run one rewriting generation over `sentence`.

    Brackets pass through and adjust the depth used for new symbols. Symbols
    without matching rules are kept as they are.
    """
    groups = group_rules(rules)
    result: list[Symbol] = []
    depth = 0

    for symbol in sentence:
        if symbol.char == PUSH:
            result.append(symbol)
            depth += 1
            continue
        if symbol.char == POP:
            result.append(symbol)
            depth -= 1
            continue

        candidates = groups.get(symbol.char)
        if not candidates:
            result.append(symbol)
            continue

        rule = select_rule(candidates, rng)
        result.extend(rule.produce.expand(symbol, depth, config, rng))

    return result


def generate_sentence(lsystem: LSystem, iterations: int, seed: str) -> list[Symbol]:
    """
    Expand the axiom of `lsystem` through `iterations` generations.

    A fresh SeededRandom is built from `seed` and threaded through the axiom
    parse and every generation.

    Example:
        >>> from treegen.config import LSystem, LSystemConfig
        >>> system = LSystem("F", (Rule("F", 1.0, Literal("FF")),), LSystemConfig())
        >>> len(generate_sentence(system, iterations=3, seed="a"))
        8
    """
    rng = SeededRandom(seed)
    sentence = parse_production(lsystem.axiom, rng, lsystem.config, depth=0)

    for _ in range(iterations):
        sentence = apply_rules(sentence, lsystem.rules, rng, lsystem.config)

    return sentence
