"""
L-system symbol alphabet.

Symbols are the commands the turtle executes:

    F       draw a segment forward (param: length)
    + -     yaw left / right about the local up axis (param: angle, degrees)
    ^ &     pitch up / down about the local right axis
    / \\     roll about the local forward axis
    [ ]     push / pop turtle state (start / end a branch)
    L       place a leaf (param: size)
    X       placeholder for rewriting; draws nothing

Any other character is carried through rewriting and ignored by the turtle.
"""

from typing import NamedTuple

FORWARD = "F"
YAW_LEFT = "+"
YAW_RIGHT = "-"
PITCH_UP = "^"
PITCH_DOWN = "&"
ROLL_RIGHT = "/"
ROLL_LEFT = "\\"
PUSH = "["
POP = "]"
LEAF = "L"

ROTATIONS = frozenset({YAW_LEFT, YAW_RIGHT, PITCH_UP, PITCH_DOWN, ROLL_RIGHT, ROLL_LEFT})
BRACKETS = frozenset({PUSH, POP})


class Symbol(NamedTuple):
    """
    One command in a sentence.

    Only the parameter relevant to the character is set; the rest stay None
    and the turtle falls back to its defaults.
    """
    char: str
    length: float | None = None
    angle: float | None = None
    size: float | None = None

    def __str__(self) -> str:
        return self.char


def sentence_to_string(sentence: list[Symbol]) -> str:
    """Join the characters of a sentence, dropping parameters."""
    return "".join(symbol.char for symbol in sentence)


def count_symbols(sentence: list[Symbol], char: str) -> int:
    return sum(1 for symbol in sentence if symbol.char == char)
