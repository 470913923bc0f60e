"""Display width inspection for sample code points.

Column widths come from wcwidth, with East Asian Ambiguous characters
(box-drawing among them) resolved by a configurable policy since their
rendered width depends on the terminal. rich's cell measurement is kept
alongside as a second opinion.
"""

import os
import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

import wcwidth
from rich.cells import cell_len


# ASCII, accented Latin, box-drawing, Gothic letter hwair (U+10348), emoji
SAMPLE_CHARACTERS = ("A", "é", "─", "\U00010348", "\U0001F600")


@dataclass(frozen=True)
class CharWidth:
    """Width facts for the leading code point of one sample."""

    sample: str
    codepoint: int
    byte_length: int
    width: int
    cells: int

    @property
    def label(self) -> str:
        return f"U+{self.codepoint:04X}"


def ambiguous_width(environ: Optional[Mapping[str, str]] = None) -> int:
    """Get the width to use for East Asian Ambiguous characters.

    Reads TERMREPORT_AMBIGUOUS_WIDTH. Default is 1 (standard Western
    terminals); set to 2 for CJK terminals that render ambiguous
    characters wide.
    """
    env = os.environ if environ is None else environ
    return 2 if env.get("TERMREPORT_AMBIGUOUS_WIDTH", "1").strip() == "2" else 1


def char_width(char: str, ambiguous: Optional[int] = None) -> int:
    """Columns occupied by a single code point.

    - Zero-width and non-printable (wcwidth 0 or -1): 0
    - Fullwidth (F) and Wide (W): 2
    - Ambiguous (A): per ``ambiguous`` or TERMREPORT_AMBIGUOUS_WIDTH
    - Everything else: 1
    """
    wc = wcwidth.wcwidth(char)
    if wc <= 0:
        return 0
    if wc == 2:
        return 2

    eaw = unicodedata.east_asian_width(char)
    if eaw in ("F", "W"):
        return 2
    if eaw == "A":
        return ambiguous_width() if ambiguous is None else ambiguous
    return 1


def display_width(text: str, ambiguous: Optional[int] = None) -> int:
    """Calculate the display width of a string in terminal columns."""
    if ambiguous is None:
        ambiguous = ambiguous_width()
    return sum(char_width(char, ambiguous) for char in text)


def inspect_sample(sample: str, ambiguous: Optional[int] = None) -> CharWidth:
    """Measure the leading code point of ``sample``.

    Raises:
        ValueError: If ``sample`` is empty.
    """
    if not sample:
        raise ValueError("sample must contain at least one code point")

    char = sample[0]
    return CharWidth(
        sample=sample,
        codepoint=ord(char),
        byte_length=len(char.encode("utf-8")),
        width=char_width(char, ambiguous),
        cells=cell_len(char),
    )


def inspect_samples(
    samples: Iterable[str] = SAMPLE_CHARACTERS,
    ambiguous: Optional[int] = None,
) -> List[CharWidth]:
    if ambiguous is None:
        ambiguous = ambiguous_width()
    return [inspect_sample(sample, ambiguous) for sample in samples]
