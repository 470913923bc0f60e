# termreport/terminal_caps.py
"""Terminal capability summary derived from the environment.

Usage:
    from termreport.terminal_caps import detect

    caps = detect()
    caps["color_depth"]    # "24bit" | "256" | "basic" | "none"
    caps["multiplexer"]    # "tmux" | "screen" | None
    caps["emulator"]       # "iTerm.app" | "kitty" | "xterm-compatible" | ...
"""

import os
import sys
from typing import IO, Any, Dict, Mapping, Optional

from .probes import is_tty


def detect(
    stream: Optional[IO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Detect terminal capabilities for ``stream`` (stdout by default).

    Returns:
        Dict with keys: interactive, term, term_program, colorterm,
        multiplexer, color_depth, emulator.
    """
    env = os.environ if environ is None else environ
    is_interactive = is_tty(sys.stdout if stream is None else stream)

    term = env.get("TERM")
    term_program = env.get("TERM_PROGRAM")
    colorterm = env.get("COLORTERM")

    info: Dict[str, Any] = {
        "interactive": is_interactive,
        "term": term,
        "term_program": term_program,
        "colorterm": colorterm,
    }
    info["multiplexer"] = _detect_multiplexer(term, env)
    info["color_depth"] = _detect_color_depth(
        is_interactive, term, colorterm, no_color="NO_COLOR" in env
    )
    info["emulator"] = _detect_emulator(term_program, term)
    return info


def _detect_multiplexer(
    term: Optional[str],
    env: Mapping[str, str],
) -> Optional[str]:
    """Detect if running inside a terminal multiplexer."""
    if env.get("TMUX"):
        return "tmux"
    if env.get("STY"):
        return "screen"
    if term and ("screen" in term or term.startswith("tmux")):
        return "tmux" if term.startswith("tmux") else "screen"
    return None


def _detect_color_depth(
    is_interactive: bool,
    term: Optional[str],
    colorterm: Optional[str],
    no_color: bool = False,
) -> str:
    """Detect terminal color depth.

    NO_COLOR (https://no-color.org) disables color regardless of what
    the terminal advertises.
    """
    if no_color or not is_interactive:
        return "none"

    term_lower = (term or "").lower()
    colorterm_lower = (colorterm or "").lower()

    if colorterm_lower in ("truecolor", "24bit") or "truecolor" in colorterm_lower:
        return "24bit"
    if "256color" in term_lower or "256" in colorterm_lower:
        return "256"
    if term_lower and term_lower != "dumb":
        return "basic"
    return "none"


def _detect_emulator(
    term_program: Optional[str],
    term: Optional[str],
) -> Optional[str]:
    """Detect the terminal emulator."""
    if term_program:
        return term_program
    term_lower = (term or "").lower()
    if "xterm" in term_lower:
        return "xterm-compatible"
    if "linux" in term_lower:
        return "linux-console"
    return None
