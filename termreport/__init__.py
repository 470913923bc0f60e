# termreport package
#
# Terminal environment diagnostics. The command-line entry point lives in
# termreport.__main__; the pieces below are importable on their own:
#
#   from termreport import collect_env_report, render_text
#   print("\n".join(render_text(collect_env_report())))

from .display_width import SAMPLE_CHARACTERS, char_width, display_width, inspect_samples
from .probes import ProbeResult
from .report import EnvReport, collect_env_report, render_json, render_text

__version__ = "0.1.0"

__all__ = [
    "SAMPLE_CHARACTERS",
    "EnvReport",
    "ProbeResult",
    "char_width",
    "collect_env_report",
    "display_width",
    "inspect_samples",
    "render_json",
    "render_text",
]
