"""Console encoding setup so the report can always print its samples.

Windows consoles default to code pages like cp1252 that cannot encode
the emoji and supplementary-plane samples.
"""

import sys


def configure_utf8_output() -> None:
    """Switch stdout and stderr to UTF-8 with 'replace' error handling.

    Only acts on Windows, and only on the streams: the process environment
    is what the report describes, so no variables are set here. Streams
    that cannot be reconfigured (replaced by a test harness, already
    detached) are left as they are.
    """
    if sys.platform != 'win32':
        return

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, 'reconfigure', None)
        if reconfigure is None:
            continue
        try:
            reconfigure(encoding='utf-8', errors='replace')
        except (ValueError, OSError):
            pass
