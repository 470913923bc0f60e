# termreport/report.py
"""Collect every probe once and render the result as text or JSON."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from . import probes, terminal_caps
from .display_width import CharWidth, ambiguous_width, inspect_samples
from .probes import ProbeResult


HEADER = "=== Terminal / environment summary ==="
FOOTER = "=== End ==="


@dataclass
class EnvReport:
    """Results of a single run, in report order."""

    platform: Dict[str, str]
    process: Dict[str, int]
    cwd: ProbeResult
    user: ProbeResult
    terminal_env: Dict[str, str]
    tty: Dict[str, bool]
    size: ProbeResult
    capabilities: Dict[str, Any]
    controlling_tty: Dict[str, Any]
    path_home: Dict[str, str]
    umask: ProbeResult
    fds: Dict[int, str]
    widths: List[CharWidth] = field(default_factory=list)


def collect_env_report(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Mapping[str, str]] = None,
) -> EnvReport:
    """Run every probe exactly once, in order.

    ``environ`` is the environment being reported on; ``settings`` holds
    the TERMREPORT_* options and defaults to ``environ``.
    """
    if settings is None:
        settings = environ
    tty = probes.tty_flags()
    return EnvReport(
        platform=probes.platform_identity(),
        process=probes.process_identity(),
        cwd=probes.working_directory(),
        user=probes.user_identity(),
        terminal_env=probes.terminal_env(environ),
        tty=tty,
        size=probes.terminal_size(tty),
        capabilities=terminal_caps.detect(environ=environ),
        controlling_tty=probes.controlling_tty(environ, settings),
        path_home=probes.path_and_home(environ),
        umask=probes.current_umask(),
        fds=probes.fd_names(),
        widths=inspect_samples(ambiguous=ambiguous_width(settings)),
    )


def render_widths(rows: Sequence[CharWidth]) -> List[str]:
    lines = []
    for row in rows:
        lines.append(
            f"{row.label} {row.sample[0]!r} bytes={row.byte_length} "
            f"width={row.width} cells={row.cells}"
        )
    return lines


def _render_user(user: ProbeResult) -> str:
    if not user.ok:
        return f"User: <error: {user.error}>"
    u = user.value
    return f"User: {u['username']} (UID: {u['uid']}, GID: {u['gid']}) Home: {u['home']}"


def _render_controlling_tty(ctty: Mapping[str, Any]) -> List[str]:
    lines = []

    link = ctty["stdin_link"]
    lines.append(f"{probes.PROC_FD_DIR}/0 -> {link.value if link.ok else link.error}")

    dev = ctty["dev_tty"]
    if dev.ok:
        lines.append(f"Opened {probes.DEV_TTY} (name): {dev.value}")
    else:
        lines.append(f"{probes.DEV_TTY}: {dev.error}")

    if ctty["ssh_tty"]:
        lines.append(f"SSH_TTY (env) = {ctty['ssh_tty']}")

    cmd = ctty["tty_command"]
    if cmd.ok:
        lines.append(f"`tty` command -> {cmd.value}")
    elif cmd.missing:
        lines.append("`tty` command not found in PATH")
    else:
        lines.append(f"`tty` command error: {cmd.error}")
    return lines


def render_text(report: EnvReport) -> List[str]:
    """Render the report as the line-oriented text format."""
    lines = [
        HEADER,
        f"OS: {report.platform['os']}",
        f"Arch: {report.platform['arch']}",
        "",
        f"PID: {report.process['pid']}",
        f"PPID: {report.process['ppid']}",
    ]

    if report.cwd.ok:
        lines.append(f"Working dir: {report.cwd.value}")
    else:
        lines.append(f"Working dir: <error: {report.cwd.error}>")
    lines.append(_render_user(report.user))

    lines.append("")
    lines.append("--- Terminal-related environment variables ---")
    lines.extend(f"{key}={value}" for key, value in report.terminal_env.items())
    lines.append("")

    lines.append(f"Stdin is TTY: {report.tty['stdin']}")
    lines.append(f"Stdout is TTY: {report.tty['stdout']}")
    lines.append(f"Stderr is TTY: {report.tty['stderr']}")
    if report.size.ok:
        cols, rows = report.size.value
        lines.append(f"Terminal size: cols={cols} rows={rows}")
    else:
        lines.append("Terminal size: unavailable")

    caps = report.capabilities
    lines.append("")
    lines.append("--- Terminal capabilities ---")
    lines.append(f"Multiplexer: {caps['multiplexer'] or 'none'}")
    lines.append(f"Color depth: {caps['color_depth']}")
    lines.append(f"Emulator: {caps['emulator'] or 'unknown'}")

    lines.append("")
    lines.append("--- Controlling TTY / fd info (best-effort) ---")
    lines.extend(_render_controlling_tty(report.controlling_tty))

    lines.append("")
    lines.append("--- Other environment information ---")
    lines.append(f"PATH={report.path_home['PATH']}")
    lines.append(f"HOME={report.path_home['HOME']}")
    if report.umask.ok:
        lines.append(f"umask={report.umask.value}")
    else:
        lines.append(f"umask: unavailable ({report.umask.error})")

    lines.append("")
    lines.append("--- FDs -> names (fd 0..3) ---")
    lines.extend(f"fd {fd} -> {name}" for fd, name in report.fds.items())

    lines.append("")
    lines.append("--- Display width ---")
    lines.extend(render_widths(report.widths))

    lines.append("")
    lines.append(FOOTER)
    return lines


def _probe_dict(result: ProbeResult) -> Dict[str, Any]:
    if result.ok:
        return {"ok": True, "value": result.value}
    return {"ok": False, "error": result.error}


def _width_dict(row: CharWidth) -> Dict[str, Any]:
    return {
        "sample": row.sample,
        "codepoint": row.label,
        "bytes": row.byte_length,
        "width": row.width,
        "cells": row.cells,
    }


def render_json(report: EnvReport) -> str:
    """Render the report as a JSON document."""
    ctty = report.controlling_tty
    size = _probe_dict(report.size)
    if size["ok"]:
        cols, rows = size.pop("value")
        size.update(cols=cols, rows=rows)

    data = {
        "platform": report.platform,
        "process": report.process,
        "cwd": _probe_dict(report.cwd),
        "user": _probe_dict(report.user),
        "terminal_env": report.terminal_env,
        "tty": report.tty,
        "terminal_size": size,
        "capabilities": report.capabilities,
        "controlling_tty": {
            "stdin_link": _probe_dict(ctty["stdin_link"]),
            "dev_tty": _probe_dict(ctty["dev_tty"]),
            "ssh_tty": ctty["ssh_tty"],
            "tty_command": dict(
                _probe_dict(ctty["tty_command"]),
                missing=ctty["tty_command"].missing,
            ),
        },
        "path": report.path_home["PATH"],
        "home": report.path_home["HOME"],
        "umask": _probe_dict(report.umask),
        "fds": {str(fd): name for fd, name in report.fds.items()},
        "widths": [_width_dict(row) for row in report.widths],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_widths_json(rows: Sequence[CharWidth]) -> str:
    return json.dumps([_width_dict(row) for row in rows], indent=2, ensure_ascii=False)
