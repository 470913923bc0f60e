# termreport/probes.py
"""Best-effort probes of the process and terminal environment.

Every probe is independent: it is attempted exactly once and either
returns a value or a ``ProbeResult`` carrying the error message. No probe
raises for an OS-level failure, so a report always runs to completion.
"""

import logging
import os
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Any, Dict, IO, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


TERMINAL_ENV_KEYS = (
    "TERM",
    "SHELL",
    "COLORTERM",
    "TERM_PROGRAM",
    "TERM_PROGRAM_VERSION",
    "LANG",
    "LC_ALL",
    "LC_CTYPE",
    "SSH_TTY",
    "SSH_CONNECTION",
)

PROC_FD_DIR = "/proc/self/fd"
DEV_FD_DIR = "/dev/fd"
DEV_TTY = "/dev/tty"

DEFAULT_TTY_TIMEOUT = 2.0


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe: a value or an error message, never both."""

    value: Any = None
    error: Optional[str] = None
    # Set when the probe could not even be attempted (e.g. command absent).
    missing: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "ProbeResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Any, missing: bool = False) -> "ProbeResult":
        return cls(error=str(error), missing=missing)


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def _normalize_arch(machine: str) -> str:
    machine_lower = machine.lower()
    if machine_lower in ("x86_64", "amd64"):
        return "x86_64"
    if machine_lower in ("arm64", "aarch64"):
        return "arm64"
    if machine_lower in ("i386", "i686", "x86"):
        return "x86"
    return machine_lower or "unknown"


def platform_identity() -> Dict[str, str]:
    """Report the OS family and the normalized CPU architecture."""
    return {
        "os": sys.platform,
        "arch": _normalize_arch(platform.machine()),
    }


def process_identity() -> Dict[str, int]:
    return {"pid": os.getpid(), "ppid": os.getppid()}


def working_directory() -> ProbeResult:
    try:
        return ProbeResult.success(os.getcwd())
    except OSError as e:
        logger.debug("getcwd failed: %s", e)
        return ProbeResult.failure(e)


def user_identity() -> ProbeResult:
    """Resolve the invoking user's name, UID, GID and home directory.

    Uses the password database where the platform has one. Elsewhere the
    name comes from ``getpass`` and the numeric IDs are reported as
    ``n/a``.
    """
    try:
        import pwd
    except ImportError:
        pwd = None

    try:
        if pwd is not None:
            entry = pwd.getpwuid(os.getuid())
            return ProbeResult.success({
                "username": entry.pw_name,
                "uid": str(entry.pw_uid),
                "gid": str(entry.pw_gid),
                "home": entry.pw_dir,
            })

        import getpass
        return ProbeResult.success({
            "username": getpass.getuser(),
            "uid": "n/a",
            "gid": "n/a",
            "home": os.path.expanduser("~"),
        })
    except (KeyError, OSError, ImportError) as e:
        # KeyError: UID has no passwd entry (common in containers)
        logger.debug("user lookup failed: %s", e)
        return ProbeResult.failure(e)


def terminal_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Snapshot the allow-listed terminal variables that are present.

    Unset variables are omitted entirely. Keys keep the allow-list order.
    """
    env = _env(environ)
    return {key: env[key] for key in TERMINAL_ENV_KEYS if key in env}


def is_tty(stream: Optional[IO]) -> bool:
    """Whether ``stream`` is connected to a terminal. Never raises."""
    if stream is None:
        return False
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, ValueError, OSError):
        # No fileno(), closed stream, or an in-memory replacement
        return False


def tty_flags() -> Dict[str, bool]:
    return {
        "stdin": is_tty(sys.stdin),
        "stdout": is_tty(sys.stdout),
        "stderr": is_tty(sys.stderr),
    }


def _fileno(stream: Optional[IO]) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, ValueError, OSError):
        return None


def terminal_size(flags: Mapping[str, bool]) -> ProbeResult:
    """Query the terminal dimensions as ``(columns, rows)``.

    Stdout is preferred, then stdin. A zero or negative dimension counts
    as a failure.
    """
    if flags.get("stdout"):
        fd = _fileno(sys.stdout)
    elif flags.get("stdin"):
        fd = _fileno(sys.stdin)
    else:
        return ProbeResult.failure("unavailable")

    if fd is None:
        return ProbeResult.failure("unavailable")

    try:
        size = os.get_terminal_size(fd)
    except (OSError, ValueError) as e:
        logger.debug("get_terminal_size(%d) failed: %s", fd, e)
        return ProbeResult.failure(e)

    if size.columns <= 0 or size.lines <= 0:
        return ProbeResult.failure(
            f"invalid size cols={size.columns} rows={size.lines}"
        )
    return ProbeResult.success((size.columns, size.lines))


def readlink_stdin() -> ProbeResult:
    """Resolve the stdin descriptor link to find the terminal path."""
    path = os.path.join(PROC_FD_DIR, "0")
    try:
        os.stat(path)
        return ProbeResult.success(os.readlink(path))
    except OSError as e:
        logger.debug("readlink %s failed: %s", path, e)
        return ProbeResult.failure(e)


def open_dev_tty(path: str = DEV_TTY) -> ProbeResult:
    """Open the generic terminal device read-only and report its name."""
    try:
        fd = os.open(path, os.O_RDONLY | getattr(os, "O_NOCTTY", 0))
    except OSError as e:
        logger.debug("open %s failed: %s", path, e)
        return ProbeResult.failure(e)

    try:
        try:
            return ProbeResult.success(os.ttyname(fd))
        except OSError:
            return ProbeResult.success(path)
    finally:
        os.close(fd)


def ssh_tty(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    return _env(environ).get("SSH_TTY") or None


def _tty_timeout(settings: Optional[Mapping[str, str]] = None) -> float:
    raw = _env(settings).get("TERMREPORT_TTY_TIMEOUT")
    if not raw:
        return DEFAULT_TTY_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        logger.warning(
            "Ignoring invalid TERMREPORT_TTY_TIMEOUT=%r, using %.1fs",
            raw, DEFAULT_TTY_TIMEOUT,
        )
        return DEFAULT_TTY_TIMEOUT
    return value


def tty_command(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Mapping[str, str]] = None,
) -> ProbeResult:
    """Run the external ``tty`` command through a shell wrapper.

    stdin is inherited, so the command reports the same terminal (or
    "not a tty") that this process sees on its standard input. The shell
    runs with ``environ`` so it searches the same PATH as the lookup.
    """
    env = _env(environ)
    if shutil.which("tty", path=env.get("PATH")) is None:
        return ProbeResult.failure("`tty` command not found in PATH", missing=True)

    try:
        proc = subprocess.run(
            ["sh", "-c", "tty"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=_tty_timeout(environ if settings is None else settings),
            env=None if environ is None else dict(environ),
            text=True,
            errors="replace",
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("tty command failed: %s", e)
        return ProbeResult.failure(f"command execution failed: {e}")

    output = (proc.stdout or "").strip()
    if proc.returncode != 0:
        return ProbeResult.failure(
            f"command execution failed: exit status {proc.returncode}"
            + (f" ({output})" if output else "")
        )
    return ProbeResult.success(output)


def path_and_home(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = _env(environ)
    return {"PATH": env.get("PATH", ""), "HOME": env.get("HOME", "")}


def current_umask() -> ProbeResult:
    """Read the process umask.

    There is no read-only query, so the mask is set and immediately
    restored.
    """
    try:
        mask = os.umask(0o022)
        os.umask(mask)
    except (AttributeError, OSError) as e:
        return ProbeResult.failure(e)
    return ProbeResult.success(f"{mask:04o}")


def fd_name(fd: int) -> str:
    """Resolve a descriptor to the file or device behind it."""
    for base in (PROC_FD_DIR, DEV_FD_DIR):
        try:
            return os.readlink(os.path.join(base, str(fd)))
        except OSError:
            continue
    return "unknown"


def fd_names(fds: Iterable[int] = range(4)) -> Dict[int, str]:
    return {fd: fd_name(fd) for fd in fds}


def controlling_tty(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Attempt every controlling-TTY strategy, independently of the others."""
    return {
        "stdin_link": readlink_stdin(),
        "dev_tty": open_dev_tty(),
        "ssh_tty": ssh_tty(environ),
        "tty_command": tty_command(environ, settings),
    }

