"""
tmux-ai-status - CLI entry point.
Provides start, stop, status and once subcommands.
"""

import argparse
import json
import logging
import os
import signal
import subprocess
import sys
import threading
from logging.handlers import TimedRotatingFileHandler

from .__version__ import __version__
from .config import load_config
from .constants import LOG_FILE, PID_FILE, STATE_DIR
from .daemon import StatusDaemon
from .schemas import DaemonConfig
from .tmux import TmuxClient

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Send logs to stderr, or to a midnight-rotated file when given."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handler: logging.Handler = TimedRotatingFileHandler(
            log_file, when="midnight", interval=1, backupCount=3, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)


def build_config(args) -> DaemonConfig:
    """Config file settings with command-line overrides applied."""
    config = load_config(getattr(args, "config", None))
    overrides = {}
    if getattr(args, "interval", None) is not None:
        overrides["poll_interval"] = args.interval
    if getattr(args, "stability", None) is not None:
        overrides["stability_threshold"] = args.stability
    if overrides:
        config = DaemonConfig.model_validate({**config.model_dump(), **overrides})
    return config


def build_daemon(config: DaemonConfig) -> StatusDaemon:
    return StatusDaemon(TmuxClient(config.tmux_bin, config.tmux_timeout), config)


def _read_pid_file() -> int | None:
    """Read PID from the PID file, returning None if corrupt or missing."""
    if not os.path.exists(PID_FILE):
        return None
    try:
        with open(PID_FILE, encoding="utf-8") as f:
            return int(f.read().strip())
    except (ValueError, OSError):
        return None


def _write_pid_file(pid: int) -> None:
    os.makedirs(STATE_DIR, exist_ok=True)
    with open(PID_FILE, "w", encoding="utf-8") as f:
        f.write(str(pid))


def _remove_pid_file() -> None:
    if os.path.exists(PID_FILE):
        os.remove(PID_FILE)


def _pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


def cmd_run(args):
    """Internal: run the poll loop in-process (used by --background)."""
    configure_logging(args.log_level, args.log_file or LOG_FILE)
    _run_loop(build_config(args))


def _run_loop(config: DaemonConfig) -> None:
    stop = threading.Event()

    def _on_signal(_signum, _frame):
        stop.set()

    signal.signal(signal.SIGTERM, _on_signal)
    _write_pid_file(os.getpid())
    try:
        build_daemon(config).run_forever(stop)
    except KeyboardInterrupt:
        pass
    finally:
        _remove_pid_file()


def cmd_start(args):
    """Start the status daemon."""
    old_pid = _read_pid_file()
    if old_pid is not None:
        if _pid_alive(old_pid):
            print(f"tmux-ai-status already running (PID {old_pid})")
            return
        _remove_pid_file()

    if args.background:
        cmd = [sys.executable, "-m", "tmux_ai_status.cli", "_run", "--log-level", args.log_level]
        if args.log_file:
            cmd += ["--log-file", args.log_file]
        if args.config:
            cmd += ["--config", args.config]
        if args.interval is not None:
            cmd += ["--interval", str(args.interval)]
        if args.stability is not None:
            cmd += ["--stability", str(args.stability)]
        proc = subprocess.Popen(  # pylint: disable=consider-using-with
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
        _write_pid_file(proc.pid)
        print(f"tmux-ai-status v{__version__} started in background (PID {proc.pid})")
        return

    configure_logging(args.log_level, args.log_file)
    print(f"tmux-ai-status v{__version__} - press Ctrl-C to stop")
    _run_loop(build_config(args))


def cmd_stop(_args):
    """Stop the background daemon."""
    pid = _read_pid_file()
    if pid is None:
        print("tmux-ai-status is not running (no PID file found).")
        return

    try:
        os.kill(pid, signal.SIGTERM)
        print(f"tmux-ai-status stopped (PID {pid}).")
    except OSError as e:
        print(f"Could not stop process {pid}: {e}")
    finally:
        _remove_pid_file()


def cmd_status(_args):
    """Check if the daemon is running."""
    pid = _read_pid_file()
    if pid is None:
        print("tmux-ai-status is not running.")
        return

    if _pid_alive(pid):
        print(f"tmux-ai-status is running (PID {pid})")
    else:
        print("PID file exists but process is not running. Cleaning up.")
        _remove_pid_file()


def cmd_once(args):
    """Run a single cycle and print each window's state."""
    configure_logging(args.log_level, args.log_file)
    daemon = build_daemon(build_config(args))
    daemon.run_once()
    snapshot = daemon.store.snapshot()
    if args.json:
        print(json.dumps([s.model_dump() for s in snapshot], ensure_ascii=False, indent=2))
        return
    if not snapshot:
        print("No tmux windows found.")
        return
    for s in snapshot:
        label = s.applied or "(automatic)"
        flag = " [unread]" if s.unread else ""
        print(f"{s.window:<20} {label}{flag}")


def _add_common_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="Path to a JSON config file")
    p.add_argument("--interval", type=float, help="Seconds between polls")
    p.add_argument("--stability", type=int, help="Cycles a new label must hold before renaming")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    p.add_argument("--log-file", help="Write logs to this file (rotated nightly)")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tmux-ai-status",
        description="Label tmux windows with what the coding agent inside them is doing",
        epilog=(
            "Examples:\n"
            "  tmux-ai-status start                  Run in the foreground\n"
            "  tmux-ai-status start --background     Run as a background process\n"
            "  tmux-ai-status stop                   Stop the background daemon\n"
            "  tmux-ai-status status                 Check if the daemon is running\n"
            "  tmux-ai-status once --json            Run one cycle and dump window state\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    start_p = sub.add_parser("start", help="Start polling tmux")
    _add_common_options(start_p)
    start_p.add_argument(
        "--background", "-b", action="store_true", help="Run as a background process (detached)"
    )

    sub.add_parser("stop", help="Stop the background daemon")
    sub.add_parser("status", help="Check if the daemon is running")

    once_p = sub.add_parser("once", help="Run one cycle and print window state")
    _add_common_options(once_p)
    once_p.add_argument("--json", action="store_true", help="Print JSON instead of text")

    run_p = sub.add_parser("_run", help=argparse.SUPPRESS)
    _add_common_options(run_p)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    {
        "start": cmd_start,
        "_run": cmd_run,
        "stop": cmd_stop,
        "status": cmd_status,
        "once": cmd_once,
    }[args.command](args)


if __name__ == "__main__":
    main()
