from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

from jbangop.config import load_config, run_config
from jbangop.core.errors import ExitStatusError, JBangError
from jbangop.core.logging import configure_logging
from jbangop.core.operation import JBangOperation
from jbangop.core.project import BaseProject
from jbangop.trace.trace_emitter import TraceEmitter
from jbangop.trace.trace_store import TraceStoreJSONL


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a JBangError
    - Includes structured `data` payload when present (e.g. config validation errors)
    """
    if isinstance(e, JBangError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2)
    return str(e)


def _trace_emitter(args: argparse.Namespace) -> Optional[TraceEmitter]:
    if not args.trace:
        return None
    return TraceEmitter(TraceStoreJSONL(Path(args.trace)), run_id=args.run_id)


def cmd_run(args: argparse.Namespace) -> int:
    op = JBangOperation().from_project(BaseProject(work_directory=Path(args.project_dir)))
    if args.jbang_home:
        op.jbang_home(args.jbang_home)
    if args.work_dir:
        op.work_dir(args.work_dir)
    op.jbang_args(args.jbang_arg).args(args.args)
    if args.script:
        op.script(args.script)
    op.exit_on_failure(not args.no_exit_on_failure).silent(args.silent)

    if args.dry_run:
        print(json.dumps(op.build_command(), ensure_ascii=False))
        return 0

    op.trace(_trace_emitter(args)).execute()
    return 0


def cmd_run_config(args: argparse.Namespace) -> int:
    config = load_config(Path(args.config))
    results = run_config(config, trace=_trace_emitter(args))
    if args.json:
        print(json.dumps(results, ensure_ascii=False, indent=2))
    return 0


def cmd_show_trace(args: argparse.Namespace) -> int:
    events = list(TraceStoreJSONL(Path(args.trace)).iter_events(event_type=args.event_type))

    if args.tail is not None and args.tail >= 0:
        events = events[-args.tail :] if args.tail else []

    for e in events:
        if args.pretty:
            print(json.dumps(e, ensure_ascii=False, indent=2))
        else:
            print(json.dumps(e, ensure_ascii=False))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="jbangop", description="Run JBang scripts from a project directory")
    parser.add_argument("--log-level", default="info", help="Logging level (default: info)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run JBang once with the given arguments")
    p_run.add_argument("--project-dir", default=".", help="Project directory (default: .)")
    p_run.add_argument("--work-dir", help="Working directory, if different from the project directory")
    p_run.add_argument("--jbang-home", help="JBang home directory (default: JBANG_HOME or PATH lookup)")
    p_run.add_argument("--jbang-arg", action="append", default=[], help="Argument passed to JBang (repeatable)")
    p_run.add_argument("--script", help="Script to run")
    p_run.add_argument("--no-exit-on-failure", action="store_true", help="Do not fail when JBang exits non-zero")
    p_run.add_argument("--silent", action="store_true", help="Suppress command and error logging")
    p_run.add_argument("--dry-run", action="store_true", help="Print the command as JSON instead of running it")
    p_run.add_argument("--trace", help="Trace output path (jsonl)")
    p_run.add_argument("--run-id", default="run_cli", help="Run ID for trace correlation")
    p_run.add_argument("args", nargs="*", help="Script arguments (use -- before arguments starting with -)")
    p_run.set_defaults(func=cmd_run)

    p_cfg = sub.add_parser("run-config", help="Run the JBang invocations declared in a YAML descriptor")
    p_cfg.add_argument("--config", default="jbang.yml", help="Path to descriptor YAML (default: jbang.yml)")
    p_cfg.add_argument("--trace", help="Trace output path (jsonl)")
    p_cfg.add_argument("--run-id", default="run_cli", help="Run ID for trace correlation")
    p_cfg.add_argument("--json", action="store_true", help="Print executed runs as JSON")
    p_cfg.set_defaults(func=cmd_run_config)

    p_show_trace = sub.add_parser("show-trace", help="Show trace events from a JSONL file")
    p_show_trace.add_argument("--trace", required=True, help="Trace path (jsonl)")
    p_show_trace.add_argument("--event-type", help="Filter by event_type")
    p_show_trace.add_argument("--tail", type=int, help="Show only last N events")
    p_show_trace.add_argument("--pretty", action="store_true", help="Pretty-print each event as JSON")
    p_show_trace.set_defaults(func=cmd_show_trace)

    ns = parser.parse_args(argv)
    configure_logging(level=ns.log_level)
    try:
        return int(ns.func(ns))
    except ExitStatusError as e:
        return e.status
    except Exception as e:  # noqa: BLE001
        print(_format_cli_error(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
