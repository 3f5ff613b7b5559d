from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .contract_store import ContractStore
from .core.errors import ValidationError
from .core.operation import JBangOperation
from .core.platform import PlatformProvider
from .core.project import BaseProject
from .resources import schemas_dir
from .trace.trace_emitter import TraceEmitter

CONFIG_SCHEMA = "jbang_config.schema.json"


@dataclass(frozen=True)
class RunSpec:
    name: str = ""
    jbang_args: List[str] = field(default_factory=list)
    script: Optional[str] = None
    args: List[str] = field(default_factory=list)
    exit_on_failure: bool = True


@dataclass(frozen=True)
class JBangConfig:
    """
    Build descriptor: shared settings plus the ordered JBang runs to perform.

    Example (YAML)::

        project_dir: "."
        runs:
          - name: init
            jbang_args: ["init", "hello.java"]
          - name: run
            jbang_args: ["--quiet"]
            script: "hello.java"
    """

    project_dir: Path
    runs: List[RunSpec]
    work_dir: Optional[Path] = None
    jbang_home: Optional[Path] = None
    silent: bool = False


def _resolve(base_dir: Path, value: str) -> Path:
    p = Path(os.path.expandvars(os.path.expanduser(value)))
    return p if p.is_absolute() else (base_dir / p)


def _contracts() -> ContractStore:
    store = ContractStore(schemas_dir())
    store.load()
    return store


def parse_config(raw: Any, *, base_dir: Path) -> JBangConfig:
    """
    Validate a decoded descriptor and resolve its relative paths against base_dir.
    """
    errors = _contracts().validate(CONFIG_SCHEMA, raw)
    if errors:
        raise ValidationError(code="config.invalid", message="JBang config validation failed", data={"errors": errors})

    runs = [
        RunSpec(
            name=str(r.get("name", "")),
            jbang_args=list(r.get("jbang_args", [])),
            script=r.get("script"),
            args=list(r.get("args", [])),
            exit_on_failure=bool(r.get("exit_on_failure", True)),
        )
        for r in raw["runs"]
    ]
    return JBangConfig(
        project_dir=_resolve(base_dir, raw.get("project_dir", ".")),
        runs=runs,
        work_dir=_resolve(base_dir, raw["work_dir"]) if "work_dir" in raw else None,
        jbang_home=_resolve(base_dir, raw["jbang_home"]) if "jbang_home" in raw else None,
        silent=bool(raw.get("silent", False)),
    )


def load_config(path: Path) -> JBangConfig:
    if not path.exists():
        raise ValidationError(code="config.not_found", message=f"Config not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(code="config.invalid", message=f"Invalid YAML: {path}", data={"error": str(e)}) from e
    return parse_config(raw, base_dir=path.resolve().parent)


def run_config(
    config: JBangConfig,
    *,
    logger: Optional[logging.Logger] = None,
    platform: Optional[PlatformProvider] = None,
    trace: Optional[TraceEmitter] = None,
) -> List[Dict[str, Any]]:
    """
    Execute each run in order with one operation, resetting it between runs.
    Stops at the first run that raises.
    """
    op = JBangOperation(logger=logger, platform=platform).from_project(BaseProject(work_directory=config.project_dir))
    if config.jbang_home is not None:
        op.jbang_home(config.jbang_home)
    if config.work_dir is not None:
        op.work_dir(config.work_dir)
    op.silent(config.silent).trace(trace)

    results: List[Dict[str, Any]] = []
    for i, run in enumerate(config.runs):
        op.reset()
        op.jbang_args(run.jbang_args).args(run.args).script(run.script).exit_on_failure(run.exit_on_failure)
        op.execute()
        results.append({"index": i, "name": run.name, "command": op.command_line()})
    return results
