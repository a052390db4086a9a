import json
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Any, NoReturn

import typer

from diffpack.diff import (
    TextDiffResult,
    compute_inline_changes,
    diff_files,
    render_diff_summary,
    render_inline_changes,
    render_side_by_side,
    render_stats_summary,
    render_unified,
)
from diffpack.performance import evaluate_benchmark_slowdown_gate, run_benchmark_suite
from diffpack.plugins import PluginError
from diffpack.textio import STDIN_MARKER, TextInputError

app = typer.Typer(help="diffkit CLI")

_OUTPUT_FORMATS = ("side-by-side", "unified")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("diffkit")
    except PackageNotFoundError:
        from diffkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show diffkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _use_color() -> bool:
    return not _OUTPUT_OPTIONS.no_color and sys.stdout.isatty()


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=False)


def _fail(command: str, error: Exception, *, json_output: bool, **context: Any) -> NoReturn:
    message = f"{command} failed: {error}"
    if json_output:
        _echo_json({"status": "error", "exit_code": 1, "message": message, **context})
    else:
        _echo(message, err=True)
    raise typer.Exit(code=1) from error


def _load_diff(
    command: str,
    left: Path,
    right: Path,
    *,
    encoding: str,
    normalize_newlines: bool,
    swap: bool,
    json_output: bool,
) -> TextDiffResult:
    context = {"left_path": str(left), "right_path": str(right)}
    try:
        if str(left) == STDIN_MARKER and str(right) == STDIN_MARKER:
            raise TextInputError("only one input may be read from stdin")
        return diff_files(
            left,
            right,
            encoding=encoding,
            normalize_newlines=normalize_newlines,
            swap=swap,
        )
    except (TextInputError, PluginError, OSError) as error:
        _fail(command, error, json_output=json_output, **context)


@app.command()
def diff(
    left: Path = typer.Argument(..., help="Path to the original text ('-' for stdin)."),
    right: Path = typer.Argument(..., help="Path to the new text ('-' for stdin)."),
    output_format: str = typer.Option(
        "side-by-side",
        "--format",
        help="Text layout: side-by-side or unified.",
    ),
    changes_only: bool = typer.Option(
        False,
        "--changes-only",
        help="Only show inserted, deleted and modified lines.",
    ),
    swap: bool = typer.Option(
        False,
        "--swap",
        help="Swap left and right inputs before diffing.",
    ),
    encoding: str = typer.Option(
        "utf-8",
        "--encoding",
        help="Text encoding of both inputs.",
    ),
    normalize_newlines: bool = typer.Option(
        False,
        "--normalize-newlines",
        help="Treat CRLF and CR line endings as LF before diffing.",
    ),
    exit_code: bool = typer.Option(
        False,
        "--exit-code",
        help="Exit with status 1 when the inputs differ.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
) -> None:
    """Diff two texts line by line with inline highlighting."""
    if output_format not in _OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"unsupported format {output_format!r}; expected one of: {', '.join(_OUTPUT_FORMATS)}",
            param_hint="--format",
        )

    result = _load_diff(
        "diff",
        left,
        right,
        encoding=encoding,
        normalize_newlines=normalize_newlines,
        swap=swap,
        json_output=json_output,
    )
    status_code = 1 if exit_code and not result.identical else 0

    if json_output:
        _echo_json(
            {
                **result.to_dict(changes_only=changes_only),
                "status": "ok",
                "exit_code": status_code,
                "message": "diff completed",
                "left_path": str(left),
                "right_path": str(right),
            }
        )
    else:
        _echo(render_diff_summary(result))
        if result.identical:
            _echo("no differences")
        else:
            lines = result.changes_only() if changes_only else result.lines
            color = _use_color()
            if output_format == "unified":
                _echo(render_unified(lines, color=color))
            else:
                _echo(render_side_by_side(lines, color=color))

    if status_code:
        raise typer.Exit(code=status_code)


@app.command()
def inline(
    old_line: str = typer.Argument(..., help="Original line."),
    new_line: str = typer.Argument(..., help="New line."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable span output.",
    ),
) -> None:
    """Character-level diff of two single lines."""
    changes = compute_inline_changes(old_line, new_line)
    identical = all(change.kind == "equal" for change in changes)

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "identical": identical,
                "changes": [change.to_dict() for change in changes],
            }
        )
        return

    _echo(render_inline_changes(changes, color=_use_color()))


@app.command()
def stats(
    left: Path = typer.Argument(..., help="Path to the original text ('-' for stdin)."),
    right: Path = typer.Argument(..., help="Path to the new text ('-' for stdin)."),
    encoding: str = typer.Option(
        "utf-8",
        "--encoding",
        help="Text encoding of both inputs.",
    ),
    normalize_newlines: bool = typer.Option(
        False,
        "--normalize-newlines",
        help="Treat CRLF and CR line endings as LF before diffing.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable statistics.",
    ),
) -> None:
    """Print added/deleted/modified/unchanged line counts."""
    result = _load_diff(
        "stats",
        left,
        right,
        encoding=encoding,
        normalize_newlines=normalize_newlines,
        swap=False,
        json_output=json_output,
    )

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "identical": result.identical,
                "stats": result.stats.to_dict(),
                "left_path": str(left),
                "right_path": str(right),
            }
        )
        return

    _echo(render_stats_summary(result.stats))


@app.command()
def benchmark(
    lines: int = typer.Option(
        200,
        "--lines",
        min=1,
        help="Lines per synthetic input.",
    ),
    line_length: int = typer.Option(
        60,
        "--line-length",
        min=1,
        help="Characters per synthetic line.",
    ),
    iterations: int = typer.Option(
        5,
        "--iterations",
        min=1,
        help="Benchmark iterations per workload.",
    ),
    out: Path = typer.Option(
        Path("runs/benchmark.json"),
        "--out",
        help="Output path for benchmark summary JSON.",
    ),
    baseline: Path | None = typer.Option(
        None,
        "--baseline",
        help="Optional baseline benchmark JSON for slowdown comparison.",
    ),
    fail_on_slowdown: float | None = typer.Option(
        None,
        "--fail-on-slowdown",
        min=0.0,
        help=(
            "Fail if any workload mean runtime exceeds baseline by this percentage. "
            "Requires --baseline."
        ),
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable benchmark output.",
    ),
) -> None:
    """Time line diff, inline diff and stats workloads with an optional slowdown gate."""
    try:
        suite = run_benchmark_suite(
            line_count=lines,
            line_length=line_length,
            iterations=iterations,
        )
    except ValueError as error:
        _fail("benchmark", error, json_output=json_output)

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(
        json.dumps(suite.to_dict(), ensure_ascii=True, sort_keys=True, indent=2) + "\n",
        encoding="utf-8",
    )

    baseline_payload: dict[str, Any] | None = None
    if baseline is not None:
        try:
            baseline_payload = json.loads(baseline.read_text(encoding="utf-8"))
        except (FileNotFoundError, json.JSONDecodeError) as error:
            _fail(
                "benchmark",
                ValueError(f"unable to read baseline benchmark ({error})"),
                json_output=json_output,
            )

    gate = evaluate_benchmark_slowdown_gate(
        suite,
        baseline_payload,
        threshold_percent=fail_on_slowdown,
    )

    payload = {
        "status": "fail" if gate.gate_failed else "pass",
        "exit_code": 1 if gate.gate_failed else 0,
        "out": str(out),
        "benchmark": suite.to_dict(),
        "baseline_path": str(baseline) if baseline is not None else None,
        "slowdown_gate": gate.to_dict(),
    }

    if json_output:
        _echo_json(payload)
    else:
        _echo(f"benchmark artifact: {out}")
        _echo(
            "benchmark means (ms): "
            + ", ".join(
                f"{name}={stats.mean_ms:.3f}"
                for name, stats in sorted(suite.workloads.items())
            )
        )
        if fail_on_slowdown is not None:
            _echo(
                "benchmark slowdown gate: "
                f"status={gate.status} threshold={fail_on_slowdown:.3f}% "
                f"failing={','.join(gate.failing_workloads) or 'none'}"
            )

    if gate.gate_failed:
        raise typer.Exit(code=1)


def main() -> None:
    app()
