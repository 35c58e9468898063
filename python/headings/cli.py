# SPDX-License-Identifier: AGPL-3.0-only
import argparse
import json
import sys
from pathlib import Path

from .auditor import audit_levels, audit_report
from .config import Config
from .rule import HeadingLevelError, coerce_level
from .sources import audit_paths, parse_html


def _load_config(args):
    if args.config:
        return Config.load(Path(args.config))
    return Config.discover()


def _audit_settings(args):
    config = _load_config(args)
    paths = [Path(p) for p in args.paths] if args.paths else config.get_paths()
    extensions = config.get_extensions()
    if args.ext:
        extensions = [e if e.startswith(".") else f".{e}" for e in (x.lower() for x in args.ext)]
    exclude = config.get_exclude() + list(args.exclude or [])
    return paths, extensions, exclude


def _write_json(payload, validate=False):
    if validate:
        from .schemas import validate_payload

        validate_payload(payload)
    sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")


def _print_report(report):
    summary = report["summary"]
    out = sys.stdout
    out.write("[audit] heading hierarchy report\n")
    out.write(f"[audit] files scanned: {summary['total_files']}\n")
    out.write(f"[audit] files with headings: {summary['files_with_headings']}\n")
    out.write(f"[audit] headings found: {summary['total_headings']}\n")
    out.write(f"[audit] h1 headings: {summary['h1_count']}\n")
    out.write(f"[audit] violations: {summary['violations_found']}\n")
    for idx, diag in enumerate(report["violations"], start=1):
        out.write(f"  {idx}. [{diag['code']}] {diag['message']} ({diag['path']})\n")
    for path in summary["multiple_h1_files"]:
        out.write(f"[audit] multiple h1 headings: {path}\n")
    for entry in report["files"]:
        if entry["error"]:
            sys.stderr.write(f"[warn] skipped {entry['path']}: {entry['error']}\n")
    if not report["violations"]:
        out.write("[audit] no heading hierarchy violations found\n")


def run_audit(args):
    """Audit source/markup files and return the report dict."""
    paths, extensions, exclude = _audit_settings(args)
    report = audit_paths(paths, extensions=extensions, exclude=exclude)
    if args.json:
        _write_json({"schema": "headings.audit.v1", **report}, args.validate_schema)
    else:
        _print_report(report)
    return report


def cmd_audit(args):
    report = run_audit(args)
    return 0 if report["ok"] else 1


def cmd_levels(args):
    levels = []
    for raw in args.levels:
        try:
            value = int(raw)
        except ValueError:
            raise HeadingLevelError(f"Heading level must be an integer, got {raw!r}")
        levels.append(coerce_level(value))
    violations = audit_levels(levels)
    if args.json:
        _write_json(
            {
                "schema": "headings.levels.v1",
                "ok": not violations,
                "levels": levels,
                "violations": [v.to_dict() for v in violations],
            },
            args.validate_schema,
        )
    else:
        for v in violations:
            sys.stdout.write(f"[{v.kind}] {v.message} ({v.source})\n")
        if not violations:
            sys.stdout.write("[audit] sequence is valid\n")
    return 0 if not violations else 1


def cmd_html(args):
    text = Path(args.file).read_text(encoding="utf-8")
    report = audit_report(parse_html(text))
    if args.json:
        _write_json({"schema": "headings.html.v1", "file": args.file, **report}, args.validate_schema)
    else:
        sys.stdout.write(
            f"[audit] {args.file}: {report['heading_count']} headings, "
            f"{report['violation_count']} violations\n"
        )
        for diag in report["violations"]:
            sys.stdout.write(f"  [{diag['code']}] {diag['message']} ({diag['path']})\n")
    return 0 if report["ok"] else 1


def cmd_watch(args):
    from .watcher import watch

    watch(args)
    return 0


def _add_audit_options(p):
    p.add_argument("paths", nargs="*", help="Files or directories (default: [audit] paths)")
    p.add_argument("--ext", action="append", help="File extension to include (repeatable)")
    p.add_argument("--exclude", action="append", help="Directory or file name to skip (repeatable)")
    p.add_argument("--config", help="Path to headings.toml")


def _build_parser():
    parser = argparse.ArgumentParser(prog="headings", description="Heading hierarchy audit tooling")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    parser.add_argument(
        "--validate-schema",
        action="store_true",
        help="Check JSON payloads against their bundled schema before writing",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_audit = sub.add_parser("audit", help="Audit heading hierarchy across source files")
    _add_audit_options(p_audit)
    p_audit.set_defaults(func=cmd_audit)

    p_levels = sub.add_parser("levels", help="Audit a literal heading level sequence")
    p_levels.add_argument("levels", nargs="+")
    p_levels.set_defaults(func=cmd_levels)

    p_html = sub.add_parser("html", help="Audit a rendered HTML document as a tree")
    p_html.add_argument("file")
    p_html.set_defaults(func=cmd_html)

    p_watch = sub.add_parser("watch", help="Re-run the audit whenever files change")
    _add_audit_options(p_watch)
    p_watch.add_argument("--delay", type=float, default=0.5, help="Debounce delay in seconds")
    p_watch.set_defaults(func=cmd_watch)

    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except Exception as exc:
        if args.json:
            err = {
                "schema": "headings.error.v1",
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
