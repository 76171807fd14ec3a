"""CLI for credkeep — generate, score, import, report."""

import argparse
import logging
import os
import sys

from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import load_config, generation_defaults
from .generator import generate
from .importer import parse_credentials, detect_format_from_filename
from .report import build_report, MAX_STALE_MONTHS
from .storage import read_text, load_credentials, save_credentials
from .strength import estimate_strength, strength_percent, MAX_SCORE

logger = logging.getLogger(__name__)

STRENGTH_STYLE = {"weak": "red", "medium": "yellow", "strong": "green"}


def _styled(label):
    return f"[{STRENGTH_STYLE.get(label, 'white')}]{label}[/]"


def setup_logging(level):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def cmd_generate(args, cfg):
    opts = generation_defaults(cfg)
    if args.length is not None:
        opts["length"] = args.length
    if args.no_upper:
        opts["use_upper"] = False
    if args.no_lower:
        opts["use_lower"] = False
    if args.no_digits:
        opts["use_digits"] = False
    if args.no_symbols:
        opts["use_symbols"] = False
    for i in range(args.copies):
        pw = generate(**opts)
        label = estimate_strength(pw)["strength"]
        print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}  ({_styled(label)})")
    return 0


def cmd_score(args, cfg):
    result = estimate_strength(args.password)
    percent = strength_percent(result["score"])
    header = f"Score: {result['score']} / {MAX_SCORE} — {result['strength']}"
    filled = percent // 5
    body = f"[{STRENGTH_STYLE[result['strength']]}]{'█' * filled}[/]{'░' * (20 - filled)} {percent}%"
    print(Panel(body, title=header))
    return 0


def _read_input(source):
    if source == "-":
        return sys.stdin.read()
    return read_text(source)


def cmd_import(args, cfg):
    try:
        text = _read_input(args.file)
    except OSError as e:
        print(f"[red]Failed to read {escape(args.file)}: {escape(str(e))}[/red]")
        return 1

    fmt = args.format
    if fmt is None and args.file != "-":
        fmt = detect_format_from_filename(args.file)
    credentials = parse_credentials(text, fmt)

    if not credentials:
        print("[red]No credentials found.[/red] Could not parse any credentials; please check the format.")
        return 1

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", width=4)
    table.add_column("Name")
    table.add_column("Username")
    table.add_column("Category")
    table.add_column("Strength")
    table.add_column("Notes")
    for i, c in enumerate(credentials):
        table.add_row(
            str(i),
            escape(c["name"]),
            escape(c["username"]),
            escape(c["category"]),
            _styled(c["strength"]),
            escape((c.get("notes") or "")[:40]),
        )
    print(table)

    if args.output:
        try:
            save_credentials(args.output, credentials)
        except OSError as e:
            print(f"[red]Failed to write {escape(args.output)}: {escape(str(e))}[/red]")
            return 1
        print(f"[green]Wrote {len(credentials)} credential(s) to:[/green] {escape(args.output)}")
    else:
        print(f"[green]Parsed {len(credentials)} credential(s).[/green]")
    return 0


def cmd_report(args, cfg):
    if not os.path.exists(args.file):
        print(f"[red]Credentials file not found: {escape(args.file)}[/red]")
        return 1
    try:
        credentials = load_credentials(args.file)
    except (OSError, ValueError) as e:
        print(f"[red]Failed to load credentials: {escape(str(e))}[/red]")
        return 1

    months = args.stale_months if args.stale_months is not None else int(cfg["stale_after_months"])
    if not 0 <= months <= MAX_STALE_MONTHS:
        print(f"[red]Stale window must be between 0 and {MAX_STALE_MONTHS} months (got {months}).[/red]")
        return 1
    report = build_report(credentials, stale_after_months=months)
    score = report["score"]
    color = "green" if score >= 80 else "yellow" if score >= 50 else "red"
    counts = ", ".join(f"{k}: {v}" for k, v in report["by_strength"].items())
    print(Panel(f"Credentials: {report['total']}\n{counts}", title=f"[{color}]Security score: {score}[/]"))

    if not report["issues"]:
        print("[green]No security issues found.[/green]")
        return 0
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Severity")
    table.add_column("Issue")
    table.add_column("Recommendation")
    for issue in report["issues"]:
        sev_color = "red" if issue["severity"] == "high" else "yellow"
        table.add_row(f"[{sev_color}]{issue['severity']}[/]", escape(issue["description"]), issue["recommendation"])
    print(table)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="credkeep")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=None, help="Password length")
    gen.add_argument("--no-symbols", action="store_true", help="Disable symbols")
    gen.add_argument("--no-upper", action="store_true", help="Disable uppercase")
    gen.add_argument("--no-lower", action="store_true", help="Disable lowercase")
    gen.add_argument("--no-digits", action="store_true", help="Disable digits")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)

    sc = sub.add_parser("score", help="Score a password")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.set_defaults(func=cmd_score)

    imp = sub.add_parser("import", help="Parse pasted text or a CSV export into credentials")
    imp.add_argument("file", type=str, help="File to import, or '-' for stdin")
    imp.add_argument("--format", choices=["text", "csv"], default=None, help="Input format (default: from extension or content)")
    imp.add_argument("--output", "-o", type=str, help="Write parsed credentials as JSON")
    imp.set_defaults(func=cmd_import)

    rep = sub.add_parser("report", help="Security report for a JSON credentials file")
    rep.add_argument("file", type=str, help="JSON file with stored credentials")
    rep.add_argument("--stale-months", type=int, default=None, help="Months after which a password is considered old")
    rep.set_defaults(func=cmd_report)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = load_config()
    setup_logging(logging.DEBUG if args.verbose else cfg.get("log_level", "WARNING"))
    logger.debug("Running %s", args.cmd)
    return args.func(args, cfg)


if __name__ == "__main__":
    sys.exit(main())
