from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from rich.markup import escape

from sheet_viewer import __version__ as TOOL_VERSION
from sheet_viewer.columns import parse_columns, project_columns
from sheet_viewer.export import export_json, json_dumps
from sheet_viewer.extract import extract_sheet
from sheet_viewer.model import RenderContext, resolve_title
from sheet_viewer.render import STYLES, make_console, select_renderer
from sheet_viewer.workbook import ALL_FORMATS, load_book, resolve_worksheet

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_PARSE_FAILED = 2

STYLE_ENV = "SHEET_VIEWER_STYLE"
WIDTH_ENV = "SHEET_VIEWER_WIDTH"


class CliError(Exception):
    def __init__(self, message: str, code: int = EXIT_COMMAND_ERROR) -> None:
        super().__init__(message)
        self.code = code


class SheetViewerArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise CliError(message, EXIT_COMMAND_ERROR)


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def emit_human(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        eprint(message)


def report_error(message: str, *, plain: bool, detail: str = "") -> None:
    """One error line on stderr; JSON runs never get markup."""
    if plain:
        eprint(f"{message} {detail}".rstrip())
        return
    console = make_console(file=sys.stderr)
    if detail:
        console.print(f"[red]{message}[/] {escape(detail)}")
    else:
        console.print(f"[red]{message}[/]")


def classify_backend_exception(exc: Exception) -> int:
    if isinstance(exc, CliError):
        return exc.code
    if isinstance(exc, FileNotFoundError):
        return EXIT_COMMAND_ERROR
    if isinstance(exc, (ImportError, UnicodeDecodeError, ValueError)):
        return EXIT_PARSE_FAILED
    return EXIT_COMMAND_ERROR


def resolve_style(args: argparse.Namespace) -> str:
    return args.style or os.environ.get(STYLE_ENV) or "table"


def resolve_width(args: argparse.Namespace) -> int | None:
    if args.width is not None:
        return args.width
    raw = os.environ.get(WIDTH_ENV)
    if not raw:
        return None
    try:
        width = int(raw)
    except ValueError:
        raise CliError(f"{WIDTH_ENV} must be an integer, got {raw!r}", EXIT_COMMAND_ERROR)
    if width <= 0:
        raise CliError(f"{WIDTH_ENV} must be positive, got {width}", EXIT_COMMAND_ERROR)
    return width


def check_input(input_path: Path) -> None:
    suffix = input_path.suffix.lower()
    if suffix not in ALL_FORMATS:
        raise CliError(
            f"Unsupported file type '{suffix or '[missing extension]'}'. "
            f"Supported: {', '.join(sorted(ALL_FORMATS))}",
            EXIT_COMMAND_ERROR,
        )


def non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def positive_int(raw: str) -> int:
    value = non_negative_int(raw)
    if value == 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = SheetViewerArgumentParser(prog="sheet-viewer", description="Render a spreadsheet sheet in the terminal.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render one worksheet as a table, panels, a tree or JSON.")
    render.add_argument("input", help="Workbook path")
    render.add_argument("--sheet", dest="sheet_name", help="Worksheet name (takes precedence over --sheet-index)")
    render.add_argument("--sheet-index", dest="sheet_index", type=int, help="1-based worksheet position")
    render.add_argument("--style", help=f"One of {', '.join(STYLES)} (default: ${STYLE_ENV} or table)")
    render.add_argument("--group-by", dest="group_by", help="Column to group rows by in tree style")
    render.add_argument("--columns", help="Comma-separated column names to keep")
    render.add_argument("--title", help="Override the display title")
    render.add_argument("--max-rows", dest="max_rows", type=non_negative_int, help="Maximum data rows to read")
    render.add_argument("--width", type=positive_int, help=f"Console width (default: ${WIDTH_ENV} or terminal width)")
    render.add_argument("--json", action="store_true", help="Write JSON to stdout instead of rendering")
    render.add_argument("--output", help="Write the JSON export to this path")
    render.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")

    sheets = subparsers.add_parser("sheets", help="List the worksheets of a workbook.")
    sheets.add_argument("input", help="Workbook path")
    sheets.add_argument("--json", action="store_true", help="Write machine JSON to stdout")

    subparsers.add_parser("version", help="Print version")
    return parser


def run_render(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    plain = args.json or bool(args.output)
    if not input_path.exists():
        report_error("File not found:", plain=plain, detail=str(input_path))
        return EXIT_COMMAND_ERROR

    try:
        check_input(input_path)
        output_path = Path(args.output) if args.output else None
        if output_path is not None and output_path.exists():
            raise CliError(f"Refusing to overwrite existing output: {output_path}", EXIT_COMMAND_ERROR)

        book = load_book(input_path)
        worksheet = resolve_worksheet(book, args.sheet_name, args.sheet_index)
        if worksheet is None:
            report_error("Worksheet not found.", plain=plain)
            return EXIT_COMMAND_ERROR

        data = extract_sheet(worksheet, args.max_rows)
        data = project_columns(data, parse_columns(args.columns))

        if plain:
            payload = export_json(data)
            if output_path is not None:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(payload + "\n", encoding="utf-8")
                emit_human(f"JSON written: {output_path}", quiet=args.quiet)
            if args.json:
                print(payload)
            return EXIT_SUCCESS

        ctx = RenderContext(resolve_title(input_path, data.sheet_name, args.title))
        renderer = select_renderer(resolve_style(args), args.group_by)
        renderer.render(data, ctx, make_console(width=resolve_width(args)))
        return EXIT_SUCCESS
    except Exception as exc:
        eprint(str(exc))
        return classify_backend_exception(exc)


def run_sheets(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        eprint(f"File not found: {input_path}")
        return EXIT_COMMAND_ERROR
    try:
        check_input(input_path)
        book = load_book(input_path)
    except Exception as exc:
        eprint(str(exc))
        return classify_backend_exception(exc)

    if args.json:
        print(json_dumps({"file": input_path.name, "sheets": list(book.sheet_names)}))
    else:
        for position, name in enumerate(book.sheet_names, start=1):
            print(f"{position}. {name}")
    return EXIT_SUCCESS


def run_version() -> int:
    print(TOOL_VERSION)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        if args.command == "render":
            return run_render(args)
        if args.command == "sheets":
            return run_sheets(args)
        if args.command == "version":
            return run_version()
        raise CliError(f"Unknown command: {args.command}", EXIT_COMMAND_ERROR)
    except CliError as exc:
        eprint(str(exc))
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
