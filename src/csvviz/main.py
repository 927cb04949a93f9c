import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence

from .aggregator import AGGREGATORS, aggregate
from .parser import CSVParser
from .plot import render_line_graph
from .processor import DIRECTIONS, OPERATORS, filter_table, limit_rows, sort_table
from .renderer import STYLES, render_csv, render_json, render_table
from .table import Table

logger = logging.getLogger(__name__)

COMMANDS = ('sort', 'filter', 'mean', 'median', 'json', 'line')

# leading positionals of a command are never read as the start of the next command
POSITIONALS = {'sort': 1, 'filter': 3}
VALUE_OPTIONS = {'-c', '--count', '-o', '--output', '--style', '-x', '--exclude', '-y'}
FLAG_OPTIONS = {'-r', '--reverse', '-h', '--help'}


def add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-c', '--count', type=int, help='Output the first N rows')
    parser.add_argument('-r', '--reverse', action='store_true', help='Output rows in reverse order')
    parser.add_argument('-o', '--output', help='Write the result to a file instead of stdout')
    parser.add_argument('--style', choices=list(STYLES), help='Table border style')


def build_command_parsers() -> Dict[str, argparse.ArgumentParser]:
    parsers = {}

    sort = argparse.ArgumentParser(prog='csvviz sort', description='Sort rows by a column')
    sort.add_argument('column', help='Column name')
    sort.add_argument('direction', nargs='?', choices=DIRECTIONS, default='asc')
    parsers['sort'] = sort

    filter_ = argparse.ArgumentParser(prog='csvviz filter', description='Keep rows matching a criterion')
    filter_.add_argument('column', help='Column name')
    filter_.add_argument('operator', choices=list(OPERATORS))
    filter_.add_argument('value', help='Value to compare against')
    parsers['filter'] = filter_

    for name in AGGREGATORS:
        aggregate_parser = argparse.ArgumentParser(prog=f'csvviz {name}', description=f'Compute the {name} of columns')
        aggregate_parser.add_argument('columns', nargs='*', help='Columns to aggregate (default: all)')
        aggregate_parser.add_argument('-x', '--exclude', action='append', default=[], help='Exclude a column')
        parsers[name] = aggregate_parser

    parsers['json'] = argparse.ArgumentParser(prog='csvviz json', description='Output the table as JSON')

    line = argparse.ArgumentParser(prog='csvviz line', description='Plot one column against another')
    line.add_argument('-x', required=True, help='Column on the X axis')
    line.add_argument('-y', required=True, help='Column on the Y axis')
    parsers['line'] = line

    for parser in parsers.values():
        add_render_options(parser)
    return parsers


def split_commands(tokens: Sequence[str]) -> List[List[str]]:
    """Split argv into a leading segment and one segment per command.

    The first segment holds whatever comes before the first command name (the
    input file and global flags).
    """
    segments: List[List[str]] = [[]]
    reserved = 0
    skip_next = False

    for token in tokens:
        if skip_next:
            skip_next = False
        elif _is_option(token):
            skip_next = token in VALUE_OPTIONS
        elif reserved:
            reserved -= 1
        elif token.startswith('-') and not _is_number(token):
            pass
        elif token in COMMANDS:
            segments.append([])
            reserved = POSITIONALS.get(token, 0)
        segments[-1].append(token)

    return segments


def arrange_arguments(command: str, tokens: Sequence[str]) -> List[str]:
    """Order a command's tokens so argparse reads dash-led positionals as values.

    Options go first; positionals follow a ``--`` when one of them starts with
    a dash, e.g. the literal in ``filter name eq -abc``.
    """
    options: List[str] = []
    positionals: List[str] = []
    reserved = POSITIONALS.get(command, 0)
    takes_value = False

    for token in tokens:
        if takes_value:
            options.append(token)
            takes_value = False
        elif _is_option(token):
            options.append(token)
            takes_value = token in VALUE_OPTIONS
        elif reserved or not token.startswith('-') or _is_number(token):
            positionals.append(token)
            reserved = max(0, reserved - 1)
        else:
            # unknown option, argparse reports it
            options.append(token)

    if any(p.startswith('-') for p in positionals):
        return options + ['--'] + positionals
    return options + positionals


def _is_option(token: str) -> bool:
    return token.split('=', 1)[0] in VALUE_OPTIONS | FLAG_OPTIONS


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def read_input(file: Optional[str]) -> bytes:
    if file is None:
        return sys.stdin.buffer.read()
    with open(file, 'rb') as f:
        return f.read()


def write_output(text: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(text + '\n')
        return
    with open(output, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def run_pipeline(table: Table, commands: Sequence[argparse.Namespace]) -> str:
    """Apply every command to the current table and render the result."""
    mode = 'table'
    count, reverse, output, style, axes = None, False, None, 'box', None

    for args in commands:
        logger.debug("Running %s on %d rows", args.command, len(table))

        if args.command == 'sort':
            table = sort_table(table, args.column, ascending=args.direction == 'asc')
        elif args.command == 'filter':
            table = filter_table(table, args.column, args.operator, args.value)
        elif args.command in AGGREGATORS:
            table = aggregate(table, args.command, args.exclude, args.columns)
        elif args.command == 'json':
            mode = 'json'
        elif args.command == 'line':
            mode = 'line'
            axes = (args.x, args.y)

        if args.count is not None:
            count = args.count
        reverse = reverse or args.reverse
        output = args.output or output
        style = args.style or style

    if mode == 'json':
        return render_json(table, count, reverse)
    if mode == 'line':
        return render_line_graph(limit_rows(table, count, reverse), *axes)
    if output is not None:
        return render_csv(table, count, reverse)
    return render_table(table, count, reverse, style)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    parser = argparse.ArgumentParser(
        prog='csvviz',
        description='CSV file visualizer',
        epilog=f"commands: {', '.join(COMMANDS)} (run 'csvviz FILE COMMAND -h' for details)",
    )
    parser.add_argument('file', nargs='?', help='Path to the CSV file (default: stdin)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug messages')

    leading, *segments = split_commands(argv)
    args = parser.parse_args(leading)

    if not segments:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    command_parsers = build_command_parsers()
    commands = []
    for command, *rest in segments:
        parsed = command_parsers[command].parse_args(arrange_arguments(command, rest))
        parsed.command = command
        commands.append(parsed)

    output = next((c.output for c in reversed(commands) if c.output), None)

    try:
        data = read_input(args.file)
    except FileNotFoundError:
        print(f"Error: File '{args.file}' not found", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = run_pipeline(CSVParser().parse(data), commands)
        write_output(result, output)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
