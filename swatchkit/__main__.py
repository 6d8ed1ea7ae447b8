"""swatchkit — Palette extraction, .ase export and region cropping for images.

Usage: uv run swatchkit <command> <out_dir> <image> [options]

Commands are auto-discovered from swatchkit/commands/.
Each command module's docstring is its documentation.
Run `swatchkit help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, swatchkit looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.

  SWATCHKIT_COUNT   default palette size (10)
  SWATCHKIT_LABEL   default crop label ('crop')
"""

import argparse
import importlib
import os
import sys

from PIL import UnidentifiedImageError

from swatchkit import registry
from swatchkit.core.ase import decode
from swatchkit.core.env import default_count, default_label, load_env
from swatchkit.core.errors import AseFormatError
from swatchkit.core.imaging import load_image
from swatchkit.core.report import format_json, format_text
from swatchkit.core.types import Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'swatchkit.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  swatchkit palette ./out thumbnail.png\n'
        '  swatchkit export ./out thumbnail.png -n 8\n'
        '  swatchkit crop ./out thumbnail.png --display 640x360 --select 100,50,50,50\n'
        '  swatchkit all ./out thumbnail.png --json\n'
        '  swatchkit inspect ./out/palette.ase\n'
        '  swatchkit help crop\n'
    )
    parser = argparse.ArgumentParser(
        prog='swatchkit',
        description='Palette extraction, .ase export and region cropping for images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        p.add_argument('out_dir', help='Directory for written files')
        p.add_argument('image', help='Path to source image (PNG/JPG/WebP)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-n',
            '--count',
            type=int,
            default=None,
            metavar='N',
            help='Palette size (default: SWATCHKIT_COUNT or 10)',
        )
        p.add_argument('-s', '--select', metavar='X,Y,W,H', help='Selection rectangle in display units')
        p.add_argument('--drag', metavar='X1,Y1,X2,Y2', help='Selection as a pointer drag in display units')
        p.add_argument('-d', '--display', metavar='WxH', help='On-screen size the selection was drawn on')
        p.add_argument('-l', '--label', default=None, help='Crop file label (default: SWATCHKIT_LABEL or crop)')

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    inspect_parser = sub.add_parser('inspect', help='List the swatches in an .ase file')
    inspect_parser.add_argument('ase_file', help='Path to .ase file')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: swatchkit help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _inspect(path: str) -> None:
    """Decode an .ase file and print one line per swatch."""
    if not os.path.isfile(path):
        print(f'Error: file not found: {path}', file=sys.stderr)
        sys.exit(1)
    with open(path, 'rb') as f:
        data = f.read()
    try:
        swatches = decode(data)
    except AseFormatError as e:
        print(f'Error: {path}: {e}', file=sys.stderr)
        sys.exit(1)

    print(f'{os.path.basename(path)}: {len(swatches)} swatch(es), {len(data)} bytes')
    for s in swatches:
        values = ', '.join(f'{v:.4f}' for v in s.values)
        print(f'  {s.name:<12} {s.model.strip():<4} {values}  type={s.colour_type}')


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'swatchkit: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if args.command == 'inspect':
        _inspect(args.ase_file)
        return

    try:
        if args.count is None:
            args.count = default_count()
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
    if args.count < 1:
        print(f'Error: --count must be >= 1, got {args.count}', file=sys.stderr)
        sys.exit(1)
    if args.label is None:
        args.label = default_label()

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)
    try:
        image = load_image(args.image)
    except UnidentifiedImageError:
        print(f'Error: not a readable image: {args.image}', file=sys.stderr)
        sys.exit(1)

    report = Report(
        image_path=args.image,
        image_width=image.width,
        image_height=image.height,
    )

    cmd = registry.get(args.command)
    cmd.execute(image, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # Bad arguments surface in the report; exit non-zero after printing it
    if any('error' in data for data in report.sections.values()):
        sys.exit(1)


if __name__ == '__main__':
    main()
