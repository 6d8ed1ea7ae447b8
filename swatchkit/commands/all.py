"""Run every command, combine into a single report.

Runs: palette, export, and crop when --select or --drag is given.

Example:
    uv run swatchkit all ./out thumbnail.png
    uv run swatchkit all ./out thumbnail.png --display 640x360 --select 100,50,50,50 --json
"""

from swatchkit.core.types import Command, PixelBuffer, Report

command = Command(
    name='all',
    help='Run palette, export and (with a selection) crop. Combine into a single report.',
)

SKIP = {'all'}


@command.run
def run(image: PixelBuffer, report: Report, args) -> None:
    from swatchkit.registry import all_commands

    has_selection = bool(getattr(args, 'select', None) or getattr(args, 'drag', None))
    for name, cmd in sorted(all_commands().items()):
        if name in SKIP:
            continue
        if name == 'crop' and not has_selection:
            continue
        cmd.execute(image, report, args)
