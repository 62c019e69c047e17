#!/usr/bin/env python3
"""
Title Progress
==============

Shows the progress of a long running tool in the terminal window title.
Reads progress lines from stdin, or runs a command and reads its output.

Usage:
    some_tool | python title_progress.py
    python title_progress.py --interval 0 --log -- python frame_extractor.py "D:/workflow"
    python title_progress.py --config title.yaml --bar < progress.log
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import threading
from pathlib import Path
from typing import Iterable, TextIO

from rich.console import Console
from rich.markup import escape
from tqdm import tqdm

from termtitle.config_manager import ConfigError, load_config, merge_cli_args, validate_options
from termtitle.progress_parser import parse_progress_line
from termtitle.title_reporter import TitleReporter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Show progress lines in the terminal window title',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            'Example:\n'
            '  some_tool | python title_progress.py\n'
            '  python title_progress.py --interval 0 -- python frame_extractor.py "D:/workflow"\n'
            '\n'
            'Recognized lines: "12/40 text", "12/40 +3 text", "done=12 total=40 running=3 text=...".\n'
            'Any other line is shown as plain text.\n'
        )
    )
    parser.add_argument('--config', type=Path, default=None, help='JSON or YAML file with reporter options')
    parser.add_argument('--interval', type=int, default=None, help='Milliseconds between title updates, 0 updates on every line (default: 1000)')
    parser.add_argument('--verbose', action='store_true', default=None, help='Show every count instead of the completed percentage')
    parser.add_argument('--log', action='store_true', default=None, help='Also print each title as a line')
    parser.add_argument('--open', default=None, help='Characters that start the title (default: \\033]0;)')
    parser.add_argument('--close', default=None, help='Characters that end the title (default: \\007)')
    parser.add_argument('--bar', action='store_true', help='Mirror done/total in a progress bar on stderr')
    parser.add_argument('command', nargs=argparse.REMAINDER, help='Command to run (after --), its stdout is read instead of stdin')
    return parser


def resolve_options(args: argparse.Namespace) -> dict:
    """
    Combine config file and CLI options.

    Raises
    ------
    ConfigError
        If the config file or the resulting options are invalid.
    """
    options = load_config(args.config) if args.config else {}
    options = merge_cli_args(options, {
        'interval': args.interval,
        'verbose': args.verbose,
        'log': args.log,
        'open': args.open,
        'close': args.close,
    })
    validate_options(options)
    return options


def pump_lines(lines: Iterable[str], reporter: TitleReporter, pbar: tqdm | None = None) -> int:
    """
    Feed progress lines into a reporter.

    Parameters
    ----------
    lines : Iterable[str]
        Lines of tool output.
    reporter : TitleReporter
        Reporter receiving the updates.
    pbar : tqdm, optional
        Progress bar mirroring done/total.

    Returns
    -------
    int
        Number of lines that produced an update.
    """
    updates = 0
    for line in lines:
        parsed = parse_progress_line(line)
        if parsed is None:
            continue
        text, counts = parsed
        reporter.update(text, counts)
        updates += 1

        if pbar is not None and reporter.counts.total:
            if pbar.total != reporter.counts.total:
                pbar.total = reporter.counts.total
            pbar.n = reporter.counts.done
            if text:
                pbar.set_postfix_str(text, refresh=False)
            pbar.refresh()
    return updates


def _run_command(command: list[str], reporter: TitleReporter, pbar: tqdm | None, console: Console) -> int:
    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace'
        )
    except OSError as e:
        console.print(f'[red]ERROR[/red]: Cannot run command: {escape(str(e))}', highlight=False)
        return 127

    # Read stderr in background thread to avoid deadlock (buffer full while reading stdout)
    stderr_output: list[str] = []
    stderr_thread = threading.Thread(target=lambda: stderr_output.append(process.stderr.read()), daemon=True)
    stderr_thread.start()

    pump_lines(process.stdout, reporter, pbar)

    process.wait()
    stderr_thread.join()

    if process.returncode != 0:
        stderr = stderr_output[0] if stderr_output else ''
        console.print(f'[red]ERROR[/red]: Command exited with code {process.returncode}')
        if stderr:
            console.print(stderr[-1000:], markup=False, highlight=False)
    return process.returncode


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    console = Console(stderr=True)

    command = args.command
    if command and command[0] == '--':
        command = command[1:]

    try:
        options = resolve_options(args)
    except ConfigError as e:
        console.print(f'[red]ERROR[/red]: {escape(str(e))}', highlight=False)
        return 1

    reporter = TitleReporter(options)
    pbar = tqdm(total=None, unit='item', bar_format='{l_bar}{bar}| {n_fmt}/{total_fmt}{postfix} [{elapsed}<{remaining}]', mininterval=0.5) if args.bar else None

    exit_code = 0
    reporter.start()
    try:
        if command:
            exit_code = _run_command(command, reporter, pbar, console)
        else:
            pump_lines(stdin if stdin is not None else sys.stdin, reporter, pbar)
    except KeyboardInterrupt:
        console.print('[yellow]Interrupted[/yellow]')
        exit_code = 130
    finally:
        # Show the last state before clearing the title
        reporter.refresh()
        reporter.stop()
        if pbar is not None:
            pbar.close()

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
