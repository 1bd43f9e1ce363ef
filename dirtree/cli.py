"""Command-line interface for dirtree."""

import logging
import sys
from typing import Optional, Tuple

import click

from .config.config_manager import ConfigManager
from .core.analyzer import TreeAnalyzer
from .core.errors import DirtreeError
from .core.models import ErrorPolicy, TraversalFlags
from .reporters.text_reporter import TextReporter


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration."""
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Set up root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Listing goes to stdout, diagnostics to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Add file handler if specified
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def resolve_flags(tree: bool, summary: bool, verbose: bool) -> TraversalFlags:
    """Combine the command-line switches into output flags.

    Tree view is the default when no switch is given, and verbose mode
    turns it on as well.
    """
    flags = TraversalFlags.NONE
    if tree:
        flags |= TraversalFlags.TREE
    if summary:
        flags |= TraversalFlags.SUMMARY
    if verbose:
        flags |= TraversalFlags.VERBOSE | TraversalFlags.TREE
    if not flags:
        flags = TraversalFlags.TREE
    return flags


def _usage_and_fail(ctx, param, value):
    """Print usage to stderr and exit with failure status."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help(), err=True)
    ctx.exit(1)


@click.command(context_settings={'help_option_names': []})
@click.option('-t', 'tree', is_flag=True,
              help='Print the directory tree (default if no other option specified).')
@click.option('-s', 'summary', is_flag=True,
              help='Print summary of directories (total number of files, total file size, etc).')
@click.option('-v', 'verbose', is_flag=True,
              help='Print detailed information for each file. Turns on tree view.')
@click.option('-h', is_flag=True, expose_value=False, is_eager=True, callback=_usage_and_fail,
              help='Print this help.')
@click.option('--config', '-c', 'config_path',
              help='Path to configuration file.')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level.')
@click.option('--log-file',
              help='Log file path.')
@click.option('--on-error', default=None,
              type=click.Choice([policy.value for policy in ErrorPolicy]),
              help='What to do with directories that cannot be read.')
@click.argument('paths', nargs=-1, type=click.Path())
def cli(tree: bool, summary: bool, verbose: bool, config_path: Optional[str],
        log_level: Optional[str], log_file: Optional[str], on_error: Optional[str],
        paths: Tuple[str, ...]):
    """Gather information about directory trees.

    PATHS is a list of space-separated paths (max 64 by default). If no path
    is given, the current directory is analyzed.
    """
    try:
        config_manager = ConfigManager(config_path)
        config_manager.load_config()
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging_config = config_manager.get_logging_config()
    setup_logging(log_level or logging_config['level'], log_file or logging_config['file'])

    traversal_config = config_manager.get_traversal_config()
    output_config = config_manager.get_output_config()

    flags = resolve_flags(tree, summary, verbose)
    reporter = TextReporter(flags, name_width=output_config['name_width'])
    analyzer = TreeAnalyzer(
        flags=flags,
        reporter=reporter,
        on_error=ErrorPolicy(on_error or traversal_config['on_error']),
        max_paths=traversal_config['max_paths'],
        max_depth=traversal_config['max_depth'],
    )

    try:
        result = analyzer.analyze(list(paths))
    except DirtreeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    reporter.finish(result)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
