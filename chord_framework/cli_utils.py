#!/usr/bin/env python3
"""
CLI utilities for chord generation.

Command-line argument parsing, logging setup and error handling for the
chord generator script.
"""

import argparse
import functools
import logging
import sys
import traceback
from pathlib import Path
from typing import Dict, Any, List, Optional

from chord_framework.chord_types import ChordConfigError, ReservedChordError
from chord_framework.config_loader import get_config_loader
from chord_framework.strategies import get_strategy_names

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class StandardCLIParser:
    """
    Command-line argument parser for the chord generator.

    Defaults for output options come from the ``cli`` section of the
    configuration file named by ``--config`` (``config.yaml`` unless given)
    when it can be loaded.
    """

    def __init__(self, prog_name: str = "generate_chords", config_path: str = "config.yaml"):
        """
        Initialize the CLI parser.

        Args:
            prog_name: Name of the script for help text
            config_path: Path to configuration file
        """
        self.prog_name = prog_name
        self._use_config(config_path)

    def _use_config(self, config_path: str) -> None:
        """Load CLI defaults from a configuration file and rebuild the parser."""
        self.config_loader = get_config_loader(config_path)

        try:
            self.cli_config = self.config_loader.get_cli_config()
        except FileNotFoundError:
            # Reported when generation settings are loaded
            self.cli_config = {}
        except Exception as e:
            print(f"Warning: Could not load configuration: {e}", file=sys.stderr)
            self.cli_config = {}

        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with input, generation and output arguments."""
        strategies = ' -> '.join(get_strategy_names())

        parser = argparse.ArgumentParser(
            prog=self.prog_name,
            description=(
                "Assign every word a unique, conflict-free chord for a chorded keyboard.\n\n"
                f"Method: try augmentation strategies in order ({strategies}) and keep\n"
                "the smallest valid key-set not already taken."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._generate_epilog()
        )

        self._add_input_arguments(parser)
        self._add_generation_arguments(parser)
        self._add_output_arguments(parser)

        return parser

    def _add_input_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add word and reserved chord input arguments."""
        input_group = parser.add_argument_group('Input Options')

        input_group.add_argument(
            '--words',
            dest='words',
            help="Comma-separated words (e.g., 'the, quick, brown')"
        )

        input_group.add_argument(
            '--words-file',
            dest='words_file',
            help="Path to word file (one word per line, or CSV with a 'word' column)"
        )

        input_group.add_argument(
            '--reserved-file',
            dest='reserved_file',
            help="Existing chord library (.json) or chord file (.csv) whose chords must not be reused"
        )

        input_group.add_argument(
            '--config',
            dest='config',
            default="config.yaml",
            help="Path to configuration file (default: config.yaml)"
        )

    def _add_generation_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add generation settings; unset values fall back to the config file."""
        generation_group = parser.add_argument_group('Generation Options')

        generation_group.add_argument(
            '--min-length',
            dest='min_chord_length',
            type=int,
            help="Minimum number of keys in a chord (default: 3)"
        )

        generation_group.add_argument(
            '--max-length',
            dest='max_chord_length',
            type=int,
            help="Maximum number of keys in a chord (default: 6)"
        )

        generation_group.add_argument(
            '--min-word-length',
            dest='min_word_length',
            type=int,
            help="Skip words shorter than this (default: 2)"
        )

        generation_group.add_argument(
            '--no-dup-key',
            dest='use_duplicate_marker',
            action='store_false',
            default=None,
            help="Do not add the DUP key for words with repeated letters"
        )

        generation_group.add_argument(
            '--no-mirror',
            dest='use_mirroring',
            action='store_false',
            default=None,
            help="Do not try mirrored keys"
        )

        generation_group.add_argument(
            '--no-alt',
            dest='use_modifier_augmentation',
            action='store_false',
            default=None,
            help="Do not try the alt modifier keys"
        )

        generation_group.add_argument(
            '--use-3d',
            dest='use_spatial_augmentation',
            action='store_true',
            default=None,
            help="Also try 3D key variants"
        )

    def _add_output_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add standard output arguments."""
        output_group = parser.add_argument_group('Output Options')

        output_group.add_argument(
            '--output-format',
            dest='output_format',
            choices=['table', 'csv'],
            default=self.cli_config.get('output_format', 'table'),
            help="Output format (default: table)"
        )

        output_group.add_argument(
            '--csv',
            dest='csv',
            action='store_true',
            help="Output chord file lines (same as --output-format csv)"
        )

        output_group.add_argument(
            '--output-file',
            dest='output_file',
            default=self.cli_config.get('output_file'),
            help="Write results to this file instead of stdout"
        )

        output_group.add_argument(
            '--export-dir',
            dest='export_dir',
            default=self.cli_config.get('export_dir'),
            help="Also write chords.csv and chord_table.csv into this directory"
        )

        output_group.add_argument(
            '--show-failures',
            dest='show_failures',
            action='store_true',
            help="List words that did not receive a chord"
        )

        output_group.add_argument(
            '--quiet',
            dest='quiet',
            action='store_true',
            help="Suppress progress and informational output"
        )

        output_group.add_argument(
            '--verbose',
            dest='verbose',
            action='store_true',
            help="Log every assignment"
        )

    def _generate_epilog(self) -> str:
        """Generate epilog text with examples."""
        basic_cmd = f"python {self.prog_name}.py --words 'the, quick, brown, fox'"

        lines = [
            "Examples:",
            "  # Basic generation",
            f"  {basic_cmd}",
            "",
            "  # Word file, avoiding chords already on the device, chord file output",
            f"  python {self.prog_name}.py --words-file words.txt --reserved-file library.json "
            "--csv --output-file chords.csv",
            "",
            "  # Longer chords only, without alt keys",
            f"  {basic_cmd} --min-length 4 --max-length 6 --no-alt",
            "",
        ]
        return "\n".join(lines)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments with validation.

        Args:
            args: List of arguments (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        config_parser = argparse.ArgumentParser(add_help=False)
        config_parser.add_argument('--config', dest='config')
        known_args, _ = config_parser.parse_known_args(args)
        if known_args.config and Path(known_args.config) != self.config_loader.config_path:
            self._use_config(known_args.config)

        parsed_args = self.parser.parse_args(args)

        if parsed_args.csv:
            parsed_args.output_format = 'csv'

        if not parsed_args.words and not parsed_args.words_file:
            self.parser.error("Must provide either --words or --words-file")

        if parsed_args.words and parsed_args.words_file:
            self.parser.error("Cannot specify both --words and --words-file")

        if parsed_args.quiet and parsed_args.verbose:
            self.parser.error("Cannot specify both --quiet and --verbose")

        return parsed_args


def create_standard_parser(prog_name: str = "generate_chords",
                           config_path: str = "config.yaml") -> StandardCLIParser:
    """Create a CLI parser for the chord generator."""
    return StandardCLIParser(prog_name, config_path)


def get_generation_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Extract generation settings given on the command line.

    Returns:
        Mapping of GenerationConfig fields to values (None for unset options)
    """
    names = ['min_chord_length', 'max_chord_length', 'min_word_length',
             'use_duplicate_marker', 'use_mirroring', 'use_modifier_augmentation',
             'use_spatial_augmentation']
    return {name: getattr(args, name, None) for name in names}


def setup_logging(quiet: bool = False, verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nChord generation cancelled by user.", file=sys.stderr)
            return 130
        except ChordConfigError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1
        except ReservedChordError as e:
            print(f"Reserved chord error: {e}", file=sys.stderr)
            return 1
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            traceback.print_exc()
            return 1

    return wrapper
