#!/usr/bin/env python3
"""
Chord generator for chorded keyboards.

Assign every word of a vocabulary a unique chord (a set of keys pressed
together) that can be played cleanly on a CharaChorder One:

  - **Word keys**: a word's own letters are tried first, smallest chords first
  - **Fallbacks**: when every subset of the letters conflicts or is taken,
    mirrored keys, the alt keys and (optionally) 3D key variants are added
  - **Order matters**: words are processed in input order, so earlier words
    claim the smaller chords
  - **Reserved chords**: chords of an existing library are never reused

Words that cannot receive any chord are reported, not fatal.

Usage:

  # Basic usage
  python generate_chords.py --words "the, quick, brown, fox"

  # Word file with an existing device library
  python generate_chords.py --words-file words.txt --reserved-file library.json

  # Chord file output (importable as reserved chords later)
  python generate_chords.py --words-file words.txt --csv --output-file chords.csv

  # Restrict chord sizes, enable 3D keys
  python generate_chords.py --words "hello, world" --min-length 2 --max-length 4 --use-3d
"""

import logging
import sys

from chord_framework.chord_types import GenerationConfig, GenerationProgress
from chord_framework.cli_utils import (create_standard_parser, get_generation_overrides,
                                       handle_common_errors, setup_logging)
from chord_framework.config_loader import ConfigLoader
from chord_framework.engine import ChordAssignmentEngine
from chord_framework.keyboard_model import KeyboardModel
from chord_framework.output_utils import (DEFAULT_SEPARATOR, export_results, print_results,
                                          save_results)
from chord_framework.reserved_chords import load_word_list
from chord_framework.text_utils import (get_vocabulary_statistics, normalize_vocabulary,
                                        split_word_input)

logger = logging.getLogger(__name__)


class ProgressPrinter:
    """Prints generation progress to stderr in whole-percent steps."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr
        self.last_percent = -1

    def __call__(self, progress: GenerationProgress) -> None:
        percent = int(progress.fraction * 100)
        if percent == self.last_percent:
            return
        self.last_percent = percent
        end = '\n' if progress.processed == progress.total else ''
        print(f"\rGenerating chords... {percent:3d}%", end=end, file=self.stream, flush=True)


def load_settings(config_path: str, overrides: dict):
    """
    Load generation settings and keyboard model, falling back to defaults
    when the configuration file is missing.

    Returns:
        Tuple of (GenerationConfig, KeyboardModel, ConfigLoader or None)
    """
    loader = ConfigLoader(config_path)
    try:
        loader.load_config()
    except FileNotFoundError:
        logger.warning(f"Configuration file not found: {config_path}, using defaults")
        settings = {key: value for key, value in overrides.items() if value is not None}
        return GenerationConfig.from_dict(settings), KeyboardModel.default(), None

    return loader.get_generation_config(overrides), loader.get_keyboard_model(), loader


@handle_common_errors
def main(argv=None) -> int:
    """Main entry point for chord generation."""

    cli_parser = create_standard_parser('generate_chords')
    args = cli_parser.parse_args(argv)

    setup_logging(quiet=args.quiet, verbose=args.verbose)

    config, keyboard, loader = load_settings(args.config, get_generation_overrides(args))

    # Get word input
    if args.words_file:
        words = load_word_list(args.words_file)
    else:
        words = split_word_input(args.words)

    if not words:
        print("Error: No words provided", file=sys.stderr)
        return 1

    if args.verbose:
        stats = get_vocabulary_statistics(normalize_vocabulary(words, config.min_word_length), keyboard)
        if stats['unmapped_characters']:
            logger.debug(f"Characters without a key: {' '.join(stats['unmapped_characters'])}")

    engine = ChordAssignmentEngine(config, keyboard)
    on_progress = None if args.quiet else ProgressPrinter()
    result = engine.generate(words, reserved=args.reserved_file, on_progress=on_progress)

    if result.skipped_reserved_entries:
        logger.warning(f"Skipped {result.skipped_reserved_entries} malformed reserved chord entries")

    # Output
    output_format = args.output_format
    output_config = dict(loader.get_output_format_config(output_format)) if loader else {}
    if args.show_failures:
        output_config['show_failures'] = True

    if args.output_file:
        output_path = save_results(result, args.output_file, output_format, output_config)
        if not args.quiet:
            print(result.summary())
            print(f"Saved {len(result.assignments)} chords to {output_path}")
    else:
        print_results(result, output_format, output_config)

    if args.export_dir:
        separator = output_config.get('separator', DEFAULT_SEPARATOR)
        paths = export_results(result, args.export_dir, separator)
        logger.info(f"Exported chords to {paths['chords']} and {paths['table']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
