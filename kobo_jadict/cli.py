"""
CLI interface for kobo-jadict.

Usage:
    kobo-jadict dicthtml-ja-en.zip --jmdict JMdict_e.xml
    kobo-jadict dicthtml-ja-en.zip -j JMdict_e.xml -p accents.txt --katakana
    kobo-jadict out.zip -j JMdict_e.xml --names jmnedict.zip --terms kanjium.zip
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from kobo_jadict import KoboJadictError, __version__, build_dictionary, build_entries
from kobo_jadict.jmdict import iter_jmdict
from kobo_jadict.settings import BuildOptions
from kobo_jadict.sources import read_dicthtml, read_pitch_accents, read_yomitan

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kobo-jadict",
        description="Kobo Japanese Dictionary Builder",
    )
    parser.add_argument(
        "output",
        type=Path,
        help="The output filepath to write the new dictionary to",
    )
    parser.add_argument(
        "--jmdict", "-j",
        type=Path,
        required=True,
        help="Path to the JMdict XML file. This is the main source dictionary",
    )
    parser.add_argument(
        "--pitch-accent", "-p",
        type=Path,
        help="Path to the pitch accent file. Adds pitch accent to matching entries",
    )
    parser.add_argument(
        "--terms", "-t",
        type=Path,
        action="append",
        default=[],
        help="Path to a Yomitan term dictionary (repeatable). Adds its definitions to matching entries",
    )
    parser.add_argument(
        "--names", "-n",
        type=Path,
        action="append",
        default=[],
        help="Path to a Yomitan name dictionary (repeatable). Adds one entry per name",
    )
    parser.add_argument(
        "--kobo-ja-dict", "-k",
        type=Path,
        help="Path to the Kobo Japanese-Japanese dictionary. Adds native definitions to matching entries",
    )
    parser.add_argument(
        "--katakana",
        action="store_true",
        help="Use katakana instead of hiragana for word pronunciation",
    )
    parser.add_argument(
        "--use-move-terms", "-m",
        action="store_true",
        help='Use "other-move" and "self-move" instead of "transitive" and "intransitive"',
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"kobo-jadict {__version__}",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> Path:
    """Read every source, build the entries and write the archive."""
    pitch_accents = read_pitch_accents(args.pitch_accent) if args.pitch_accent else []
    natives = read_dicthtml(args.kobo_ja_dict) if args.kobo_ja_dict else []

    terms, names, kanji = [], [], []
    for path in args.terms:
        dictionary = read_yomitan(path)
        terms.extend(dictionary.terms)
        kanji.extend(dictionary.kanji)
    for path in args.names:
        dictionary = read_yomitan(path, names=True)
        names.extend(dictionary.names)
        kanji.extend(dictionary.kanji)

    entries = build_entries(
        iter_jmdict(args.jmdict),
        pitch_accents=pitch_accents,
        terms=terms,
        names=names,
        kanji=kanji,
        natives=natives,
        options=BuildOptions.from_flags(args.katakana, args.use_move_terms),
    )

    logger.info("Writing dictionary to disk...")
    return build_dictionary(entries, args.output)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    start_time = time.time()
    try:
        run(args)
    except (KoboJadictError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == "__main__":
    main()
