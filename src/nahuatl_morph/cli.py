#!/usr/bin/env python3
"""
Nahuatl morphological analyzer CLI.

Uses the packaged lexicon, or nahuatl_morph.toml when one is found in the
working directory (override with --config / --lexicon):

    python -m nahuatl_morph.cli --analyze nicochi calli
    python -m nahuatl_morph.cli --analyze nikochi --orthography modern --json
    python -m nahuatl_morph.cli --to-modern "nicochi in calli"
    python -m nahuatl_morph.cli --coverage words.txt --failures failures.tsv
"""

import argparse
import json
import logging
import sys
from pathlib import Path


def _find_default_config() -> Path | None:
    """Look for nahuatl_morph.toml in CWD."""
    candidate = Path("nahuatl_morph.toml")
    if candidate.exists():
        return candidate
    return None


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Nahuatl morphological analyzer"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect nahuatl_morph.toml)",
    )
    parser.add_argument(
        "--lexicon",
        metavar="FILE",
        help="Path to a lexicon JSON file (overrides config)",
    )
    parser.add_argument(
        "--analyze",
        nargs="+",
        metavar="WORD",
        help="Analyze one or more words",
    )
    parser.add_argument(
        "--orthography",
        choices=["classical", "modern"],
        default="classical",
        help="Spelling of the input words (default: classical)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print analyses as JSON",
    )
    parser.add_argument(
        "--to-classical",
        metavar="TEXT",
        help="Convert modern-orthography text to classical",
    )
    parser.add_argument(
        "--to-modern",
        metavar="TEXT",
        help="Convert classical-orthography text to modern",
    )
    parser.add_argument(
        "--coverage",
        metavar="FILE",
        help="Analyze a word list (one word per line) and report coverage",
    )
    parser.add_argument(
        "--failures",
        metavar="FILE",
        help="Write failed words to a TSV file (use with --coverage)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log search attempts and exclusions",
    )
    args = parser.parse_args(argv)

    # ── Build analyzer ───────────────────────────────────────────────────

    from nahuatl_morph.engine import Analyzer, load_config
    from nahuatl_morph.lexicon import Lexicon

    config_path = Path(args.config) if args.config else _find_default_config()
    log_level = "WARNING"
    if config_path is not None:
        log_level = load_config(config_path).get("logging", {}).get("level", log_level)
    if args.verbose:
        log_level = "DEBUG"
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.lexicon:
        analyzer = Analyzer(Lexicon.from_file(args.lexicon))
    elif config_path is not None:
        analyzer = Analyzer.from_config(config_path)
    else:
        analyzer = Analyzer()

    if not args.json:
        print(analyzer.summary())
        print()

    # ── Analyze ──────────────────────────────────────────────────────────

    if args.analyze:
        results = analyzer.analyze_batch(args.analyze, args.orthography)
        if args.json:
            print(json.dumps(
                {word: r.to_dict() for word, r in results.items()},
                ensure_ascii=False, indent=2,
            ))
        else:
            for word, result in results.items():
                if not result.success:
                    print(f"'{word}': {result.error}")
                    print()
                    continue
                print(f"═══ Analysis of '{word}' ({result.source}) ═══")
                for p in result.parsings:
                    forms = "-".join(m.morpheme for m in p.morphemes)
                    print(f"  {forms:30s}  {p.english_translation}")
                    for m in p.morphemes:
                        tags = ", ".join(
                            f"{k}={v}" for k, v in m.details.items()
                            if k not in ("morpheme", "english")
                        )
                        print(f"      {m.morpheme:10s} {tags}")
                print()

    # ── Convert ──────────────────────────────────────────────────────────

    if args.to_classical:
        print(analyzer.converter.convert_text(args.to_classical, "classical"))
    if args.to_modern:
        print(analyzer.converter.convert_text(args.to_modern, "modern"))

    # ── Coverage ─────────────────────────────────────────────────────────

    if args.coverage:
        from nahuatl_morph.coverage import check_coverage, read_word_list

        words_path = Path(args.coverage)
        if not words_path.exists():
            print(f"ERROR: word list not found: {words_path}", file=sys.stderr)
            sys.exit(1)

        report = check_coverage(
            analyzer, read_word_list(words_path), orthography=args.orthography,
        )
        print(report.summary())
        if args.failures:
            report.write_failures(Path(args.failures))
            print(f"\nFailures written to {args.failures}")


if __name__ == "__main__":
    main()
