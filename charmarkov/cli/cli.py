"""
cli.py - command line front end for the character model

Trains a LanguageModel on a corpus file and prints generated text.
- "fixed" mode seeds the model (seed 20 unless --seed/config says otherwise),
  so repeated runs print the same text; "random" mode does not
- options fall back to a JSON config file (charmarkov.json by default)
- --show-model prints the learned table with Rich, for inspection

Usage:
  charmarkov corpus.txt "The" -w 3 -n 200 --mode fixed
"""

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from charmarkov.core.errors import CharMarkovError, CorpusReadError, ModelConfigError
from charmarkov.core.language_model import LanguageModel
from charmarkov.utils.config_manager import Config
from charmarkov.utils.logger_utils import Log, setup_logging

logger = logging.getLogger(__name__)

# diagnostics go to stderr; stdout carries only the generated text
console = Console(stderr=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="charmarkov",
        description="Train a character-level Markov model and generate text from it.",
    )
    parser.add_argument("corpus", type=Path, help="training text file")
    parser.add_argument("initial_text", help="seed text; its last WINDOW chars start generation")
    parser.add_argument("-w", "--window-length", type=int, help="context window in characters")
    parser.add_argument("-n", "--length", type=int, dest="text_length",
                        help="total length of the output, seed included")
    parser.add_argument("--mode", choices=["random", "fixed"],
                        help="fixed: reproducible output; random: new output every run")
    parser.add_argument("--seed", type=int, help="seed used in fixed mode")
    parser.add_argument("--encoding", help="corpus encoding (default utf-8)")
    parser.add_argument("--config", default="charmarkov.json", help="JSON config file")
    parser.add_argument("--save-config", action="store_true",
                        help="write the effective options back to --config")
    parser.add_argument("--show-config", action="store_true", help="print effective options")
    parser.add_argument("--show-model", action="store_true", default=None,
                        help="print the learned context table")
    parser.add_argument("--log-file", dest="log_path", help="also append log records here")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def load_config(args):
    cfg = Config(args.config)
    random_mode = None if args.mode is None else args.mode == "random"
    cfg.update(
        window_length=args.window_length,
        text_length=args.text_length,
        seed=args.seed,
        random=random_mode,
        encoding=args.encoding,
        show_model=args.show_model,
        log_path=args.log_path,
    )
    return cfg


def model_table(lm):
    """Rich table with one row per (window, character) record."""
    table = Table(title=f"Context table (window={lm.window_length})", box=box.SIMPLE)
    table.add_column("Window", style="cyan")
    table.add_column("Char", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("p", justify="right", style="magenta")
    table.add_column("cp", justify="right", style="magenta")

    for window, bucket in sorted(lm.table.items()):
        for i, rec in enumerate(bucket):
            table.add_row(
                repr(window) if i == 0 else "",
                repr(rec.chr),
                str(rec.count),
                f"{rec.p:.4f}" if rec.p is not None else "-",
                f"{rec.cp:.4f}" if rec.cp is not None else "-",
            )
    return table


def run(args):
    cfg = load_config(args)
    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING
    setup_logging(level, cfg.get("log_path"))
    Log.metrics_path = cfg.get("log_path")

    if args.show_config:
        cfg.show(console)
    if args.save_config:
        cfg.save()
        console.print(f"[dim]Config written to {cfg.path}[/dim]")

    if cfg.get("random"):
        lm = LanguageModel.unseeded(cfg.get("window_length"))
    else:
        lm = LanguageModel.seeded(cfg.get("window_length"), cfg.get("seed"))

    with Log.time_block("training"):
        lm.train_file(args.corpus, encoding=cfg.get("encoding"))

    if cfg.get("show_model"):
        console.print(model_table(lm))

    result = lm.generate_detailed(args.initial_text, cfg.get("text_length"))
    logger.info("stopped: %s (%d chars)", result.stop_reason, len(result.text))
    print(result.text)
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run(args)
    except (ModelConfigError, ValueError) as e:
        console.print(f"[red]Invalid option:[/red] {e}")
        return 2
    except CorpusReadError as e:
        console.print(f"[red]Cannot read corpus:[/red] {e}")
        return 1
    except CharMarkovError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
