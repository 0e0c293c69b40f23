# -*- coding: utf-8 -*-
"""
spell.py
Learns a lexicon + language model from a corpus, saves / loads it, and
corrects a text file token by token.

usage:
    python spell.py --corpus corpus.txt --ngram 2 --save model.spell
    python spell.py --load model.spell --check text.txt --result corrected.txt --details
"""

import argparse
import logging
import sys
from pathlib import Path

from ngramspell.config import load_config
from ngramspell.corpus import read_lines
from ngramspell.corrector import Corrector
from ngramspell.errors import SpellModelError
from ngramspell.graphviz import draw_lexicon, draw_model
from ngramspell.model import SpellModel
from ngramspell.normalize import iter_tokens

logger = logging.getLogger("ngramspell.cli")

NOT_FOUND = "<NOTFOUND>"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ngramspell",
        description="Corrects the text in a file with a lexicon and language model "
                    "learned from a text corpus.",
    )
    src = ap.add_argument_group("model source")
    src.add_argument("--corpus", "-c", help="learn a new lexicon and language model from this file (.txt or .csv)")
    src.add_argument("--load", "-l", help="load a model saved with --save")
    src.add_argument("--save", "-s", help="save the model learned with --corpus to this file")
    src.add_argument("--ngram", "-n", type=int, help="n-gram order of the language model (default from config)")

    cor = ap.add_argument_group("correction")
    cor.add_argument("--check", "--correct", dest="check", help="text file to correct")
    cor.add_argument("--result", help="where to write the corrected text")
    cor.add_argument("--details", "-d", action="store_true",
                     help="write the top candidates with their scores for every token")
    cor.add_argument("--suggestions", type=int, help="candidates written per token with --details")

    ap.add_argument("--draw-lexicon", help="write the lexicon as a graphviz file (small corpora only)")
    ap.add_argument("--draw-model", help="write the language model as a graphviz file (small corpora only)")
    ap.add_argument("--encoding", "--enc", help="encoding of corpus, text and model files")
    ap.add_argument("--config", help="YAML file merged over the default configuration")
    ap.add_argument("--verbose", "-v", action="store_true", help="print progress information")
    return ap


def check_arguments(ap: argparse.ArgumentParser, args):
    if not args.corpus and not args.load:
        ap.error("specify a source for the model: --corpus or --load")
    if args.corpus and args.load:
        ap.error("--corpus and --load cannot be combined")
    if args.load and args.save:
        ap.error("a loaded model cannot be saved again; use --save with --corpus")
    if args.check and not args.result:
        ap.error("--check needs --result to write the corrected text to")
    if args.result and not args.check:
        ap.error("--result needs a text file given with --check")
    if args.details and not args.result:
        ap.error("--details only applies when correcting a file")
    if args.suggestions is not None and args.suggestions < 1:
        ap.error("--suggestions must be at least 1")
    if args.load and args.ngram is not None:
        ap.error("--ngram only applies to a model learned with --corpus")
    for name in ("corpus", "load", "check"):
        value = getattr(args, name)
        if value and not Path(value).exists():
            ap.error(f"--{name}: file not found: {value}")


def _padding(word: str) -> str:
    return " " * max(0, 30 - len(word))


def correct_file(corrector: Corrector, src: Path, dst: Path, encoding: str,
                 details: bool = False, suggestions: int = 5) -> int:
    """Correct ``src`` into ``dst``; returns the number of tokens processed."""
    n = 0
    with dst.open("w", encoding=encoding) as out:
        for tok, cands in corrector.correct_tokens(iter_tokens(read_lines(src, encoding))):
            n += 1
            if not details:
                out.write((cands[0][0] if cands else NOT_FOUND) + "\n")
                continue
            if not cands:
                out.write(f"✗ {tok}{_padding(tok)} |Suggestions: <NONE>\n")
                continue
            mark = "✓" if cands[0][0] == tok else "✗"
            shown = ", ".join(f"{w} ({s})" for w, s in cands[:suggestions])
            out.write(f"{mark} {tok}{_padding(tok)} |Suggestions: {shown}\n")
    return n


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    check_arguments(ap, args)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(Path(args.config) if args.config else None)
        encoding = args.encoding or cfg["model"]["encoding"]
        order = args.ngram if args.ngram is not None else cfg["model"]["ngram"]
        suggestions = args.suggestions if args.suggestions is not None else cfg["output"]["suggestions"]

        if args.corpus:
            logger.info("Creating a new model from %s. This can take a while.", args.corpus)
            model = SpellModel(order).fit(read_lines(args.corpus, encoding))
            if args.save:
                model.save(args.save, encoding)
                print("Wrote model to", args.save)
        else:
            logger.info("Reading model from %s. This can take a while.", args.load)
            model = SpellModel.load(args.load, encoding)

        if args.draw_lexicon:
            Path(args.draw_lexicon).write_text(draw_lexicon(model.lexicon), encoding="utf-8")
        if args.draw_model:
            Path(args.draw_model).write_text(draw_model(model), encoding="utf-8")

        if args.check:
            corrector = Corrector.from_config(model, cfg)
            n = correct_file(corrector, Path(args.check), Path(args.result), encoding,
                             details=args.details, suggestions=suggestions)
            print(f"Corrected {n} tokens, written to {args.result}")
    except (SpellModelError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
