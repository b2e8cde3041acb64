"""Command line entry point.

Usage:
    embedscore "<text>" [--corpus reviews|emotions] [--threshold 70]
    embedscore generate positive|negative    # embed one sentiment's reviews
    embedscore generate                      # embed the six emotions
"""
import argparse
import os
import sys
from typing import List, Optional

from embedscore.config import Settings, load_settings
from embedscore.embeddings import get_provider
from embedscore.errors import InvalidArgument, SimilarityError
from embedscore.models import CorpusKind, Sentiment
from embedscore.pipeline import QueryReport, generate_emotion_embeddings, generate_review_embeddings, query
from embedscore.similarity import classify

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def _use_color(stream) -> bool:
    return stream.isatty() and "NO_COLOR" not in os.environ


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embedscore",
        description="Score a text against precomputed movie-review or emotion embeddings.",
    )
    parser.add_argument("text", help="text to score, or 'generate' to build a corpus")
    parser.add_argument(
        "category",
        nargs="?",
        help="with 'generate': positive or negative (omit to generate the emotions corpus)",
    )
    parser.add_argument("--corpus", default=CorpusKind.REVIEWS.value, help="reviews (default) or emotions")
    parser.add_argument("--threshold", type=float, default=None, help="override SIMILARITY_THRESHOLD")
    return parser


def print_report(report: QueryReport, threshold: float, stream=None):
    if stream is None:
        stream = sys.stdout
    color = _use_color(stream)
    for result, similar in classify(report.results, threshold):
        value = _paint(str(result.percentage), GREEN if similar else RED, color)
        print(f"{result.label!s}: {value}", file=stream)
    if report.conclusion is not None:
        print(f"The input expresses {report.conclusion.display_name}.", file=stream)


def run(args: argparse.Namespace, settings: Settings):
    if args.text == "generate":
        sentiment = Sentiment.parse(args.category) if args.category is not None else None
        provider = get_provider(settings)
        if sentiment is None:
            generate_emotion_embeddings(provider, settings.data_dir)
        else:
            generate_review_embeddings(sentiment, provider, settings.data_dir)
        return

    if args.category is not None:
        raise InvalidArgument(f"unexpected argument {args.category!r}; quote the text to score")

    corpus = CorpusKind.parse(args.corpus)
    threshold = settings.threshold if args.threshold is None else args.threshold
    provider = get_provider(settings)
    report = query(args.text, provider, corpus, settings.data_dir)
    print_report(report, threshold)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        run(args, load_settings())
    except SimilarityError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
