#!/usr/bin/env python3
"""
N-gram Distribution Training Script

Train a smoothed n-gram distribution on a text corpus (or the Brown corpus),
then evaluate it, generate text from it, or explore it interactively.

Usage:
    python train.py --n 3 --corpus data/train/ --generate 20 --seed 42
    python train.py --n 5 --tokenizer char --corpus book.txt --evaluate test.txt
    python train.py --categories news fiction --interactive
"""

import argparse
import sys

from ngram.corpus import get_brown_categories, load_documents
from ngram.errors import NgramError
from ngram.training import (
    console, setup_logging, train_model_cli, evaluate_model_cli, interactive_demo
)


def main():
    parser = argparse.ArgumentParser(
        description="Train a smoothed n-gram distribution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --n 3 --corpus data/train/
  %(prog)s --n 2 --categories news fiction --generate 25 --seed 7
  %(prog)s --n 6 --tokenizer char --corpus book.txt --evaluate test.txt
  %(prog)s --interactive  # Interactive demo after training

Tokenizers:
  word - whitespace-delimited words, case and punctuation kept
  char - one token per character
        """
    )

    parser.add_argument(
        '-n', '--n',
        type=int,
        default=3,
        help='Order of the n-gram distribution (default: 3)'
    )

    parser.add_argument(
        '-t', '--tokenizer',
        type=str,
        default='word',
        choices=['word', 'char'],
        help='Tokenizer (default: word)'
    )

    parser.add_argument(
        '--corpus',
        type=str,
        default=None,
        help='Training text file or directory of *.txt files (default: Brown corpus)'
    )

    parser.add_argument(
        '-c', '--categories',
        type=str,
        nargs='+',
        default=None,
        help='Brown corpus categories to use when no --corpus is given (default: all)'
    )

    parser.add_argument(
        '--lowercase',
        action='store_true',
        help='Lowercase word tokens'
    )

    parser.add_argument(
        '--evaluate',
        type=str,
        default=None,
        help='Text file or directory to compute perplexity on'
    )

    parser.add_argument(
        '-g', '--generate',
        type=int,
        default=0,
        help='Number of tokens of random text to generate'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=0,
        help='Random seed for generation (default: 0)'
    )

    parser.add_argument(
        '-i', '--interactive',
        action='store_true',
        help='Run interactive demo after training'
    )

    parser.add_argument(
        '--list-categories',
        action='store_true',
        help='List available Brown corpus categories and exit'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )

    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.list_categories:
        console.print("Available Brown corpus categories:")
        for cat in get_brown_categories():
            console.print(f"  - {cat}")
        return 0

    try:
        model = train_model_cli(
            n=args.n,
            tokenizer=args.tokenizer,
            corpus_path=args.corpus,
            categories=args.categories,
            lowercase=args.lowercase
        )

        if args.evaluate:
            evaluate_model_cli(model, load_documents(args.evaluate))

        if args.generate:
            console.print()
            console.print(f"[green]Generated (seed {args.seed}):[/green] "
                          f"[bold]{model.random_sentence(args.seed, args.generate)}[/bold]")
            console.print()
    except (NgramError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if args.interactive:
        interactive_demo(model, seed=args.seed)

    return 0


if __name__ == '__main__':
    sys.exit(main())
