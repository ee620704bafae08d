"""
Training Module with Rich Terminal UI

This module provides training, evaluation and generation helpers with
progress bars and status displays using the Rich library.
"""

import logging
import math
from typing import Optional, List, Dict

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich.panel import Panel
from rich.table import Table
from rich import box

from .model import NgramDistribution
from .corpus import Document, load_documents, load_brown_corpus
from .tokenizer import get_tokenizer
from .errors import NgramError


console = Console()


def setup_logging(level: str = "WARNING") -> None:
    """Route log records through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)]
    )


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying training statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in stats.items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        elif isinstance(value, list):
            display_value = f"{len(value)} items"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def create_levels_table(model: NgramDistribution) -> Table:
    """One row per order of the model, highest order first."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Order", style="green", justify="right")
    table.add_column("Contexts", style="yellow", justify="right")
    table.add_column("Distinct N-grams", style="yellow", justify="right")
    table.add_column("Discount", style="magenta", justify="right")

    for k in range(model.n_value(), 0, -1):
        freqs = model.kth_frequencies(k)
        table.add_row(
            str(k),
            f"{len(freqs):,}",
            f"{sum(len(c) for c in freqs.values()):,}",
            f"{model.kth_discount(k):.4f}"
        )

    return table


def train_model_cli(
    n: int = 3,
    tokenizer: str = "word",
    corpus_path: Optional[str] = None,
    categories: Optional[List[str]] = None,
    lowercase: bool = False
) -> NgramDistribution:
    """
    Train an n-gram distribution with terminal output.

    Args:
        n: Order of the distribution
        tokenizer: Tokenizer name ('word' or 'char')
        corpus_path: Text file or directory to train on; the Brown corpus
                     is used when omitted
        categories: Brown corpus categories to use
        lowercase: Lowercase word tokens

    Returns:
        Trained NgramDistribution
    """
    tokenizer_kwargs = {'lowercase': lowercase} if tokenizer == "word" else {}
    tok = get_tokenizer(tokenizer, **tokenizer_kwargs)

    console.print()
    console.print(Panel.fit(
        "[bold blue]N-gram Distribution Training[/bold blue]",
        border_style="blue"
    ))
    console.print()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Model Order (n)", str(n))
    config_table.add_row("Tokenizer", tok.name)
    config_table.add_row("Smoothing", "absolute discounting")
    if corpus_path:
        config_table.add_row("Corpus", corpus_path)
    else:
        config_table.add_row("Corpus", "Brown")
        config_table.add_row("Categories", ", ".join(categories) if categories else "All")

    console.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:

        task = progress.add_task("[cyan]Loading corpus...", total=None)
        if corpus_path:
            documents = load_documents(corpus_path)
        else:
            documents = load_brown_corpus(categories=categories, lowercase=lowercase)
        progress.remove_task(task)

        console.print(f"[green]✓[/green] Loaded {len(documents):,} documents")

        task = progress.add_task(f"[cyan]Training orders 1..{n}...", total=None)
        model = NgramDistribution(n, documents, tok)
        progress.remove_task(task)

    console.print("[green]✓[/green] Training complete!")
    console.print()

    console.print(Panel(
        create_levels_table(model),
        title="[bold]Training Statistics[/bold]",
        border_style="yellow"
    ))

    return model


def evaluate_model_cli(model: NgramDistribution, documents: List[Document]) -> Dict:
    """
    Evaluate a model on documents with terminal output.

    Documents the model cannot score are counted and reported instead of
    aborting the evaluation.

    Args:
        model: Trained NgramDistribution
        documents: Evaluation documents

    Returns:
        Dictionary of evaluation metrics
    """
    console.print()
    console.print(Panel.fit("[bold blue]Model Evaluation[/bold blue]", border_style="blue"))
    console.print()

    log_likelihood = 0.0
    num_windows = 0
    skipped = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:

        task = progress.add_task("[cyan]Computing perplexity...", total=len(documents))

        for document in documents:
            try:
                doc_log_likelihood, doc_windows = model.score(document)
            except NgramError as e:
                console.print(f"[red]✗[/red] {document.name}: {e}")
                skipped += 1
            else:
                log_likelihood += doc_log_likelihood
                num_windows += doc_windows
            progress.advance(task)

    results = {
        'log_likelihood': log_likelihood,
        'ngrams_scored': num_windows,
        'documents_skipped': skipped
    }
    if num_windows:
        results['perplexity'] = math.exp(-log_likelihood / num_windows)

    console.print()
    console.print(Panel(
        create_stats_table(results),
        title="[bold]Evaluation Results[/bold]",
        border_style="green"
    ))

    return results


def interactive_demo(model: NgramDistribution, seed: int = 0):
    """Run an interactive demo of the model."""
    console.print()
    console.print(Panel.fit(
        "[bold magenta]Interactive Demo[/bold magenta]\n"
        "Enter a context to see predictions.\n"
        "Type 'quit' to exit.",
        border_style="magenta"
    ))
    console.print()

    n = model.n_value()
    tokenizer = model.tokenizer

    while True:
        try:
            user_input = console.input("[bold cyan]Enter context:[/bold cyan] ")

            if user_input.lower() in ('quit', 'exit', 'q'):
                break

            tokens = tokenizer.tokens(user_input)
            context = tokens[-(n - 1):] if n > 1 else []

            if len(context) < n - 1:
                console.print(f"[yellow]Need at least {n - 1} token(s) of context.[/yellow]")
                continue

            predictions = model.next_token_distribution(context, top_k=10)

            console.print()
            console.print(f"[yellow]Context:[/yellow] {tokenizer.join(context)!r}")

            if not predictions:
                console.print("[yellow]Context never seen during training.[/yellow]")
            else:
                console.print("[yellow]Top predictions:[/yellow]")

            for i, (word, prob) in enumerate(predictions, 1):
                bar_length = int(prob * 50)
                bar = "█" * bar_length + "░" * (50 - bar_length)
                console.print(f"  {i:2}. {word!r:15} {bar} {prob:.4f}")

            console.print()

            try:
                generated = model.random_sentence(seed, 15)
            except NgramError as e:
                console.print(f"[red]✗[/red] {e}")
            else:
                console.print(f"[green]Generated:[/green] [bold]{generated}[/bold]")
            console.print()
            seed += 1

        except KeyboardInterrupt:
            break

    console.print("\n[yellow]Goodbye![/yellow]")
