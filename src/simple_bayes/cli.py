"""Command-line interface for Simple Bayes.

Keeps a classifier in a JSON model file and provides ``init``, ``train``,
``untrain``, ``classify``, ``scores``, and ``stats`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    simple-bayes init interesting uninteresting
    simple-bayes train interesting "here is some interesting text about rails"
    simple-bayes train uninteresting --file notes.txt
    simple-bayes classify "i love rails"
    simple-bayes scores "i love rails"
"""

from __future__ import annotations

import json
import logging
import math
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .bayes import Bayes, TieBreak
from .config import Settings, load_settings
from .errors import SimpleBayesError

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)-15s %(name)-5s %(levelname)-8s %(message)s"


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}")
    sys.exit(1)


def _read_text(text: str | None, file: Path | None) -> str:
    """Return text from the argument or ``--file`` (exactly one)."""
    if text is not None and file is not None:
        raise click.UsageError("Give either TEXT or --file, not both.")
    if file is not None:
        return file.read_text(encoding="utf-8")
    if text is None:
        raise click.UsageError("Missing TEXT (or --file).")
    return text


def _load_model(ctx: click.Context) -> Bayes:
    path: Path = ctx.obj["model_path"]
    if not path.exists():
        raise click.ClickException(
            f"Model file {path} does not exist. Run 'simple-bayes init' first."
        )
    try:
        return Bayes.load(path)
    except SimpleBayesError as e:
        _fail(e)


@click.group()
@click.version_option(package_name="simple-bayes")
@click.option("--model", "-m", "model_path", type=click.Path(path_type=Path), default=None,
              help="Model file (default: $SIMPLE_BAYES_MODEL or simple_bayes_model.json).")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help="Logging level (default: $SIMPLE_BAYES_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, model_path: Path | None, log_level: str | None) -> None:
    """🧮 Simple Bayes: Naive Bayes text classification.

    Train categories from example text, then classify new text.
    """
    try:
        settings = load_settings()
    except SimpleBayesError as e:
        _fail(e)

    level = (log_level or settings.log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["model_path"] = model_path or settings.model_path


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--tie-break", type=click.Choice([t.value for t in TieBreak]), default=None,
              help="Tie-break policy (default: $SIMPLE_BAYES_TIE_BREAK or last).")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing model file.")
@click.pass_context
def init(ctx: click.Context, names: tuple[str, ...], tie_break: str | None, force: bool) -> None:
    """Create an empty model with the given categories.

    Example: simple-bayes init spam ham
    """
    settings: Settings = ctx.obj["settings"]
    path: Path = ctx.obj["model_path"]
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists. Use --force to overwrite.")

    try:
        bayes = Bayes(*names, tie_break=tie_break or settings.tie_break)
        bayes.save(path)
    except (SimpleBayesError, OSError) as e:
        _fail(e)

    console.print(f"Created [bold]{path}[/] with categories: {', '.join(bayes.category_names)}")


@main.command()
@click.argument("name")
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the training text from a file.")
@click.pass_context
def train(ctx: click.Context, name: str, text: str | None, file: Path | None) -> None:
    """Train category NAME with TEXT.

    Example: simple-bayes train spam "win a free prize now"
    """
    _update(ctx, name, _read_text(text, file), untrain=False)


@main.command()
@click.argument("name")
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the text to forget from a file.")
@click.pass_context
def untrain(ctx: click.Context, name: str, text: str | None, file: Path | None) -> None:
    """Remove TEXT from category NAME.

    Example: simple-bayes untrain spam "win a free prize now"
    """
    _update(ctx, name, _read_text(text, file), untrain=True)


def _update(ctx: click.Context, name: str, text: str, untrain: bool) -> None:
    bayes = _load_model(ctx)
    try:
        if untrain:
            bayes.untrain(name, text)
        else:
            bayes.train(name, text)
        bayes.save(ctx.obj["model_path"])
    except (SimpleBayesError, OSError) as e:
        _fail(e)

    verb = "Untrained" if untrain else "Trained"
    console.print(f"{verb} [cyan]{name}[/] ({bayes.count_terms()} terms in corpus)")


@main.command()
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the text to classify from a file.")
@click.option("--default-prob", type=float, default=None,
              help="Probability for unseen terms (default: $SIMPLE_BAYES_DEFAULT_PROB or 0.05).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def classify(
    ctx: click.Context,
    text: str | None,
    file: Path | None,
    default_prob: float | None,
    output: str,
) -> None:
    """Print the most probable category for TEXT.

    Example: simple-bayes classify "claim your free prize"
    """
    settings: Settings = ctx.obj["settings"]
    content = _read_text(text, file)
    bayes = _load_model(ctx)
    prob = default_prob if default_prob is not None else settings.default_prob

    try:
        name = bayes.classify(content, prob)
    except SimpleBayesError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps({"category": name}))
    else:
        console.print(f"[bold green]{name}[/]")


@main.command()
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the text to score from a file.")
@click.option("--default-prob", type=float, default=None,
              help="Probability for unseen terms (default: $SIMPLE_BAYES_DEFAULT_PROB or 0.05).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def scores(
    ctx: click.Context,
    text: str | None,
    file: Path | None,
    default_prob: float | None,
    output: str,
) -> None:
    """Show every category's score for TEXT.

    Example: simple-bayes scores "claim your free prize"
    """
    settings: Settings = ctx.obj["settings"]
    content = _read_text(text, file)
    bayes = _load_model(ctx)
    prob = default_prob if default_prob is not None else settings.default_prob

    try:
        log_scores = bayes.log_classifications(content, prob)
        plain_scores = bayes.classifications(content, prob)
        winner = bayes.classify(content, prob)
    except SimpleBayesError as e:
        _fail(e)

    rows = [
        {
            "category": cat.name,
            "log_score": None if math.isinf(log_score) else log_score,
            "score": score,
        }
        for (log_score, cat), (score, _) in zip(log_scores, plain_scores)
    ]

    if output == "json":
        click.echo(json.dumps({"winner": winner, "scores": rows}, indent=2))
        return

    table = Table(title="Category Scores", show_lines=False)
    table.add_column("Category", style="cyan")
    table.add_column("Log score", justify="right")
    table.add_column("Score", justify="right")
    for row in rows:
        style = "bold green" if row["category"] == winner else ""
        log_text = "-inf" if row["log_score"] is None else f"{row['log_score']:.4f}"
        table.add_row(row["category"], log_text, f"{row['score']:.3e}", style=style)

    console.print(table)


@main.command()
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def stats(ctx: click.Context, output: str) -> None:
    """Show corpus statistics for the model."""
    bayes = _load_model(ctx)
    data = {
        "categories": {name: cat.total() for name, cat in bayes.categories.items()},
        "count_terms": bayes.count_terms(),
        "count_unique_terms": bayes.count_unique_terms(),
        "tie_break": bayes.tie_break.value,
    }

    if output == "json":
        click.echo(json.dumps(data, indent=2))
        return

    console.print(Panel(
        f"Terms: {data['count_terms']} | "
        f"Unique terms: {data['count_unique_terms']} | "
        f"Tie-break: {data['tie_break']}",
        title=f"🧮 {ctx.obj['model_path']}",
        border_style="blue",
    ))

    table = Table(title="Training Volume", show_lines=False)
    table.add_column("Category", style="cyan")
    table.add_column("Terms", justify="right")
    for name, total in data["categories"].items():
        table.add_row(name, str(total))
    console.print(table)


if __name__ == "__main__":
    main()
