import sys
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO, Optional

import typer

from src.corpus import lemmatize_stream, read_training_records
from src.pipelines import TrainingConfig, evaluate_lemmatizer, train_model, trim_model_file
from src.suffixstats import Lemmatizer, SuflemError
from src.suffixstats.config import DEFAULT_MAX_SUFFIX_SIZE

app = typer.Typer(help="Statistical suffix replacement lemmatizer.")


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"[suflem] error: {exc}", err=True)
    return typer.Exit(code=1)


@app.command()
def train(
    model_path: Path = typer.Argument(..., help="Where to save the trained model."),
    corpus: Path = typer.Option(
        ...,
        "--train",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Training corpus: inflected<TAB>lemma<TAB>count per line.",
    ),
    maxlen: int = typer.Option(DEFAULT_MAX_SUFFIX_SIZE, "--maxlen", help="Maximal suffix length to store."),
    trim: bool = typer.Option(True, "--trim/--no-trim", help="Drop zero-count entries before saving."),
) -> None:
    """
    Train a model from a tab-separated corpus and save it to MODEL_PATH.
    """
    try:
        summary = train_model(corpus, model_path, TrainingConfig(max_suffix_size=maxlen, trim=trim))
    except (SuflemError, OSError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"[train] Done! {summary.records} records, {summary.stats.replacement_entries} replacements.", err=True)


@app.command()
def lemmatize(
    model_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Previously trained model."),
    flush: bool = typer.Option(False, "--flush", help="Flush the output after each processed line."),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", exists=True, dir_okay=False, help="Read words from a file instead of stdin."),
    output_path: Optional[Path] = typer.Option(None, "--output", "-o", dir_okay=False, help="Write lemmas to a file instead of stdout."),
) -> None:
    """
    Lemmatize one word per input line, writing one lemma per output line.
    """
    try:
        typer.echo(f"[lemmatize] Loading model from {model_path}.", err=True)
        lemmatizer = Lemmatizer.load(model_path)
        with ExitStack() as stack:
            source: BinaryIO = stack.enter_context(input_path.open("rb")) if input_path else sys.stdin.buffer
            sink: BinaryIO = stack.enter_context(output_path.open("wb")) if output_path else sys.stdout.buffer
            lemmatize_stream(lemmatizer, source, sink, flush=flush)
    except (SuflemError, OSError) as exc:
        raise _fail(exc) from exc


@app.command("trim")
def trim_command(
    model_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Model to trim."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save the trimmed model here instead of in place."),
) -> None:
    """
    Remove zero-count entries from a saved model. Trimmed models cannot be trained further.
    """
    try:
        trim_model_file(model_path, output)
    except (SuflemError, OSError) as exc:
        raise _fail(exc) from exc


@app.command()
def stats(model_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Model to inspect.")) -> None:
    """
    Print table sizes of a saved model.
    """
    try:
        summary = Lemmatizer.load(model_path).stats()
    except (SuflemError, OSError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"max_suffix_size\t{summary.max_suffix_size}")
    typer.echo(f"trimmed\t{int(summary.is_trimmed)}")
    typer.echo(f"lemma_entries\t{summary.lemma_entries}")
    typer.echo(f"inflected_entries\t{summary.inflected_entries}")
    typer.echo(f"replacement_keys\t{summary.replacement_keys}")
    typer.echo(f"replacement_entries\t{summary.replacement_entries}")


@app.command()
def evaluate(
    model_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Model to evaluate."),
    gold: Path = typer.Option(..., "--gold", exists=True, dir_okay=False, help="Gold corpus in training format."),
    show_mistakes: int = typer.Option(10, "--show-mistakes", help="Number of mistakes to print."),
) -> None:
    """
    Report type- and token-level accuracy of a model on a labelled corpus.
    """
    try:
        lemmatizer = Lemmatizer.load(model_path)
        result = evaluate_lemmatizer(lemmatizer, read_training_records(gold), max_mistakes=show_mistakes)
    except (SuflemError, OSError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"pairs\t{result.pairs}")
    typer.echo(f"tokens\t{result.tokens}")
    typer.echo(f"type_accuracy\t{result.type_accuracy:.4f}")
    typer.echo(f"token_accuracy\t{result.token_accuracy:.4f}")
    for inflected, expected, predicted in result.mistakes:
        typer.echo(
            "\t".join(part.decode("utf-8", errors="replace") for part in (inflected, expected, predicted)),
            err=True,
        )


if __name__ == "__main__":
    app()
