import itertools
import os

import click
from tqdm import tqdm

import settings
from detector import AlgorithmNotFoundError, SimilarityEnsemble
from logging_config import get_logger, setup_logging
from performance import PerformanceMonitor, format_memory_size
from preprocessor import crawl_directory, load_submission, read_text_file

logger = get_logger('main')


def format_similarity(similarity):
    return f"{similarity:.2f}"


def format_percentage(similarity):
    return f"{similarity * 100:.2f}%"


def _read_input(path):
    try:
        text = read_text_file(path)
    except OSError as e:
        raise click.FileError(path, hint=str(e))
    if len(text) > settings.MAX_INPUT_CHARS:
        raise click.BadParameter(
            f"{path} has {len(text)} characters, the limit is {settings.MAX_INPUT_CHARS}"
        )
    return text


def write_result(output_path, similarity):
    """
    Writes the two-decimal score to output_path, creating parent folders.
    """
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(format_similarity(similarity))


def echo_stats(monitor):
    for name, stats in monitor.get_all_stats().items():
        click.echo(
            f"{name}: runs={stats['executionCount']} failures={stats['failureCount']} "
            f"total={stats['totalTime']:.3f}ms avg={stats['averageTime']:.3f}ms",
            err=True,
        )


def check_plagiarism(root_path, threshold, ensemble=None):
    """
    Compares every pair of submissions under root_path.
    Returns the pairs scoring above threshold, highest score first,
    and the IDs of submissions without any readable text.
    """
    ensemble = ensemble or SimilarityEnsemble()

    logger.info("Step 1: Crawling and loading submissions...")
    submission_files = crawl_directory(root_path, settings.SUBMISSION_EXTENSIONS)
    texts = {}
    empty = []
    loaded_bytes = 0
    for submission, files in sorted(submission_files.items()):
        text = load_submission(files['text'])
        if not text.strip():
            empty.append(submission)
        texts[submission] = text
        loaded_bytes += len(text.encode('utf-8'))
    logger.info("Loaded %d submissions (%s)", len(texts), format_memory_size(loaded_bytes))

    logger.info("Step 2: Pairwise comparison...")
    pairs = list(itertools.combinations(sorted(texts), 2))
    results = []
    for submission1, submission2 in tqdm(pairs, desc="Comparing pairs", unit="pair"):
        score = ensemble.score_all(texts[submission1], texts[submission2])
        if score > threshold:
            results.append({
                'submission1': submission1,
                'submission2': submission2,
                'score': score,
            })

    results.sort(key=lambda x: x['score'], reverse=True)
    return results, empty


@click.group()
def cli():
    """
    Text plagiarism checker (CLI)
    """
    setup_logging()


@cli.command()
@click.argument("original", type=click.Path(exists=True, dir_okay=False))
@click.argument("suspect", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", required=False, type=click.Path(dir_okay=False))
@click.option("--algorithm", "algorithm_name", default=None, help="Score with a single algorithm by name")
@click.option("--breakdown", is_flag=True, help="Also print every algorithm's score")
@click.option("--stats", is_flag=True, help="Print per-algorithm timing to stderr")
def compare(original, suspect, output, algorithm_name, breakdown, stats):
    """
    Score the similarity of two text files.
    """
    text1 = _read_input(original)
    text2 = _read_input(suspect)

    monitor = PerformanceMonitor()
    ensemble = SimilarityEnsemble(monitor=monitor)

    if algorithm_name:
        try:
            similarity = ensemble.score_by_name(text1, text2, algorithm_name)
        except AlgorithmNotFoundError as e:
            raise click.ClickException(str(e))
    else:
        similarity = ensemble.score_all(text1, text2)

    if breakdown:
        # Unmonitored, so --stats only counts the runs behind the printed score
        for name, score in SimilarityEnsemble().score_breakdown(text1, text2).items():
            click.echo(f"{name}: {format_percentage(score)}")

    if output:
        write_result(output, similarity)
    click.echo(format_similarity(similarity))

    if stats:
        echo_stats(monitor)


@cli.command()
def algorithms():
    """
    List the available algorithm names.
    """
    for name in SimilarityEnsemble().list_algorithm_names():
        click.echo(name)


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--threshold", type=float, default=None, help="Report pairs scoring above this value")
@click.option("--stats", is_flag=True, help="Print per-algorithm timing to stderr")
def scan(root, threshold, stats):
    """
    Compare every pair of submissions under ROOT (one sub-folder each).
    """
    if threshold is None:
        threshold = settings.THRESHOLD
    monitor = PerformanceMonitor()
    results, empty = check_plagiarism(root, threshold, SimilarityEnsemble(monitor=monitor))

    for submission in empty:
        click.echo(f"Empty submission: {submission}")
    click.echo(f"Found {len(results)} suspicious pairs.")
    for res in results:
        click.echo(f"{res['submission1']} vs {res['submission2']}: {format_percentage(res['score'])}")

    if stats:
        echo_stats(monitor)


if __name__ == "__main__":
    cli()
