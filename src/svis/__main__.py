import json
import logging
import os
import sys

import click
from dotenv import load_dotenv

from svis import config
from svis.collector import discover_files
from svis.errors import DiscoveryError
from svis.reporting import ResultSort, find_results_by_source, render_error, render_file_info, sort_results
from svis.runner import analyze_path, analyze_path_concurrent

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """svis - Source map size visualizer CLI"""
    # Load .env from current working directory
    load_dotenv(os.path.join(os.getcwd(), ".env"))
    logging.basicConfig(
        level=config.read_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _run_batch(path, parallel, workers, executor):
    results = []
    if parallel:
        summary = analyze_path_concurrent(
            path,
            results.append,
            max_workers=workers or config.read_max_workers(),
            executor=executor or config.read_executor(),
        )
    else:
        summary = analyze_path(path, results.append)
    return results, summary


@cli.command()
@click.argument("path")
@click.option("--parallel/--sequential", default=False, help="Analyze files on a worker pool")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker pool size (parallel mode)")
@click.option("--executor", type=click.Choice(config.EXECUTOR_KINDS), default=None, help="Worker pool kind")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice([s.value for s in ResultSort]),
    default=ResultSort.NAME.value,
    help="Order of the per-file reports",
)
@click.option("--reverse", is_flag=True, help="Reverse the report order")
@click.option("--tree", is_flag=True, help="Group sources by directory")
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON")
def analyze(path, parallel, workers, executor, sort_by, reverse, tree, as_json):
    """Report how many bytes each original source contributes to generated files."""
    try:
        results, summary = _run_batch(path, parallel, workers, executor)
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    results = sort_results(results, ResultSort(sort_by), reverse=reverse)

    if as_json:
        payload = {"files": [r.to_dict() for r in results], "summary": summary.to_dict()}
        click.echo(json.dumps(payload, indent=2))
        return

    for result in results:
        if result.ok:
            for line in render_file_info(result.info, tree=tree):
                click.echo(line)
            click.echo()

    for result in results:
        if not result.ok:
            for line in render_error(result):
                click.echo(line)

    click.echo(f"Files checked: {click.style(str(summary.files_checked), fg='cyan')}")
    if summary.files_failed:
        click.echo(f"Files failed: {click.style(str(summary.files_failed), fg='red')}")


@cli.command()
@click.argument("path")
def discover(path):
    """List the generated files that would be analyzed."""
    try:
        files = discover_files(path)
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for file in files:
        click.echo(file)


@cli.command()
@click.argument("path")
@click.argument("query")
def find(path, query):
    """Find the generated files whose source map lists a source matching QUERY."""
    try:
        results, _ = _run_batch(path, parallel=False, workers=None, executor=None)
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    matches = find_results_by_source(sort_results(results), query)
    if not matches:
        click.echo(f"No generated file contains a source matching '{query}'.")
        sys.exit(1)

    for result in matches:
        sources = [s for s in result.info.source_mapping.sources if query in s]
        click.echo(f"{result.file}: {', '.join(sources)}")


if __name__ == "__main__":
    cli()
