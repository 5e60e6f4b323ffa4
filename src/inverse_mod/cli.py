import functools

import click
from rich.console import Console
from rich.table import Table

from inverse_mod import analysis
from inverse_mod.client import DEFAULT_ENDPOINT, fetch_outcome
from inverse_mod.config import Mode, SearchConfig
from inverse_mod.errors import RemoteError
from inverse_mod.inverse import compute_inverse
from inverse_mod.log_config import configure_logging
from inverse_mod.narration import ALGORITHM_EXPLANATION, format_result, format_steps
from inverse_mod.outcome import Reason
from inverse_mod.ui import render_trace

MODE_CHOICES = [mode.value for mode in Mode]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log search decisions at debug level.")
@click.option("--json-logs", is_flag=True, help="Render log events as JSON.")
def cli(verbose: bool, json_logs: bool):
    configure_logging(verbose=verbose, json=json_logs)


def search_options(fn):
    """Shared options that select the heuristic variant and its budgets."""
    @click.option("--mode", "-m", type=click.Choice(MODE_CHOICES), default=Mode.GUARANTEED.value, show_default=True)
    @click.option("--naive-baseline", is_flag=True, help="Use the uncorrected multiplier rule.")
    @click.option("--no-offset-retry", is_flag=True, help="Disable the k+1..k+W retry window.")
    @click.option("--no-backtrack", is_flag=True, help="Disable the earliest-odd-multiplier backtrack.")
    @click.option("--parity-only", is_flag=True, help="Backtrack only on the strict even/even parity trap.")
    @click.option("--offset-window", default=5, type=int, show_default=True)
    @click.option("--max-iterations", default=200, type=int, show_default=True)
    @click.option("--max-nodes", default=2000, type=int, show_default=True)
    @click.option("--max-backtracks", default=5, type=int, show_default=True)
    @functools.wraps(fn)
    def wrapper(
        mode: str,
        naive_baseline: bool,
        no_offset_retry: bool,
        no_backtrack: bool,
        parity_only: bool,
        offset_window: int,
        max_iterations: int,
        max_nodes: int,
        max_backtracks: int,
        **kwargs,
    ):
        try:
            config = SearchConfig(
                use_corrected_baseline=not naive_baseline,
                enable_local_offset_retry=not no_offset_retry,
                enable_parity_backtrack=not no_backtrack,
                backtrack_on_shared_factor=not parity_only,
                offset_window=offset_window,
                max_iterations=max_iterations,
                max_nodes=max_nodes,
                max_backtracks=max_backtracks,
            )
        except ValueError as e:
            raise click.BadParameter(str(e))
        return fn(mode=Mode(mode), config=config, **kwargs)

    return wrapper


def run(x: int, y: int, mode: Mode, config: SearchConfig):
    """Compute the outcome, turning invalid input into a usage error."""
    outcome = compute_inverse(x, y, mode, config=config)
    if not outcome.success and outcome.reason is Reason.INVALID_INPUT:
        raise click.BadParameter(outcome.message)
    return outcome


@cli.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@search_options
def steps(x: int, y: int, mode: Mode, config: SearchConfig):
    """Show every step of the inverse of X mod Y."""
    click.echo(format_steps(x, y, run(x, y, mode, config)))


@cli.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@search_options
def solve(x: int, y: int, mode: Mode, config: SearchConfig):
    """Print only the inverse of X mod Y."""
    outcome = run(x, y, mode, config)
    click.echo(format_result(x, y, outcome))
    if not outcome.success:
        raise SystemExit(1)


@cli.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@search_options
def trace(x: int, y: int, mode: Mode, config: SearchConfig):
    """Render the multiplier/remainder trace of X mod Y as a table."""
    Console().print(render_trace(x, y, run(x, y, mode, config)))


@cli.command()
def explain():
    """Explain how the algorithm works."""
    click.echo(ALGORITHM_EXPLANATION)


@cli.command()
@click.option("--max-modulus", "-n", default=200, type=click.IntRange(min=2), show_default=True)
@click.option("--min-modulus", default=2, type=click.IntRange(min=2), show_default=True)
@click.option("--samples", "-s", default=0, type=click.IntRange(min=0), help="Bases per modulus, 0 for all.")
@click.option("--output", "-o", default="complexity.csv", type=click.Path(dir_okay=False), show_default=True)
@click.option("--summary/--no-summary", default=True, help="Print per-modulus success rates.")
def analyze(max_modulus: int, min_modulus: int, samples: int, output: str, summary: bool):
    """Compare the heuristic variants over a range of moduli and write a CSV."""
    click.echo(f"Analyzing moduli {min_modulus}..{max_modulus} (samples per modulus: {samples or 'all'})...")
    rows = list(analysis.analyze_range(max_modulus, min_modulus=min_modulus, samples_per_modulus=samples))
    count = analysis.write_csv(rows, output)
    click.echo(f"CSV written: {output} ({count} rows)")

    if not summary:
        return

    table = Table(title="Heuristic-only success rate by modulus")
    table.add_column("y", justify="right")
    table.add_column("pairs", justify="right")
    table.add_column("naive", justify="right")
    table.add_column("corrected", justify="right")
    table.add_column("backtracking", justify="right")
    table.add_column("avg steps", justify="right")
    for s in analysis.summarize(rows):
        table.add_row(
            str(s.modulus),
            str(s.pairs),
            f"{s.naive_rate:.1%}",
            f"{s.corrected_rate:.1%}",
            f"{s.backtracking_rate:.1%}",
            "" if s.avg_backtracking_steps is None else f"{s.avg_backtracking_steps:.2f}",
        )
    Console().print(table)


@cli.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.option("--mode", "-m", type=click.Choice(MODE_CHOICES), default=Mode.GUARANTEED.value, show_default=True)
@click.option("--endpoint", "-e", default=DEFAULT_ENDPOINT, show_default=True)
@click.option("--steps/--result-only", "with_steps", default=False)
def query(x: int, y: int, mode: str, endpoint: str, with_steps: bool):
    """Ask a running API server for the inverse of X mod Y."""
    try:
        data = fetch_outcome(x, y, mode, endpoint, steps=with_steps)
    except RemoteError as e:
        raise click.ClickException(str(e))
    if with_steps:
        click.echo(data["steps"])
    else:
        click.echo(data["result"])


@cli.command("api")
@click.option("--host", default="127.0.0.1", help="Host to bind the server to")
@click.option("--port", default=8000, help="Port to bind the server to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def api(host: str, port: int, reload: bool):
    """Start the HTTP API server."""
    import uvicorn
    from inverse_mod_api.api import app

    click.echo(f"Starting API server on http://{host}:{port}")
    click.echo("Available endpoints:")
    click.echo("  - GET /api/inverse-mod?x=&y=&mode=      - Steps of the calculation")
    click.echo("  - GET /api/inverse-mod-z?x=&y=&mode=    - Result only")
    click.echo("  - GET /api/inverse-mod-explanation      - How the algorithm works")
    click.echo("\nPress Ctrl+C to stop the server")

    if reload:
        # Use import string for reload mode
        uvicorn.run("inverse_mod_api.api:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    cli()
