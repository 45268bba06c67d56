import asyncio

import click
from rich.console import Console

from loadgen.runner import fetch_stats, run_hash_test
from loadgen.stats import compute_percentiles, print_report


@click.command()
@click.option("--server-url", default="http://localhost:8080", help="Base URL of the hash service")
@click.option("--num-requests", default=100, help="Number of passwords to submit")
@click.option("--concurrency", default=20, help="Max concurrent submissions")
@click.option("--poll-interval", default=0.5, help="Seconds between result polls")
@click.option("--job-wait", default=30.0, help="Seconds to wait for each job to complete")
@click.option("--timeout", default=10.0, help="Request timeout in seconds")
def main(
    server_url: str,
    num_requests: int,
    concurrency: int,
    poll_interval: float,
    job_wait: float,
    timeout: float,
) -> None:
    """Load test runner for the password hash service."""
    console = Console()
    console.rule("[bold]Hash Service Load Test[/bold]")
    console.print(f"Server: {server_url}")
    console.print(f"Requests: {num_requests}, Concurrency: {concurrency}")
    console.print()

    console.print("[bold green]Submitting and polling...[/bold green]")
    accept_lat, done_lat, errors, mismatches, err_details = asyncio.run(
        run_hash_test(server_url, num_requests, concurrency, timeout, poll_interval, job_wait)
    )
    console.print(
        f"  Done: {len(accept_lat)} accepted, {len(done_lat)} completed, "
        f"{errors} errors, {mismatches} mismatches"
    )
    for err, count in err_details.most_common():
        console.print(f"    [dim]{count}x {err}[/dim]")

    server_stats = asyncio.run(fetch_stats(server_url, timeout))

    print_report(
        compute_percentiles(accept_lat),
        compute_percentiles(done_lat),
        errors,
        mismatches,
        server_stats,
    )


if __name__ == "__main__":
    main()
