import statistics

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def compute_percentiles(latencies: list[float]) -> dict:
    if not latencies:
        return {"p50": 0, "p95": 0, "p99": 0, "min": 0, "max": 0, "mean": 0, "count": 0}
    sorted_lat = sorted(latencies)
    n = len(sorted_lat)
    return {
        "p50": sorted_lat[int(n * 0.50)],
        "p95": sorted_lat[int(n * 0.95)] if n > 1 else sorted_lat[0],
        "p99": sorted_lat[int(n * 0.99)] if n > 1 else sorted_lat[0],
        "min": sorted_lat[0],
        "max": sorted_lat[-1],
        "mean": round(statistics.mean(sorted_lat), 2),
        "count": n,
    }


def _fmt(stats: dict, metric: str) -> str:
    if metric == "count":
        return str(stats.get(metric, 0))
    return f"{stats.get(metric, 0):.1f}"


def print_report(
    accept_stats: dict,
    completion_stats: dict,
    errors: int = 0,
    mismatches: int = 0,
    server_stats: dict | None = None,
) -> None:
    console = Console()
    console.print()
    console.rule("[bold blue]Load Test Results[/bold blue]")
    console.print()

    table = Table(title="Latency (ms)", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Submit (accept)", justify="right", style="green")
    table.add_column("Job (complete)", justify="right", style="cyan")
    for m in ["count", "min", "p50", "p95", "p99", "max", "mean"]:
        table.add_row(m.upper(), _fmt(accept_stats, m), _fmt(completion_stats, m))
    console.print(table)

    error_table = Table(title="Error Summary", show_lines=True)
    error_table.add_column("Metric", style="bold")
    error_table.add_column("Value", justify="right")
    error_table.add_row("Errors", str(errors))
    error_table.add_row("Digest mismatches", str(mismatches))
    console.print(error_table)

    insights = []
    if server_stats is not None:
        insights.append(
            f"Server reports {server_stats['total']} completed jobs, "
            f"average worker latency {server_stats['average'] / 1000:.1f}ms."
        )
    if accept_stats["count"] > 0 and completion_stats["count"] > 0:
        ratio = completion_stats["p50"] / accept_stats["p50"] if accept_stats["p50"] > 0 else 0
        if ratio > 1:
            insights.append(
                f"Submits return ~{ratio:.0f}x faster than jobs complete (P50). "
                "Clients are free while the hash is computed."
            )
    if mismatches > 0:
        insights.append(f"{mismatches} digest(s) differed from the locally computed value.")

    if insights:
        console.print()
        console.print(Panel("\n".join(f"  {i+1}. {insight}" for i, insight in enumerate(insights)),
                            title="[bold]Key Insights[/bold]", border_style="blue"))
    console.print()
