"""
Command-line interface for keyed-repeat.
Replays keyed list updates against an in-memory container and prints the
operations each pass produced.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from keyed_repeat.cache import BindingSiteCache
from keyed_repeat.container import MemoryContainer
from keyed_repeat.lis import lis
from keyed_repeat.operations import Operation, count_operations
from keyed_repeat.options import RepeatOptions
from keyed_repeat.pool import ReusePool
from keyed_repeat.repeat import repeat

cli = typer.Typer(
	name="keyed-repeat",
	help="Trace keyed list reconciliation passes",
	no_args_is_help=True,
)

console = Console()


def parse_keys(value: str) -> list[str]:
	value = value.strip()
	if not value:
		return []
	return [k.strip() for k in value.split(",")]


def _configure_logging(verbose: bool) -> None:
	if not verbose:
		return
	logging.basicConfig(
		level=logging.DEBUG,
		format="%(message)s",
		handlers=[RichHandler(console=console, show_path=False, markup=False)],
		force=True,
	)


def _operations_table(index: int, ops: list[Operation]) -> Table:
	table = Table(title=f"Pass {index}", show_lines=False)
	table.add_column("#", justify="right", style="dim")
	table.add_column("op", style="bold")
	table.add_column("key")
	table.add_column("before")
	for i, op in enumerate(ops):
		if "before" not in op:
			before = ""
		elif op["before"] is None:
			before = "<end>"
		else:
			before = str(op["before"])
		table.add_row(str(i), op["type"], str(op["key"]), before)
	return table


@cli.command("trace")
def trace(
	passes: list[str] = typer.Argument(
		...,
		help="Comma-separated keys for each pass, e.g. 'a,b,c' 'c,a,b'",
	),
	use_lis: bool = typer.Option(False, "--lis", help="Skip moves for LIS parts"),
	pool: bool = typer.Option(False, "--pool", help="Pool removed parts across passes"),
	reuse: bool = typer.Option(
		False, "--reuse", help="Let pooled parts stand in for any new key"
	),
	updates: bool = typer.Option(
		False, "--updates", help="Include in-place update operations in the table"
	),
	as_json: bool = typer.Option(False, "--json", help="Print operations as JSON"),
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Log the scan state"),
):
	"""Run one reconciliation pass per argument and print the operations."""
	_configure_logging(verbose)
	container = MemoryContainer()
	cache = BindingSiteCache()
	options = RepeatOptions(
		pool=ReusePool() if pool else False, reuse=reuse, lis=use_lis
	)
	report: list[dict[str, object]] = []

	for index, spec in enumerate(passes):
		keys = parse_keys(spec)
		repeat(keys, lambda item, _i: item.upper(), lambda item, _i: item, options).commit(
			container, cache=cache
		)
		ops = container.reset_operations()
		counts = count_operations(ops)
		shown = ops if updates else [op for op in ops if op["type"] != "update"]
		if as_json:
			report.append(
				{
					"pass": index,
					"keys": keys,
					"operations": shown,
					"order": container.keys(),
				}
			)
			continue
		console.print(_operations_table(index, shown))
		console.print(
			f"create={counts['create']} update={counts['update']} "
			+ f"move={counts['move']} remove={counts['remove']} "
			+ f"reattach={counts['reattach']} detach={counts['detach']}"
		)
		console.print(f"order: {','.join(str(k) for k in container.keys())}")

	if as_json:
		typer.echo(json.dumps(report, indent=2))


@cli.command("lis")
def lis_command(
	values: str = typer.Argument(..., help="Comma-separated integers"),
):
	"""Print the longest increasing subsequence of a list of integers."""
	try:
		seq = [int(v) for v in parse_keys(values)]
	except ValueError:
		console.print("[red]Values must be integers[/red]")
		raise typer.Exit(1) from None
	indices = lis(seq)
	console.print(" ".join(str(seq[i]) for i in indices))


def main():
	cli()


if __name__ == "__main__":
	main()
