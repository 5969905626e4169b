"""Command-line interface for the factory planner game data core."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from factoryplanner.config.settings import PlannerConfig
    from factoryplanner.lookup import GameDataLookup
    from factoryplanner.schemas.game import Recipe

app = typer.Typer(
    name="factoryplanner",
    help="Load, validate and query factory planner game data.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
DataRootOption = Annotated[
    str | None,
    typer.Option(
        "--data-root",
        "-d",
        help="Data directory or http(s) base URL (overrides config).",
    ),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (overrides config)."),
]
JsonLogsOption = Annotated[
    bool,
    typer.Option("--json-logs", help="Emit logs as JSON."),
]


def _setup(
    config: Path | None,
    data_root: str | None,
    log_level: str | None,
    json_logs: bool,
) -> "PlannerConfig":
    """Resolve configuration and configure logging."""
    from factoryplanner.config import default_config, load_config
    from factoryplanner.config.settings import LoggingConfig
    from factoryplanner.utils.logging import configure_logging

    planner_config = load_config(config) if config is not None else default_config()

    if data_root is not None:
        planner_config = planner_config.model_copy(
            update={"data": planner_config.data.model_copy(update={"root": data_root})}
        )
    if log_level is not None or json_logs:
        logging_config = LoggingConfig(
            level=log_level or planner_config.logging.level,
            json_output=json_logs or planner_config.logging.json_output,
        )
        planner_config = planner_config.model_copy(update={"logging": logging_config})

    configure_logging(
        level=planner_config.logging.level,
        json_output=planner_config.logging.json_output,
    )
    return planner_config


def _load_lookup(planner_config: "PlannerConfig") -> "GameDataLookup":
    """Run the full pipeline; exit 1 with the store's error on failure."""
    from factoryplanner.lookup import GameDataLookup
    from factoryplanner.store import GameDataStore, LoadStatus

    store = GameDataStore(planner_config)
    state = store.load()
    if state.status is not LoadStatus.READY:
        console.print(f"[red]Error: {state.error}[/red]")
        raise typer.Exit(code=1)
    return GameDataLookup(store)


def _print_recipes(title: str, recipes: "tuple[Recipe, ...]") -> None:
    table = Table(title=title)
    table.add_column("Recipe", style="cyan")
    table.add_column("Building", style="blue")
    table.add_column("Output", style="green")
    table.add_column("Inputs")
    table.add_column("Per min", justify="right")

    for recipe in recipes:
        inputs = ", ".join(f"{i.amount:g}x {i.id}" for i in recipe.inputs) or "-"
        table.add_row(
            recipe.id,
            recipe.building_id,
            f"{recipe.output.amount:g}x {recipe.output.id}",
            inputs,
            f"{recipe.output_per_minute:g}",
        )

    console.print(table)


@app.command()
def validate(
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    log_level: LogLevelOption = None,
    json_logs: JsonLogsOption = False,
) -> None:
    """Load the game data and report every integrity violation."""
    from factoryplanner.ingestion import GameDataLoadError, load_raw_game_data
    from factoryplanner.validation import ConsoleReporter, validate_game_data

    planner_config = _setup(config, data_root, log_level, json_logs)
    console.print(f"[blue]Loading game data from {planner_config.data.root}[/blue]")

    try:
        raw = load_raw_game_data(planner_config)
    except GameDataLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    result = validate_game_data(raw, planner_config.resources)
    ConsoleReporter(console).print_result(result)

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def summary(
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    log_level: LogLevelOption = None,
    json_logs: JsonLogsOption = False,
) -> None:
    """Load, validate and index the game data; print record counts."""
    planner_config = _setup(config, data_root, log_level, json_logs)
    lookup = _load_lookup(planner_config)

    table = Table(title="Game Data Summary")
    table.add_column("Collection", style="cyan")
    table.add_column("Resource", style="blue")
    table.add_column("Records", justify="right", style="green")

    counts = {
        "items": len(lookup.get_all_items()),
        "buildings": len(lookup.get_all_buildings()),
        "recipes": len(lookup.get_all_recipes()),
        "rails": len(lookup.get_all_rails()),
        "corporations": len(lookup.get_all_corporations()),
    }
    for name, resource in planner_config.resources.items():
        table.add_row(name, resource, str(counts[name]))

    console.print(table)


@app.command()
def rails(
    min_capacity: Annotated[
        float,
        typer.Option("--min-capacity", "-m", help="Minimum throughput (items/min)."),
    ] = 0.0,
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    log_level: LogLevelOption = None,
    json_logs: JsonLogsOption = False,
) -> None:
    """List rails at or above a capacity, ascending by capacity."""
    planner_config = _setup(config, data_root, log_level, json_logs)
    lookup = _load_lookup(planner_config)

    table = Table(title=f"Rails with capacity >= {min_capacity:g}")
    table.add_column("Rail", style="cyan")
    table.add_column("Name")
    table.add_column("Capacity", justify="right", style="green")
    table.add_column("Unlocked by", style="dim")

    for rail in lookup.get_rails_by_min_capacity(min_capacity):
        unlock = (
            f"{rail.unlocked_by.corporation} L{rail.unlocked_by.level}"
            if rail.unlocked_by
            else "-"
        )
        table.add_row(rail.id, rail.name, f"{rail.capacity:g}", unlock)

    console.print(table)


@app.command()
def recipes(
    building: Annotated[
        str | None,
        typer.Option("--building", "-b", help="Recipes run by this building."),
    ] = None,
    produces: Annotated[
        str | None,
        typer.Option("--produces", "-p", help="Recipes producing this item."),
    ] = None,
    consumes: Annotated[
        str | None,
        typer.Option("--consumes", help="Recipes consuming this item."),
    ] = None,
    config: ConfigOption = None,
    data_root: DataRootOption = None,
    log_level: LogLevelOption = None,
    json_logs: JsonLogsOption = False,
) -> None:
    """Query recipes by building, output item or input item."""
    selected = [opt for opt in (building, produces, consumes) if opt is not None]
    if len(selected) != 1:
        console.print(
            "[red]Error: pass exactly one of --building, --produces, --consumes[/red]"
        )
        raise typer.Exit(code=1)

    planner_config = _setup(config, data_root, log_level, json_logs)
    lookup = _load_lookup(planner_config)

    if building is not None:
        _print_recipes(f"Recipes run by {building}", lookup.get_recipes_by_building(building))
    elif produces is not None:
        _print_recipes(f"Recipes producing {produces}", lookup.get_recipes_producing(produces))
    else:
        _print_recipes(f"Recipes consuming {consumes}", lookup.get_recipes_consuming(consumes))


if __name__ == "__main__":
    app()
