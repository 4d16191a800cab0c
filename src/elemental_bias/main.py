"""CLI entrypoint for elemental bias configuration and dry-run rolls."""

from __future__ import annotations

import random
from collections import Counter
from typing import NoReturn

import typer
from rich import print
from rich.table import Table

from elemental_bias.bias_service import ElementalBiasService
from elemental_bias.bias_store import (
    BiasConfigError,
    BiasConfigStore,
    InMemoryBiasConfigStore,
    JsonBiasConfigStore,
)
from elemental_bias.biome_bias import BiomeBiasError
from elemental_bias.config import settings
from elemental_bias.elements import REAL_ELEMENTS
from elemental_bias.telemetry.logging import configure_logging
from elemental_bias.world import climate_for_biome

app = typer.Typer(help="Elemental bias service entrypoint")
biomebias_app = typer.Typer(help="Manage custom per-biome element bias")
app.add_typer(biomebias_app, name="biomebias")


@app.callback()
def _setup() -> None:
    configure_logging(settings.log_level)


def _build_store() -> BiasConfigStore:
    if settings.bias_config_path:
        return JsonBiasConfigStore(settings.bias_config_path)
    return InMemoryBiasConfigStore(settings.custom_biome_attribute_bias)


def _build_service(seed: int | None = None) -> ElementalBiasService:
    rng = random.Random(seed) if seed is not None else None
    return ElementalBiasService(_build_store(), settings.bias_parameters, rng=rng)


def _build_editing_service() -> ElementalBiasService:
    if not settings.bias_config_path:
        print({"error": "Edits would not be saved. Set ELEMENTAL_BIAS_BIAS_CONFIG_PATH to a JSON file."})
        raise typer.Exit(code=1)
    return _build_service()


def _fail(exc: ValueError) -> NoReturn:
    print({"error": str(exc)})
    raise typer.Exit(code=1)


@app.command()
def start() -> None:
    """Show effective bias configuration."""
    try:
        line_count = len(_build_store().lines())
    except BiasConfigError as exc:
        _fail(exc)
    print(
        {
            "app_name": settings.app_name,
            "bias_parameters": settings.bias_parameters(),
            "bias_config_path": settings.bias_config_path,
            "custom_line_count": line_count,
        }
    )


@biomebias_app.command("add")
def biomebias_add(
    biome: str = typer.Argument(..., help="Biome id, e.g. desert or minecraft:desert"),
    element: str = typer.Argument(..., help="fire/frost/nature/thunder or all"),
    probability: float = typer.Argument(..., min=0.0, max=100.0, help="Bias weight 0-100"),
) -> None:
    service = _build_editing_service()
    try:
        line = service.add_bias(biome, element, probability)
    except (BiomeBiasError, BiasConfigError) as exc:
        _fail(exc)
    print({"added": line})


@biomebias_app.command("remove")
def biomebias_remove(
    biome: str = typer.Argument(..., help="Biome id"),
    element: str = typer.Argument(..., help="fire/frost/nature/thunder or all"),
) -> None:
    service = _build_editing_service()
    try:
        removed = service.remove_bias(biome, element)
    except (BiomeBiasError, BiasConfigError) as exc:
        _fail(exc)
    print({"removed": removed})


@biomebias_app.command("list")
def biomebias_list(biome: str = typer.Argument(..., help="Biome id")) -> None:
    service = _build_service()
    try:
        entries = service.list_bias(biome)
    except (BiomeBiasError, BiasConfigError) as exc:
        _fail(exc)
    print({"biome": biome, "entries": entries})


@app.command("table")
def bias_table(biome: str = typer.Option(..., help="Biome id")) -> None:
    """Print the accumulated custom bias weights for a biome."""
    try:
        table = _build_service().bias_table(biome)
    except BiasConfigError as exc:
        _fail(exc)
    print({element.value: weight for element, weight in table.items()})


@app.command()
def roll(
    biome: str = typer.Option(..., help="Biome id, e.g. desert"),
    stormy: bool = typer.Option(False, help="Resolve as during a thunderstorm"),
    count: int = typer.Option(1000, min=1, help="Number of spawns to simulate"),
    temperature: float = typer.Option(None, help="Override the biome base temperature"),
    seed: int = typer.Option(None, help="Seed for a reproducible roll"),
) -> None:
    """Resolve many spawns in one biome and show the element distribution."""
    service = _build_service(seed=seed)
    climate = climate_for_biome(biome, temperature=temperature)
    environment = climate.predicates(
        hot_threshold=settings.hot_temperature_threshold,
        cold_threshold=settings.cold_temperature_threshold,
    )
    try:
        counts = Counter(service.resolve(biome, is_stormy=stormy, environment=environment) for _ in range(count))
    except BiasConfigError as exc:
        _fail(exc)

    table = Table(title=f"{climate.biome} (temperature {climate.temperature}, stormy={stormy})")
    table.add_column("element")
    table.add_column("count", justify="right")
    table.add_column("share", justify="right")
    for element in REAL_ELEMENTS:
        table.add_row(element.value, str(counts[element]), f"{counts[element] / count:.1%}")
    print(table)


if __name__ == "__main__":
    app()
