"""Material commands: admin catalogue management and per-project ordering."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cli.runtime import confirm_or_abort, console, get_settings, maybe_export, run_action
from cli.ui_components import build_materials_table
from core.domain.forms import MaterialForm, build_form
from core.services import workflows
from core.services.project_views import ordered_quantity

app = typer.Typer(no_args_is_help=True, help="Material catalogue and project orders.")


@app.command("list")
def list_materials(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also save the list as JSON."),
) -> None:
    """List the material catalogue."""

    materials = run_action(lambda api: api.list_materials(), failure="Failed to fetch materials")
    console.print(build_materials_table(materials, currency=get_settings().currency_symbol))
    maybe_export(materials, output)


@app.command()
def add(
    name: str = typer.Option("", "--name", "-n"),
    unit: str = typer.Option("", "--unit", "-u", help="e.g. bag, kg, m3."),
    price_per_unit: str = typer.Option("", "--price"),
    stock_quantity: str = typer.Option("", "--stock"),
    category: str = typer.Option("", "--category", "-c"),
    description: str = typer.Option("", "--description", "-d"),
) -> None:
    """Add a material to the catalogue (admin)."""

    async def _action(api):
        form = build_form(
            MaterialForm,
            name=name,
            unit=unit,
            price_per_unit=price_per_unit,
            stock_quantity=stock_quantity,
            category=category,
            description=description,
        )
        return await api.create_material(form)

    material = run_action(_action, failure="Failed to save material")
    console.print(f"[green]Material added successfully[/green] (#{material.id} {material.name})")


@app.command()
def update(
    material_id: int = typer.Argument(..., help="Material ID."),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    unit: Optional[str] = typer.Option(None, "--unit", "-u"),
    price_per_unit: Optional[str] = typer.Option(None, "--price"),
    stock_quantity: Optional[str] = typer.Option(None, "--stock"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    """Edit a material (admin); omitted options keep their current value."""

    material = run_action(
        lambda api: workflows.update_material(
            api,
            material_id,
            name=name,
            unit=unit,
            price_per_unit=price_per_unit,
            stock_quantity=stock_quantity,
            category=category,
            description=description,
        ),
        failure="Failed to save material",
    )
    console.print(f"[green]Material updated successfully[/green] (#{material.id} {material.name})")


@app.command()
def delete(
    material_id: int = typer.Argument(..., help="Material ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a material (admin)."""

    confirm_or_abort("Are you sure you want to delete this material?", yes=yes)
    run_action(lambda api: api.delete_material(material_id), failure="Failed to delete material")
    console.print("[green]Material deleted successfully[/green]")


@app.command()
def project(project_id: int = typer.Argument(..., help="Project ID.")) -> None:
    """Catalogue with the quantities already ordered for a project."""

    async def _action(api):
        catalogue = await api.list_materials()
        ordered = await workflows.project_materials_or_empty(api, project_id)
        return catalogue, ordered

    catalogue, ordered = run_action(_action, failure="Failed to fetch materials")
    quantities = {material.id: ordered_quantity(ordered, material.id) for material in catalogue}
    console.print(
        build_materials_table(catalogue, currency=get_settings().currency_symbol, ordered=quantities)
    )


@app.command()
def order(
    project_id: int = typer.Argument(..., help="Project ID."),
    material_id: int = typer.Argument(..., help="Material ID."),
    quantity: str = typer.Argument(..., help="Units to order."),
) -> None:
    """Order a material for a project (checked against the available stock)."""

    run_action(
        lambda api: workflows.order_material(
            api, project_id=project_id, material_id=material_id, quantity=quantity
        ),
        failure="Failed to order material",
    )
    console.print("[green]Material ordered successfully[/green]")
