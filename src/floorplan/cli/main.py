"""Typer CLI for managing and exporting floorplan layouts."""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer

from floorplan.application import AppSettings, ServiceFactory
from floorplan.application.factory import set_factory
from floorplan.application.serialization import (
    LayoutFormatError,
    dump_layout,
    load_layout,
)
from floorplan.contracts import ExportOptions, LayoutRepositoryProtocol
from floorplan.domain import (
    LayoutNotFoundError,
    PageSize,
    StorageError,
    UnitSystem,
    create_empty_layout,
    format_dimension,
    parse_dimension,
    slugify,
)
from floorplan.domain.services.attachment import find_orphaned_openings
from floorplan.infrastructure.exporters import ExporterRegistry

app = typer.Typer(
    name="floorplan",
    help="Create, inspect and export 2D floorplan layouts.",
)


def _factory(ctx: typer.Context) -> ServiceFactory:
    factory = ctx.obj
    if not isinstance(factory, ServiceFactory):
        factory = ServiceFactory(AppSettings.from_env())
        ctx.obj = factory
    return factory


def _display_format_error(e: LayoutFormatError) -> None:
    typer.echo(f"Error: {e.message}", err=True)


def _layout_exists(repository: LayoutRepositoryProtocol, slug: str) -> bool:
    try:
        repository.get_layout(slug)
    except LayoutNotFoundError:
        return False
    except LayoutFormatError:
        return True
    return True


@app.callback()
def main(
    ctx: typer.Context,
    layouts_dir: Annotated[
        Path | None,
        typer.Option("--layouts-dir", help="Directory holding layout documents (env: LAYOUTS_DIR)"),
    ] = None,
    exports_dir: Annotated[
        Path | None,
        typer.Option("--exports-dir", help="Directory receiving exports (env: EXPORTS_DIR)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Create, inspect and export 2D floorplan layouts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = AppSettings.from_env(layouts_dir=layouts_dir, exports_dir=exports_dir)
    ctx.obj = ServiceFactory(settings)


@app.command(name="list")
def list_layouts(ctx: typer.Context) -> None:
    """List stored layouts, most recently updated first."""
    repository = _factory(ctx).get_repository()
    layouts = repository.list_layouts()
    if not layouts:
        typer.echo("No layouts found.")
        return
    for summary in layouts:
        typer.echo(
            f"{summary.slug:<30} {summary.name:<30} "
            f"{summary.entity_count:>5} entities  {summary.updated_at}"
        )


@app.command()
def show(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Layout slug")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the stored document as JSON"),
    ] = False,
) -> None:
    """Show a layout's settings and contents."""
    repository = _factory(ctx).get_repository()
    try:
        layout = repository.get_layout(slug)
    except LayoutNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except LayoutFormatError as e:
        _display_format_error(e)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(dump_layout(layout), indent=2))
        return

    settings = layout.settings
    typer.echo(f"Name:     {layout.name}")
    typer.echo(f"Slug:     {layout.slug}")
    typer.echo(f"Updated:  {layout.updated_at}")
    typer.echo(
        f"Page:     {format_dimension(settings.page_width, settings.units)} x "
        f"{format_dimension(settings.page_height, settings.units)} ({settings.page_size.value})"
    )
    typer.echo(f"Grid:     {format_dimension(settings.grid_size, settings.units)}")
    typer.echo(f"Entities: {len(layout.entities)}")
    counts = Counter(entity.type.value for entity in layout.entities)
    for entity_type, count in sorted(counts.items()):
        typer.echo(f"  {entity_type:<10} {count}")

    for opening in find_orphaned_openings(layout):
        typer.echo(
            f"Warning: {opening.type.value} {opening.id} references missing wall "
            f"'{opening.wall_id}'",
            err=True,
        )


@app.command()
def new(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Display name for the layout")],
    slug: Annotated[
        str | None,
        typer.Option("--slug", help="Slug to store under (default: derived from name)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing layout with the same slug"),
    ] = False,
) -> None:
    """Create a new empty layout."""
    slug = slug or slugify(name)
    if not slug:
        typer.echo(f"Error: cannot derive a slug from name {name!r}", err=True)
        raise typer.Exit(code=1)

    repository = _factory(ctx).get_repository()
    if not force and _layout_exists(repository, slug):
        typer.echo(f"Error: layout '{slug}' already exists (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)

    layout = create_empty_layout(name, slug)
    try:
        repository.save_layout(slug, layout)
    except StorageError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Created layout '{slug}'")


@app.command()
def delete(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Layout slug")],
) -> None:
    """Delete a stored layout."""
    repository = _factory(ctx).get_repository()
    try:
        repository.delete_layout(slug)
    except (LayoutNotFoundError, StorageError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted layout '{slug}'")


@app.command()
def export(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Layout slug")],
    output_formats: Annotated[
        str,
        typer.Option("--format", "-f", help="Comma-separated formats: png,svg,pdf,dxf (or 'all')"),
    ] = "svg",
    grid: Annotated[bool, typer.Option("--grid/--no-grid", help="Draw the grid")] = True,
    dimensions: Annotated[
        bool, typer.Option("--dimensions/--no-dimensions", help="Label wall lengths")
    ] = True,
    labels: Annotated[bool, typer.Option("--labels/--no-labels", help="Draw text and object labels")] = True,
    dpi: Annotated[int, typer.Option("--dpi", min=1, help="PNG resolution")] = 150,
    paper: Annotated[PageSize, typer.Option("--paper", help="PDF paper size")] = PageSize.LETTER,
    orientation: Annotated[
        str, typer.Option("--orientation", help="PDF orientation: landscape or portrait")
    ] = "landscape",
    scale_label: Annotated[
        str, typer.Option("--scale-label", help="Scale note printed in the PDF footer")
    ] = "",
) -> None:
    """Export a stored layout to image, document or CAD files."""
    if output_formats.strip().lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid or not formats:
        typer.echo(f"Unknown formats: {', '.join(invalid) or '(none given)'}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    try:
        options = ExportOptions(
            formats=formats,
            include_grid=grid,
            include_dimensions=dimensions,
            include_labels=labels,
            paper_size=paper,
            orientation=orientation,
            scale_label=scale_label,
            dpi=dpi,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    factory = _factory(ctx)
    session = factory.create_session()
    loaded = session.load_layout(slug)
    if not loaded.success:
        typer.echo(f"Error: {loaded.message}", err=True)
        raise typer.Exit(code=1)

    result = session.export(options)
    if not result.success:
        typer.echo(f"Export error: {result.message}", err=True)
        raise typer.Exit(code=1)

    target = factory.settings.exports_dir / slug
    for filename in result.files:
        typer.echo(f"Exported: {target / filename}")


@app.command()
def presets(ctx: typer.Context) -> None:
    """List the object preset library."""
    repository = _factory(ctx).get_repository()
    try:
        library = repository.get_presets()
    except (LayoutFormatError, StorageError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for category, items in library.presets.items():
        typer.echo(f"{category}:")
        if not items:
            typer.echo("  (none)")
        for preset in items:
            typer.echo(
                f"  {preset.name:<28} {preset.object_type:<8} "
                f"{preset.width:g} x {preset.height:g}"
            )


@app.command(name="format-dimension")
def format_dimension_command(
    inches: Annotated[float, typer.Argument(help="Length in inches")],
    units: Annotated[UnitSystem, typer.Option("--units", "-u", help="Display units")] = UnitSystem.FEET_INCHES,
) -> None:
    """Format a length in inches for display."""
    typer.echo(format_dimension(inches, units))


@app.command(name="parse-dimension")
def parse_dimension_command(
    text: Annotated[str, typer.Argument(help="Length text, e.g. 5'-6\" or 2.5m")],
    units: Annotated[UnitSystem, typer.Option("--units", "-u", help="Input units")] = UnitSystem.FEET_INCHES,
) -> None:
    """Parse a length and print it in inches."""
    value = parse_dimension(text, units)
    if value is None:
        typer.echo(f"Error: cannot parse dimension {text!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{value:g}")


@app.command()
def validate(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to a layout JSON document"),
    ],
) -> None:
    """Validate a layout document.

    Exit codes:
        0 - Document is valid
        1 - Document has errors
        2 - Document is valid but has warnings
    """
    try:
        layout = load_layout(layout_file)
    except LayoutFormatError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    orphans = find_orphaned_openings(layout)
    for opening in orphans:
        typer.echo(
            f"Warning: {opening.type.value} {opening.id} references missing wall "
            f"'{opening.wall_id}'"
        )
    if orphans:
        raise typer.Exit(code=2)
    typer.echo(f"{layout_file}: valid ({len(layout.entities)} entities)")


@app.command()
def serve(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from floorplan.web.app import create_app

    set_factory(_factory(ctx))
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
