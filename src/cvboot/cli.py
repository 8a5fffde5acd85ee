from __future__ import annotations

import json
import pathlib

import numpy as np
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cvboot._config import get_export_settings
from cvboot.boot import make_boot
from cvboot.io.stl import write_stl
from cvboot.mesh import analyze_mesh
from cvboot.params import BootParameters, load_parameters, out_of_range
from cvboot.profile import ZONE_NAMES, radius_profile
from cvboot.validation import ValidationError

console = Console()
app = typer.Typer(help="Generate parametric CV boot meshes and export them as STL.")

PARAMS_OPTION = typer.Option(None, "--params", "-p", help="JSON file with boot parameters (camelCase or snake_case).")
SET_OPTION = typer.Option(None, "--set", "-s", help="Override a parameter, e.g. --set nRibs=10. Repeatable.")


def _parse_overrides(items: list[str] | None) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{item}'.", param_hint="--set")
        overrides[key.strip()] = value.strip()
    return overrides


def _resolve_parameters(params_file: pathlib.Path | None, overrides: list[str] | None) -> BootParameters:
    if params_file is not None and not params_file.exists():
        raise typer.BadParameter(f"Parameter file {params_file} does not exist.", param_hint="--params")
    try:
        params = load_parameters(params_file) if params_file is not None else BootParameters()
        extra = _parse_overrides(overrides)
        if extra:
            params = BootParameters.from_mapping({**params.to_dict(), **extra})
        params.validate()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return params


def _report_ranges(params: BootParameters) -> None:
    for issue in out_of_range(params):
        console.print(f"[yellow]{issue}[/yellow]")


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


@app.command()
def export(
    params_file: pathlib.Path | None = PARAMS_OPTION,
    overrides: list[str] | None = SET_OPTION,
    output: pathlib.Path = typer.Option(
        pathlib.Path("cv_boot.stl"),
        "--output",
        "-o",
        help="Path to the STL file that will be produced.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing STL."),
    binary: bool = typer.Option(False, "--binary", help="Write binary STL instead of ASCII."),
    solid_name: str | None = typer.Option(None, "--solid-name", help="Name written after 'solid' in ASCII STL."),
    preview: bool = typer.Option(False, "--preview", help="Halve the sampling resolution for a quick draft."),
) -> None:
    """
    Build the boot wall from the given parameters and save it as an STL file.
    """

    params = _resolve_parameters(params_file, overrides)
    _report_ranges(params)
    settings = get_export_settings()

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    mesh = make_boot(params, settings.quality(preview=preview))
    final_output.parent.mkdir(parents=True, exist_ok=True)
    try:
        write_stl(mesh, final_output, ascii=not binary, solid_name=solid_name or settings.solid_name)
    except OSError as exc:  # pragma: no cover - filesystem failure
        raise typer.BadParameter(f"Failed to export STL: {exc}") from exc

    mode = "binary" if binary else "ASCII"
    console.print(
        Panel(
            f"Wrote {mode} STL to [green]{final_output}[/green]: "
            f"{mesh.n_faces} facets, {mesh.n_vertices} vertices.",
            title="Export complete",
            border_style="green",
        )
    )


@app.command()
def profile(
    params_file: pathlib.Path | None = PARAMS_OPTION,
    overrides: list[str] | None = SET_OPTION,
    every: int = typer.Option(10, min=1, help="Show every n-th axial sample."),
) -> None:
    """
    Print the sampled outer/inner radius profile along the boot axis.
    """

    params = _resolve_parameters(params_file, overrides)
    settings = get_export_settings()
    prof = radius_profile(params, settings.axial_samples)

    table = Table(title="Radius profile (mm)")
    for column in ("i", "z", "height", "zone", "outer", "inner", "wall"):
        table.add_column(column, justify="right" if column != "zone" else "left")
    rows = list(range(0, len(prof), every))
    if rows[-1] != len(prof) - 1:
        rows.append(len(prof) - 1)
    for i in rows:
        table.add_row(
            str(i),
            f"{prof.z[i]:.3f}",
            f"{prof.heights[i]:.3f}",
            ZONE_NAMES[int(prof.zone[i])],
            f"{prof.outer[i]:.3f}",
            f"{prof.inner[i]:.3f}",
            f"{prof.wall[i]:.3f}",
        )
    console.print(table)
    _report_ranges(params)


@app.command()
def check(
    params_file: pathlib.Path | None = PARAMS_OPTION,
    overrides: list[str] | None = SET_OPTION,
) -> None:
    """
    Build the mesh and report its vertex/face counts and edge topology.
    """

    params = _resolve_parameters(params_file, overrides)
    settings = get_export_settings()
    mesh = make_boot(params, settings.quality())
    analysis = analyze_mesh(mesh)
    prof = radius_profile(params, settings.axial_samples)

    table = Table(title="Boot mesh")
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("vertices", str(analysis.n_vertices))
    table.add_row("faces", str(analysis.n_faces))
    table.add_row("boundary edges", str(analysis.boundary_edges))
    table.add_row("non-manifold edges", str(analysis.nonmanifold_edges))
    table.add_row("degenerate faces", str(analysis.degenerate_faces))
    table.add_row("min wall (mm)", f"{float(np.min(prof.wall)):.3f}")
    console.print(table)

    _report_ranges(params)
    if analysis.is_watertight:
        console.print("[green]Mesh is watertight.[/green]")
    else:
        for issue in analysis.issues():
            console.print(f"[red]{issue}[/red]")
        raise typer.Exit(code=1)


@app.command()
def defaults() -> None:
    """
    Print the default parameter set as JSON.
    """

    console.print_json(json.dumps(BootParameters().to_dict()))


if __name__ == "__main__":  # pragma: no cover
    app()
