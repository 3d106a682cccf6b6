from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Callable, List

import typer
from rich.console import Console
from rich.panel import Panel

from povrounding._config import load_settings
from povrounding.errors import RoundingError
from povrounding.io.pov import write_pov
from povrounding.io.stl import write_stl
from povrounding.mesh import solid_to_mesh
from povrounding.outline.polygon import parse_polygon
from povrounding.outline.svg import parse_svg_file, parse_svg_path
from povrounding.rounding.points import TypedPoint
from povrounding.rounding.solid import RoundedSolid, round_outline
from povrounding.settings import CIRCULAR_FACTOR, RoundingSettings

console = Console()
app = typer.Typer(help="Extrude 2D outlines into POV-Ray solids with rounded edges.")

OutlineFactory = Callable[[], List[TypedPoint]]

OUTPUT = typer.Option(..., "--output", "-o", help="Where to write the POV-Ray source.")
NAME = typer.Option(..., "--name", "-n", help="What to call the POV-Ray object.")
DEPTH = typer.Option(None, "--depth", "-d", help="Extrusion depth. (Default is 6.)")
RADIUS = typer.Option(None, "--radius", "-r", help="Rounding radius. (Default is 1.)")
FACTOR_HELP = (
    "Bezier factor. (Default is 0.76. A value of "
    f"{CIRCULAR_FACTOR} gives a rounding close to circular; a value near 0 produces a near-flat bevel.)"
)
FACTOR = typer.Option(None, "--factor", "-f", help=FACTOR_HELP)
EXTRA = typer.Option(
    None,
    "--extra",
    "-e",
    help="Text file with extra POV-ray code added to the declaration of every generated object.",
)
SKIP_FRONT = typer.Option(
    False, "--skip-front", "-sf", help="Do not generate the rounding at the front of the object."
)
SKIP_BACK = typer.Option(
    False, "--skip-back", "-sb", help="Do not generate the rounding at the back of the object."
)
SMOOTHNESS_HELP = "Patch tessellation steps. 4 (the default) is enough unless the edge is seen close up; then use 6."
SMOOTHNESS = typer.Option(None, "--smoothness", "-s", min=1, help=SMOOTHNESS_HELP)
STL = typer.Option(None, "--stl", help="Also write a tessellated STL of the rounded solid.")
OVERWRITE = typer.Option(False, "--overwrite", help="Allow replacing existing output files.")
VERBOSE = typer.Option(False, "--verbose", "-v", help="Print curve, quad and patch statistics.")


@dataclass(frozen=True)
class OutputOptions:
    output: pathlib.Path
    name: str
    stl: pathlib.Path | None
    overwrite: bool
    verbose: bool


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


def _resolve_output(path: pathlib.Path, overwrite: bool) -> pathlib.Path:
    if overwrite or not path.exists():
        return path
    final = _next_available_path(path)
    console.print(f"[yellow]Output {path} exists; writing to {final} instead.[/yellow]")
    return final


def _read_extra(extra: pathlib.Path | None) -> str | None:
    if extra is None:
        return None
    if not extra.is_file():
        raise typer.BadParameter(f"Extra code file {extra} does not exist.")
    return extra.read_text()


def _settings(
    depth: float | None,
    radius: float | None,
    factor: float | None,
    smoothness: int | None,
    skip_front: bool,
    skip_back: bool,
    extra: pathlib.Path | None,
) -> RoundingSettings:
    try:
        return load_settings(
            depth=depth,
            radius=radius,
            factor=factor,
            smoothness=smoothness,
            skip_front=True if skip_front else None,
            skip_back=True if skip_back else None,
            extra_code=_read_extra(extra),
        )
    except (RoundingError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _log_solid(solid: RoundedSolid) -> None:
    console.print(
        f"[magenta]{solid.curve_count} curves, {solid.quad_count} quads, "
        f"{solid.convex_junctions} convex junctions, {len(solid.patches)} patches, "
        f"{solid.prism_point_count} prism points.[/magenta]"
    )


def _run(outline: OutlineFactory, settings: RoundingSettings, opts: OutputOptions) -> None:
    console.rule("povrounding")
    try:
        points = outline()
        solid = round_outline(points, settings, name=opts.name)
    except (RoundingError, LookupError, ValueError, FileNotFoundError) as exc:
        console.print(Panel.fit(str(exc), title="Rounding failed", style="red"))
        raise typer.Exit(code=1) from exc

    if opts.verbose:
        _log_solid(solid)

    output = _resolve_output(opts.output, opts.overwrite)
    write_pov(solid, output)
    written = [f"POV-Ray source [green]{output}[/green]"]

    if opts.stl is not None:
        mesh = solid_to_mesh(solid)
        stl_path = _resolve_output(opts.stl, opts.overwrite)
        write_stl(mesh, stl_path)
        written.append(f"STL [green]{stl_path}[/green] ({mesh.n_faces} triangles)")

    console.print(
        Panel(
            "\n".join(f"Wrote {item}." for item in written),
            title=f"Declared {solid.name}",
            border_style="green",
        )
    )


@app.command()
def text(
    content: str = typer.Argument(..., metavar="TEXT", help="The text to render."),
    font: str = typer.Option(..., "--font", "-f", help="Font family name or path to a TTF/OTF file."),
    size: float = typer.Option(64.0, "--size", "-s", help="Font size (em) to use. (Default is 64.)"),
    bold: bool = typer.Option(False, "--bold", "-b", help="Uses boldface."),
    italic: bool = typer.Option(False, "--italics", "--italic", "-i", help="Uses italics."),
    output: pathlib.Path = OUTPUT,
    name: str = NAME,
    depth: float | None = DEPTH,
    radius: float | None = RADIUS,
    factor: float | None = typer.Option(None, "--bezier-factor", help=FACTOR_HELP),
    extra: pathlib.Path | None = EXTRA,
    skip_front: bool = SKIP_FRONT,
    skip_back: bool = SKIP_BACK,
    smoothness: int | None = typer.Option(None, "--smoothness", min=1, help=SMOOTHNESS_HELP),
    stl: pathlib.Path | None = STL,
    overwrite: bool = OVERWRITE,
    verbose: bool = VERBOSE,
) -> None:
    """
    Generate the input curve from a line of text.
    """

    from povrounding.outline.glyphs import text_outline

    settings = _settings(depth, radius, factor, smoothness, skip_front, skip_back, extra)
    opts = OutputOptions(output, name, stl, overwrite, verbose)
    _run(lambda: text_outline(content, font, size=size, bold=bold, italic=italic), settings, opts)


@app.command()
def polygon(
    vertices: str = typer.Argument(..., metavar="POLYGON", help='Polygon vertices as "(x1,y1),(x2,y2),...,(xn,yn)".'),
    output: pathlib.Path = OUTPUT,
    name: str = NAME,
    depth: float | None = DEPTH,
    radius: float | None = RADIUS,
    factor: float | None = FACTOR,
    extra: pathlib.Path | None = EXTRA,
    skip_front: bool = SKIP_FRONT,
    skip_back: bool = SKIP_BACK,
    smoothness: int | None = SMOOTHNESS,
    stl: pathlib.Path | None = STL,
    overwrite: bool = OVERWRITE,
    verbose: bool = VERBOSE,
) -> None:
    """
    Use a polygon as the input curve.
    """

    settings = _settings(depth, radius, factor, smoothness, skip_front, skip_back, extra)
    opts = OutputOptions(output, name, stl, overwrite, verbose)
    _run(lambda: parse_polygon(vertices), settings, opts)


@app.command()
def svgpath(
    data: str | None = typer.Option(None, "-p", "--path-data", help="The curve in SVG path syntax (M, L, C, Z/z)."),
    svg_file: pathlib.Path | None = typer.Option(None, "--file", "-F", help="SVG file to read path data from."),
    element_id: str | None = typer.Option(None, "--id", help="ID of the path element inside --file."),
    output: pathlib.Path = OUTPUT,
    name: str = NAME,
    depth: float | None = DEPTH,
    radius: float | None = RADIUS,
    factor: float | None = FACTOR,
    extra: pathlib.Path | None = EXTRA,
    skip_front: bool = SKIP_FRONT,
    skip_back: bool = SKIP_BACK,
    smoothness: int | None = SMOOTHNESS,
    stl: pathlib.Path | None = STL,
    overwrite: bool = OVERWRITE,
    verbose: bool = VERBOSE,
) -> None:
    """
    Use a path in SVG syntax as the input curve.
    """

    if data is None and (svg_file is None or element_id is None):
        raise typer.BadParameter("If -p is not used, --file and --id must both be present.")
    if data is not None and (svg_file is not None or element_id is not None):
        raise typer.BadParameter("If -p is used, neither --file nor --id may be present.")

    settings = _settings(depth, radius, factor, smoothness, skip_front, skip_back, extra)
    opts = OutputOptions(output, name, stl, overwrite, verbose)
    if data is not None:
        _run(lambda: parse_svg_path(data), settings, opts)
    else:
        _run(lambda: parse_svg_file(svg_file, element_id), settings, opts)
