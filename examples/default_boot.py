"""Export the reference boot and a stiffer variant as ASCII STL."""

from __future__ import annotations

from pathlib import Path

from cvboot import BootParameters, analyze_mesh, make_boot, write_stl


def build(output_dir: Path = Path("dist")) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    reference = BootParameters()
    stiff = reference.replace(wall_thickness=5.0, n_ribs=5.0, rib_amp=4.0)

    written = []
    for name, params in (("cv_boot", reference), ("cv_boot_stiff", stiff)):
        mesh = make_boot(params)
        analysis = analyze_mesh(mesh)
        print(f"{name}: {mesh.n_faces} facets, watertight={analysis.is_watertight}")
        written.append(write_stl(mesh, output_dir / f"{name}.stl", solid_name=name))
    return written


if __name__ == "__main__":
    build()
