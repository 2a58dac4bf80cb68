"""3D preview of the rack grid.

The preview only sees the derived geometry of a :class:`PlanResult`, never
the raw plan input. Scene coordinates are y-up (x along the building length,
z across its width); plotly is z-up, so y and z are swapped when drawing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import plotly.graph_objects as go

from .calculator import PlanResult
from .errors import PreviewTooLargeError

RACK_HEIGHT_FT = 5.0
MAX_PREVIEW_RACKS = 5000
RACK_COLOR = "#5555ff"

# Triangles of a box whose 8 corners are ordered bottom face then top face.
_BOX_I = (7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2)
_BOX_J = (3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 7)
_BOX_K = (0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6)

Vector = Tuple[float, float, float]


@dataclass(frozen=True)
class SceneSpec:
    rows: int
    columns: int
    rack_length_ft: float
    rack_depth_ft: float
    aisle_ft: float
    intersecting_ft: float
    rack_height_ft: float = RACK_HEIGHT_FT

    @classmethod
    def from_result(cls, result: PlanResult) -> "SceneSpec":
        return cls(
            rows=result.number_of_rack_rows,
            columns=result.rack_count_per_row,
            rack_length_ft=result.rack_length_ft,
            rack_depth_ft=result.rack_depth_ft,
            aisle_ft=result.aisle_width_ft,
            intersecting_ft=result.intersecting_aisle_width_ft,
        )

    @property
    def rack_count(self) -> int:
        return max(self.rows, 0) * max(self.columns, 0)


@dataclass(frozen=True)
class RackBox:
    row: int
    column: int
    center: Vector
    size: Vector


def rack_boxes(spec: SceneSpec) -> Iterator[RackBox]:
    """Yield one box per rack, row by row."""

    size = (spec.rack_length_ft, spec.rack_height_ft, spec.rack_depth_ft)
    for row in range(spec.rows):
        for column in range(spec.columns):
            center = (
                column * (spec.rack_length_ft + spec.aisle_ft),
                spec.rack_height_ft / 2,
                row * (spec.rack_depth_ft + spec.intersecting_ft),
            )
            yield RackBox(row=row, column=column, center=center, size=size)


def _box_corners(box: RackBox) -> List[Vector]:
    """Return the corners of ``box`` in plotly (x, y, z-up) coordinates."""

    cx, cy, cz = box.center
    length, height, depth = box.size
    x0, x1 = cx - length / 2, cx + length / 2
    y0, y1 = cz - depth / 2, cz + depth / 2
    z0, z1 = cy - height / 2, cy + height / 2
    return [
        (x0, y0, z0), (x1, y0, z0), (x1, y1, z0), (x0, y1, z0),
        (x0, y0, z1), (x1, y0, z1), (x1, y1, z1), (x0, y1, z1),
    ]


def build_figure(spec: SceneSpec, max_racks: int = MAX_PREVIEW_RACKS) -> go.Figure:
    """Draw every rack as one mesh.

    Raises PreviewTooLargeError when the grid holds more than ``max_racks``.
    """
    if spec.rack_count > max_racks:
        raise PreviewTooLargeError(spec.rack_count, max_racks)

    xs: List[float] = []
    ys: List[float] = []
    zs: List[float] = []
    i: List[int] = []
    j: List[int] = []
    k: List[int] = []
    for box in rack_boxes(spec):
        offset = len(xs)
        for x, y, z in _box_corners(box):
            xs.append(x)
            ys.append(y)
            zs.append(z)
        i.extend(offset + index for index in _BOX_I)
        j.extend(offset + index for index in _BOX_J)
        k.extend(offset + index for index in _BOX_K)

    fig = go.Figure(
        go.Mesh3d(
            x=xs,
            y=ys,
            z=zs,
            i=i,
            j=j,
            k=k,
            color=RACK_COLOR,
            flatshading=True,
            name="Racks",
            hoverinfo="name",
        )
    )
    fig.update_layout(
        title=f"Rack layout - {spec.rows} rows × {spec.columns} racks",
        scene=dict(
            xaxis=dict(title="Length (ft)"),
            yaxis=dict(title="Width (ft)"),
            zaxis=dict(title="Height (ft)"),
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def render_html(
    spec: SceneSpec, full_html: bool = False, max_racks: int = MAX_PREVIEW_RACKS
) -> str:
    """Render the preview as HTML, loading plotly.js from the CDN."""

    return build_figure(spec, max_racks).to_html(full_html=full_html, include_plotlyjs="cdn")
