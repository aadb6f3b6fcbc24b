"""Triangle meshes of rounded boxes."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

from .indexer import PhysicalIndexer, quarter_coords

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]


class PrimitiveTopology(enum.Enum):
    """How the indices of a mesh are grouped into primitives."""

    TRIANGLE_LIST = "triangle_list"


@dataclass
class Mesh:
    """An indexed triangle mesh with optional texture coordinates and face ids.

    ``faces`` holds, for every vertex, the box face it belongs to: 0 for +Z,
    5 for -Z and 1 to 4 for the sides.
    """

    positions: list[Vec3]
    normals: list[Vec3]
    indices: list[int]
    uvs: list[Vec2] | None = None
    faces: list[int] | None = None
    topology: PrimitiveTopology = PrimitiveTopology.TRIANGLE_LIST

    def count_vertices(self) -> int:
        """Number of vertices in the mesh."""
        return len(self.positions)

    def triangles(self) -> Iterator[tuple[int, int, int]]:
        """Yield the vertex indices of each triangle."""
        it = iter(self.indices)
        return zip(it, it, it)


@dataclass(frozen=True)
class RoundedBoxMeshOptions:
    """Options for generating the mesh of a ``RoundedBox``."""

    generate_uv: bool = False
    generate_face: bool = False

    def with_uv(self) -> RoundedBoxMeshOptions:
        """Options that also generate texture coordinates."""
        return replace(self, generate_uv=True)

    def with_face(self) -> RoundedBoxMeshOptions:
        """Options that also generate per-vertex face indices."""
        return replace(self, generate_face=True)

    def split_faces(self) -> bool:
        """Whether the mesh must keep separate vertices for each box face."""
        return self.generate_uv or self.generate_face


@dataclass(frozen=True)
class RoundedBox:
    """A box of the given size whose edges and corners are rounded with ``radius``."""

    size: Vec3 = (1.0, 1.0, 1.0)
    radius: float = 0.1

    def __post_init__(self) -> None:
        size = tuple(float(c) for c in self.size)
        if len(size) != 3:
            raise ValueError(f"size must have three components, got {len(size)}")
        object.__setattr__(self, "size", size)

    def mesh(self) -> RoundedBoxMeshBuilder:
        """A mesh builder for this box with default settings."""
        return RoundedBoxMeshBuilder(rounded_box=self)

    def to_mesh(self) -> Mesh:
        """Build a mesh of this box with default settings."""
        return self.mesh().build()


@dataclass(frozen=True)
class RoundedBoxMeshBuilder:
    """Builds a ``Mesh`` with a ``RoundedBox`` shape."""

    rounded_box: RoundedBox = field(default_factory=RoundedBox)
    subdivisions: int = 4
    options: RoundedBoxMeshOptions = field(default_factory=RoundedBoxMeshOptions)

    def with_subdivisions(self, subdivisions: int) -> RoundedBoxMeshBuilder:
        """Set the number of sectors and stacks in each corner."""
        return replace(self, subdivisions=subdivisions)

    def with_options(self, options: RoundedBoxMeshOptions) -> RoundedBoxMeshBuilder:
        """Set the mesh generation options."""
        return replace(self, options=options)

    def with_uv(self) -> RoundedBoxMeshBuilder:
        """Also generate texture coordinates."""
        return replace(self, options=self.options.with_uv())

    def with_face(self) -> RoundedBoxMeshBuilder:
        """Also generate per-vertex face indices."""
        return replace(self, options=self.options.with_face())

    def _indexer(self) -> PhysicalIndexer:
        split = self.options.split_faces()
        subdivisions = self.subdivisions + self.subdivisions % 2 if split else self.subdivisions
        extra_levels = 2 if split else 1
        return PhysicalIndexer(
            subdivisions=subdivisions,
            extra_levels=extra_levels,
            sectors=4 * subdivisions + 4 * extra_levels,
            stacks=2 * subdivisions + 2 + 2 * extra_levels,
        )

    def build(self) -> Mesh:
        """Generate the mesh."""
        if self.subdivisions <= 0:
            raise ValueError(f"subdivisions must be positive, got {self.subdivisions}")
        split = self.options.split_faces()
        physical = self._indexer()
        subdivisions = physical.subdivisions
        extra_levels = physical.extra_levels

        radius = self.rounded_box.radius
        core_size = tuple(c - 2.0 * radius for c in self.rounded_box.size)
        core_x, core_y, core_z = (c / 2.0 for c in core_size)
        sector_step = math.tau / (4 * subdivisions)
        stack_step = math.pi / (2 * subdivisions)
        rounded_length = 0.125 * math.tau * radius

        positions: list[Vec3] = []
        normals: list[Vec3] = []
        uvs: list[Vec2] = []
        faces: list[int] = []

        for p_stack in range(physical.stacks):
            logical_stack, z_half = physical.decode_stack(p_stack)
            stack_angle = math.pi / 2.0 - logical_stack * stack_step
            xy = math.cos(stack_angle)
            normal_z = math.sin(stack_angle)
            pos_z = radius * normal_z + core_z * z_half.coord()
            stretch = 1.0 if physical.stretch_xy(p_stack) else 0.0

            for p_sector in range(physical.sectors_in(p_stack)):
                logical_sector, xy_quarter = physical.decode_sector(p_sector, p_stack)
                sector_angle = logical_sector * sector_step
                nx = xy * math.cos(sector_angle)
                ny = xy * math.sin(sector_angle)
                normals.append((nx, ny, normal_z))

                sign_x, sign_y = quarter_coords(xy_quarter)
                positions.append(
                    (
                        radius * nx + stretch * core_x * sign_x,
                        radius * ny + stretch * core_y * sign_y,
                        pos_z,
                    )
                )

                if self.options.generate_uv:
                    uvs.append(
                        physical.uv_coords(rounded_length, core_size, p_sector, p_stack)
                    )
                if self.options.generate_face:
                    faces.append(physical.face(p_sector, p_stack))

        half = subdivisions // 2
        skipped_stacks = {
            PhysicalIndexer.END_STACKS + half - 1,
            physical.stacks - PhysicalIndexer.END_STACKS - half - 1,
        }
        period = subdivisions + extra_levels

        indices: list[int] = []
        for p_stack in range(physical.stacks - 1):
            if split and p_stack in skipped_stacks:
                continue
            for p_sector in range(physical.sectors):
                # Seams between split faces would only produce degenerate triangles.
                if split and (p_sector + period // 2 + 1) % period == 0:
                    continue
                jj = physical.index(p_sector, p_stack)
                jk = physical.index(p_sector, p_stack + 1)
                kj = physical.index(p_sector + 1, p_stack)
                kk = physical.index(p_sector + 1, p_stack + 1)
                if jj != jk and jj != kj and jk != kj:
                    indices.extend((jj, jk, kj))
                if kj != jk and kj != kk and jk != kk:
                    indices.extend((kj, jk, kk))

        return Mesh(
            positions=positions,
            normals=normals,
            indices=indices,
            uvs=uvs if self.options.generate_uv else None,
            faces=faces if self.options.generate_face else None,
        )