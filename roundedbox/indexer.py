"""Mapping between the logical sphere grid and the physical vertex layout of a rounded box.

A rounded box is built like a UV sphere whose sectors and stacks are split at
the quarter and half boundaries so that the flat core of the box can be
inserted between them.  ``PhysicalIndexer`` answers every question about that
layout: where a physical stack or sector sits on the sphere, which vertex
index it has, which face it belongs to and what texture coordinate it gets.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class ZHalf(enum.Enum):
    """The upper (+Z) or lower (-Z) half of the box."""

    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def from_index(cls, n: int) -> ZHalf:
        """Return ``TOP`` for 0 and ``BOTTOM`` for anything else."""
        return cls.TOP if n == 0 else cls.BOTTOM

    def coord(self) -> float:
        """Sign of the Z offset for this half."""
        return 1.0 if self is ZHalf.TOP else -1.0


class StackKind(enum.Enum):
    """Role of a physical stack: one of the two pole stacks, next to a pole, or ordinary."""

    ULTIMATE_TOP = "ultimate_top"
    PENULTIMATE_TOP = "penultimate_top"
    ORDINARY = "ordinary"
    PENULTIMATE_BOTTOM = "penultimate_bottom"
    ULTIMATE_BOTTOM = "ultimate_bottom"

    @property
    def is_ultimate(self) -> bool:
        return self in (StackKind.ULTIMATE_TOP, StackKind.ULTIMATE_BOTTOM)

    @property
    def is_penultimate(self) -> bool:
        return self in (StackKind.PENULTIMATE_TOP, StackKind.PENULTIMATE_BOTTOM)

    @property
    def half(self) -> ZHalf | None:
        """The half an end stack belongs to, or ``None`` for an ordinary stack."""
        if self in (StackKind.ULTIMATE_TOP, StackKind.PENULTIMATE_TOP):
            return ZHalf.TOP
        if self in (StackKind.ULTIMATE_BOTTOM, StackKind.PENULTIMATE_BOTTOM):
            return ZHalf.BOTTOM
        return None


_QUARTER_COORDS = ((1.0, 1.0), (-1.0, 1.0), (-1.0, -1.0), (1.0, -1.0))


def quarter_coords(quarter: int) -> tuple[float, float]:
    """Signs of X and Y for an XY quarter, counted anticlockwise from +X+Y."""
    return _QUARTER_COORDS[quarter % 4]


@dataclass(frozen=True)
class PhysicalIndexer:
    """Layout of the physical vertex grid of a rounded box mesh."""

    subdivisions: int
    extra_levels: int
    sectors: int
    stacks: int

    ULTIMATE_SECTORS: ClassVar[int] = 1
    PENULTIMATE_SECTORS: ClassVar[int] = 4
    TOTAL_END_SECTORS: ClassVar[int] = 5
    END_STACKS: ClassVar[int] = 2
    BOTH_END_STACKS: ClassVar[int] = 4

    def _check_stack(self, stack: int) -> None:
        if not 0 <= stack < self.stacks:
            raise IndexError(f"stack {stack} out of range 0..{self.stacks}")

    def decode_stack(self, stack: int) -> tuple[int, ZHalf]:
        """Return the logical stack and the Z half of a physical stack."""
        self._check_stack(stack)
        clamped = max(stack, 1) - 1
        half = (self.stacks - 2) // 2
        z_half = clamped // (half // self.extra_levels)
        return clamped - z_half, ZHalf.from_index(z_half // self.extra_levels)

    def stack_type(self, stack: int) -> StackKind:
        """Classify a physical stack."""
        self._check_stack(stack)
        if stack == 0:
            return StackKind.ULTIMATE_TOP
        if stack == self.stacks - 1:
            return StackKind.ULTIMATE_BOTTOM
        if stack == 1:
            return StackKind.PENULTIMATE_TOP
        if stack == self.stacks - 2:
            return StackKind.PENULTIMATE_BOTTOM
        return StackKind.ORDINARY

    def decode_sector(self, sector: int, stack: int) -> tuple[int, int]:
        """Return the logical sector and the XY quarter of a physical sector."""
        quarter = self.sectors // 4
        kind = self.stack_type(stack)
        if kind.is_ultimate:
            if sector != 0:
                raise IndexError(f"sector {sector} out of range for a pole stack")
            return 0, 0
        if kind.is_penultimate:
            if not 0 <= sector < self.PENULTIMATE_SECTORS:
                raise IndexError(f"sector {sector} out of range for a stack next to a pole")
            return sector * (quarter - self.extra_levels), sector
        if not 0 <= sector < self.sectors:
            raise IndexError(f"sector {sector} out of range 0..{self.sectors}")
        xy_quarter = sector // (quarter // self.extra_levels)
        return sector - xy_quarter, xy_quarter // self.extra_levels

    def sectors_in(self, stack: int) -> int:
        """Number of physical vertices on a stack."""
        kind = self.stack_type(stack)
        if kind.is_ultimate:
            return self.ULTIMATE_SECTORS
        if kind.is_penultimate:
            return self.PENULTIMATE_SECTORS
        return self.sectors

    def stretch_xy(self, stack: int) -> bool:
        """Whether the vertices of a stack are pushed out to the box core corners."""
        return not self.stack_type(stack).is_ultimate

    def index(self, sector: int, stack: int) -> int:
        """Vertex index of a point on the full sector grid; sectors wrap around."""
        quarter = self.sectors // self.PENULTIMATE_SECTORS
        kind = self.stack_type(stack)
        middle = (self.stacks - self.BOTH_END_STACKS) * self.sectors
        if kind is StackKind.ULTIMATE_TOP:
            return 0
        if kind is StackKind.PENULTIMATE_TOP:
            return self.ULTIMATE_SECTORS + (sector // quarter) % self.PENULTIMATE_SECTORS
        if kind is StackKind.ORDINARY:
            return (
                self.TOTAL_END_SECTORS
                + (stack - self.END_STACKS) * self.sectors
                + sector % self.sectors
            )
        if kind is StackKind.PENULTIMATE_BOTTOM:
            return (
                self.TOTAL_END_SECTORS
                + middle
                + (sector // quarter) % self.PENULTIMATE_SECTORS
            )
        return self.TOTAL_END_SECTORS + self.PENULTIMATE_SECTORS + middle

    def total_vertices(self) -> int:
        """Number of vertices in the mesh."""
        return (
            self.sectors * (self.stacks - self.BOTH_END_STACKS)
            + 2 * self.TOTAL_END_SECTORS
        )

    def total_indices(self) -> int:
        """Number of triangle indices in the mesh."""
        extra = self.extra_levels - 1
        return 6 * (
            (self.sectors - self.PENULTIMATE_SECTORS * extra)
            * (self.stacks - (self.BOTH_END_STACKS - 1) - 2 * extra)
            - self.PENULTIMATE_SECTORS * (self.subdivisions - 1)
        )

    def face(self, sector: int, stack: int) -> int:
        """Box face of a vertex: 0 for +Z, 5 for -Z, 1 to 4 for the sides."""
        half_subdivisions = self.subdivisions // 2
        if stack < self.END_STACKS + half_subdivisions:
            return 0
        if stack > self.stacks - self.END_STACKS - half_subdivisions - 1:
            return 5
        return 1 + (
            (sector + self.sectors - half_subdivisions - 1) // (self.sectors // 4)
        ) % 4

    def uv_coords(
        self,
        rounded_length: float,
        core_size: tuple[float, float, float],
        sector: int,
        stack: int,
    ) -> tuple[float, float]:
        """Texture coordinate of a vertex, laid out per face."""
        half_subdivisions = self.subdivisions // 2
        logical_sector, xy_quarter = self.decode_sector(sector, stack)
        face = self.face(sector, stack)
        core_x, core_y, core_z = core_size

        if face in (0, 5):
            if self.stack_type(stack).is_ultimate:
                return 0.5, 0.5
            level = min(max(min(stack, self.stacks - stack - 1), 1), half_subdivisions + 1)
            dist = (level - 1) / half_subdivisions
            corner_sector = logical_sector % self.subdivisions
            octant = logical_sector // half_subdivisions
            if corner_sector <= half_subdivisions:
                mirrored_sector = corner_sector
            else:
                mirrored_sector = 2 * half_subdivisions - corner_sector
            edge_len = mirrored_sector / half_subdivisions
            if (-(-octant // 2)) % 2 == 1:
                edge_x, edge_y = edge_len, 1.0
            else:
                edge_x, edge_y = 1.0, edge_len
            flip_y = -1.0 if face == 0 else 1.0
            sign_x, sign_y = quarter_coords(xy_quarter)
            vx = sign_x * (dist * edge_x * rounded_length + 0.5 * core_x)
            vy = flip_y * sign_y * (dist * edge_y * rounded_length + 0.5 * core_y)
            return (
                0.5 + vx / (core_x + 2.0 * rounded_length),
                0.5 + vy / (core_y + 2.0 * rounded_length),
            )

        u_core_len = core_x if face in (1, 3) else core_y
        ring = 4 * self.subdivisions
        u_offset = (ring + half_subdivisions + logical_sector - face * self.subdivisions) % ring
        u_off_len = rounded_length * u_offset / half_subdivisions
        if face % 4 == xy_quarter:
            u_off_len += u_core_len
        v_offset = stack - half_subdivisions - 2
        v_off_len = rounded_length * ((v_offset % (half_subdivisions + 1)) / half_subdivisions)
        if v_offset > half_subdivisions:
            v_off_len += core_z + rounded_length
        return (
            u_off_len / (u_core_len + 2.0 * rounded_length),
            v_off_len / (core_z + 2.0 * rounded_length),
        )