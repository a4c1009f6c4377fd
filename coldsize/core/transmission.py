"""Conductive heat gain through the enclosure for ColdSize.

Each surface contributes ``(ΔT · A · U / 1000) · 3600 · hours`` kJ. Walls and
ceiling see the ambient-to-room difference; the floor sits on a slab held at
a fixed 28 °C reference instead of ambient.
"""

from __future__ import annotations

from dataclasses import dataclass

from coldsize.core.insulation import u_factor
from coldsize.core.models import RoomGeometry
from coldsize.utils.constants import FLOOR_REFERENCE_TEMP_C, SECONDS_PER_HOUR


@dataclass(frozen=True)
class TransmissionLoads:
    """Transmission loads per surface [kJ] with their inputs."""

    wall: float
    ceiling: float
    floor: float

    wall_area: float  # m²
    ceiling_area: float  # m²
    floor_area: float  # m²
    wall_delta_t: float  # K
    ceiling_delta_t: float  # K
    floor_delta_t: float  # K
    wall_u: float  # W/(m²·K)
    ceiling_u: float  # W/(m²·K)
    floor_u: float  # W/(m²·K)

    @property
    def total(self) -> float:
        return self.wall + self.ceiling + self.floor


def surface_load(delta_t: float, area: float, u: float, hours: float) -> float:
    """Heat gain through one surface [kJ].

    Args:
        delta_t: Temperature difference across the surface [K].
        area: Surface area [m²].
        u: Overall heat-transfer coefficient [W/(m²·K)].
        hours: Hours of load.
    """
    return (delta_t * area * u / 1000.0) * SECONDS_PER_HOUR * hours


def wall_area(length: float, width: float, height: float) -> float:
    """Wall area: enclosure perimeter times height [m²]."""
    return 2.0 * (length + width) * height


def transmission_loads(room: RoomGeometry) -> TransmissionLoads:
    """Compute wall, ceiling and floor loads for a room in canonical units.

    Args:
        room: Normalised RoomGeometry (metres, °C).
    """
    walls = wall_area(room.length, room.width, room.height)
    plan = room.length * room.width

    dt_wall = room.ambient_temp - room.room_temp
    dt_ceiling = room.ambient_temp - room.room_temp
    dt_floor = FLOOR_REFERENCE_TEMP_C - room.room_temp

    u_wall = u_factor(room.wall_insulation_mm, room.insulation_material)
    u_ceiling = u_factor(room.ceiling_insulation_mm, room.insulation_material)
    u_floor = u_factor(room.floor_insulation_mm, room.insulation_material)

    return TransmissionLoads(
        wall=surface_load(dt_wall, walls, u_wall, room.wall_hours),
        ceiling=surface_load(dt_ceiling, plan, u_ceiling, room.ceiling_hours),
        floor=surface_load(dt_floor, plan, u_floor, room.floor_hours),
        wall_area=walls,
        ceiling_area=plan,
        floor_area=plan,
        wall_delta_t=dt_wall,
        ceiling_delta_t=dt_ceiling,
        floor_delta_t=dt_floor,
        wall_u=u_wall,
        ceiling_u=u_ceiling,
        floor_u=u_floor,
    )
