"""Demo dataset: fifteen persons across every colour and country."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from ..domain.enums import Color, Country
from ..domain.person import Coordinates, Location, Person
from .models import PersonModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def _person(
    person_id: int,
    name: str,
    xy: tuple[int, int],
    created: str,
    height: int | None,
    weight: float,
    hair: Color,
    eye: Color,
    nationality: Country,
    location: tuple[int, float, float, str],
) -> Person:
    lx, ly, lz, lname = location
    return Person(
        id=person_id,
        name=name,
        coordinates=Coordinates(x=xy[0], y=xy[1]),
        creation_date=datetime.fromisoformat(created),
        height=height,
        weight=weight,
        hair_color=hair,
        eye_color=eye,
        nationality=nationality,
        location=Location(x=lx, y=ly, z=lz, name=lname),
    )


# fmt: off
SEED_PERSONS: tuple[Person, ...] = (
    _person(1, "John Smith", (100, 200), "2024-01-15T10:30:00", 180, 75.5,
            Color.BROWN, Color.BLUE, Country.FRANCE, (10, 20.5, 30.7, "Paris Office")),
    _person(2, "Maria Garcia", (-50, 150), "2024-01-20T14:45:00", 165, 62.3,
            Color.ORANGE, Color.GREEN, Country.SPAIN, (5, 15.2, 25.8, "Madrid Center")),
    _person(3, "Raj Patel", (75, 300), "2024-02-01T09:15:00", 175, 70.0,
            Color.GREEN, Color.BROWN, Country.INDIA, (0, 0.0, 0.0, "Unknown Location")),
    _person(4, "Somchai Wong", (-120, 450), "2024-02-10T16:20:00", None, 68.8,
            Color.BLUE, Color.ORANGE, Country.THAILAND, (30, 40.1, 50.3, "Bangkok Tower")),
    _person(5, "Kim Min-jung", (200, 100), "2024-02-15T11:00:00", 160, 55.2,
            Color.ORANGE, Color.BLUE, Country.SOUTH_KOREA, (15, 25.6, 35.9, "Seoul Plaza")),
    _person(6, "Pierre Dubois", (-80, 250), "2024-03-01T13:30:00", 185, 82.1,
            Color.BROWN, Color.GREEN, Country.FRANCE, (0, 0.0, 0.0, "Remote Location")),
    _person(7, "Isabella Martinez", (150, 500), "2024-03-05T10:45:00", 170, 58.9,
            Color.GREEN, Color.ORANGE, Country.SPAIN, (20, 30.4, 40.2, "Barcelona Beach")),
    _person(8, "Priya Sharma", (0, 350), "2024-03-10T15:15:00", 155, 52.4,
            Color.BLUE, Color.BROWN, Country.INDIA, (8, 18.7, 28.5, "Mumbai Station")),
    _person(9, "Niran Prasert", (-200, 626), "2024-03-15T08:30:00", 172, 66.7,
            Color.ORANGE, Color.GREEN, Country.THAILAND, (0, 0.0, 0.0, "Home Office")),
    _person(10, "Park Ji-ho", (90, 180), "2024-03-20T12:00:00", None, 73.5,
            Color.BROWN, Color.BLUE, Country.SOUTH_KOREA, (12, 22.3, 32.1, "Busan Port")),
    _person(11, "Sophie Laurent", (-30, 400), "2024-04-01T14:20:00", 168, 61.0,
            Color.GREEN, Color.ORANGE, Country.FRANCE, (25, 35.8, 45.6, "Lyon Square")),
    _person(12, "Carlos Rodriguez", (180, 220), "2024-04-05T09:50:00", 178, 77.3,
            Color.BLUE, Color.BROWN, Country.SPAIN, (0, 0.0, 0.0, "Work From Home")),
    _person(13, "Arun Kumar", (-150, 550), "2024-04-10T16:40:00", 182, 79.8,
            Color.ORANGE, Color.GREEN, Country.INDIA, (18, 28.9, 38.7, "Delhi Gate")),
    _person(14, "Siriporn Chaiyawan", (60, 120), "2024-04-15T11:25:00", 158, 54.6,
            Color.BROWN, Color.BLUE, Country.THAILAND, (0, 0.0, 0.0, "Mobile Office")),
    _person(15, "Lee Sung-min", (-100, 0), "2024-04-20T13:55:00", 176, 69.2,
            Color.GREEN, Color.ORANGE, Country.SOUTH_KOREA, (22, 32.5, 42.3, "Incheon Airport")),
)
# fmt: on


async def seed_database(session: AsyncSession) -> int:
    """Insert :data:`SEED_PERSONS` when the table is empty; returns rows added."""
    existing = await session.scalar(select(func.count(PersonModel.id)))
    if existing:
        logger.info("Skipping seed: persons table already holds %s rows", existing)
        return 0
    session.add_all(PersonModel.from_domain(p) for p in SEED_PERSONS)
    await session.flush()
    logger.info("Seeded %s persons", len(SEED_PERSONS))
    return len(SEED_PERSONS)
