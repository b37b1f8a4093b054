"""Bundled dataset used to initialize empty collections."""
from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from carbooking.bookings.models import Booking
from carbooking.identity.models import User
from carbooking.inventory.models import Car


class SeedData(BaseModel):
    users: List[User] = Field(default_factory=list)
    cars: List[Car] = Field(default_factory=list)
    bookings: List[Booking] = Field(default_factory=list)


@lru_cache(maxsize=None)
def _read(path: Optional[Path]) -> str:
    if path is not None:
        return path.read_text(encoding="utf-8")
    return resources.files(__name__).joinpath("seed.json").read_text(encoding="utf-8")


def load_seed(path: Optional[Path] = None) -> SeedData:
    """Parse the fixture. Each call returns fresh model instances."""
    return SeedData.model_validate_json(_read(path))


def default_seed() -> SeedData:
    from carbooking.settings import settings

    return load_seed(settings.seed_path)
