"""Domain models for coordinates, addresses and store locations."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Address:
    """Structured postal address; every field is independently optional."""

    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class StoreLocation:
    """A store's registered warehouse coordinate; ``None`` means unknown."""

    store_id: str
    coordinate: Optional[Coordinate] = None

    @property
    def is_known(self) -> bool:
        return self.coordinate is not None


@dataclass(frozen=True, slots=True)
class UserSession:
    """Identity of the signed-in caller, created at login and dropped at logout."""

    user_id: str
    email: Optional[str] = None
