from enum import Enum


class CarCategory(str, Enum):
    SEDAN = "sedan"
    SUV = "suv"
    HATCHBACK = "hatchback"
    LUXURY = "luxury"
    SPORTS = "sports"
    ELECTRIC = "electric"


class Transmission(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class FuelType(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"


class SortOption(str, Enum):
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"  # highest rated first
    NEWEST = "newest"


# Filter value meaning "no constraint on this field"
ALL = "all"
