"""Default service intervals by vehicle make."""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_INTERVAL_KM = 15000
DEFAULT_INTERVAL_MONTHS = 12


@dataclass(frozen=True)
class ServiceIntervalEntry:
    """Manufacturer service interval. `models` is informational only."""

    make: str
    models: Tuple[str, ...]
    interval_km: int
    interval_months: int


SERVICE_INTERVALS: Tuple[ServiceIntervalEntry, ...] = (
    ServiceIntervalEntry("Lada", ("Vesta", "Granta", "Niva", "XRAY", "Largus"), 15000, 12),
    ServiceIntervalEntry("Toyota", ("Camry", "RAV4", "Corolla", "Land Cruiser", "Hilux", "Fortuner"), 10000, 12),
    ServiceIntervalEntry("Hyundai", ("Solaris", "Tucson", "Creta", "Santa Fe", "Elantra", "i30"), 15000, 12),
    ServiceIntervalEntry("Kia", ("Rio", "Sportage", "Ceed", "Sorento", "Optima", "Seltos", "K5"), 15000, 12),
    ServiceIntervalEntry("Volkswagen", ("Polo", "Tiguan", "Golf", "Passat", "Touareg", "Jetta", "ID.4"), 15000, 12),
    ServiceIntervalEntry("Skoda", ("Octavia", "Rapid", "Kodiaq", "Karoq", "Superb", "Yeti", "Fabia"), 15000, 12),
    ServiceIntervalEntry("Renault", ("Duster", "Logan", "Sandero", "Kaptur", "Arkana", "Koleos"), 15000, 12),
    ServiceIntervalEntry("Nissan", ("Qashqai", "X-Trail", "Almera", "Juke", "Patrol", "Terrano", "Murano"), 15000, 12),
    ServiceIntervalEntry("BMW", ("3 Series", "5 Series", "X3", "X5", "X1", "7 Series", "X6"), 15000, 24),
    ServiceIntervalEntry("Mercedes-Benz", ("C-Class", "E-Class", "GLC", "GLE", "S-Class", "A-Class", "GLA"), 15000, 24),
    ServiceIntervalEntry("Audi", ("A3", "A4", "A6", "Q3", "Q5", "Q7", "Q8"), 15000, 24),
    ServiceIntervalEntry("Mazda", ("3", "6", "CX-5", "CX-9", "CX-30", "MX-5"), 15000, 12),
    ServiceIntervalEntry("Ford", ("Focus", "Kuga", "Mondeo", "Explorer", "EcoSport", "Fiesta"), 15000, 12),
    ServiceIntervalEntry("Chevrolet", ("Cruze", "Niva", "Aveo", "Cobalt", "Tracker", "Tahoe"), 15000, 12),
    ServiceIntervalEntry("Mitsubishi", ("Outlander", "ASX", "Pajero", "L200", "Eclipse Cross", "Lancer"), 15000, 12),
    ServiceIntervalEntry("Honda", ("CR-V", "Civic", "Accord", "HR-V", "Pilot", "Jazz"), 15000, 12),
    ServiceIntervalEntry("Subaru", ("Forester", "Outback", "XV", "Impreza", "Legacy", "WRX"), 15000, 12),
    ServiceIntervalEntry("Suzuki", ("Vitara", "SX4", "Jimny", "Swift", "Grand Vitara"), 15000, 12),
    ServiceIntervalEntry("Geely", ("Atlas", "Coolray", "Tugella", "Monjaro", "Emgrand"), 10000, 12),
    ServiceIntervalEntry("Chery", ("Tiggo 4", "Tiggo 7 Pro", "Tiggo 8 Pro", "Arrizo", "Omoda"), 10000, 6),
    ServiceIntervalEntry("Haval", ("Jolion", "F7", "H9", "Dargo", "H5"), 10000, 12),
    ServiceIntervalEntry("Changan", ("CS35 Plus", "CS55 Plus", "CS75 Plus", "Uni-K", "Uni-V"), 10000, 6),
    ServiceIntervalEntry("GAC", ("GS8", "GS5", "GN6", "Empow"), 10000, 6),
    ServiceIntervalEntry("Volvo", ("XC60", "XC90", "S60", "S90", "V60", "XC40"), 15000, 12),
    ServiceIntervalEntry("Peugeot", ("308", "408", "3008", "5008", "2008", "Partner"), 15000, 12),
    ServiceIntervalEntry("Citroen", ("C4", "C5", "Berlingo", "C-Elysee", "C3"), 15000, 12),
    ServiceIntervalEntry("Lexus", ("RX", "NX", "ES", "LX", "GX", "IS"), 10000, 12),
    ServiceIntervalEntry("Infiniti", ("QX50", "QX60", "QX80", "Q50", "Q60"), 15000, 12),
    ServiceIntervalEntry("Land Rover", ("Discovery", "Range Rover", "Defender", "Freelander", "Evoque"), 16000, 12),
    ServiceIntervalEntry("Porsche", ("Cayenne", "Macan", "Panamera", "911", "Taycan"), 15000, 24),
)


def interval_for_make(make: Optional[str]) -> Optional[ServiceIntervalEntry]:
    """Find the catalog entry for a make (case-insensitive, first match wins)."""
    if make is None:
        return None
    wanted = make.lower()
    for entry in SERVICE_INTERVALS:
        if entry.make.lower() == wanted:
            return entry
    return None
