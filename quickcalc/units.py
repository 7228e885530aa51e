"""
Unit tables.

Every linear unit belongs to one category and carries a factor to that
category's base unit (meters, square meters, liters, grams, seconds, m/s,
pascals, joules, watts, hertz, bytes, newtons). Temperature lives in its own
table because Celsius/Fahrenheit/Kelvin need an offset, not just a factor.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Category(str, enum.Enum):
    LENGTH = "Length"
    AREA = "Area"
    VOLUME = "Volume"
    MASS = "Mass"
    TIME = "Time"
    SPEED = "Speed"
    PRESSURE = "Pressure"
    ENERGY = "Energy"
    POWER = "Power"
    FREQUENCY = "Frequency"
    DATA = "Data"
    FORCE = "Force"


@dataclass(frozen=True)
class UnitDef:
    aliases: tuple[str, ...]
    label: str
    symbol: str
    to_base: float  # multiply by this to get to the category base unit


@dataclass(frozen=True)
class UnitCategory:
    category: Category
    units: tuple[UnitDef, ...]

    @property
    def name(self) -> str:
        return self.category.value


def _u(aliases, label, symbol, to_base) -> UnitDef:
    return UnitDef(tuple(aliases), label, symbol, float(to_base))


UNIT_CATEGORIES: tuple[UnitCategory, ...] = (
    UnitCategory(Category.LENGTH, (
        _u(["nm", "nanometer", "nanometers", "nanometre", "nanometres"], "Nanometers", "nm", 1e-9),
        _u(["um", "micrometer", "micrometers", "micrometre", "micrometres", "micron", "microns"], "Micrometers", "um", 1e-6),
        _u(["mm", "millimeter", "millimeters", "millimetre", "millimetres"], "Millimeters", "mm", 1e-3),
        _u(["cm", "centimeter", "centimeters", "centimetre", "centimetres"], "Centimeters", "cm", 1e-2),
        _u(["dm", "decimeter", "decimeters", "decimetre", "decimetres"], "Decimeters", "dm", 1e-1),
        _u(["m", "meter", "meters", "metre", "metres"], "Meters", "m", 1),
        _u(["dam", "decameter", "decameters", "dekameter", "dekameters"], "Decameters", "dam", 10),
        _u(["hm", "hectometer", "hectometers", "hectometre", "hectometres"], "Hectometers", "hm", 100),
        _u(["km", "kilometer", "kilometers", "kilometre", "kilometres"], "Kilometers", "km", 1000),
        _u(["in", "inch", "inches"], "Inches", "in", 0.0254),
        _u(["ft", "foot", "feet"], "Feet", "ft", 0.3048),
        _u(["yd", "yard", "yards"], "Yards", "yd", 0.9144),
        _u(["mi", "mile", "miles"], "Miles", "mi", 1609.344),
        _u(["nmi", "nautical mile", "nautical miles"], "Nautical Miles", "nmi", 1852),
    )),
    UnitCategory(Category.AREA, (
        _u(["mm2", "sq mm", "square millimeter", "square millimeters", "square millimetre", "square millimetres"], "Square Millimeters", "mm²", 1e-6),
        _u(["cm2", "sq cm", "square centimeter", "square centimeters", "square centimetre", "square centimetres"], "Square Centimeters", "cm²", 1e-4),
        _u(["m2", "sq m", "square meter", "square meters", "square metre", "square metres"], "Square Meters", "m²", 1),
        _u(["ha", "hectare", "hectares"], "Hectares", "ha", 10_000),
        _u(["km2", "sq km", "square kilometer", "square kilometers", "square kilometre", "square kilometres"], "Square Kilometers", "km²", 1_000_000),
        _u(["in2", "sq in", "square inch", "square inches"], "Square Inches", "in²", 0.00064516),
        _u(["ft2", "sq ft", "square foot", "square feet"], "Square Feet", "ft²", 0.09290304),
        _u(["yd2", "sq yd", "square yard", "square yards"], "Square Yards", "yd²", 0.83612736),
        _u(["acre", "acres"], "Acres", "ac", 4046.8564224),
        _u(["mi2", "sq mi", "square mile", "square miles"], "Square Miles", "mi²", 2_589_988.110336),
    )),
    UnitCategory(Category.VOLUME, (
        _u(["ul", "microliter", "microliters", "microlitre", "microlitres"], "Microliters", "uL", 1e-6),
        _u(["ml", "milliliter", "milliliters", "millilitre", "millilitres"], "Milliliters", "mL", 1e-3),
        _u(["cl", "centiliter", "centiliters", "centilitre", "centilitres"], "Centiliters", "cL", 1e-2),
        _u(["dl", "deciliter", "deciliters", "decilitre", "decilitres"], "Deciliters", "dL", 1e-1),
        _u(["l", "liter", "liters", "litre", "litres"], "Liters", "L", 1),
        _u(["hl", "hectoliter", "hectoliters", "hectolitre", "hectolitres"], "Hectoliters", "hL", 100),
        _u(["m3", "cu m", "cubic meter", "cubic meters", "cubic metre", "cubic metres"], "Cubic Meters", "m³", 1000),
        _u(["cm3", "cc", "cu cm", "cubic centimeter", "cubic centimeters", "cubic centimetre", "cubic centimetres"], "Cubic Centimeters", "cm³", 1e-3),
        _u(["mm3", "cu mm", "cubic millimeter", "cubic millimeters", "cubic millimetre", "cubic millimetres"], "Cubic Millimeters", "mm³", 1e-6),
        _u(["in3", "cu in", "cubic inch", "cubic inches"], "Cubic Inches", "in³", 0.016387064),
        _u(["ft3", "cu ft", "cubic foot", "cubic feet"], "Cubic Feet", "ft³", 28.316846592),
        _u(["gal", "gallon", "gallons", "us gallon", "us gallons"], "Gallons (US)", "gal", 3.785411784),
        _u(["qt", "quart", "quarts"], "Quarts", "qt", 0.946352946),
        _u(["pt", "pint", "pints"], "Pints", "pt", 0.473176473),
        _u(["cup", "cups"], "Cups", "cup", 0.2365882365),
        _u(["floz", "fl oz", "fluid ounce", "fluid ounces"], "Fluid Ounces", "fl oz", 0.0295735295625),
        _u(["tbsp", "tablespoon", "tablespoons"], "Tablespoons", "tbsp", 0.01478676478125),
        _u(["tsp", "teaspoon", "teaspoons"], "Teaspoons", "tsp", 0.00492892159375),
    )),
    UnitCategory(Category.MASS, (
        _u(["ug", "microgram", "micrograms"], "Micrograms", "ug", 1e-6),
        _u(["mg", "milligram", "milligrams"], "Milligrams", "mg", 1e-3),
        _u(["g", "gram", "grams"], "Grams", "g", 1),
        _u(["kg", "kilogram", "kilograms"], "Kilograms", "kg", 1000),
        _u(["t", "tonne", "tonnes", "metric ton", "metric tons"], "Metric Tonnes", "t", 1_000_000),
        _u(["oz", "ounce", "ounces"], "Ounces", "oz", 28.349523125),
        _u(["lb", "lbs", "pound", "pounds"], "Pounds", "lb", 453.59237),
        _u(["st", "stone", "stones"], "Stones", "st", 6350.29318),
        _u(["ton", "tons", "short ton", "short tons", "us ton", "us tons"], "Short Tons (US)", "ton", 907_184.74),
        _u(["long ton", "long tons", "imperial ton", "imperial tons"], "Long Tons (Imperial)", "LT", 1_016_046.9088),
    )),
    UnitCategory(Category.TIME, (
        _u(["ns", "nanosecond", "nanoseconds"], "Nanoseconds", "ns", 1e-9),
        _u(["us", "microsecond", "microseconds"], "Microseconds", "us", 1e-6),
        _u(["ms", "millisecond", "milliseconds"], "Milliseconds", "ms", 1e-3),
        _u(["s", "sec", "second", "seconds"], "Seconds", "s", 1),
        _u(["min", "minute", "minutes"], "Minutes", "min", 60),
        _u(["h", "hr", "hour", "hours"], "Hours", "h", 3600),
        _u(["day", "days", "d"], "Days", "day", 86_400),
        _u(["week", "weeks", "wk"], "Weeks", "week", 604_800),
        _u(["month", "months", "mo"], "Months (avg)", "month", 2_629_800),
        _u(["year", "years", "yr", "yrs", "y"], "Years (365.25 days)", "yr", 31_557_600),
    )),
    UnitCategory(Category.SPEED, (
        _u(["m/s", "mps", "meter/second", "meters/second", "metre/second", "metres/second"], "Meters per Second", "m/s", 1),
        _u(["km/h", "kmh", "kph", "kilometer/hour", "kilometers/hour", "kilometre/hour", "kilometres/hour"], "Kilometers per Hour", "km/h", 1000 / 3600),
        _u(["mph", "mile/hour", "miles/hour"], "Miles per Hour", "mph", 0.44704),
        _u(["kt", "kts", "knot", "knots", "kn"], "Knots", "kn", 1852 / 3600),
        _u(["ft/s", "fps", "foot/second", "feet/second"], "Feet per Second", "ft/s", 0.3048),
    )),
    UnitCategory(Category.PRESSURE, (
        _u(["pa", "pascal", "pascals"], "Pascals", "Pa", 1),
        _u(["kpa", "kilopascal", "kilopascals"], "Kilopascals", "kPa", 1000),
        _u(["mpa", "megapascal", "megapascals"], "Megapascals", "MPa", 1_000_000),
        _u(["bar", "bars"], "Bar", "bar", 100_000),
        _u(["mbar", "millibar", "millibars"], "Millibar", "mbar", 100),
        _u(["atm", "atmosphere", "atmospheres"], "Atmospheres", "atm", 101_325),
        _u(["psi"], "PSI", "psi", 6894.757293168),
        _u(["torr", "mmhg"], "Torr", "Torr", 133.3223684211),
    )),
    UnitCategory(Category.ENERGY, (
        _u(["j", "joule", "joules"], "Joules", "J", 1),
        _u(["kj", "kilojoule", "kilojoules"], "Kilojoules", "kJ", 1000),
        _u(["mj", "megajoule", "megajoules"], "Megajoules", "MJ", 1_000_000),
        _u(["cal", "calorie", "calories"], "Calories", "cal", 4.184),
        _u(["kcal", "kilocalorie", "kilocalories"], "Kilocalories", "kcal", 4184),
        _u(["wh", "watt hour", "watt hours"], "Watt-hours", "Wh", 3600),
        _u(["kwh", "kilowatt hour", "kilowatt hours"], "Kilowatt-hours", "kWh", 3_600_000),
        _u(["btu"], "BTU", "BTU", 1055.05585262),
        _u(["ev", "electronvolt", "electronvolts"], "Electronvolts", "eV", 1.602176634e-19),
    )),
    UnitCategory(Category.POWER, (
        _u(["w", "watt", "watts"], "Watts", "W", 1),
        _u(["kw", "kilowatt", "kilowatts"], "Kilowatts", "kW", 1000),
        _u(["mw", "megawatt", "megawatts"], "Megawatts", "MW", 1_000_000),
        _u(["gw", "gigawatt", "gigawatts"], "Gigawatts", "GW", 1_000_000_000),
        _u(["hp", "horsepower"], "Horsepower", "hp", 745.6998715822702),
    )),
    UnitCategory(Category.FREQUENCY, (
        _u(["hz", "hertz"], "Hertz", "Hz", 1),
        _u(["khz", "kilohertz"], "Kilohertz", "kHz", 1000),
        _u(["mhz", "megahertz"], "Megahertz", "MHz", 1_000_000),
        _u(["ghz", "gigahertz"], "Gigahertz", "GHz", 1_000_000_000),
    )),
    UnitCategory(Category.DATA, (
        _u(["bit", "bits"], "Bits", "bit", 0.125),
        _u(["b", "byte", "bytes"], "Bytes", "B", 1),
        _u(["kb", "kilobyte", "kilobytes"], "Kilobytes (decimal)", "KB", 1000),
        _u(["kib", "kibibyte", "kibibytes"], "Kibibytes (binary)", "KiB", 1024),
        _u(["mb", "megabyte", "megabytes"], "Megabytes (decimal)", "MB", 1000 ** 2),
        _u(["mib", "mebibyte", "mebibytes"], "Mebibytes (binary)", "MiB", 1024 ** 2),
        _u(["gb", "gigabyte", "gigabytes"], "Gigabytes (decimal)", "GB", 1000 ** 3),
        _u(["gib", "gibibyte", "gibibytes"], "Gibibytes (binary)", "GiB", 1024 ** 3),
        _u(["tb", "terabyte", "terabytes"], "Terabytes (decimal)", "TB", 1000 ** 4),
        _u(["tib", "tebibyte", "tebibytes"], "Tebibytes (binary)", "TiB", 1024 ** 4),
        _u(["pb", "petabyte", "petabytes"], "Petabytes (decimal)", "PB", 1000 ** 5),
        _u(["pib", "pebibyte", "pebibytes"], "Pebibytes (binary)", "PiB", 1024 ** 5),
    )),
    UnitCategory(Category.FORCE, (
        _u(["n", "newton", "newtons"], "Newtons", "N", 1),
        _u(["kilonewton", "kilonewtons", "kilo newton", "kilo newtons"], "Kilonewtons", "kN", 1000),
        _u(["lbf", "pound force", "pound-force"], "Pound-force", "lbf", 4.4482216152605),
    )),
)


# ---------------------------------------------------------------------------
# Temperature (affine: scale + offset, pivoting through Celsius)
# ---------------------------------------------------------------------------

class TemperatureKey(str, enum.Enum):
    CELSIUS = "c"
    FAHRENHEIT = "f"
    KELVIN = "k"

    @property
    def label(self) -> str:
        return TEMPERATURE_LABELS[self][0]

    @property
    def symbol(self) -> str:
        return TEMPERATURE_LABELS[self][1]


TEMPERATURE_LABELS: dict[TemperatureKey, tuple[str, str]] = {
    TemperatureKey.CELSIUS: ("Celsius", "°C"),
    TemperatureKey.FAHRENHEIT: ("Fahrenheit", "°F"),
    TemperatureKey.KELVIN: ("Kelvin", "K"),
}

# Ordered: the first alias registered for a normalized key wins.
TEMPERATURE_ALIASES: tuple[tuple[str, TemperatureKey], ...] = (
    ("c", TemperatureKey.CELSIUS),
    ("celsius", TemperatureKey.CELSIUS),
    ("centigrade", TemperatureKey.CELSIUS),
    ("deg c", TemperatureKey.CELSIUS),
    ("degree celsius", TemperatureKey.CELSIUS),
    ("degrees celsius", TemperatureKey.CELSIUS),
    ("f", TemperatureKey.FAHRENHEIT),
    ("fahrenheit", TemperatureKey.FAHRENHEIT),
    ("deg f", TemperatureKey.FAHRENHEIT),
    ("degree fahrenheit", TemperatureKey.FAHRENHEIT),
    ("degrees fahrenheit", TemperatureKey.FAHRENHEIT),
    ("k", TemperatureKey.KELVIN),
    ("kelvin", TemperatureKey.KELVIN),
    ("kelvins", TemperatureKey.KELVIN),
)

KELVIN_OFFSET = 273.15


def convert_temperature(value: float, src: TemperatureKey, dst: TemperatureKey) -> float:
    if src == dst:
        return value

    if src is TemperatureKey.CELSIUS:
        celsius = value
    elif src is TemperatureKey.FAHRENHEIT:
        celsius = (value - 32) * (5 / 9)
    else:
        celsius = value - KELVIN_OFFSET

    if dst is TemperatureKey.CELSIUS:
        return celsius
    if dst is TemperatureKey.FAHRENHEIT:
        return celsius * (9 / 5) + 32
    return celsius + KELVIN_OFFSET


def convert_linear(value: float, src: UnitDef, dst: UnitDef) -> float:
    """Scale through the shared base unit. Caller guarantees same category."""
    return value * src.to_base / dst.to_base
