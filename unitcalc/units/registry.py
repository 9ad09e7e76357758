"""
Unit registry for unitcalc.

Declares every supported unit with its dimension, its weight relative to
the dimension's base unit, display names and the aliases the lexer
recognises. The registry is built once at import time and never changes
afterwards.

Author: xwest
"""

import re
from decimal import Decimal, localcontext
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum

from .dimensions import Dimension


class Unit(Enum):
    """Every unit the calculator knows. Values are canonical names."""

    # Time
    NANOSECOND = "Nanosecond"
    MICROSECOND = "Microsecond"
    MILLISECOND = "Millisecond"
    SECOND = "Second"
    MINUTE = "Minute"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    QUARTER = "Quarter"
    YEAR = "Year"
    DECADE = "Decade"
    CENTURY = "Century"
    MILLENNIUM = "Millennium"

    # Length
    MILLIMETER = "Millimeter"
    CENTIMETER = "Centimeter"
    DECIMETER = "Decimeter"
    METER = "Meter"
    KILOMETER = "Kilometer"
    INCH = "Inch"
    FOOT = "Foot"
    YARD = "Yard"
    MILE = "Mile"
    MARATHON = "Marathon"
    NAUTICAL_MILE = "NauticalMile"
    LIGHT_SECOND = "LightSecond"
    LIGHT_YEAR = "LightYear"

    # Area
    SQUARE_MILLIMETER = "SquareMillimeter"
    SQUARE_CENTIMETER = "SquareCentimeter"
    SQUARE_DECIMETER = "SquareDecimeter"
    SQUARE_METER = "SquareMeter"
    SQUARE_KILOMETER = "SquareKilometer"
    SQUARE_INCH = "SquareInch"
    SQUARE_FOOT = "SquareFoot"
    SQUARE_YARD = "SquareYard"
    SQUARE_MILE = "SquareMile"
    ARE = "Are"
    DECARE = "Decare"
    HECTARE = "Hectare"
    ACRE = "Acre"

    # Volume
    CUBIC_MILLIMETER = "CubicMillimeter"
    CUBIC_CENTIMETER = "CubicCentimeter"
    CUBIC_DECIMETER = "CubicDecimeter"
    CUBIC_METER = "CubicMeter"
    CUBIC_KILOMETER = "CubicKilometer"
    CUBIC_INCH = "CubicInch"
    CUBIC_FOOT = "CubicFoot"
    CUBIC_YARD = "CubicYard"
    CUBIC_MILE = "CubicMile"
    MILLILITER = "Milliliter"
    CENTILITER = "Centiliter"
    DECILITER = "Deciliter"
    LITER = "Liter"
    TEASPOON = "Teaspoon"
    TABLESPOON = "Tablespoon"
    FLUID_OUNCE = "FluidOunce"
    CUP = "Cup"
    PINT = "Pint"
    QUART = "Quart"
    GALLON = "Gallon"
    OIL_BARREL = "OilBarrel"

    # Mass
    MILLIGRAM = "Milligram"
    GRAM = "Gram"
    HECTOGRAM = "Hectogram"
    KILOGRAM = "Kilogram"
    METRIC_TON = "MetricTon"
    OUNCE = "Ounce"
    POUND = "Pound"
    STONE = "Stone"
    SHORT_TON = "ShortTon"
    LONG_TON = "LongTon"

    # Digital storage
    BIT = "Bit"
    KILOBIT = "Kilobit"
    MEGABIT = "Megabit"
    GIGABIT = "Gigabit"
    TERABIT = "Terabit"
    PETABIT = "Petabit"
    EXABIT = "Exabit"
    ZETTABIT = "Zettabit"
    YOTTABIT = "Yottabit"
    KIBIBIT = "Kibibit"
    MEBIBIT = "Mebibit"
    GIBIBIT = "Gibibit"
    TEBIBIT = "Tebibit"
    PEBIBIT = "Pebibit"
    EXBIBIT = "Exbibit"
    ZEBIBIT = "Zebibit"
    YOBIBIT = "Yobibit"
    BYTE = "Byte"
    KILOBYTE = "Kilobyte"
    MEGABYTE = "Megabyte"
    GIGABYTE = "Gigabyte"
    TERABYTE = "Terabyte"
    PETABYTE = "Petabyte"
    EXABYTE = "Exabyte"
    ZETTABYTE = "Zettabyte"
    YOTTABYTE = "Yottabyte"
    KIBIBYTE = "Kibibyte"
    MEBIBYTE = "Mebibyte"
    GIBIBYTE = "Gibibyte"
    TEBIBYTE = "Tebibyte"
    PEBIBYTE = "Pebibyte"
    EXBIBYTE = "Exbibyte"
    ZEBIBYTE = "Zebibyte"
    YOBIBYTE = "Yobibyte"

    # Data transfer rate
    BITS_PER_SECOND = "BitsPerSecond"
    KILOBITS_PER_SECOND = "KilobitsPerSecond"
    MEGABITS_PER_SECOND = "MegabitsPerSecond"
    GIGABITS_PER_SECOND = "GigabitsPerSecond"
    TERABITS_PER_SECOND = "TerabitsPerSecond"
    PETABITS_PER_SECOND = "PetabitsPerSecond"
    EXABITS_PER_SECOND = "ExabitsPerSecond"
    ZETTABITS_PER_SECOND = "ZettabitsPerSecond"
    YOTTABITS_PER_SECOND = "YottabitsPerSecond"
    KIBIBITS_PER_SECOND = "KibibitsPerSecond"
    MEBIBITS_PER_SECOND = "MebibitsPerSecond"
    GIBIBITS_PER_SECOND = "GibibitsPerSecond"
    TEBIBITS_PER_SECOND = "TebibitsPerSecond"
    PEBIBITS_PER_SECOND = "PebibitsPerSecond"
    EXBIBITS_PER_SECOND = "ExbibitsPerSecond"
    ZEBIBITS_PER_SECOND = "ZebibitsPerSecond"
    YOBIBITS_PER_SECOND = "YobibitsPerSecond"
    BYTES_PER_SECOND = "BytesPerSecond"
    KILOBYTES_PER_SECOND = "KilobytesPerSecond"
    MEGABYTES_PER_SECOND = "MegabytesPerSecond"
    GIGABYTES_PER_SECOND = "GigabytesPerSecond"
    TERABYTES_PER_SECOND = "TerabytesPerSecond"
    PETABYTES_PER_SECOND = "PetabytesPerSecond"
    EXABYTES_PER_SECOND = "ExabytesPerSecond"
    ZETTABYTES_PER_SECOND = "ZettabytesPerSecond"
    YOTTABYTES_PER_SECOND = "YottabytesPerSecond"
    KIBIBYTES_PER_SECOND = "KibibytesPerSecond"
    MEBIBYTES_PER_SECOND = "MebibytesPerSecond"
    GIBIBYTES_PER_SECOND = "GibibytesPerSecond"
    TEBIBYTES_PER_SECOND = "TebibytesPerSecond"
    PEBIBYTES_PER_SECOND = "PebibytesPerSecond"
    EXBIBYTES_PER_SECOND = "ExbibytesPerSecond"
    ZEBIBYTES_PER_SECOND = "ZebibytesPerSecond"
    YOBIBYTES_PER_SECOND = "YobibytesPerSecond"

    # Energy
    MILLIJOULE = "Millijoule"
    JOULE = "Joule"
    NEWTON_METER = "NewtonMeter"
    KILOJOULE = "Kilojoule"
    MEGAJOULE = "Megajoule"
    GIGAJOULE = "Gigajoule"
    TERAJOULE = "Terajoule"
    CALORIE = "Calorie"
    KILOCALORIE = "KiloCalorie"
    BRITISH_THERMAL_UNIT = "BritishThermalUnit"
    WATT_HOUR = "WattHour"
    KILOWATT_HOUR = "KilowattHour"
    MEGAWATT_HOUR = "MegawattHour"
    GIGAWATT_HOUR = "GigawattHour"
    TERAWATT_HOUR = "TerawattHour"
    PETAWATT_HOUR = "PetawattHour"

    # Power
    MILLIWATT = "Milliwatt"
    WATT = "Watt"
    KILOWATT = "Kilowatt"
    MEGAWATT = "Megawatt"
    GIGAWATT = "Gigawatt"
    TERAWATT = "Terawatt"
    PETAWATT = "Petawatt"
    BTU_PER_MINUTE = "BritishThermalUnitsPerMinute"
    BTU_PER_HOUR = "BritishThermalUnitsPerHour"
    HORSEPOWER = "Horsepower"
    METRIC_HORSEPOWER = "MetricHorsepower"

    # Electric current
    MILLIAMPERE = "Milliampere"
    AMPERE = "Ampere"
    KILOAMPERE = "Kiloampere"
    ABAMPERE = "Abampere"

    # Resistance
    MILLIOHM = "Milliohm"
    OHM = "Ohm"
    KILOOHM = "Kiloohm"
    MEGAOHM = "Megaohm"

    # Voltage
    MILLIVOLT = "Millivolt"
    VOLT = "Volt"
    KILOVOLT = "Kilovolt"

    # Pressure
    PASCAL = "Pascal"
    KILOPASCAL = "Kilopascal"
    ATMOSPHERE = "Atmosphere"
    MILLIBAR = "Millibar"
    BAR = "Bar"
    INCH_OF_MERCURY = "InchOfMercury"
    POUNDS_PER_SQUARE_INCH = "PoundsPerSquareInch"
    TORR = "Torr"

    # Frequency
    HERTZ = "Hertz"
    KILOHERTZ = "Kilohertz"
    MEGAHERTZ = "Megahertz"
    GIGAHERTZ = "Gigahertz"
    TERAHERTZ = "Terahertz"
    PETAHERTZ = "Petahertz"
    REVOLUTIONS_PER_MINUTE = "RevolutionsPerMinute"

    # Speed
    KILOMETERS_PER_HOUR = "KilometersPerHour"
    MILES_PER_HOUR = "MilesPerHour"
    METERS_PER_SECOND = "MetersPerSecond"
    FEET_PER_SECOND = "FeetPerSecond"
    KNOT = "Knot"

    # Temperature
    KELVIN = "Kelvin"
    CELSIUS = "Celsius"
    FAHRENHEIT = "Fahrenheit"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnitDefinition:
    """
    Everything the calculator knows about one unit.

    For linear units ``weight`` converts into the base unit:
    value_in_base = value * weight. Temperatures are affine, with
    value_in_unit = value_in_celsius * weight + offset.
    """
    unit: Unit
    dimension: Dimension
    weight: Decimal
    singular: str
    plural: str
    aliases: Tuple[str, ...] = ()       # matched case-insensitively
    exact_aliases: Tuple[str, ...] = ()  # symbols whose case matters (mW vs MW)
    offset: Decimal = Decimal(0)

    @property
    def is_affine(self) -> bool:
        return self.dimension is Dimension.TEMPERATURE


# digits kept when a weight is itself a quotient
WEIGHT_PRECISION = 60

_WORD_SPLIT = re.compile(r"[\s\-]+")


def alias_key(alias: str, lower: bool = True) -> Tuple[str, ...]:
    """Split an alias into the word tuple the lexer produces ("km/h" -> ("km", "per", "h"))."""
    text = alias.replace("/", " per ")
    if lower:
        text = text.lower()
    return tuple(word for word in _WORD_SPLIT.split(text) if word)


def _names(*stems: str) -> List[str]:
    """Singular and plural spellings: _names("meter") -> ["meter", "meters"]."""
    result = []
    for stem in stems:
        result.extend([stem, stem + "s"])
    return result


def _per(numerators: Iterable[str], denominators: Iterable[str]) -> List[str]:
    return [f"{n} per {d}" for n in numerators for d in denominators]


_SECOND_WORDS = ("s", "sec", "second")
_MINUTE_WORDS = ("min", "minute")
_HOUR_WORDS = ("h", "hr", "hour")

# (SI name, SI letter, power of ten, IEC name, IEC letters, power of two)
_STORAGE_PREFIXES = [
    ("kilo", "k", 3, "kibi", "ki", 10),
    ("mega", "m", 6, "mebi", "mi", 20),
    ("giga", "g", 9, "gibi", "gi", 30),
    ("tera", "t", 12, "tebi", "ti", 40),
    ("peta", "p", 15, "pebi", "pi", 50),
    ("exa", "e", 18, "exbi", "ei", 60),
    ("zetta", "z", 21, "zebi", "zi", 70),
    ("yotta", "y", 24, "yobi", "yi", 80),
]


class UnitRegistry:
    """Registry of all units, their aliases and the base unit of each dimension."""

    def __init__(self):
        self.definitions: Dict[Unit, UnitDefinition] = {}
        self.base_units: Dict[Dimension, Unit] = {}
        self.aliases: Dict[Tuple[str, ...], Unit] = {}
        self.exact_aliases: Dict[Tuple[str, ...], Unit] = {}
        self.max_alias_words = 1

        # fractional weights (btu / 60, 1000 / 3600) keep more digits than any evaluation uses
        with localcontext() as ctx:
            ctx.prec = WEIGHT_PRECISION
            self._init_time_units()
            self._init_length_units()
            self._init_area_units()
            self._init_volume_units()
            self._init_mass_units()
            self._init_storage_units()
            self._init_energy_units()
            self._init_power_units()
            self._init_electrical_units()
            self._init_pressure_units()
            self._init_frequency_units()
            self._init_speed_units()
            self._init_temperature_units()
        self._validate()

    def _register(
        self,
        unit: Unit,
        dimension: Dimension,
        weight,
        singular: str,
        plural: str,
        aliases: Sequence[str] = (),
        exact: Sequence[str] = (),
        offset=0,
        base: bool = False
    ):
        if unit in self.definitions:
            raise ValueError(f"Unit {unit} registered twice")

        definition = UnitDefinition(
            unit=unit,
            dimension=dimension,
            weight=Decimal(weight),
            singular=singular,
            plural=plural,
            aliases=tuple(aliases) + (singular, plural),
            exact_aliases=tuple(exact),
            offset=Decimal(offset),
        )
        self.definitions[unit] = definition

        if base:
            if dimension in self.base_units:
                raise ValueError(f"Dimension {dimension} already has base unit {self.base_units[dimension]}")
            self.base_units[dimension] = unit

        for alias in definition.aliases:
            self._add_alias(self.aliases, alias_key(alias), unit)
        for alias in definition.exact_aliases:
            self._add_alias(self.exact_aliases, alias_key(alias, lower=False), unit)

    def _add_alias(self, table: Dict[Tuple[str, ...], Unit], key: Tuple[str, ...], unit: Unit):
        existing = table.get(key)
        if existing is not None and existing is not unit:
            raise ValueError(f"Alias {' '.join(key)!r} is ambiguous: {existing} and {unit}")
        table[key] = unit
        self.max_alias_words = max(self.max_alias_words, len(key))

    def _init_time_units(self):
        t = Dimension.TIME
        self._register(Unit.NANOSECOND, t, "1E-9", "nanosecond", "nanoseconds", ["ns", "nsec"])
        self._register(Unit.MICROSECOND, t, "1E-6", "microsecond", "microseconds", ["µs", "μs", "us", "usec"])
        self._register(Unit.MILLISECOND, t, "0.001", "millisecond", "milliseconds", ["ms", "msec"])
        self._register(Unit.SECOND, t, 1, "second", "seconds", ["s", "sec", "secs"], base=True)
        self._register(Unit.MINUTE, t, 60, "minute", "minutes", ["min", "mins"])
        self._register(Unit.HOUR, t, 3600, "hour", "hours", ["h", "hr", "hrs"])
        self._register(Unit.DAY, t, 86400, "day", "days")
        self._register(Unit.WEEK, t, 604800, "week", "weeks", ["wk", "wks"])
        self._register(Unit.MONTH, t, 2629746, "month", "months", ["mo", "mos"])
        self._register(Unit.QUARTER, t, 7889238, "quarter", "quarters", ["q"])
        self._register(Unit.YEAR, t, 31556952, "year", "years", ["yr", "yrs"])
        self._register(Unit.DECADE, t, 315569520, "decade", "decades")
        self._register(Unit.CENTURY, t, 3155695200, "century", "centuries")
        self._register(Unit.MILLENNIUM, t, 31556952000, "millennium", "millennia",
                       ["millenium", "millenia", "millenniums"])

    def _init_length_units(self):
        l = Dimension.LENGTH
        self._register(Unit.MILLIMETER, l, "0.001", "millimeter", "millimeters", ["mm"] + _names("millimetre"))
        self._register(Unit.CENTIMETER, l, "0.01", "centimeter", "centimeters", ["cm"] + _names("centimetre"))
        self._register(Unit.DECIMETER, l, "0.1", "decimeter", "decimeters", ["dm"] + _names("decimetre"))
        self._register(Unit.METER, l, 1, "meter", "meters", ["m"] + _names("metre"), base=True)
        self._register(Unit.KILOMETER, l, 1000, "kilometer", "kilometers", ["km"] + _names("kilometre"))
        # bare "in" is resolved by the lexer, it doubles as the conversion keyword
        self._register(Unit.INCH, l, "0.0254", "inch", "inches")
        self._register(Unit.FOOT, l, "0.3048", "foot", "feet", ["ft"])
        self._register(Unit.YARD, l, "0.9144", "yard", "yards", ["yd", "yds"])
        self._register(Unit.MILE, l, "1609.344", "mile", "miles", ["mi"])
        self._register(Unit.MARATHON, l, 42195, "marathon", "marathons")
        self._register(Unit.NAUTICAL_MILE, l, 1852, "nautical mile", "nautical miles", ["nmi"])
        self._register(Unit.LIGHT_SECOND, l, 299792458, "light second", "light seconds", _names("lightsecond"))
        self._register(Unit.LIGHT_YEAR, l, 9460730472580800, "light year", "light years",
                       ["ly"] + _names("lightyear"))

    # length symbols and spellings that square and cubic aliases are derived from
    _LENGTH_STEMS = [
        ("mm", ["millimeter", "millimeters", "millimetre", "millimetres"]),
        ("cm", ["centimeter", "centimeters", "centimetre", "centimetres"]),
        ("dm", ["decimeter", "decimeters", "decimetre", "decimetres"]),
        ("m", ["meter", "meters", "metre", "metres"]),
        ("km", ["kilometer", "kilometers", "kilometre", "kilometres"]),
        ("in", ["inch", "inches"]),
        ("ft", ["foot", "feet"]),
        ("yd", ["yard", "yards"]),
        ("mi", ["mile", "miles"]),
    ]

    @classmethod
    def _power_aliases(cls, index: int, power: int) -> List[str]:
        symbol, words = cls._LENGTH_STEMS[index]
        superscript = "²" if power == 2 else "³"
        prefixes = ("sq", "square") if power == 2 else ("cu", "cubic")
        aliases = [f"{symbol}{power}", f"{symbol}{superscript}"]
        for prefix in prefixes:
            aliases.append(f"{prefix} {symbol}")
            aliases.extend(f"{prefix} {word}" for word in words)
        aliases.extend(f"{word}{power}" for word in words)
        aliases.extend(f"{word}{superscript}" for word in words)
        return aliases

    def _init_area_units(self):
        a = Dimension.AREA
        squares = [
            (Unit.SQUARE_MILLIMETER, "1E-6", "square millimeter", "square millimeters"),
            (Unit.SQUARE_CENTIMETER, "1E-4", "square centimeter", "square centimeters"),
            (Unit.SQUARE_DECIMETER, "0.01", "square decimeter", "square decimeters"),
            (Unit.SQUARE_METER, 1, "square meter", "square meters"),
            (Unit.SQUARE_KILOMETER, "1E+6", "square kilometer", "square kilometers"),
            (Unit.SQUARE_INCH, "0.00064516", "square inch", "square inches"),
            (Unit.SQUARE_FOOT, "0.09290304", "square foot", "square feet"),
            (Unit.SQUARE_YARD, "0.83612736", "square yard", "square yards"),
            (Unit.SQUARE_MILE, "2589988.110336", "square mile", "square miles"),
        ]
        for index, (unit, weight, singular, plural) in enumerate(squares):
            aliases = [alias for alias in self._power_aliases(index, 2) if alias not in (singular, plural)]
            self._register(unit, a, weight, singular, plural, aliases, base=unit is Unit.SQUARE_METER)

        self._register(Unit.ARE, a, 100, "are", "ares")
        self._register(Unit.DECARE, a, 1000, "decare", "decares")
        self._register(Unit.HECTARE, a, 10000, "hectare", "hectares", ["ha"])
        self._register(Unit.ACRE, a, "4046.8564224", "acre", "acres")

    def _init_volume_units(self):
        v = Dimension.VOLUME
        cubes = [
            (Unit.CUBIC_MILLIMETER, "1E-9", "cubic millimeter", "cubic millimeters"),
            (Unit.CUBIC_CENTIMETER, "1E-6", "cubic centimeter", "cubic centimeters"),
            (Unit.CUBIC_DECIMETER, "0.001", "cubic decimeter", "cubic decimeters"),
            (Unit.CUBIC_METER, 1, "cubic meter", "cubic meters"),
            (Unit.CUBIC_KILOMETER, "1E+9", "cubic kilometer", "cubic kilometers"),
            (Unit.CUBIC_INCH, "0.000016387064", "cubic inch", "cubic inches"),
            (Unit.CUBIC_FOOT, "0.028316846592", "cubic foot", "cubic feet"),
            (Unit.CUBIC_YARD, "0.764554857984", "cubic yard", "cubic yards"),
            (Unit.CUBIC_MILE, "4168181825.440579584", "cubic mile", "cubic miles"),
        ]
        for index, (unit, weight, singular, plural) in enumerate(cubes):
            aliases = [alias for alias in self._power_aliases(index, 3) if alias not in (singular, plural)]
            extra = ["cc"] if unit is Unit.CUBIC_CENTIMETER else []
            self._register(unit, v, weight, singular, plural, aliases + extra, base=unit is Unit.CUBIC_METER)

        self._register(Unit.MILLILITER, v, "1E-6", "milliliter", "milliliters", ["ml"] + _names("millilitre"))
        self._register(Unit.CENTILITER, v, "1E-5", "centiliter", "centiliters", ["cl"] + _names("centilitre"))
        self._register(Unit.DECILITER, v, "1E-4", "deciliter", "deciliters", ["dl"] + _names("decilitre"))
        self._register(Unit.LITER, v, "0.001", "liter", "liters", ["l"] + _names("litre"))
        self._register(Unit.TEASPOON, v, "0.00000492892159375", "teaspoon", "teaspoons", ["tsp", "tsps"])
        self._register(Unit.TABLESPOON, v, "0.00001478676478125", "tablespoon", "tablespoons", ["tbsp", "tbsps"])
        self._register(Unit.FLUID_OUNCE, v, "0.0000295735295625", "fluid ounce", "fluid ounces", ["floz", "fl oz"])
        self._register(Unit.CUP, v, "0.0002365882365", "cup", "cups")
        self._register(Unit.PINT, v, "0.000473176473", "pint", "pints", ["pt", "pts"])
        self._register(Unit.QUART, v, "0.000946352946", "quart", "quarts", ["qt", "qts"])
        self._register(Unit.GALLON, v, "0.003785411784", "gallon", "gallons", ["gal", "gals"])
        self._register(Unit.OIL_BARREL, v, "0.158987294928", "oil barrel", "oil barrels", ["bbl", "bbls"])

    def _init_mass_units(self):
        m = Dimension.MASS
        self._register(Unit.MILLIGRAM, m, "1E-6", "milligram", "milligrams", ["mg"])
        self._register(Unit.GRAM, m, "0.001", "gram", "grams", ["g"] + _names("gramme"))
        self._register(Unit.HECTOGRAM, m, "0.1", "hectogram", "hectograms", ["hg"])
        self._register(Unit.KILOGRAM, m, 1, "kilogram", "kilograms", ["kg"] + _names("kilo"), base=True)
        self._register(Unit.METRIC_TON, m, 1000, "metric ton", "metric tons", ["t"] + _names("tonne"))
        self._register(Unit.OUNCE, m, "0.028349523125", "ounce", "ounces", ["oz"])
        self._register(Unit.POUND, m, "0.45359237", "pound", "pounds", ["lb", "lbs"])
        self._register(Unit.STONE, m, "6.35029318", "stone", "stones", ["st"])
        self._register(Unit.SHORT_TON, m, "907.18474", "short ton", "short tons", _names("ton"))
        self._register(Unit.LONG_TON, m, "1016.0469088", "long ton", "long tons")

    def _init_storage_units(self):
        ds = Dimension.DIGITAL_STORAGE
        dtr = Dimension.DATA_TRANSFER_RATE

        def register_family(unit_name: str, rate_name: str, bits: int, singular: str,
                            aliases: List[str], exact: List[str],
                            rate_aliases: List[str], rate_exact: List[str]):
            unit = Unit[unit_name]
            rate = Unit[rate_name]
            weight = Decimal(bits)
            self._register(unit, ds, weight, singular, singular + "s", aliases, exact, base=unit is Unit.BIT)

            # every storage spelling also works as "<spelling> per second"
            storage_words = aliases + [singular, singular + "s"]
            rate_singular = f"{singular} per second"
            rate_plural = f"{singular}s per second"
            generated = [a for a in _per(storage_words, _SECOND_WORDS) if a not in (rate_singular, rate_plural)]
            generated_exact = _per(exact, ("s",))
            self._register(rate, dtr, weight, rate_singular, rate_plural,
                           rate_aliases + generated, rate_exact + generated_exact,
                           base=rate is Unit.BITS_PER_SECOND)

        register_family("BIT", "BITS_PER_SECOND", 1, "bit", [], ["b"], ["bps"], [])
        register_family("BYTE", "BYTES_PER_SECOND", 8, "byte", [], ["B"], [], ["Bps"])

        for si_name, si_letter, si_exp, iec_name, iec_letters, iec_exp in _STORAGE_PREFIXES:
            upper = si_letter.upper()
            iec_upper = iec_letters[0].upper() + "i"

            # SI bits: "Mb", "mbit"; SI bytes: "MB", "mb"
            register_family(
                f"{si_name.upper()}BIT", f"{si_name.upper()}BITS_PER_SECOND",
                10 ** si_exp, f"{si_name}bit",
                [f"{si_letter}bit", f"{si_letter}bits"], [f"{upper}b"],
                [f"{si_letter}bps", f"{si_letter}bit/s"], [])
            register_family(
                f"{si_name.upper()}BYTE", f"{si_name.upper()}BYTES_PER_SECOND",
                8 * 10 ** si_exp, f"{si_name}byte",
                [f"{si_letter}b"], [f"{upper}B"] + (["kB"] if si_letter == "k" else []),
                [], [f"{upper}Bps"] + (["kBps"] if si_letter == "k" else []))

            # IEC bits: "Kib", "kibit"; IEC bytes: "KiB", "kib"
            register_family(
                f"{iec_name.upper()}BIT", f"{iec_name.upper()}BITS_PER_SECOND",
                2 ** iec_exp, f"{iec_name}bit",
                [f"{iec_letters}bit", f"{iec_letters}bits"], [f"{iec_upper}b"],
                [f"{iec_letters}bps"], [])
            register_family(
                f"{iec_name.upper()}BYTE", f"{iec_name.upper()}BYTES_PER_SECOND",
                8 * 2 ** iec_exp, f"{iec_name}byte",
                [f"{iec_letters}b"], [f"{iec_upper}B"],
                [], [f"{iec_upper}Bps"])

    def _init_energy_units(self):
        e = Dimension.ENERGY
        btu = Decimal("1055.05585262")
        self._register(Unit.MILLIJOULE, e, "0.001", "millijoule", "millijoules", exact=["mJ"])
        self._register(Unit.JOULE, e, 1, "joule", "joules", ["j"], base=True)
        self._register(Unit.NEWTON_METER, e, 1, "newton meter", "newton meters",
                       ["nm"] + _names("newton metre", "newtonmeter"))
        self._register(Unit.KILOJOULE, e, 1000, "kilojoule", "kilojoules", ["kj"])
        self._register(Unit.MEGAJOULE, e, "1E+6", "megajoule", "megajoules", ["mj"], ["MJ"])
        self._register(Unit.GIGAJOULE, e, "1E+9", "gigajoule", "gigajoules", ["gj"])
        self._register(Unit.TERAJOULE, e, "1E+12", "terajoule", "terajoules", ["tj"])
        self._register(Unit.CALORIE, e, "4.184", "calorie", "calories", ["cal", "cals"])
        self._register(Unit.KILOCALORIE, e, 4184, "kilocalorie", "kilocalories", ["kcal", "kcals"], ["Cal"])
        self._register(Unit.BRITISH_THERMAL_UNIT, e, btu, "british thermal unit", "british thermal units",
                       ["btu", "btus"])
        self._register(Unit.WATT_HOUR, e, 3600, "watt hour", "watt hours", ["wh"])
        self._register(Unit.KILOWATT_HOUR, e, "3.6E+6", "kilowatt hour", "kilowatt hours", ["kwh"])
        self._register(Unit.MEGAWATT_HOUR, e, "3.6E+9", "megawatt hour", "megawatt hours", ["mwh"], ["MWh"])
        self._register(Unit.GIGAWATT_HOUR, e, "3.6E+12", "gigawatt hour", "gigawatt hours", ["gwh"])
        self._register(Unit.TERAWATT_HOUR, e, "3.6E+15", "terawatt hour", "terawatt hours", ["twh"])
        self._register(Unit.PETAWATT_HOUR, e, "3.6E+18", "petawatt hour", "petawatt hours", ["pwh"])

    def _init_power_units(self):
        p = Dimension.POWER
        btu = Decimal("1055.05585262")
        self._register(Unit.MILLIWATT, p, "0.001", "milliwatt", "milliwatts", exact=["mW"])
        self._register(Unit.WATT, p, 1, "watt", "watts", ["w"], base=True)
        self._register(Unit.KILOWATT, p, 1000, "kilowatt", "kilowatts", ["kw"])
        self._register(Unit.MEGAWATT, p, "1E+6", "megawatt", "megawatts", ["mw"], ["MW"])
        self._register(Unit.GIGAWATT, p, "1E+9", "gigawatt", "gigawatts", ["gw"])
        self._register(Unit.TERAWATT, p, "1E+12", "terawatt", "terawatts", ["tw"])
        self._register(Unit.PETAWATT, p, "1E+15", "petawatt", "petawatts", ["pw"])
        self._register(Unit.BTU_PER_MINUTE, p, btu / 60,
                       "british thermal unit per minute", "british thermal units per minute",
                       _per(["btu", "btus"], _MINUTE_WORDS))
        self._register(Unit.BTU_PER_HOUR, p, btu / 3600,
                       "british thermal unit per hour", "british thermal units per hour",
                       _per(["btu", "btus"], _HOUR_WORDS))
        self._register(Unit.HORSEPOWER, p, "745.69987158227022", "horsepower", "horsepower", ["hp"])
        self._register(Unit.METRIC_HORSEPOWER, p, "735.49875", "metric horsepower", "metric horsepower",
                       ["metric hp"])

    def _init_electrical_units(self):
        current = Dimension.ELECTRIC_CURRENT
        self._register(Unit.MILLIAMPERE, current, "0.001", "milliampere", "milliamperes",
                       ["ma"] + _names("milliamp"), ["mA"])
        self._register(Unit.AMPERE, current, 1, "ampere", "amperes", ["a"] + _names("amp"), base=True)
        self._register(Unit.KILOAMPERE, current, 1000, "kiloampere", "kiloamperes", ["ka"] + _names("kiloamp"))
        self._register(Unit.ABAMPERE, current, 10, "abampere", "abamperes", _names("abamp", "biot"))

        resistance = Dimension.RESISTANCE
        self._register(Unit.MILLIOHM, resistance, "0.001", "milliohm", "milliohms", exact=["mΩ", "mΩ"])
        self._register(Unit.OHM, resistance, 1, "ohm", "ohms", ["Ω", "Ω"], base=True)
        self._register(Unit.KILOOHM, resistance, 1000, "kiloohm", "kiloohms", ["kΩ", "kΩ"] + _names("kilohm"))
        self._register(Unit.MEGAOHM, resistance, "1E+6", "megaohm", "megaohms", _names("megohm"), ["MΩ", "MΩ"])

        voltage = Dimension.VOLTAGE
        self._register(Unit.MILLIVOLT, voltage, "0.001", "millivolt", "millivolts", ["mv"])
        self._register(Unit.VOLT, voltage, 1, "volt", "volts", ["v"], base=True)
        self._register(Unit.KILOVOLT, voltage, 1000, "kilovolt", "kilovolts", ["kv"])

    def _init_pressure_units(self):
        p = Dimension.PRESSURE
        self._register(Unit.PASCAL, p, 1, "pascal", "pascals", ["pa"], base=True)
        self._register(Unit.KILOPASCAL, p, 1000, "kilopascal", "kilopascals", ["kpa"])
        self._register(Unit.ATMOSPHERE, p, 101325, "atmosphere", "atmospheres", ["atm", "atms"])
        self._register(Unit.MILLIBAR, p, 100, "millibar", "millibars", ["mbar", "mbars"])
        self._register(Unit.BAR, p, 100000, "bar", "bars")
        self._register(Unit.INCH_OF_MERCURY, p, "3386.389", "inch of mercury", "inches of mercury", ["inhg"])
        self._register(Unit.POUNDS_PER_SQUARE_INCH, p, Decimal("4.4482216152605") / Decimal("0.00064516"),
                       "pound-force per square inch", "pounds-force per square inch",
                       ["psi", "lbf per sq in", "lbf per square inch", "pounds per square inch"])
        self._register(Unit.TORR, p, Decimal(101325) / 760, "torr", "torr")

    def _init_frequency_units(self):
        f = Dimension.FREQUENCY
        self._register(Unit.HERTZ, f, 1, "hertz", "hertz", ["hz"], base=True)
        self._register(Unit.KILOHERTZ, f, 1000, "kilohertz", "kilohertz", ["khz"])
        self._register(Unit.MEGAHERTZ, f, "1E+6", "megahertz", "megahertz", ["mhz"])
        self._register(Unit.GIGAHERTZ, f, "1E+9", "gigahertz", "gigahertz", ["ghz"])
        self._register(Unit.TERAHERTZ, f, "1E+12", "terahertz", "terahertz", ["thz"])
        self._register(Unit.PETAHERTZ, f, "1E+15", "petahertz", "petahertz", ["phz"])
        self._register(Unit.REVOLUTIONS_PER_MINUTE, f, Decimal(1) / 60,
                       "revolution per minute", "revolutions per minute", ["rpm", "r/min"])

    def _init_speed_units(self):
        s = Dimension.SPEED
        km_words = ["km", "kilometer", "kilometers", "kilometre", "kilometres"]
        mile_words = ["mi", "mile", "miles"]
        meter_words = ["m", "meter", "meters", "metre", "metres"]
        foot_words = ["ft", "foot", "feet"]

        self._register(Unit.KILOMETERS_PER_HOUR, s, Decimal(1000) / 3600,
                       "kilometer per hour", "kilometers per hour",
                       ["kph", "kmh", "km/h", "kmph"] + [a for a in _per(km_words, _HOUR_WORDS)
                                                 if a not in ("kilometer per hour", "kilometers per hour", "km per h")])
        self._register(Unit.MILES_PER_HOUR, s, "0.44704", "mile per hour", "miles per hour",
                       ["mph"] + [a for a in _per(mile_words, _HOUR_WORDS)
                                  if a not in ("mile per hour", "miles per hour")])
        self._register(Unit.METERS_PER_SECOND, s, 1, "meter per second", "meters per second",
                       ["mps"] + [a for a in _per(meter_words, _SECOND_WORDS)
                                  if a not in ("meter per second", "meters per second")],
                       base=True)
        self._register(Unit.FEET_PER_SECOND, s, "0.3048", "foot per second", "feet per second",
                       ["fps"] + [a for a in _per(foot_words, _SECOND_WORDS)
                                  if a not in ("foot per second", "feet per second")])
        self._register(Unit.KNOT, s, Decimal(1852) / 3600, "knot", "knots", ["kn", "kt", "kts"])

    def _init_temperature_units(self):
        t = Dimension.TEMPERATURE
        self._register(Unit.CELSIUS, t, 1, "degree Celsius", "degrees Celsius",
                       ["c", "°c", "celsius", "centigrade"], base=True)
        self._register(Unit.KELVIN, t, 1, "kelvin", "kelvin", ["k", "°k"], offset="273.15")
        self._register(Unit.FAHRENHEIT, t, "1.8", "degree Fahrenheit", "degrees Fahrenheit",
                       ["f", "°f", "fahrenheit"], offset=32)

    def _validate(self):
        missing = [unit for unit in Unit if unit not in self.definitions]
        if missing:
            raise ValueError(f"Units without a definition: {', '.join(str(u) for u in missing)}")

        for dimension in Dimension:
            if dimension is not Dimension.NO_UNIT and dimension not in self.base_units:
                raise ValueError(f"Dimension {dimension} has no base unit")

    def definition(self, unit: Unit) -> UnitDefinition:
        return self.definitions[unit]

    def lookup(self, words: Sequence[str]) -> Optional[Unit]:
        """
        Find the unit spelled by a word tuple.

        Case-sensitive symbols win over the case-insensitive aliases, so
        "mW" is a milliwatt while "mw" and "MW" are megawatts.
        """
        unit = self.exact_aliases.get(tuple(words))
        if unit is not None:
            return unit
        return self.aliases.get(tuple(word.lower() for word in words))

    def all_aliases(self) -> List[str]:
        return sorted(" ".join(key) for key in self.aliases)


UNITS = UnitRegistry()
