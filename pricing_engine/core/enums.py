from enum import Enum


class ServiceId(str, Enum):
    SANICLEAN = "saniclean"
    SANISCRUB = "saniscrub"
    RPM_WINDOWS = "rpmWindows"
    FOAMING_DRAIN = "foamingDrain"
    GREASE_TRAP = "greaseTrap"
    MICROFIBER_MOPPING = "microfiberMopping"
    JANITORIAL = "pureJanitorial"
    CARPET_CLEANING = "carpetCleaning"
    ELECTROSTATIC_SPRAY = "electrostaticSpray"
    STRIP_WAX = "stripWax"
    SANIPOD = "sanipod"
    REFRESH_POWER_SCRUB = "refreshPowerScrub"

    def __str__(self):
        return self.value


class Frequency(str, Enum):
    ONE_TIME = "oneTime"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    TWICE_PER_MONTH = "twicePerMonth"
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    ANNUAL = "annual"

    def __str__(self):
        return self.value


class FrequencyClass(str, Enum):
    VISIT_BASED = "visit_based"
    CALENDAR_BASED = "calendar_based"

    def __str__(self):
        return self.value


class RateTier(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"

    def __str__(self):
        return self.value


class Location(str, Enum):
    INSIDE_BELTWAY = "insideBeltway"
    OUTSIDE_BELTWAY = "outsideBeltway"

    def __str__(self):
        return self.value


class AnnualBasis(str, Enum):
    CONTRACT = "contract"
    RECURRING = "recurring"

    def __str__(self):
        return self.value


class ConfigSource(str, Enum):
    REMOTE = "remote"
    CACHE = "cache"
    DEFAULT = "default"
    EDITED = "edited"

    def __str__(self):
        return self.value


class QuoteField(str, Enum):
    PER_VISIT = "per_visit"
    FIRST_VISIT = "first_visit"
    MONTHLY_BASE = "monthly_base"
    MONTHLY_TRIP = "monthly_trip"
    MONTHLY_TOTAL = "monthly_total"
    INSTALLATION_FEE = "installation_fee"
    FIRST_PERIOD_TOTAL = "first_period_total"
    CONTRACT_TOTAL = "contract_total"
    ANNUAL_TOTAL = "annual_total"
    VISITS_PER_YEAR = "visits_per_year"
    VISITS_PER_MONTH = "visits_per_month"

    def __str__(self):
        return self.value


class SaniCleanPricingMode(str, Enum):
    PER_ITEM = "perItem"
    ALL_INCLUSIVE = "allInclusive"

    def __str__(self):
        return self.value


class SoapType(str, Enum):
    STANDARD = "standard"
    LUXURY = "luxury"

    def __str__(self):
        return self.value


class SprayPricingMethod(str, Enum):
    BY_ROOM = "byRoom"
    BY_SQFT = "bySqft"

    def __str__(self):
        return self.value


class StripWaxVariant(str, Enum):
    STANDARD_FULL = "standardFull"
    NO_SEALANT = "noSealant"
    WELL_MAINTAINED = "wellMaintained"

    def __str__(self):
        return self.value


class DrainInstallFrequency(str, Enum):
    WEEKLY = "weekly"
    BIMONTHLY = "bimonthly"

    def __str__(self):
        return self.value


class RefreshArea(str, Enum):
    DUMPSTER = "dumpster"
    PATIO = "patio"
    WALKWAY = "walkway"
    FRONT_OF_HOUSE = "frontOfHouse"
    BACK_OF_HOUSE = "backOfHouse"
    OTHER = "other"

    def __str__(self):
        return self.value


class RefreshPricingMethod(str, Enum):
    AREA_SPECIFIC = "areaSpecific"
    HOURLY = "hourly"
    SQUARE_FOOTAGE = "squareFootage"

    def __str__(self):
        return self.value


class KitchenSize(str, Enum):
    SMALL_MEDIUM = "smallMedium"
    LARGE = "large"

    def __str__(self):
        return self.value


class PatioMode(str, Enum):
    STANDALONE = "standalone"
    UPSELL = "upsell"

    def __str__(self):
        return self.value
