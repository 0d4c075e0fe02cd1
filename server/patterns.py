# patterns.py
import re

WEEKDAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")
CODESHARES = ("AA", "DL", "UA")
CALENDAR_DAYS = tuple(str(d) for d in range(1, 32))

# "Ocotber" is a known misspelling produced by the upstream extractor
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
    "Ocotber",
)

BLANK_PAGE_MARKER = "(This is intentionally left blank.)"
STANDOVER_MARKER = "STANDOVER"
DUTY_END_MARKER = "D-END"
TOTALS_MARKER = "TOTALS"
DEADHEAD_MARKER = "DH"
CALENDAR_FILLER = "--"
TBD_HOTEL = "TBD"
PLACEHOLDER_PHONE = "000-000-0000"

# Lines 0..5 of a block carry the columnar operating-day calendar
CALENDAR_REGION_LINES = 6


class Patterns:
    DOCUMENT_HEADER = re.compile(
        r"^(?P<month>(?i:" + "|".join(MONTH_NAMES) + r")) (?P<year>20\d{2}) Pilot "
        r"(?P<codeshare>AA|DL|UA) Pairings .*$"
    )

    # Pairing level
    PAIRING_ID = re.compile(r"^[A-Z][0-9]{4}$")
    AIRPORT = re.compile(r"^[A-Z]{3}$")
    ZONED_TIME = re.compile(r"^[0-9]{4}[A-Z]$")
    TOTAL_BLOCK = re.compile(r"^[0-9]{1,4}$")
    TOTAL_DEADHEAD = re.compile(r"^[0-9]{1,4}$")
    TOTAL_CREDIT = re.compile(r"^[0-9]{1,4}$")
    TAFB = re.compile(r"^[0-9]{1,5}$")
    LANDINGS = re.compile(r"^[0-9]{1,2}$")

    # Leg level
    DAY_CODE = re.compile(r"^(?:SU|MO|TU|WE|TH|FR|SA|[1-7])$")
    FLIGHT_NUMBER = re.compile(r"^[0-9]{4}$")
    DEADHEAD_FLIGHT_NUMBER = re.compile(r"^[0-9]+$")
    HHMM = re.compile(r"^[0-9]{4}$")
    BLOCK_TIME = re.compile(r"^[0-9]{1,4}$")
    GROUND_TIME = re.compile(r"^[0-9]{2,4}$")
    # Three characters mixing letters and digits (E75, CR9) or two letters
    EQUIPMENT = re.compile(r"^(?:(?=[A-Z0-9]*[0-9])(?=[A-Z0-9]*[A-Z])[A-Z0-9]{3}|[A-Z]{2})$")
    DUTY_BLOCK = re.compile(r"^[0-9]{1,4}$")
    DUTY_CREDIT = re.compile(r"^[0-9]{1,4}$")
    DUTY_PAY = re.compile(r"^[0-9]{2,4}$")
    DUTY_TIME = re.compile(r"^[0-9]{2,4}$")
    LAYOVER = re.compile(r"^[0-9]{2,4}$")

    # Hotel level
    PHONE = re.compile(r"^[0-9]{3}-[0-9]{3}-[0-9]{4}$")
    PHONE_LINE = re.compile(r"^[0-9\-\s]+$")

    NUMERIC = re.compile(r"^[0-9]+$")
    LEADING_DIGITS = re.compile(r"^[0-9]+")


patterns = Patterns()
