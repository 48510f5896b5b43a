"""Scrape elevation gain (meters) from the rendered MapMyRide workout page."""

from bs4 import BeautifulSoup

from mapmyride_sync.services.errors import GainScrapeError

GAIN_ROW_SELECTOR = "#workout_elevation_data > tbody:nth-child(2) > tr:nth-child(1)"
GAIN_LABEL = "Gain"
BLANK_VALUES = ("", "--")


def parse_gain(html: str, workout_id: int) -> int:
    """
    Return elevation gain from the workout page.
    No elevation table (some activity kinds have none) or a blank/"--" value means 0.
    """
    soup = BeautifulSoup(html, "html.parser")
    row = soup.select_one(GAIN_ROW_SELECTOR)
    if row is None:
        return 0

    label = row.find("th")
    if label is None or label.get_text() != GAIN_LABEL:
        raise GainScrapeError(f"unable to detect gain for workout {workout_id}")

    cell = row.select_one("td > span")
    value = cell.get_text().strip() if cell is not None else ""
    if value in BLANK_VALUES:
        return 0

    try:
        return int(value)
    except ValueError as e:
        raise GainScrapeError(f"workout {workout_id}: gain {value!r} is not a number") from e
