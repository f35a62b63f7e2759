# tests/conftest.py
import pytest

from litcal.calendar.definition import CalendarDefinition

# Two seasons and two fixed feasts; enough to exercise naming, transfers and
# the Saturday Office without depending on the bundled calendars.
MINI_TOML = """
name = "{name}"

[[seasons]]
name = "Advent"
begin = "((12/25) previous year) + -4 Sundays"
end = "(12/24) previous year"
color = "violet"
sunday_rank = "I"

[[seasons]]
name = "Rest of the Year"
begin = "(12/25) previous year"
end = "((12/25) + -4 Sundays) + -1 days"

[[feasts]]
name = "Solemnity A"
date_rule = "12/8"
rank = "I"

[[feasts]]
name = "Feast B"
date_rule = "12/9"
rank = "II"
color = "red"
titles = ["Martyr"]
"""


@pytest.fixture
def mini_toml():
    return MINI_TOML.format(name="Test Calendar")


@pytest.fixture
def mini_of():
    return CalendarDefinition.from_toml_str(MINI_TOML.format(name="Test Calendar"))


@pytest.fixture
def mini_62():
    return CalendarDefinition.from_toml_str(MINI_TOML.format(name="1962 Test Calendar"))
