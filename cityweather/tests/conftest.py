from datetime import datetime

import pytest
from dateutil import tz


@pytest.fixture
def paris_morning():
    return datetime(2025, 4, 17, 9, 30, tzinfo=tz.gettz("Europe/Paris"))
