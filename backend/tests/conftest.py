from datetime import date

import pytest
from venuebook.domain import services

# Fixed "today" so dated fixtures stay in the future.
TODAY = date(2025, 5, 1)


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch: pytest.MonkeyPatch) -> date:
    monkeypatch.setattr(services, "local_today", lambda: TODAY)
    return TODAY
