"""
pytest configuration and fixtures for the TV guide scraper tests.
"""
from datetime import date

import httpx
import pytest

from tvguide.config import CustomSettings
from tvguide.services.schedule_types import RawScheduleEntry


BASE_URL = "https://guide.example.com/"
GUIDE_URL = "https://guide.example.com/tv/tvguide/"


GUIDE_HTML = """
<html>
  <body>
    <div class="scheduleTable">
      <div class="scheduleChannel">
        <div class="scheduleChannel_num"><b> 12 </b></div>
        <div class="scheduleChannel_item"><strong>20:00 - 22:00</strong><span>Evening Movie</span></div>
        <div class="scheduleChannel_item"><strong>22:00 - 23:00</strong><span>News at 10</span></div>
        <div class="scheduleChannel_item"><strong>23:30 - 00:15</strong><span>Late Talk</span></div>
        <div class="scheduleChannel_item"><strong>01:00 - 05:30</strong><span>Night Reruns</span></div>
      </div>
      <div class="scheduleChannel">
        <div class="scheduleChannel_num"><b>13</b></div>
        <div class="scheduleChannel_item"><strong>06:00 - 09:00</strong><span>חדשות הבוקר</span></div>
        <div class="scheduleChannel_item"><span>No Time Listed</span></div>
        <div class="scheduleChannel_item"><strong>10:00</strong><span>Open Ended</span></div>
        <div class="scheduleChannel_item"><strong>abc - 10:00</strong><span>Broken Time</span></div>
      </div>
      <div class="scheduleChannel">
        <div class="scheduleChannel_num"><b>99</b></div>
        <div class="scheduleChannel_item"><strong>12:00 - 13:00</strong><span>Filtered Out</span></div>
      </div>
      <div class="scheduleChannel">
        <div class="scheduleChannel_item"><strong>12:00 - 13:00</strong><span>No Channel Number</span></div>
      </div>
    </div>
  </body>
</html>
"""


@pytest.fixture
def reference_day() -> date:
    return date(2024, 6, 1)


@pytest.fixture
def guide_html() -> str:
    return GUIDE_HTML


@pytest.fixture
def make_raw():
    """Factory for raw entries with sensible defaults."""
    def _make(start: str, end: str, channel: str = "12", title: str = "Show") -> RawScheduleEntry:
        return RawScheduleEntry(channel=channel, title=title, raw_start_time=start, raw_end_time=end)
    return _make


@pytest.fixture
def test_settings(tmp_path) -> CustomSettings:
    return CustomSettings(
        base_url=BASE_URL,
        guide_url=GUIDE_URL,
        channels="11,12,13,14",
        output_path=str(tmp_path / "out" / "schedule.json"),
        schedule_timezone="UTC",
        warmup_delay_sec=0,
        parse_timeout_sec=0,
    )


@pytest.fixture
def guide_transport():
    """Mock transport serving the home page (with a cookie) and the guide page."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if str(request.url) == BASE_URL:
            return httpx.Response(
                200,
                html="<html><body>home</body></html>",
                headers={"Set-Cookie": "session=abc123; Path=/"},
            )
        if str(request.url) == GUIDE_URL:
            return httpx.Response(200, html=GUIDE_HTML)
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport
