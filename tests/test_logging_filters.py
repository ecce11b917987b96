import logging

import pytest

from fleet_mdm.logging_filters import LookupNoiseFilter


def make_record(msg):
    return logging.LogRecord("fleet_mdm", logging.DEBUG, __file__, 1, msg, None, None)


class TestLookupNoiseFilter:
    @pytest.mark.parametrize("event", ["Flushed cache", "Loaded identifier list"])
    def test_lookup_events_dropped(self, event):
        assert not LookupNoiseFilter().filter(make_record({"event": event}))

    def test_lookup_events_kept_in_debug(self):
        assert LookupNoiseFilter(debug=True).filter(make_record({"event": "Flushed cache"}))

    @pytest.mark.parametrize("msg", [{"event": "Sending MDM command"}, "Flushed cache"])
    def test_other_events_kept(self, msg):
        assert LookupNoiseFilter().filter(make_record(msg))
