import logging

LOOKUP_NOISE_EVENTS = ["Flushed cache", "Loaded identifier list", "Fetched group members"]


class LookupNoiseFilter(logging.Filter):
    """Filter out target lookup events so they don't clutter the console,
    unless debug is on.
    """

    def __init__(self, debug: bool = False):
        super().__init__()
        self.debug = debug

    def filter(self, record):
        if not self.debug and type(record.msg) is dict:
            event = record.msg.get("event")
            if event in LOOKUP_NOISE_EVENTS:
                return False
        return True
