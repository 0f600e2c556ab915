from fastapi import Request

from timing.registry import Timing

def get_timing(request: Request) -> Timing:
    """Returns the registry the timing middleware attached to this request."""
    timing = getattr(request.state, "timing", None)
    if timing is None:
        # App built without the middleware: time from first use
        timing = Timing()
        request.state.timing = timing
    return timing
