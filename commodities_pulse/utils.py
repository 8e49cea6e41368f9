import time
from contextlib import contextmanager
from datetime import UTC


def utc_now_iso() -> str:
    from datetime import datetime

    return datetime.now(tz=UTC).isoformat()


@contextmanager
def timer_s():
    start = time.perf_counter()
    yield lambda: time.perf_counter() - start
