"""
Log Tailer

Streams app logs to the terminal from a background thread while a command
waits for the app to come up.
"""

import logging
import threading
from typing import Optional

from ltc.constants import LOG_TAIL_INTERVAL
from ltc.core.interfaces import UI
from ltc.services.receptor_service import ReceptorService

log = logging.getLogger(__name__)


class LogTailer:
    """
    Polls the receptor for new log lines until stopped.

    output_tailed_logs() returns immediately; stop_outputting() may be
    called any number of times.
    """

    def __init__(
        self,
        receptor: ReceptorService,
        ui: UI,
        interval: float = LOG_TAIL_INTERVAL,
    ):
        self.receptor = receptor
        self.ui = ui
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def output_tailed_logs(self, name: str) -> None:
        """Start streaming logs for an app in the background."""
        self.stop_outputting()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._tail, args=(name,), name=f"ltc-logs-{name}", daemon=True
        )
        self._thread.start()

    def stop_outputting(self) -> None:
        """Stop streaming and wait for the background thread to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None

    def _tail(self, name: str) -> None:
        last_ts = 0
        while not self._stop.wait(self.interval):
            try:
                entries = self.receptor.fetch_logs(name, since_ns=last_ts)
            except Exception as e:
                log.debug("Fetching logs for %s failed: %s", name, e)
                continue

            for entry in entries:
                if self._stop.is_set():
                    return
                timestamp = int(entry.get("timestamp", 0))
                if timestamp <= last_ts:
                    continue
                source = entry.get("source", name)
                self.ui.say_line(f"{source} {entry.get('message', '')}", style="dim")
                last_ts = timestamp
