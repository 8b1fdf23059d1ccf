"""
Polling engine

Turns the eventually-consistent cluster state into a synchronous outcome:
poll once per interval until all instances run, the cluster reports a
placement error, or the timeout elapses.
"""

import logging
from datetime import timedelta
from typing import Callable

from ltc.constants import ERROR_PLACEMENT, POLLING_INTERVAL
from ltc.core.interfaces import UI, AppExaminer, Clock
from ltc.models import PollingAction, PollOutcome, PollResult

log = logging.getLogger(__name__)


class Poller:
    """
    Fixed-interval, bounded-time retry loop.

    Features:
    - Injectable clock (tests advance virtual time)
    - Progress dots while waiting
    - Distinct narratives for start vs. scale timeouts
    """

    def __init__(self, clock: Clock, ui: UI, interval: timedelta = POLLING_INTERVAL):
        self.clock = clock
        self.ui = ui
        self.interval = interval

    def poll_until_success(
        self,
        timeout: timedelta,
        polling_func: Callable[[], bool],
        output_progress: bool = True,
    ) -> bool:
        """
        Call polling_func once per interval until it returns True.

        Args:
            timeout: Total time budget
            polling_func: Returns True when polling should stop
            output_progress: Emit a '.' for every unsuccessful attempt

        Returns:
            True if polling_func succeeded before the deadline
        """
        deadline = self.clock.now() + timeout

        while deadline > self.clock.now():
            if polling_func():
                self.ui.say_new_line()
                return True
            elif output_progress:
                self.ui.say(".")

            self.clock.sleep(self.interval)

        self.ui.say_new_line()
        return False

    def poll_until_all_instances_running(
        self,
        app_examiner: AppExaminer,
        timeout: timedelta,
        app_name: str,
        instances: int,
        action: PollingAction,
    ) -> PollResult:
        """
        Wait until the cluster reports `instances` running instances.

        A placement error ends polling at once; it is never retried.

        Args:
            app_examiner: Source of running instance counts
            timeout: Total time budget
            app_name: App being polled
            instances: Requested instance count
            action: Whether the app is starting or scaling

        Returns:
            PollResult with the final outcome
        """
        state = {"running": 0, "placement_error": False}

        def all_instances_running() -> bool:
            try:
                running, placement_error = app_examiner.running_app_instances_info(
                    app_name
                )
            except Exception as e:
                log.debug("Instance status query for %s failed: %s", app_name, e)
                return False

            state["running"] = running
            if placement_error:
                self.ui.say(ERROR_PLACEMENT, style="red")
                state["placement_error"] = True
                return True

            return running == instances

        ok = self.poll_until_success(timeout, all_instances_running, True)

        if state["placement_error"]:
            return PollResult(PollOutcome.PLACEMENT_FAILED, state["running"])

        if not ok:
            self._report_timeout(app_name, action)
            return PollResult(PollOutcome.TIMED_OUT, state["running"])

        return PollResult(PollOutcome.RUNNING, state["running"])

    def _report_timeout(self, app_name: str, action: PollingAction) -> None:
        if action == PollingAction.START:
            self.ui.say("Timed out waiting for the container to come up.", style="red")
            self.ui.say_new_line()
            self.ui.say_line(
                "This typically happens because docker layers can take time to download."
            )
            self.ui.say_line(
                "Lattice is still downloading your application in the background."
            )
        else:
            self.ui.say("Timed out waiting for the container to scale.", style="red")
            self.ui.say_new_line()
            self.ui.say_line("Lattice is still scaling your application in the background.")

        self.ui.say_line(f"To view logs:\n\tltc logs {app_name}")
        self.ui.say_line(f"To view status:\n\tltc status {app_name}")
        self.ui.say_new_line()
