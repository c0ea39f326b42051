"""Module for the `RepeatingTask` class, which drives device polling."""
import asyncio
import logging

logger = logging.getLogger(__name__)


class RepeatingTask:
    """Runs an async job now, and again ``interval`` seconds after each run completes.

    The interval is measured from the end of a run, so runs never overlap.
    A failing run is logged and the task carries on. ``stop`` ends the loop
    at the next wait and ``restart`` starts the current wait over.

    .. code-block:: python

        task = RepeatingTask(device.async_poll, 60)
        driver.async_add_job(task.async_run)
        ...
        task.stop()
    """

    def __init__(self, job, interval, name=None):
        """
        :param job: Coroutine function called with no arguments on every run.
        :type job: callable

        :param interval: Seconds to wait after a run before the next one.
        :type interval: float
        """
        self.job = job
        self.interval = interval
        self.name = name or getattr(job, "__qualname__", repr(job))
        self.runs = 0
        self._stopped = False
        self._stop_event = None
        self._restart_event = None

    def __repr__(self):
        return "<RepeatingTask name='{}' interval={}>".format(self.name, self.interval)

    @property
    def running(self):
        """Return if `async_run` is looping."""
        return self._stop_event is not None and not self._stopped

    async def async_run_once(self):
        """Run the job a single time, logging anything it raises."""
        self.runs += 1
        try:
            await self.job()
        except Exception:  # pylint: disable=broad-except
            logger.exception("%s: Error in run %d", self.name, self.runs)

    async def async_run(self):
        """Run the job until `stop` is called."""
        if self._stopped:
            return
        self._stop_event = asyncio.Event()
        self._restart_event = asyncio.Event()
        logger.debug("%s: Started, interval %ss", self.name, self.interval)
        while True:
            await self.async_run_once()
            if await self._async_wait():
                break
        logger.debug("%s: Stopped", self.name)

    async def _async_wait(self):
        """Wait for the interval to elapse. Return True if stopped meanwhile."""
        while not self._stop_event.is_set():
            self._restart_event.clear()
            waiters = [
                asyncio.ensure_future(self._stop_event.wait()),
                asyncio.ensure_future(self._restart_event.wait()),
            ]
            try:
                done, _ = await asyncio.wait(
                    waiters, timeout=self.interval, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                for waiter in waiters:
                    waiter.cancel()
            if not done:
                return False
            if self._restart_event.is_set() and not self._stop_event.is_set():
                logger.debug("%s: Timer restarted", self.name)
        return True

    def restart(self):
        """Start the current wait over, postponing the next run by a full interval."""
        if self._restart_event is not None:
            self._restart_event.set()

    def stop(self):
        """Stop looping. A run in progress is not interrupted."""
        self._stopped = True
        if self._stop_event is not None:
            self._stop_event.set()
