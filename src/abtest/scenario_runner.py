"""Runs an iteration function under a ramping number of concurrent workers."""
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from .constants import ComparisonConstants
from .models import RampStage


# Configure logging
logger = logging.getLogger(__name__)


class ScenarioRunner(ABC):
    """Executes a list of ramp stages, calling iteration_fn once per active worker per loop."""

    @abstractmethod
    def run_scenario(self, stages: Sequence[RampStage], iteration_fn: Callable[[], None]) -> int:
        """
        Run the load profile to completion.

        Returns:
            Number of iterations executed, failed ones included.
        """


class _Worker:
    """A virtual user: loops the iteration function until stopped."""

    def __init__(self, name: str, iteration_fn: Callable[[], None], counter: "_IterationCounter"):
        self.stop_event = threading.Event()
        self.iteration_fn = iteration_fn
        self.counter = counter
        self.thread = threading.Thread(target=self._loop, name=name, daemon=True)

    def _loop(self) -> None:
        while not self.stop_event.is_set():
            try:
                self.iteration_fn()
            except Exception as e:
                logger.error(f"Error in iteration on {self.thread.name}: {e}")
            finally:
                self.counter.increment()


class _IterationCounter:
    def __init__(self):
        self._lock = threading.Lock()
        self.value = 0

    def increment(self) -> None:
        with self._lock:
            self.value += 1


class RampingScenarioRunner(ScenarioRunner):
    """
    Thread-based ramping-workers executor.

    Within a stage the active worker count moves linearly from the previous
    stage's target to this stage's target and is re-evaluated every tick.
    Stopped workers finish the iteration in flight. The call returns once the
    last stage ends and every worker thread has exited.
    """

    def __init__(self, tick_sec: float = ComparisonConstants.DEFAULT_TICK, start_workers: int = 0,
                 name: str = "scenario"):
        self.tick_sec = tick_sec
        self.start_workers = start_workers
        self.name = name

    def run_scenario(self, stages: Sequence[RampStage], iteration_fn: Callable[[], None]) -> int:
        counter = _IterationCounter()
        active: List[_Worker] = []
        started: List[_Worker] = []

        def scale(target: int) -> None:
            while len(active) < target:
                worker = _Worker(f"{self.name}-vu-{len(started) + 1}", iteration_fn, counter)
                active.append(worker)
                started.append(worker)
                worker.thread.start()
            while len(active) > target:
                active.pop().stop_event.set()

        try:
            current = self.start_workers
            scale(current)
            for stage in stages:
                logger.info(f"{self.name}: ramping {current} -> {stage.target} workers over {stage.duration:g}s")
                stage_start = time.monotonic()
                while True:
                    elapsed = time.monotonic() - stage_start
                    if elapsed >= stage.duration:
                        break
                    progress = elapsed / stage.duration
                    scale(round(current + (stage.target - current) * progress))
                    time.sleep(min(self.tick_sec, stage.duration - elapsed))
                current = stage.target
                scale(current)
        finally:
            scale(0)
            for worker in started:
                worker.thread.join()

        logger.info(f"{self.name}: {counter.value} iterations across {len(started)} workers")
        return counter.value
