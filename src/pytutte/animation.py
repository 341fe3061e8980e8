"""
Timed driver for the relaxation.

This module implements the Animation class which provides:
- A start/stop state machine over a single tick source
- Fixed-rate ticks on a background Ticker thread
- Planarity classification of each tick's drawing
- Event system (start/tick/end events)
- Mutation commands serialised against running ticks
"""

from __future__ import annotations

from typing import Optional, Callable, Union, TypedDict
from enum import IntEnum
import logging
import threading
import time

from .graph import Graph, set_boundary, set_position
from .planarity import is_planar
from .relaxation import step, CONVERGENCE_THRESHOLD

logger = logging.getLogger(__name__)


# Tick period in seconds
PERIOD = 0.05


class EventType(IntEnum):
    """
    The animation fires three events:
    - start: ticking started
    - tick: fired once per tick, listen to this to redraw
    - end: relaxation converged and ticking stopped
    """
    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event dictionary passed to event listeners."""
    type: EventType
    graph: Graph
    planar: Optional[bool]
    displacement: Optional[float]
    tick: int


TickCallback = Callable[[Graph, bool], None]


class Ticker(threading.Thread):
    """
    Fixed-rate repeating task.

    Calls callback every period seconds on its own thread until the callback
    returns True or cancel() is called. Calls never overlap.
    """

    def __init__(self, period: float, callback: Callable[[], bool]):
        super().__init__(name="pytutte-ticker", daemon=True)
        self.period = period
        self.callback = callback
        self._cancelled = threading.Event()

    def run(self) -> None:
        deadline = time.monotonic() + self.period
        while not self._cancelled.wait(max(0.0, deadline - time.monotonic())):
            if self.callback():
                break
            deadline += self.period
            # Don't try to catch up after a slow tick
            deadline = max(deadline, time.monotonic())

    def cancel(self) -> None:
        """Prevent any further call of the callback."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


class Animation:
    """
    Drives relaxation steps at a fixed period until convergence.

    The animation is Idle until start() and Running until stop() or
    convergence. Each tick steps the graph, classifies the drawing as
    planar or not, and notifies listeners with the updated graph.
    """

    def __init__(self, graph: Optional[Graph] = None):
        """Initialize animation with default parameters."""
        self._graph: Optional[Graph] = graph
        self._period: float = PERIOD
        self._threshold: float = CONVERGENCE_THRESHOLD
        self._checkInterval: int = 1
        self._running: bool = False
        self._ticks: int = 0
        self._planar: Optional[bool] = None
        self._lastDisplacement: Optional[float] = None
        self._ticker: Optional[Ticker] = None
        self._retired: Optional[Ticker] = None
        self._tickerLock = threading.Lock()
        self._onTick: Optional[TickCallback] = None
        self._lock = threading.RLock()

        # Event system - can be overridden by subclasses
        self.event: Optional[dict] = None

    def on(self, e: Union[EventType, str], listener: Callable[[Event], None]) -> Animation:
        """
        Subscribe a listener to an event.

        Args:
            e: Event type (EventType enum or string name)
            listener: Function to call when event fires

        Returns:
            self for method chaining
        """
        if self.event is None:
            self.event = {}

        if isinstance(e, str):
            e = EventType[e]
        self.event[e] = listener

        return self

    def trigger(self, e: Event) -> None:
        """
        Trigger an event by calling registered listeners.

        Args:
            e: Event to trigger
        """
        if self.event and e['type'] in self.event:
            self.event[e['type']](e)

    def graph(self, g: Optional[Graph] = None) -> Union[Optional[Graph], Animation]:
        """
        Get or set the graph being animated.

        Args:
            g: Optional graph to set

        Returns:
            Current graph if g is None, otherwise self for chaining
        """
        if g is None:
            return self._graph

        with self._lock:
            self._graph = g
            self._planar = None
            self._lastDisplacement = None
        return self

    def period(self, x: Optional[float] = None) -> Union[float, Animation]:
        """
        Get or set the tick period in seconds.

        Takes effect on the next start().
        """
        if x is None:
            return self._period

        x = float(x)
        if x < 0:
            raise ValueError(f"Period must be non-negative, got {x}")
        self._period = x
        return self

    def convergence_threshold(self, x: Optional[float] = None) -> Union[float, Animation]:
        """
        Get or set convergence threshold on the per-tick displacement.

        Args:
            x: Optional threshold to set

        Returns:
            Current threshold if x is None, otherwise self for chaining
        """
        if x is None:
            return self._threshold

        self._threshold = float(x)
        return self

    def check_interval(self, x: Optional[int] = None) -> Union[int, Animation]:
        """
        Get or set how often, in ticks, the drawing is checked for crossings.

        The default of 1 checks every tick. Larger values reuse the last
        result in between; the converging tick is always checked.
        """
        if x is None:
            return self._checkInterval

        x = int(x)
        if x < 1:
            raise ValueError(f"Check interval must be at least 1, got {x}")
        self._checkInterval = x
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        """Number of ticks since the last start()."""
        return self._ticks

    @property
    def planar(self) -> Optional[bool]:
        """Planarity of the drawing after the last checked tick."""
        return self._planar

    @property
    def displacement(self) -> Optional[float]:
        """Largest displacement of the last tick."""
        return self._lastDisplacement

    def start(
        self,
        graph: Optional[Graph] = None,
        on_tick: Optional[TickCallback] = None,
        keep_running: bool = True
    ) -> Animation:
        """
        Start ticking from the graph's current positions.

        An already running tick source is cancelled first.

        Args:
            graph: Graph to animate (defaults to the attached graph)
            on_tick: Called with (graph, planar) after every tick
            keep_running: Install the timer tick source; when False the
                          caller drives ticks with tick() or run()

        Returns:
            self for method chaining
        """
        self._replace_ticker(None)

        with self._lock:
            if graph is not None:
                self.graph(graph)
            if self._graph is None:
                raise RuntimeError("No graph to animate")

            self._onTick = on_tick
            self._ticks = 0
            self._planar = None
            self._running = True
            logger.info(
                "Animation started: %d vertices, period %.3fs",
                len(self._graph.vertices), self._period
            )
            self.trigger({'type': EventType.start, 'graph': self._graph, 'tick': 0})

        if keep_running:
            self.kick()

        return self

    def kick(self) -> None:
        """Install a Ticker that calls tick() every period."""
        ticker = Ticker(self._period, self.tick)
        self._replace_ticker(ticker)
        # If another start() replaced it meanwhile, it is cancelled and exits at once
        ticker.start()

    def tick(self) -> bool:
        """
        Step the relaxation once.

        Returns:
            True when ticking should stop (converged or not running)
        """
        with self._lock:
            if self._graph is None:
                raise RuntimeError("Must call start() before tick()")
            if not self._running:
                return True

            graph, displacement = step(self._graph)
            self._ticks += 1
            self._lastDisplacement = displacement

            converged = displacement < self._threshold
            if converged or self._planar is None or self._ticks % self._checkInterval == 0:
                self._planar = is_planar(graph.vertices, graph.edges)

            logger.debug(
                "Tick %d: displacement %.6f, planar %s",
                self._ticks, displacement, self._planar
            )

            self.trigger({
                'type': EventType.tick,
                'graph': graph,
                'planar': self._planar,
                'displacement': displacement,
                'tick': self._ticks
            })
            if self._onTick is not None:
                self._onTick(graph, self._planar)

            if converged:
                self._running = False
                logger.info(
                    "Converged after %d ticks (displacement %.2e)",
                    self._ticks, displacement
                )
                self.trigger({
                    'type': EventType.end,
                    'graph': graph,
                    'planar': self._planar,
                    'displacement': displacement,
                    'tick': self._ticks
                })
                return True

            return False

    def run(self, max_ticks: Optional[int] = None) -> Animation:
        """
        Tick back to back without a timer.

        Starts the animation if it is not running, then ticks until
        convergence, stop() or max_ticks.
        """
        if not self._running:
            self.start(keep_running=False)

        count = 0
        while max_ticks is None or count < max_ticks:
            count += 1
            if self.tick():
                break
        return self

    def stop(self) -> Animation:
        """
        Stop ticking. The last applied state is kept.

        Returns:
            self for method chaining
        """
        self._replace_ticker(None)
        with self._lock:
            if self._running:
                logger.info("Animation stopped after %d ticks", self._ticks)
            self._running = False
        return self

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the tick source finishes.

        Returns:
            True if no tick source is left running
        """
        with self._tickerLock:
            tickers = [t for t in (self._ticker, self._retired) if t is not None]

        if threading.current_thread() in tickers:
            return False
        for ticker in tickers:
            if ticker.ident is not None:
                ticker.join(timeout)
        return not any(t.is_alive() for t in tickers)

    def _replace_ticker(self, ticker: Optional[Ticker]) -> None:
        """
        Install ticker (or none) as the only tick source.

        The swap happens under a lock so concurrent start()/stop() calls
        leave exactly one installed ticker. The previous one is cancelled
        and joined outside the lock, since it may be inside a tick.
        """
        current = threading.current_thread()
        with self._tickerLock:
            old, self._ticker = self._ticker, ticker
            # A listener may call stop()/start() from inside a tick; that
            # thread exits once the tick returns and is joined by wait()
            if old is current:
                self._retired = old

        if old is None:
            return
        old.cancel()
        if old is not current and old.is_alive():
            old.join()

    def set_boundary(self, vertex_id: int, value: bool) -> Graph:
        """Pin or release a vertex once any in-flight tick has finished."""
        with self._lock:
            return set_boundary(self._require_graph(), vertex_id, value)

    def set_position(self, vertex_id: int, x: float, y: float) -> Graph:
        """Move a vertex once any in-flight tick has finished."""
        with self._lock:
            return set_position(self._require_graph(), vertex_id, x, y)

    def snapshot(self) -> Graph:
        """Copy of the graph that is safe to read while ticks continue."""
        with self._lock:
            return self._require_graph().copy()

    def _require_graph(self) -> Graph:
        if self._graph is None:
            raise RuntimeError("No graph attached")
        return self._graph
