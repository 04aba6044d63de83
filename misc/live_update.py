from __future__ import annotations

import asyncio
import inspect
import math
import time
from typing import Any, Awaitable, Callable

import discord

from classroom.events import ClassroomEvent
from classroom.events import ClassroomEventKind
from classroom.models import Classroom
from config.defaults import DEFAULT_UPDATE_INTERVAL_SECONDS
from config.defaults import DEFAULT_UPDATE_MINUTES
from config.defaults import MIN_UPDATE_SPACING_SECONDS

SCHEDULED_REASON = "scheduled"
DEADLINE_REASON = "deadline"
TIME_LIMIT_NOTICE = "**Auto-updates have stopped**: Time limit reached"

NOTIFICATION_REASONS: dict[ClassroomEventKind, str] = {
    ClassroomEventKind.STUDENT_ADDED: "student-joined",
    ClassroomEventKind.STUDENT_GROUP_CHANGED: "group-changed",
    ClassroomEventKind.LAB_COMPLETED: "lab-completed",
}

RenderFunc = Callable[[], "discord.Embed | Awaitable[discord.Embed]"]


def format_budget(seconds: float) -> str:
    minutes = seconds / 60.0
    if minutes >= 1 and float(minutes).is_integer():
        n = int(minutes)
        return f"{n} minute{'s' if n != 1 else ''}"
    return f"{seconds:g} seconds"


class LiveUpdateSession:
    """
    Keeps one posted reply in sync with a render function.

    Refreshes come from three places: a fixed-interval ticker, classroom
    notifications (rate limited and coalesced by ``queue_update``), and the
    time-budget safety net. All of them funnel through one queue drained by a
    single worker task, so refreshes never overlap.

    The session stops when the budget runs out (after posting a final
    "time limit reached" render), or on the first render/post error. Stopping
    cancels the ticker and any deferred refresh and drops the classroom
    subscriptions. ``stop`` is idempotent.
    """

    def __init__(
        self,
        *,
        target: Any,
        render: RenderFunc,
        content: str = "",
        interval_seconds: float = DEFAULT_UPDATE_INTERVAL_SECONDS,
        time_budget_seconds: float = DEFAULT_UPDATE_MINUTES * 60,
        min_spacing_seconds: float = MIN_UPDATE_SPACING_SECONDS,
        classroom: Classroom | None = None,
        label: str = "live",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.target = target
        self.render = render
        self.content = content or ""
        self.interval_seconds = max(0.001, float(interval_seconds))
        self.time_budget_seconds = max(0.0, float(time_budget_seconds))
        self.min_spacing_seconds = max(0.0, float(min_spacing_seconds))
        self.classroom = classroom
        self.label = label
        self.clock = clock

        self.started_at: float | None = None
        self.deadline: float | None = None
        self.last_update_at: float | None = None
        self.update_count = 0
        self.pending_update = False
        self.finished = False
        self.stop_reason: str | None = None

        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._worker_task: asyncio.Task | None = None
        self._ticker_task: asyncio.Task | None = None
        self._deferred_handle: asyncio.TimerHandle | None = None
        self._scheduled_queued = False
        self._safety_handle: asyncio.TimerHandle | None = None
        self._subscriptions: list[tuple[ClassroomEventKind, Callable[[ClassroomEvent], None]]] = []
        self._detached = False
        self._closed = False

    @property
    def active(self) -> bool:
        return self.started_at is not None and not self._closed

    @property
    def ticker_running(self) -> bool:
        return self._ticker_task is not None and not self._ticker_task.done()

    async def _render(self) -> discord.Embed:
        result = self.render()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def start(self) -> None:
        # errors here propagate; the caller still owns the reply at this point
        embed = await self._render()
        await self.target.post(content=self.content, embed=embed)

        now = self.clock()
        self.started_at = now
        self.deadline = now + self.time_budget_seconds
        self.last_update_at = now

        loop = asyncio.get_running_loop()
        self._worker_task = asyncio.create_task(self._worker())
        self._ticker_task = asyncio.create_task(self._ticker())

        if self.classroom is not None:
            for kind, reason in NOTIFICATION_REASONS.items():
                listener = self._make_listener(reason)
                self.classroom.subscribe(kind, listener)
                self._subscriptions.append((kind, listener))

        self._safety_handle = loop.call_later(self.time_budget_seconds, self._on_budget_elapsed)
        print(
            f"[LIVE] action=start label={self.label} target={getattr(self.target, 'ident', '?')} "
            f"interval_s={self.interval_seconds:g} budget={format_budget(self.time_budget_seconds)} "
            f"classroom={self.classroom.id if self.classroom is not None else None}"
        )

    def _make_listener(self, reason: str) -> Callable[[ClassroomEvent], None]:
        def _listener(event: ClassroomEvent) -> None:
            self.queue_update(reason)

        return _listener

    def _enqueue(self, reason: str) -> None:
        if self._closed:
            return
        self._queue.put_nowait(reason)

    async def _ticker(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            # a slow render must not build a backlog of identical ticks
            if self._scheduled_queued:
                continue
            self._scheduled_queued = True
            self._enqueue(SCHEDULED_REASON)

    async def _worker(self) -> None:
        while True:
            reason = await self._queue.get()
            if reason is None or self._closed:
                return
            if reason == SCHEDULED_REASON:
                self._scheduled_queued = False
            await self.refresh(reason)

    def queue_update(self, reason: str) -> None:
        """Request a notification-driven refresh, at most one per spacing window."""
        if self._detached or self.last_update_at is None:
            return
        now = self.clock()
        elapsed = now - self.last_update_at
        if elapsed < self.min_spacing_seconds:
            if not self.pending_update:
                self.pending_update = True
                delay = self.min_spacing_seconds - elapsed
                print(f"[LIVE] action=queue label={self.label} delay_s={delay:.2f} reason={reason}")
                if self._deferred_handle is not None:
                    self._deferred_handle.cancel()
                loop = asyncio.get_running_loop()
                self._deferred_handle = loop.call_later(delay, self._fire_deferred, reason)
            # an earlier deferred refresh is already scheduled and renders at fire time
            return
        self.last_update_at = now
        self._enqueue(reason)

    def _fire_deferred(self, reason: str) -> None:
        self._deferred_handle = None
        self._enqueue(reason)

    async def refresh(self, reason: str = SCHEDULED_REASON) -> None:
        if self._closed:
            return
        try:
            now = self.clock()
            self.update_count += 1

            if reason == DEADLINE_REASON or now >= self.deadline:
                embed = await self._render()
                embed.set_footer(
                    text=f"Auto-updates ended (time limit reached) • Total updates: {self.update_count + 1}"
                )
                await self.target.edit(
                    content=f"{self.content}\n{TIME_LIMIT_NOTICE} ({format_budget(self.time_budget_seconds)})",
                    embed=embed,
                )
                self.finished = True
                self.stop("time_limit")
                return

            embed = await self._render()
            remaining = max(1, math.ceil((self.deadline - now) / 60.0))
            embed.set_footer(
                text=(
                    f"Auto-updating • {remaining} minute{'s' if remaining != 1 else ''} remaining • "
                    f"Update #{self.update_count + 1} ({reason})"
                )
            )
            await self.target.edit(content=self.content, embed=embed)

            self.last_update_at = now
            self.pending_update = False
            print(f"[LIVE] action=refresh label={self.label} update={self.update_count} reason={reason}")
        except Exception as e:
            print(f"[LIVE] action=refresh result=error label={self.label} reason={reason} error={str(e)[:180]}")
            self.stop("error")

    def _on_budget_elapsed(self) -> None:
        self._safety_handle = None
        if self._closed:
            return
        self._detach()
        if not self.finished:
            self._enqueue(DEADLINE_REASON)

    def _detach(self) -> None:
        if self._detached:
            return
        self._detached = True
        if self._ticker_task is not None and not self._ticker_task.done():
            self._ticker_task.cancel()
        if self._deferred_handle is not None:
            self._deferred_handle.cancel()
            self._deferred_handle = None
        if self._safety_handle is not None:
            self._safety_handle.cancel()
            self._safety_handle = None
        if self.classroom is not None:
            for kind, listener in self._subscriptions:
                self.classroom.unsubscribe(kind, listener)
        self._subscriptions.clear()

    def stop(self, reason: str = "stopped") -> None:
        if self._closed:
            return
        self._detach()
        self._closed = True
        self.stop_reason = reason
        self._queue.put_nowait(None)
        print(f"[LIVE] action=stop label={self.label} reason={reason} updates={self.update_count}")


async def start_live_update(**kwargs: Any) -> LiveUpdateSession:
    session = LiveUpdateSession(**kwargs)
    await session.start()
    return session
