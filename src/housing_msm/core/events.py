"""이벤트 버스 - 연간 이벤트 모델(이주, 멸실 등)의 이벤트 전파"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol
from collections import defaultdict

from .types import MigrationKind

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """기본 이벤트"""
    type: str
    year: int


@dataclass
class MigrationEvent(Event):
    """전입(IN) / 전출(OUT) 이벤트"""
    household_id: int = -1
    kind: MigrationKind = MigrationKind.OUT


@dataclass
class DemolitionEvent(Event):
    """멸실 후보 이벤트 (주택 1채당 1개)"""
    dwelling_id: int = -1


class EventModel(Protocol):
    """연간 이벤트 모델 계약

    prepare_year: 연초 상태에서 이벤트 생성
    handle_event: 이벤트 적용, 상태가 바뀌었으면 True
    finish_year: 집계/리셋 (새 이벤트 없음)
    """
    event_type: str

    def prepare_year(self, year: int) -> list[Event]: ...

    def handle_event(self, event: Event) -> bool: ...

    def finish_year(self, year: int) -> dict: ...


@dataclass
class EventStats:
    handled: int = 0
    changed: int = 0


class EventBus:
    """간단한 이벤트 버스 - 발행 순서대로 순차 처리"""

    def __init__(self):
        self._handlers: dict[str, list[Callable[[Event], bool]]] = defaultdict(list)
        self._pending: list[Event] = []

    def subscribe(self, event_type: str, handler: Callable[[Event], bool]):
        self._handlers[event_type].append(handler)

    def publish(self, event: Event):
        self._pending.append(event)

    def publish_all(self, events: Iterable[Event]):
        self._pending.extend(events)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def process(self) -> dict[str, EventStats]:
        """대기중인 이벤트 처리

        Returns:
            이벤트 타입별 처리 건수 / 상태 변경 건수
        """
        events = self._pending.copy()
        self._pending.clear()
        stats: dict[str, EventStats] = defaultdict(EventStats)
        for event in events:
            handlers = self._handlers.get(event.type, [])
            if not handlers:
                logger.warning("No handler subscribed for event type %s", event.type)
            for handler in handlers:
                stats[event.type].handled += 1
                if handler(event):
                    stats[event.type].changed += 1
        return dict(stats)


class IssueCounter:
    """주택 부족 등 진단용 카운터 (연 단위, 기록 후 리셋)"""

    def __init__(self):
        self.lack_of_dwelling_failed_inmigration = 0
        self.lack_of_dwelling_forced_outmigration = 0

    def count_lack_of_dwelling_failed_inmigration(self):
        self.lack_of_dwelling_failed_inmigration += 1

    def count_lack_of_dwelling_forced_outmigration(self):
        self.lack_of_dwelling_forced_outmigration += 1

    def log_issues(self, year: int):
        if self.lack_of_dwelling_failed_inmigration > 0:
            logger.warning("%d: %d in-migrating households found no vacant dwelling",
                           year, self.lack_of_dwelling_failed_inmigration)
        if self.lack_of_dwelling_forced_outmigration > 0:
            logger.warning("%d: %d households displaced by demolition were forced to out-migrate",
                           year, self.lack_of_dwelling_forced_outmigration)

    def to_dict(self) -> dict:
        return {
            'lack_of_dwelling_failed_inmigration': self.lack_of_dwelling_failed_inmigration,
            'lack_of_dwelling_forced_outmigration': self.lack_of_dwelling_forced_outmigration,
        }

    def reset(self):
        self.lack_of_dwelling_failed_inmigration = 0
        self.lack_of_dwelling_forced_outmigration = 0
