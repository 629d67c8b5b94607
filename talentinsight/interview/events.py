"""
Event-driven notifications for the interview review workflows.
"""
import time
import logging
from typing import Dict, Any, List, Callable, Optional
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger("events")


class EventType(str, Enum):
    """Types of workflow events."""
    MEDIA_SELECTED = "media_selected"
    RECORDING_STARTED = "recording_started"
    RECORDING_STOPPED = "recording_stopped"
    RECORDING_DELETED = "recording_deleted"
    ANALYSIS_STARTED = "analysis_started"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_FAILED = "analysis_failed"
    QUESTIONS_GENERATED = "questions_generated"
    FOLLOW_UP_GENERATED = "follow_up_generated"
    ERROR_OCCURRED = "error_occurred"


@dataclass
class WorkflowEvent:
    """Base class for all workflow events."""
    event_type: EventType
    subject: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


@dataclass
class AnalysisStartedEvent(WorkflowEvent):
    """Event fired when a submission is sent for analysis."""
    def __init__(self, candidate_name: str, mime_type: str, has_cv: bool):
        super().__init__(
            event_type=EventType.ANALYSIS_STARTED,
            subject=candidate_name,
            data={"mime_type": mime_type, "has_cv": has_cv},
        )


@dataclass
class AnalysisCompletedEvent(WorkflowEvent):
    """Event fired when an analysis succeeded and the candidate was stored."""
    def __init__(self, candidate_id: str, candidate_name: str, match_score: float, risk_level: str):
        super().__init__(
            event_type=EventType.ANALYSIS_COMPLETED,
            subject=candidate_name,
            data={"candidate_id": candidate_id, "match_score": match_score, "risk_level": risk_level},
        )


@dataclass
class AnalysisFailedEvent(WorkflowEvent):
    """Event fired when the analysis call failed; nothing was stored."""
    def __init__(self, candidate_name: str, error_type: str, error_message: str):
        super().__init__(
            event_type=EventType.ANALYSIS_FAILED,
            subject=candidate_name,
            data={"error_type": error_type, "error_message": error_message},
        )


@dataclass
class ErrorOccurredEvent(WorkflowEvent):
    """Event fired when a user-facing error is raised at a point of interaction."""
    def __init__(self, component: str, error_type: str, error_message: str):
        super().__init__(
            event_type=EventType.ERROR_OCCURRED,
            subject=component,
            data={"error_type": error_type, "error_message": error_message},
        )


EventHandler = Callable[[WorkflowEvent], None]


class EventBus:
    """Event bus for workflow communication."""

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Subscribe to specific event type.

        Args:
            event_type: Type of event to listen for
            handler: Function to call when event occurs
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler to {event_type}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                logger.warning(f"Handler not found for {event_type}")

    def emit(self, event: WorkflowEvent) -> None:
        """
        Emit an event to all subscribers. Handler failures are logged, not raised.

        Args:
            event: Event to emit
        """
        logger.debug(f"Emitting event: {event.event_type} for {event.subject}")

        for handler in list(self._handlers.get(event.event_type, [])) + list(self._global_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.event_type}: {e}")

    def clear_handlers(self) -> None:
        self._handlers.clear()
        self._global_handlers.clear()


class EventLogger:
    """Logs all events for debugging and analysis."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger("event_logger")
        self.logger.setLevel(log_level)

    def handle_event(self, event: WorkflowEvent) -> None:
        self.logger.info(f"Event: {event.event_type.value} | Subject: {event.subject} | Data: {event.data}")


class SessionMetrics:
    """Counts workflow outcomes for the current session."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.analyses_started = 0
        self.analyses_completed = 0
        self.analyses_failed = 0
        self.recordings = 0
        self.questions_generated = 0
        self.errors_occurred = 0

    def handle_event(self, event: WorkflowEvent) -> None:
        if event.event_type == EventType.ANALYSIS_STARTED:
            self.analyses_started += 1
        elif event.event_type == EventType.ANALYSIS_COMPLETED:
            self.analyses_completed += 1
        elif event.event_type == EventType.ANALYSIS_FAILED:
            self.analyses_failed += 1
        elif event.event_type == EventType.RECORDING_STOPPED:
            self.recordings += 1
        elif event.event_type == EventType.QUESTIONS_GENERATED:
            self.questions_generated += 1
        elif event.event_type == EventType.ERROR_OCCURRED:
            self.errors_occurred += 1

    def get_metrics(self) -> Dict[str, int]:
        """Get current metrics snapshot."""
        return {
            "analyses_started": self.analyses_started,
            "analyses_completed": self.analyses_completed,
            "analyses_failed": self.analyses_failed,
            "recordings": self.recordings,
            "questions_generated": self.questions_generated,
            "errors_occurred": self.errors_occurred,
        }


def create_event_bus(metrics: Optional[SessionMetrics] = None) -> EventBus:
    """Event bus with the standard logger (and optional metrics) subscribed."""
    bus = EventBus()
    bus.subscribe_all(EventLogger().handle_event)
    if metrics is not None:
        bus.subscribe_all(metrics.handle_event)
    return bus
