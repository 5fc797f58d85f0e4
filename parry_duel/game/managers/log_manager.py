"""
Log management for combat messages and debugging.

Managers never print directly. They publish ``LogMessage`` events and this
manager collects them into a bounded buffer with categories and levels, so
the renderer can show the latest combat lines and the whole session can be
saved to disk on request.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events.events import (
    DebugMessage,
    DebugToggleRequested,
    EventType,
    LogMessage as LogEvent,
    LogSaveRequested,
)

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Initialization, shutdown
    BATTLE = auto()     # Attacks, hits, parries
    STATE = auto()      # Turn state machine transitions
    INPUT = auto()      # Key handling
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()
    UI = auto()


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.STATE: "STA",
    LogCategory.INPUT: "INP",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
    LogCategory.UI: "UI",
}


@dataclass
class LogEntry:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class LogManager:
    """Collects log events into a filtered, bounded message buffer."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 500,
        default_level: LogLevel = LogLevel.INFO,
        log_dir: str = "logs",
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to receive log events from
            max_messages: Maximum number of messages to keep
            default_level: Minimum level shown by get_messages()
            log_dir: Directory save_log_to_file() writes into
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager
        self.log_dir = log_dir

        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.INPUT: LogLevel.DEBUG,
            LogCategory.STATE: LogLevel.DEBUG,
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
            # SYSTEM, BATTLE, UI default to INFO
        }

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )
        self.event_manager.subscribe(
            EventType.DEBUG_MESSAGE,
            self._handle_debug_message_event,
            subscriber_name="LogManager.debug_message"
        )
        self.event_manager.subscribe(
            EventType.LOG_SAVE_REQUESTED,
            self._handle_log_save_request,
            subscriber_name="LogManager.log_save_request"
        )
        self.event_manager.subscribe(
            EventType.DEBUG_TOGGLE_REQUESTED,
            self._handle_debug_toggle_request,
            subscriber_name="LogManager.debug_toggle_request"
        )

    def _handle_log_message_event(self, event) -> None:
        if isinstance(event, LogEvent):
            try:
                category = LogCategory[event.category.upper()]
            except (KeyError, AttributeError):
                category = LogCategory.SYSTEM
            self.log(event.message, category)

    def _handle_debug_message_event(self, event) -> None:
        if isinstance(event, DebugMessage):
            self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG)

    def _handle_log_save_request(self, event) -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file()

    def _handle_debug_toggle_request(self, event) -> None:
        if isinstance(event, DebugToggleRequested):
            self.toggle_debug()
            self.system(f"Debug messages {'shown' if self.is_debug_enabled() else 'hidden'}")

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Add a message to the log.

        Messages are always stored; filtering happens when reading.
        """
        self.messages.append(LogEntry(text=text, category=category))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include (None for all enabled)

        Returns:
            List of recent messages, oldest first
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = []
            for msg in self.messages:
                if msg.category not in self.enabled_categories:
                    continue
                message_level = self.category_levels.get(msg.category, LogLevel.INFO)
                if message_level.value < self.log_level.value:
                    continue
                filtered.append(msg)

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def get_formatted_messages(self, count: Optional[int] = None) -> list[str]:
        return [msg.format() for msg in self.get_messages(count)]

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self) -> bool:
        """Save all messages to a timestamped log file.

        Returns:
            True if save was successful, False otherwise
        """
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            os.makedirs(self.log_dir, exist_ok=True)
            filepath = os.path.join(self.log_dir, f"log_{timestamp}.log")

            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Parry Duel - Encounter Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                else:
                    # Every message, ignoring current filters
                    for msg in self.messages:
                        timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                        f.write(f"[{timestamp_str}] [{msg.category.name}] {msg.text}\n")

            self.system(f"Encounter log saved to {filepath}")
            return True

        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return False
