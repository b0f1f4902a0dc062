"""
Button Registry
===============

Maps button ids to their behavior records and keeps the data file in sync.
Entries are only ever added; removing a button is done by editing the file.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from button_commands.models.button import ButtonBehavior, default_behavior
from button_commands.storage import DataFile, DataFileError, StorageError

logger = logging.getLogger(__name__)

PRESS_BUTTONS_KEY = "Press Buttons"


class RegisterResult(Enum):
    """Outcome of a registration attempt."""

    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"


def parse_button_id(key: Any) -> int:
    """Data file keys are strings; button ids are unsigned 64-bit ints."""
    try:
        button_id = int(key)
    except (TypeError, ValueError):
        raise DataFileError(f"Invalid button id: {key!r}")
    if button_id < 0 or button_id >= 2 ** 64:
        raise DataFileError(f"Button id out of range: {key!r}")
    return button_id


class ButtonRegistry:
    """
    Registry of button behavior records.

    Loaded once at startup and saved back on every mutation.
    """

    def __init__(
        self,
        data_file: Optional[DataFile] = None,
        default_factory: Callable[[], ButtonBehavior] = default_behavior,
    ):
        self._data_file = data_file
        self._default_factory = default_factory
        self._buttons: Dict[int, ButtonBehavior] = {}
        self._lock = threading.RLock()

    @property
    def data_file(self) -> Optional[DataFile]:
        return self._data_file

    # ==================== QUERIES ====================

    def get(self, button_id: int) -> Optional[ButtonBehavior]:
        """Behavior record for a button, or None if this plugin doesn't handle it."""
        with self._lock:
            return self._buttons.get(button_id)

    def ids(self) -> List[int]:
        with self._lock:
            return list(self._buttons)

    def __contains__(self, button_id: int) -> bool:
        with self._lock:
            return button_id in self._buttons

    def __len__(self) -> int:
        with self._lock:
            return len(self._buttons)

    # ==================== MUTATIONS ====================

    def register(self, button_id: int) -> RegisterResult:
        """
        Assign the default behavior record to a new button and persist.

        An existing record is never touched. If saving fails the insert is
        rolled back and StorageError propagates.
        """
        with self._lock:
            if button_id in self._buttons:
                return RegisterResult.ALREADY_REGISTERED

            self._buttons[button_id] = self._default_factory()
            try:
                self.save()
            except StorageError:
                del self._buttons[button_id]
                raise

        logger.info(f"🔘 Button registered: {button_id}")
        return RegisterResult.REGISTERED

    def set(self, button_id: int, behavior: ButtonBehavior):
        """Insert or replace a record and persist."""
        with self._lock:
            previous = self._buttons.get(button_id)
            self._buttons[button_id] = behavior
            try:
                self.save()
            except StorageError:
                if previous is None:
                    del self._buttons[button_id]
                else:
                    self._buttons[button_id] = previous
                raise

    # ==================== PERSISTENCE ====================

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                PRESS_BUTTONS_KEY: {
                    str(button_id): behavior.to_dict()
                    for button_id, behavior in self._buttons.items()
                }
            }

    @staticmethod
    def parse_buttons(mapping: Any) -> Dict[int, ButtonBehavior]:
        """Parse a ``{"<id>": {...}}`` mapping into behavior records."""
        if mapping is None:
            return {}
        if not isinstance(mapping, dict):
            raise DataFileError(f"'{PRESS_BUTTONS_KEY}' must be an object")
        return {
            parse_button_id(key): ButtonBehavior.from_dict(value)
            for key, value in mapping.items()
        }

    def load_dict(self, data: Dict[str, Any]):
        buttons = self.parse_buttons(data.get(PRESS_BUTTONS_KEY))
        with self._lock:
            self._buttons = buttons

    def load(self) -> bool:
        """
        Load records from the data file.

        Returns:
            False if there was no data file (registry left empty)
        """
        if self._data_file is None:
            return False

        data = self._data_file.load()
        if data is None:
            with self._lock:
                self._buttons = {}
            return False

        self.load_dict(data)
        logger.info(f"📂 Loaded {len(self)} button(s) from {self._data_file.path}")
        return True

    def import_legacy(self, config_extra: Dict[str, Any]) -> int:
        """
        Import buttons kept inside the config file by older releases.

        Only fills an empty registry. Returns how many records were imported.
        """
        buttons = self.parse_buttons(config_extra.get(PRESS_BUTTONS_KEY))
        if not buttons:
            return 0

        with self._lock:
            if self._buttons:
                return 0
            self._buttons = buttons
            try:
                self.save()
            except StorageError:
                self._buttons = {}
                raise

        logger.info(f"📦 Imported {len(buttons)} button(s) from the config file")
        return len(buttons)

    def save(self):
        if self._data_file is None:
            return
        self._data_file.save(self.to_dict())
