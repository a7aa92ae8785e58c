"""The modal form loop: chrome, key routing, function keys and the status thread."""

import logging
import threading
from enum import Enum
from typing import Dict, Optional

from ..config import FormSettings
from ..exceptions import ScreenIOError
from ..terminal.colors import DEFAULT_COLOR, DISABLED_COLOR, CellColor, ConsoleColor
from ..terminal.driver import CursorShape
from ..terminal.geometry import FieldBounds, ScreenPoint
from ..terminal.keys import Key, KeyStroke
from ..terminal.screen_io import ScreenIO
from ..utils.logging_utils import (
    log_form_event,
    log_function_key_warning,
    log_key_dispatch,
)
from ..warnings import get_categorized_logger
from .collection import FieldCollection
from .field_kinds import FieldValue
from .fields import Field
from .function_keys import (
    RESERVED_KEYS,
    FunctionKeyBinding,
    FunctionKeyCollection,
)
from .string_manager import next_word_start, prev_word_start

logger = logging.getLogger(__name__)
state_logger = get_categorized_logger(__name__)

TITLE_COLOR = CellColor(ConsoleColor.WHITE, ConsoleColor.BLACK)
CHROME_COLOR = DEFAULT_COLOR
RULE_CHAR = "═"

REVERT_PROMPT = "Revert all changes? [Enter/Y]es or [Esc/N]o: "
CANCEL_PROMPT = "Discard this form? [Enter/Y]es or [Esc/N]o: "


class RunState(Enum):
    """Lifecycle of a running form."""

    STOPPED = "stopped"
    PAUSED = "paused"
    """A key is being dispatched; the status thread leaves the screen alone."""

    RUNNING = "running"


_TRANSITIONS = {
    RunState.STOPPED: {RunState.RUNNING, RunState.STOPPED},
    RunState.RUNNING: {RunState.PAUSED, RunState.STOPPED, RunState.RUNNING},
    RunState.PAUSED: {RunState.RUNNING, RunState.STOPPED, RunState.PAUSED},
}


class RunControl:
    """Run state shared by the input loop, key handlers and the status thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = RunState.STOPPED
        self._stopped = threading.Event()
        self._stopped.set()

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @state.setter
    def state(self, state: RunState) -> None:
        self.set_state(state)

    def set_state(self, state: RunState) -> bool:
        """Move to ``state``; returns False for a transition that is not allowed."""
        with self._lock:
            if state not in _TRANSITIONS[self._state]:
                state_logger.log_state_warning(
                    f"Ignoring transition {self._state.value} -> {state.value}"
                )
                return False
            self._state = state
            if state is RunState.STOPPED:
                self._stopped.set()
            else:
                self._stopped.clear()
            return True

    def stop(self) -> None:
        self.set_state(RunState.STOPPED)

    @property
    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    def wait_stopped(self, timeout: Optional[float] = None) -> bool:
        """Wait up to ``timeout`` seconds for STOPPED; True if it happened."""
        return self._stopped.wait(timeout)


class StatusMonitor(threading.Thread):
    """Polls lock keys and the cursor shape and repaints the indicators."""

    def __init__(self, controller: "Controller") -> None:
        super().__init__(name="termform-status", daemon=True)
        self.controller = controller

    def run(self) -> None:
        run = self.controller.run
        interval = self.controller.settings.status_interval
        while not run.wait_stopped(interval):
            if run.state is not RunState.RUNNING:
                continue
            try:
                self.controller.refresh_indicators()
            except ScreenIOError as e:
                logger.error(f"Status thread stopping after screen failure: {e}")
                return


class Controller:
    """
    Runs one form: draws it, routes keys and returns the entered values.

    Example:
        >>> controller = Controller(screen, "New customer")
        >>> controller.fields.add(StringField(screen, "Name", "", ...))
        >>> values = controller.execute()
    """

    def __init__(
        self,
        screen: ScreenIO,
        title: str,
        bindings: Optional[FunctionKeyCollection] = None,
        fields: Optional[FieldCollection] = None,
        settings: Optional[FormSettings] = None,
    ) -> None:
        """
        Args:
            screen: Screen the form is drawn on
            title: Form title shown on the first row
            bindings: Extra function keys; any on F1-F3 move to a free key
            fields: Fields of the form; an empty collection when None
            settings: Form settings; read from the environment when None
        """
        self.screen = screen
        self.title = title
        self.fields = fields if fields is not None else FieldCollection()
        self.settings = settings or FormSettings.from_env()
        self.run = RunControl()
        self.bindings = self._build_bindings(bindings)
        self._result: Dict[str, FieldValue] = {}
        self._indicators: Optional[tuple] = None
        self._focused: Optional[Field] = None

    def __getitem__(self, data_name: str) -> Field:
        return self.fields[data_name]

    @property
    def state(self) -> RunState:
        return self.run.state

    @property
    def result(self) -> Dict[str, FieldValue]:
        return dict(self._result)

    def active_field(self, cursor: Optional[ScreenPoint] = None) -> Optional[Field]:
        """
        The field keys go to: the focused field while the cursor is on one of
        its cells, its one-past cell included, else the field under the cursor.
        """
        if cursor is None:
            cursor = self.screen.get_cursor()
        focused = self._focused
        if focused is not None and focused in self.fields and focused.contains(cursor):
            return focused
        return self.fields.field_at(cursor)

    @property
    def form_area(self) -> FieldBounds:
        """Region the cursor may roam: the fields' bounding rectangle."""
        rect = self.fields.bounding_rect
        if rect is not None:
            return rect
        return FieldBounds(
            ScreenPoint(0, 2), self.screen.width, max(self.screen.height - 4, 1)
        )

    def execute(self) -> Dict[str, FieldValue]:
        """
        Show the form and process keys until a handler stops it.

        Returns:
            The values collected by Accept, or an empty dict on Cancel

        Raises:
            ScreenIOError: If the terminal fails; the form is torn down first
        """
        self._result = {}
        self.run.set_state(RunState.RUNNING)
        monitor: Optional[StatusMonitor] = None
        log_form_event(logger, "started", self.title, form_title=self.title)
        try:
            self.draw_screen()
            self.draw_status()
            monitor = StatusMonitor(self)
            monitor.start()
            while self.run.state is not RunState.STOPPED:
                key = self.screen.read_key()
                self.run.set_state(RunState.PAUSED)
                self.dispatch(key)
                self.draw_status()
                if self.run.state is RunState.PAUSED:
                    self.run.set_state(RunState.RUNNING)
        finally:
            self.run.stop()
            if monitor is not None:
                monitor.join(timeout=self.settings.status_interval * 4)
            self._restore_terminal()
        log_form_event(
            logger,
            "finished",
            f"{self.title} ({len(self._result)} values)",
            form_title=self.title,
        )
        return dict(self._result)

    def dispatch(self, key: KeyStroke) -> bool:
        """
        Route one keystroke.

        Navigation, Tab, Insert, Escape and function keys are handled here;
        everything else goes to the field under the cursor.

        Returns:
            False if nothing accepted the key
        """
        cursor = self.screen.get_cursor()
        active = self.active_field(cursor)
        self._focused = None
        try:
            return self._route(key, cursor, active)
        finally:
            if self._focused is None:
                self._focused = self.fields.field_at(self.screen.get_cursor())

    def _route(
        self, key: KeyStroke, cursor: ScreenPoint, active: Optional[Field]
    ) -> bool:
        area = self.form_area

        if key.key in (Key.UP, Key.DOWN):
            log_key_dispatch(logger, key, "navigation")
            return self._move_vertical(key, cursor, active, area)
        if key.key in (Key.LEFT, Key.RIGHT):
            if key.shift and active is not None:
                return self._forward(active, key)
            log_key_dispatch(logger, key, "navigation")
            if key.ctrl:
                return self._move_word(key, cursor, active, area)
            delta = -1 if key.key is Key.LEFT else 1
            x = max(area.x, min(area.right + 1, cursor.x + delta))
            return self._move_to(ScreenPoint(x, cursor.y), cursor)
        if key.key is Key.TAB:
            origin = active.bounds.location if active is not None else cursor
            target = (
                self.fields.prev_field(origin)
                if key.shift
                else self.fields.next_field(origin)
            )
            log_key_dispatch(logger, key, target.data_name if target else "nowhere")
            if target is None:
                return False
            target.focus()
            self._focused = target
            return True
        if key.key is Key.INSERT:
            self.screen.toggle_insert_mode()
            self.refresh_indicators()
            return True
        if key.key.is_function_key:
            return self._invoke(key.key, active)
        if key.key is Key.ESCAPE and not (key.ctrl or key.alt):
            return self._invoke(Key.F3, active)
        if key.key in (Key.HOME, Key.END) and active is None:
            return self._move_home_end(key, cursor, area)
        if active is None:
            log_key_dispatch(logger, key, "no field")
            self._reject()
            return False
        return self._forward(active, key)

    def draw_screen(self) -> None:
        """Clear the screen and paint the chrome and every field."""
        screen = self.screen
        with screen.exclusive():
            width, height = screen.width, screen.height
            screen.clear(CHROME_COLOR)
            heading = f"{self.settings.title_marker}{self.title}"
            screen.write_at(ScreenPoint(1, 0), heading, TITLE_COLOR)
            screen.fill_rect(FieldBounds.at(0, 1, width), RULE_CHAR, CHROME_COLOR)
            screen.fill_rect(
                FieldBounds.at(0, max(height - 2, 0), width), RULE_CHAR, CHROME_COLOR
            )
            self.draw_legend()
            for field in self.fields:
                if field.template_char is None:
                    field.template_char = self.settings.template_char
                field.write()
            if len(self.fields):
                self.fields[0].focus()
                self._focused = self.fields[0]
            else:
                self._focused = None
                screen.set_cursor(self.form_area.location)
            self._indicators = None
            self.refresh_indicators()
        log_form_event(
            logger, "drawn", f"{len(self.fields)} fields", form_title=self.title
        )

    def draw_legend(self) -> None:
        """Paint the function-key legend on the last row."""
        screen = self.screen
        legend_width = self.settings.legend_width
        with screen.exclusive():
            saved = screen.get_cursor()
            row = screen.height - 1
            screen.fill_rect(FieldBounds.at(0, row, screen.width), " ", CHROME_COLOR)
            for index, binding in enumerate(self.bindings):
                x = index * legend_width
                if x + legend_width > screen.width:
                    logger.debug(f"No room in legend for {binding.legend}")
                    break
                color = CHROME_COLOR if binding.enabled else DISABLED_COLOR
                screen.write_at(
                    ScreenPoint(x, row), binding.legend[: legend_width - 1], color
                )
            screen.set_cursor(saved)

    def draw_status(self) -> None:
        """Repaint coordinates, focused kind, title highlight and the F1 state."""
        screen = self.screen
        with screen.exclusive():
            cursor = screen.get_cursor()
            active = self.active_field(cursor)
            width = screen.width
            status_row = max(screen.height - 2, 0)
            screen.write_at(
                ScreenPoint(max(width - 30, 0), status_row),
                f"[ X: {cursor.x:03d} Y: {cursor.y:03d} ]",
                CHROME_COLOR,
            )
            kind = f" {active.kind.value} " if active is not None else ""
            screen.write_at(
                ScreenPoint(max(width - 12, 0), 0), f"{kind:>11}", TITLE_COLOR
            )
            for field in self.fields:
                field.paint_title(field is active)
            if self.bindings.set_enabled(Key.F1, self.fields.is_valid()):
                self.draw_legend()
            screen.set_cursor(cursor)
            screen.refresh()

    def refresh_indicators(self) -> None:
        """Repaint the lock-key and insert indicators if they changed."""
        screen = self.screen
        with screen.exclusive():
            locks = screen.lock_states()
            current = (locks, screen.insert_mode)
            if current == self._indicators:
                return
            self._indicators = current
            text = " ".join(
                (
                    "SCROLL" if locks.scroll_lock else "      ",
                    "INS" if screen.insert_mode else "OVR",
                    "CAPS" if locks.caps_lock else "    ",
                    "NUM" if locks.num_lock else "   ",
                )
            )
            saved = screen.get_cursor()
            screen.write_at(
                ScreenPoint(max(screen.width - 50, 0), max(screen.height - 2, 0)),
                f" {text} ",
                CHROME_COLOR,
            )
            screen.set_cursor(saved)
            screen.refresh()

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question on the legend row; Y, O and Enter mean yes."""
        screen = self.screen
        with screen.exclusive():
            saved = screen.get_cursor()
            while screen.key_available():
                screen.read_key()
            row = screen.height - 1
            screen.fill_rect(FieldBounds.at(0, row, screen.width), " ", CHROME_COLOR)
            screen.write_at(ScreenPoint(0, row), prompt, TITLE_COLOR)
            screen.refresh()
        key = screen.read_key()
        answer = key.key is Key.ENTER or key.is_char("YO")
        self.draw_legend()
        screen.set_cursor(saved)
        return answer

    def accept(
        self, fields: FieldCollection, active: Optional[Field], run: RunControl
    ) -> Optional[Dict[str, FieldValue]]:
        """F1: collect every value and stop."""
        values = fields.values()
        run.stop()
        log_form_event(logger, "accepted", ", ".join(values), form_title=self.title)
        return values

    def revert(
        self, fields: FieldCollection, active: Optional[Field], run: RunControl
    ) -> Optional[Dict[str, FieldValue]]:
        """F2: after confirmation, restore every field's initial value."""
        if not self.confirm(REVERT_PROMPT):
            return None
        fields.revert_all()
        if len(fields):
            fields[0].focus()
        log_form_event(logger, "reverted", form_title=self.title)
        return None

    def cancel(
        self, fields: FieldCollection, active: Optional[Field], run: RunControl
    ) -> Optional[Dict[str, FieldValue]]:
        """F3: after confirmation, stop with no result."""
        if not self.confirm(CANCEL_PROMPT):
            return None
        run.stop()
        log_form_event(logger, "cancelled", form_title=self.title)
        return {}

    def _build_bindings(
        self, user_bindings: Optional[FunctionKeyCollection]
    ) -> FunctionKeyCollection:
        bindings = FunctionKeyCollection()
        displaced = []
        for binding in user_bindings or []:
            if binding.key in RESERVED_KEYS:
                displaced.append(binding)
            else:
                bindings.add(binding)
        for binding in displaced:
            target = bindings.next_available(Key.F4)
            if target is None:
                log_function_key_warning(
                    logger, f"bind {binding.name}", "no free function key; dropped"
                )
                continue
            log_function_key_warning(
                logger,
                f"bind {binding.name}",
                f"{binding.key.name} is reserved; moved to {target.name}",
            )
            bindings.add(
                FunctionKeyBinding(
                    binding.name, target, binding.operation, binding.enabled
                )
            )
        bindings.add(FunctionKeyBinding("Accept", Key.F1, self.accept))
        bindings.add(FunctionKeyBinding("Revert", Key.F2, self.revert))
        bindings.add(FunctionKeyBinding("Cancel", Key.F3, self.cancel))
        return bindings

    def _invoke(self, key: Key, active: Optional[Field]) -> bool:
        binding = self.bindings.get(key)
        if binding is None or not binding.enabled:
            log_key_dispatch(logger, key.name, "disabled or unbound")
            self._reject()
            return False
        log_key_dispatch(logger, key.name, binding.name)
        result = binding.invoke(self.fields, active, self.run)
        if result is not None:
            self._result = dict(result)
        return True

    def _forward(self, field: Field, key: KeyStroke) -> bool:
        self._focused = field
        log_key_dispatch(logger, key, field.data_name)
        accepted = field.process_key_stroke(key, self.screen.insert_mode)
        if not accepted:
            self._reject()
        return accepted

    def _reject(self) -> None:
        if self.settings.beep_on_reject:
            self.screen.beep()

    def _move_to(self, target: ScreenPoint, cursor: ScreenPoint) -> bool:
        if target == cursor:
            return False
        self.screen.set_cursor(target)
        return True

    def _move_vertical(
        self,
        key: KeyStroke,
        cursor: ScreenPoint,
        active: Optional[Field],
        area: FieldBounds,
    ) -> bool:
        up = key.key is Key.UP
        if key.ctrl:
            region = active.bounds if active is not None else area
            y = region.y if up else region.bottom
        else:
            y = max(area.y, min(area.bottom, cursor.y + (-1 if up else 1)))
        return self._move_to(ScreenPoint(cursor.x, y), cursor)

    def _move_word(
        self,
        key: KeyStroke,
        cursor: ScreenPoint,
        active: Optional[Field],
        area: FieldBounds,
    ) -> bool:
        left = key.key is Key.LEFT
        if active is not None:
            self._focused = active
            return active.word_left() if left else active.word_right()
        y = max(area.y, min(area.bottom, cursor.y))
        line = self.screen.read_line(ScreenPoint(area.x, y), area.width)
        position = max(0, min(len(line), cursor.x - area.x))
        if left:
            position = prev_word_start(line, position)
        else:
            position = next_word_start(line, position)
        return self._move_to(ScreenPoint(area.x + position, y), cursor)

    def _move_home_end(
        self, key: KeyStroke, cursor: ScreenPoint, area: FieldBounds
    ) -> bool:
        home = key.key is Key.HOME
        if key.ctrl:
            target = (
                area.location if home else ScreenPoint(area.right, area.bottom)
            )
        else:
            y = max(area.y, min(area.bottom, cursor.y))
            target = ScreenPoint(area.x if home else area.right, y)
        return self._move_to(target, cursor)

    def _restore_terminal(self) -> None:
        self.screen.cursor_shape = CursorShape.UNDERLINE
        self.screen.clear(CHROME_COLOR)
        self.screen.refresh()
