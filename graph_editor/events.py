"""
    Input events and the surface that delivers them.

    ``InputSurface`` stands in for the canvas / window: a UI layer feeds it
    raw pointer and keyboard input, and whoever subscribed (normally the
    ``InteractionController``) receives the events in arrival order.
    Handlers call ``prevent_default()`` on events they consumed so the UI
    can suppress its own default action.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


class EventType(Enum):
    POINTER = "pointer"
    KEY = "key"


_MODIFIER_ORDER = ("ctrl", "alt", "meta", "shift")


@dataclass
class PointerEvent:
    """Pointer input in viewport-relative coordinates."""
    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    default_prevented: bool = field(default=False, compare=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class KeyEvent:
    """
    Keyboard input.

    Attributes:
        key:   Key name as reported by the UI (``"z"``, ``"Z"``, ``"Backspace"``).
        ctrl:  Control held.
        shift: Shift held.
        alt:   Alt / Option held.
        meta:  Meta / Command held.
    """
    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False
    default_prevented: bool = field(default=False, compare=False)

    @classmethod
    def parse(cls, combo: str) -> 'KeyEvent':
        """
        Build an event from a combo string such as ``"ctrl+shift+z"``.

        Raises:
            ValueError: If the combo has no key or an unknown modifier.
        """
        parts = [p for p in combo.split("+") if p]
        if not parts:
            raise ValueError(f"Empty key combo: {combo!r}")
        *modifiers, key = parts
        flags = {}
        for mod in modifiers:
            mod = mod.lower()
            if mod not in _MODIFIER_ORDER:
                raise ValueError(f"Unknown modifier '{mod}' in {combo!r}")
            flags[mod] = True
        return cls(key, **flags)

    @property
    def combo(self) -> str:
        """
        Normalized combo string, e.g. ``"ctrl+shift+z"``.

        Single letters are lower-cased (shift is carried by the modifier,
        and a capital letter implies it); named keys keep their spelling.
        """
        key = self.key
        shift = self.shift
        if len(key) == 1 and key.isalpha():
            if key.isupper():
                shift = True
            key = key.lower()
        held = {"ctrl": self.ctrl, "alt": self.alt, "meta": self.meta, "shift": shift}
        mods = [m for m in _MODIFIER_ORDER if held[m]]
        return "+".join(mods + [key])

    def prevent_default(self) -> None:
        self.default_prevented = True


class InputSurface:
    """
    Event source for pointer and keyboard input.

    Usage:
        surface = InputSurface()
        surface.subscribe(EventType.POINTER, on_pointer)
        surface.pointer_down(120, 80)
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[Callable]] = {t: [] for t in EventType}

    # ── Subscription ─────────────────────────────────────────────

    def subscribe(self, event_type: EventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._handlers[event_type])

    # ── Delivery ─────────────────────────────────────────────────

    def dispatch(self, event) -> bool:
        """
        Deliver an event to every subscriber of its type.

        Returns:
            ``True`` if any handler called ``prevent_default()``.
        """
        event_type = EventType.KEY if isinstance(event, KeyEvent) else EventType.POINTER
        for handler in list(self._handlers[event_type]):
            handler(event)
        return event.default_prevented

    def pointer_down(self, x: float, y: float) -> bool:
        return self.dispatch(PointerEvent(PointerKind.DOWN, x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        return self.dispatch(PointerEvent(PointerKind.MOVE, x, y))

    def pointer_up(self, x: float = 0.0, y: float = 0.0) -> bool:
        return self.dispatch(PointerEvent(PointerKind.UP, x, y))

    def key_down(self, combo: str) -> bool:
        return self.dispatch(KeyEvent.parse(combo))

    def __repr__(self) -> str:
        return (
            f"InputSurface(pointer={self.subscriber_count(EventType.POINTER)}, "
            f"key={self.subscriber_count(EventType.KEY)})"
        )
