"""Event subsystem boundary: listener registry and built-in handlers."""

import logging
import re
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from pyvue.runtime.component import Component

logger = logging.getLogger(__name__)

MODEL_EVENT = "input"

Handler = Callable[["Component", "EventData"], Any]


class EventData(dict):
    """Dict that allows dot-access to keys.

    Keys used by the built-in handlers:
        type: the event type, e.g. "click"
        target: attributes of the element the event fired on
        value: the element's current value (input events)
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            # Check for camelCase version of name
            camel = re.sub(r"(?!^)_([a-z])", lambda x: x.group(1).upper(), name)
            if camel in self:
                return self[camel]
            return None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value


def v_model(component: "Component", event: EventData) -> None:
    """Two-way binding: write the element value back into the bound field."""
    target = event.target or {}
    field = target.get(MODEL_EVENT)
    if not field:
        return
    component.set_field(field, event.value if event.value is not None else "")


def v_on(component: "Component", event: EventData) -> None:
    """Call the component method named by the element's event attribute."""
    target = event.target or {}
    method = target.get(event.type)
    if not method:
        return
    component.call(method, event)


class EventRegistry:
    """Listeners registered while executing a component's template."""

    def __init__(self, component: "Component") -> None:
        self.component = component
        self.listeners: Dict[str, List[Handler]] = defaultdict(list)

    def add_event_listener(self, event_type: str, handler: Handler) -> None:
        if handler not in self.listeners[event_type]:
            logger.debug("Listening for %r on %r", event_type, self.component)
            self.listeners[event_type].append(handler)

    def has_listener(self, event_type: str) -> bool:
        return bool(self.listeners.get(event_type))

    def dispatch(self, event_type: str, event: Any = None) -> None:
        """Run every handler registered for `event_type`."""
        data = EventData(event or {})
        data.type = event_type
        for handler in list(self.listeners.get(event_type, ())):
            handler(self.component, data)

    def clear(self) -> None:
        self.listeners.clear()
