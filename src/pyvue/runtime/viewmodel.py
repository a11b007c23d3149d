"""View model: runs a component's template and serialises the result."""

import logging
from typing import Any, Optional

from pyvue.compiler.markup import render_children
from pyvue.compiler.template import Template
from pyvue.core.data import DataContext
from pyvue.core.dom import Element
from pyvue.runtime.component import Component

logger = logging.getLogger(__name__)


class ViewModel:
    """Renders a component from scratch on every call.

    Event listeners are re-registered by each execution, so listeners for
    elements that no longer render do not linger.
    """

    def __init__(self, component: Component) -> None:
        self.component = component
        self.data: Optional[DataContext] = None

    def execute(self) -> Element:
        """Execute the template; return the synthetic root of the output."""
        self.component.events.clear()
        self.data = self.component.context()
        return Template(self.component).execute(self.data)

    def render(self) -> str:
        return render_children(self.execute())

    def dispatch(self, event_type: str, event: Any = None) -> str:
        """Deliver an event to the component, then render it again."""
        if not self.component.events.has_listener(event_type):
            # Listeners are only known after a first execution.
            self.execute()
        logger.debug("Dispatching %r to %r", event_type, self.component)
        self.component.events.dispatch(event_type, event)
        return self.render()


def render(component: Component) -> str:
    """Render `component` to an HTML string."""
    return ViewModel(component).render()
