"""Component definitions and the subcomponent registry."""

import inspect
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterable, Optional, Type, Union

from pyvue.config import DEFAULT_CONFIG, TemplateConfig
from pyvue.core.data import DataContext
from pyvue.core.props import PropSpec
from pyvue.runtime.events import EventRegistry

logger = logging.getLogger(__name__)

Method = Callable[..., Any]


def _method_map(methods: Union[Mapping, Iterable[Method], None]) -> Dict[str, Method]:
    if methods is None:
        return {}
    if isinstance(methods, Mapping):
        return dict(methods)
    return {fn.__name__: fn for fn in methods}


class Component:
    """A template plus the data, methods, props and subcomponents it uses.

    Args:
        template: HTML markup with `v-` directives and `{{ }}` placeholders.
        data: Mapping, dataclass instance or plain object holding the fields
            the template reads. A zero-argument factory gives every instance
            its own state, which subcomponents used more than once need.
        methods: Functions callable from `v-on` handlers, by `__name__`, or
            a mapping of name to function. Each is called with the component
            (and the event, if it accepts a second argument).
        props: An `@props` class, or prop names, this component accepts from
            a parent's `v-bind`.
        components: Subcomponents by tag name.
        config: Template execution settings, inherited by subcomponents.
    """

    def __init__(
        self,
        template: str,
        data: Any = None,
        methods: Union[Mapping, Iterable[Method], None] = None,
        props: Union[PropSpec, Type, Iterable[str], None] = None,
        components: Optional[Mapping[str, "Component"]] = None,
        name: Optional[str] = None,
        config: Optional[TemplateConfig] = None,
    ) -> None:
        self.template = template
        self._data_source = data
        if callable(data) and not isinstance(data, type):
            data = data()
        self.data = data
        self.methods = _method_map(methods)
        self.prop_spec = props if isinstance(props, PropSpec) else PropSpec(props)
        self.components: Dict[str, Component] = {}
        for tag, comp in (components or {}).items():
            self.register(tag, comp)
        self.name = name
        self.config = config or DEFAULT_CONFIG

        # Prop values bound by the parent, keyed by declared prop name
        self.props: Dict[str, Any] = {}
        self.events = EventRegistry(self)

    def __repr__(self) -> str:
        return f"<Component {self.name or 'anonymous'}>"

    def register(self, tag: str, component: "Component") -> None:
        """Make `component` available as the custom element `<tag>`."""
        self.components[tag.lower()] = component

    def instance(self, config: Optional[TemplateConfig] = None) -> "Component":
        """Fresh instance of this definition with no props bound."""
        return Component(
            self.template,
            data=self._data_source,
            methods=self.methods,
            props=self.prop_spec,
            components=self.components,
            name=self.name,
            config=config or self.config,
        )

    def new_sub(self, tag: str) -> Optional["Component"]:
        """Instantiate the subcomponent registered for `tag`, if any."""
        definition = self.components.get(tag.lower())
        if definition is None:
            return None
        return definition.instance(self.config)

    def resolve_prop(self, name: str) -> Optional[str]:
        return self.prop_spec.resolve(name)

    def context(self) -> DataContext:
        """Data context for one execution: data fields, then bound props.

        Declared prop defaults fill in names neither provides.
        """
        ctx = DataContext(self.data)
        for name, default in self.prop_spec.defaults.items():
            if name not in ctx and name not in self.props:
                ctx[name] = default
        ctx.update(self.props)
        return ctx

    def set_field(self, field: str, value: Any) -> None:
        if isinstance(self.data, MutableMapping):
            self.data[field] = value
        elif self.data is None:
            raise ValueError(f"{self!r} has no data to write '{field}' into")
        else:
            setattr(self.data, field, value)

    def call(self, method: str, *args: Any) -> Any:
        """Call a registered method by name."""
        if method.startswith("_"):
            raise ValueError(f"Method '{method}' not allowed")
        fn = self.methods.get(method)
        if fn is None:
            raise ValueError(f"Method {method} not found")

        try:
            params = inspect.signature(fn).parameters.values()
        except (TypeError, ValueError):
            return fn(self, *args)
        accepts_var = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params)
        if accepts_var:
            return fn(self, *args)
        return fn(self, *args[: max(len(params) - 1, 0)])

    def render(self) -> str:
        from pyvue.runtime.viewmodel import ViewModel

        return ViewModel(self).render()
