try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("pyvue")
    except PackageNotFoundError:
        __version__ = "unknown"

from pyvue.config import DEFAULT_CONFIG, TemplateConfig
from pyvue.core.data import DataContext, ValueKind
from pyvue.core.props import props
from pyvue.compiler.template import StructuralChange, Template
from pyvue.exceptions import (
    InterpolationError,
    MalformedForExpressionError,
    MarkupParseError,
    NotSequenceError,
    SequenceNotFoundError,
    TemplateError,
    TypeMismatchError,
    UnknownDataFieldError,
    UnknownDirectiveError,
)
from pyvue.runtime.component import Component
from pyvue.runtime.events import EventData
from pyvue.runtime.viewmodel import ViewModel, render

__all__ = [
    "Component",
    "DataContext",
    "DEFAULT_CONFIG",
    "EventData",
    "StructuralChange",
    "Template",
    "TemplateConfig",
    "ValueKind",
    "ViewModel",
    "props",
    "render",
    "InterpolationError",
    "MalformedForExpressionError",
    "MarkupParseError",
    "NotSequenceError",
    "SequenceNotFoundError",
    "TemplateError",
    "TypeMismatchError",
    "UnknownDataFieldError",
    "UnknownDirectiveError",
]
