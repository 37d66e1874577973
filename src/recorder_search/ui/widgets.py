"""
Widgets - The recorder toolbar nodes the search tool renders into.

A deliberately small stand-in for DOM nodes built by the recorder's element
factories: tag, classes, text, children and event listeners. The search tool
only needs these to render the counter and state classes and to receive
input and key events.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[["Event"], None]


@dataclass
class Event:
    """
    A UI event.
    
    Attributes:
        type: Event name (``input``, ``keydown``, ``click``)
        default_prevented: Set by prevent_default()
        propagation_stopped: Set by stop_propagation()
    """
    type: str
    default_prevented: bool = False
    propagation_stopped: bool = False
    
    def prevent_default(self) -> None:
        self.default_prevented = True
    
    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class KeyboardEvent(Event):
    """Key press (``key`` uses DOM key names: Enter, Escape, F3)."""
    type: str = "keydown"
    key: str = ""
    shift_key: bool = False


class ClassList:
    """Ordered set of CSS classes."""
    
    def __init__(self, classes: Iterable[str] = ()):
        self._classes: List[str] = []
        for name in classes:
            self.add(name)
    
    def add(self, name: str) -> None:
        if name not in self._classes:
            self._classes.append(name)
    
    def remove(self, name: str) -> None:
        if name in self._classes:
            self._classes.remove(name)
    
    def toggle(self, name: str, force: Optional[bool] = None) -> bool:
        enable = (name not in self._classes) if force is None else force
        if enable:
            self.add(name)
        else:
            self.remove(name)
        return enable
    
    def contains(self, name: str) -> bool:
        return name in self._classes
    
    def __contains__(self, name: str) -> bool:
        return self.contains(name)
    
    def __iter__(self):
        return iter(self._classes)
    
    def __repr__(self) -> str:
        return f"ClassList({self._classes!r})"


class Widget:
    """A toolbar node."""
    
    def __init__(self, tag: str, classes: Iterable[str] = (), title: str = ""):
        self.tag = tag
        self.class_list = ClassList(classes)
        self.title = title
        self.text_content = ""
        self.children: List["Widget"] = []
        self.parent: Optional["Widget"] = None
        self._listeners: Dict[str, List[Listener]] = {}
    
    def append_child(self, child: "Widget") -> "Widget":
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        return child
    
    def remove(self) -> None:
        """Detach from the parent, if any."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None
    
    def add_event_listener(self, event_type: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.
        
        Returns:
            A function that removes the listener again
        """
        self._listeners.setdefault(event_type, []).append(listener)
        
        def remove() -> None:
            listeners = self._listeners.get(event_type, [])
            if listener in listeners:
                listeners.remove(listener)
        
        return remove
    
    def listener_count(self, event_type: Optional[str] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(listeners) for listeners in self._listeners.values())
    
    def dispatch_event(self, event: Event) -> bool:
        """
        Deliver ``event`` to this node's listeners, then bubble to the parent.
        
        Returns:
            False if a listener called prevent_default()
        """
        node: Optional[Widget] = self
        while node is not None:
            for listener in list(node._listeners.get(event.type, [])):
                listener(event)
            if event.propagation_stopped:
                break
            node = node.parent
        return not event.default_prevented
    
    def find(self, tag: str) -> Optional["Widget"]:
        """First descendant (or self) with ``tag``."""
        if self.tag == tag:
            return self
        for child in self.children:
            found = child.find(tag)
            if found is not None:
                return found
        return None
    
    def __repr__(self) -> str:
        return f"<{self.tag} class={list(self.class_list)!r}>"


class SearchInput(Widget):
    """Multi-line search text field."""
    
    def __init__(self, tag: str = "textarea", classes: Iterable[str] = (), placeholder: str = ""):
        super().__init__(tag, classes)
        self.value = ""
        self.placeholder = placeholder
        self.focused = False
    
    def focus(self) -> None:
        self.focused = True
    
    def type(self, value: str) -> None:
        """Set the value and fire ``input``, as a keystroke would."""
        self.value = value
        self.dispatch_event(Event("input"))
    
    def press(self, key: str, shift: bool = False) -> KeyboardEvent:
        event = KeyboardEvent(key=key, shift_key=shift)
        self.dispatch_event(event)
        return event


@dataclass
class SearchFactories:
    """
    Builders for the search UI nodes.
    
    ``create_container`` and ``create_input`` are required; the trigger,
    expandable wrapper and counter are optional. A missing expandable falls
    back to a plain ``x-pw-search-expandable`` node.
    """
    create_container: Callable[[], Widget] = field(
        default=lambda: Widget("x-pw-search-container")
    )
    create_input: Callable[[str], SearchInput] = field(
        default=lambda placeholder: SearchInput(classes=["x-pw-search-input"], placeholder=placeholder)
    )
    create_trigger: Optional[Callable[[str], Widget]] = field(
        default=lambda title: Widget("x-pw-search-trigger", title=title)
    )
    create_expandable: Optional[Callable[[], Widget]] = field(
        default=lambda: Widget("x-pw-search-expandable")
    )
    create_counter: Optional[Callable[[], Widget]] = field(
        default=lambda: Widget("x-pw-search-counter")
    )
