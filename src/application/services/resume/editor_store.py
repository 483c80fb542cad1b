"""
Resume Editor Store
In-memory editor state with ordered dispatch and change listeners
"""
from typing import Callable, List, Optional

from domain.entities import EditorState

from .actions import ResumeAction
from .reducer import resume_reducer

StateListener = Callable[[EditorState, EditorState], None]


class ResumeEditorStore:
    """
    Single owner of the in-memory editor state.

    Actions are applied strictly in dispatch order through the reducer, and
    listeners are called synchronously with ``(state, previous)`` after each
    action that produced a new state, so anyone reading ``store.state`` right
    after ``dispatch`` sees the result.
    """

    def __init__(self, initial_state: Optional[EditorState] = None):
        self._state = initial_state or EditorState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> EditorState:
        return self._state

    def dispatch(self, action: ResumeAction) -> EditorState:
        previous = self._state
        state = resume_reducer(previous, action)
        if state is previous:
            return state

        self._state = state
        for listener in list(self._listeners):
            listener(state, previous)
        return state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
