"""
Interaction controller: the Input -> Loading -> Result -> Edit flow.

Every keyboard event and the generation completion are fed through
``transition``, which returns the next session together with the effect the
caller should carry out. Nothing here touches the terminal, the network or
the clipboard.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union


class State(Enum):
    INPUT = "input"
    LOADING = "loading"
    RESULT = "result"
    EDIT = "edit"


class Effect(Enum):
    NONE = "none"
    GENERATE = "generate"
    CONFIRM = "confirm"
    QUIT = "quit"


CONFIRM_KEYS = ("enter",)
EDIT_KEYS = ("e", "E")
CANCEL_KEYS = ("escape", "c-c")


@dataclass(frozen=True)
class Session:
    state: State = State.INPUT
    prompt: str = ""
    generated_command: Optional[str] = None
    error: Optional[str] = None
    full_prompt: Optional[str] = None
    verbose: bool = False


@dataclass(frozen=True)
class Submit:
    text: str


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class GenerationCompleted:
    command: Optional[str] = None
    error: Optional[str] = None
    full_prompt: Optional[str] = None


Event = Union[Submit, KeyPress, Cancel, GenerationCompleted]


def start(initial_prompt: str = "", verbose: bool = False) -> Tuple[Session, Effect]:
    """Builds the opening session; a prompt from the command line skips straight to Loading."""
    if initial_prompt.strip():
        return Session(state=State.LOADING, prompt=initial_prompt, verbose=verbose), Effect.GENERATE
    return Session(prompt=initial_prompt, verbose=verbose), Effect.NONE


def transition(session: Session, event: Event) -> Tuple[Session, Effect]:
    """Applies one event to the session."""
    if isinstance(event, Cancel):
        return session, Effect.QUIT

    if session.state in (State.INPUT, State.EDIT):
        return _on_editing(session, event)
    if session.state is State.LOADING:
        return _on_loading(session, event)
    return _on_result(session, event)


def _on_editing(session: Session, event: Event) -> Tuple[Session, Effect]:
    if not isinstance(event, Submit) or not event.text.strip():
        return session, Effect.NONE
    return replace(
        session,
        state=State.LOADING,
        prompt=event.text,
        generated_command=None,
        error=None,
        full_prompt=None,
    ), Effect.GENERATE


def _on_loading(session: Session, event: Event) -> Tuple[Session, Effect]:
    # Editing is disabled until the one in-flight request reports back
    if not isinstance(event, GenerationCompleted):
        return session, Effect.NONE
    if event.error:
        return replace(
            session,
            state=State.RESULT,
            error=event.error,
            generated_command=None,
            full_prompt=event.full_prompt,
        ), Effect.NONE
    return replace(
        session,
        state=State.RESULT,
        generated_command=event.command,
        full_prompt=event.full_prompt,
    ), Effect.NONE


def _on_result(session: Session, event: Event) -> Tuple[Session, Effect]:
    if not isinstance(event, KeyPress):
        return session, Effect.NONE
    if session.error or event.key in CANCEL_KEYS:
        return session, Effect.QUIT
    if event.key in CONFIRM_KEYS and session.generated_command:
        return session, Effect.CONFIRM
    if event.key in EDIT_KEYS:
        return replace(session, state=State.EDIT, generated_command=None), Effect.NONE
    return session, Effect.QUIT
