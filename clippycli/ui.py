import threading

from prompt_toolkit import Application, PromptSession
from prompt_toolkit.application import get_app_session
from prompt_toolkit.input.typeahead import clear_typeahead
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .controller import Session, State

console = Console()
error_console = Console(stderr=True)

TITLE = "🔧 ClippyCLI - AI Command Generator"

ACTION_LABELS = {
    "copy": "copy to clipboard",
    "execute": "execute",
}


def _help(text: str) -> Text:
    return Text(text, style="dim")


def _prompt_line(session: Session) -> Text:
    return Text(f'"{session.prompt}"', style="italic grey50")


def render(session: Session, confirm_action: str = "copy"):
    """Redraws the screen for the session's current state."""
    console.clear()
    console.print(Text(TITLE, style="bold #7C3AED"))
    console.print()

    if session.state is State.INPUT:
        label = "Review your prompt:" if session.prompt.strip() else "What would you like to do?"
        console.print(Text(label, style="bold #059669"))
        console.print(_help("Press Enter to generate command • Ctrl+C/Esc to quit"))

    elif session.state is State.EDIT:
        console.print(Text("Edit your prompt:", style="bold #059669"))
        console.print(_help("Press Enter to regenerate • Ctrl+C/Esc to quit"))

    elif session.state is State.LOADING:
        console.print(Text("Generating command for:", style="bold #059669"))
        console.print()
        console.print(_prompt_line(session))
        console.print()

    elif session.state is State.RESULT:
        if session.verbose and session.full_prompt:
            console.print(Panel(
                Text(session.full_prompt),
                title="[bold]Sent to model[/bold]",
                border_style="grey50",
            ))
        if session.error:
            console.print(Text(f"Error: {session.error}", style="bold #DC2626"))
            console.print(_help("Press any key to quit"))
        else:
            action = ACTION_LABELS.get(confirm_action, confirm_action)
            console.print(Panel(
                Group(_prompt_line(session), Text(""), Text(session.generated_command or "", style="bold")),
                title="[bold #059669]Generated command[/bold #059669]",
                border_style="#6B7280",
            ))
            console.print(_help(f"Press Enter to {action} • E to edit prompt • Any other key to cancel"))


CANCEL_KEY_PRESSES = (Keys.Escape, Keys.ControlC)


def _drain_keys(terminal_input) -> bool:
    """Throws away pending keystrokes. Returns True if one of them was a cancel key."""
    pending = terminal_input.read_keys() + terminal_input.flush_keys()
    return any(key_press.key in CANCEL_KEY_PRESSES for key_press in pending)


def wait_for(task: threading.Thread):
    """
    Shows a spinner until the background task has finished.

    Keys typed meanwhile are discarded so they cannot answer the Result
    screen. Raises KeyboardInterrupt when Esc or Ctrl+C is pressed.
    """
    terminal_input = get_app_session().input
    with console.status("[#7C3AED]Thinking...[/#7C3AED]", spinner="dots"):
        with terminal_input.raw_mode():
            while task.is_alive():
                task.join(0.1)
                if _drain_keys(terminal_input):
                    raise KeyboardInterrupt
            # Anything that arrived while the last poll was sleeping
            if _drain_keys(terminal_input):
                raise KeyboardInterrupt
    clear_typeahead(terminal_input)


def _prompt_bindings() -> KeyBindings:
    kb = KeyBindings()

    @kb.add("escape", eager=True)
    def _(event):
        event.app.exit(exception=KeyboardInterrupt)

    return kb


def read_prompt(default: str = "") -> str:
    """
    Reads the user's request, pre-filled with ``default``.

    Raises KeyboardInterrupt on Ctrl+C/Esc and EOFError on Ctrl+D.
    """
    # Built per call so it picks up the current app session's input
    session = PromptSession(key_bindings=_prompt_bindings())
    return session.prompt(
        "> ",
        default=default,
        placeholder="Describe what you want to do...",
    )


def read_key() -> str:
    """
    Waits for a single keypress and returns its name.

    Enter is reported as "enter", Escape as "escape", Ctrl+C as "c-c" and
    printable keys as themselves. Keystrokes left over from the prompt are
    dropped first, so only a key pressed on this screen counts.
    """
    clear_typeahead(get_app_session().input)

    kb = KeyBindings()

    @kb.add("enter")
    def _(event):
        event.app.exit(result="enter")

    @kb.add("escape", eager=True)
    def _(event):
        event.app.exit(result="escape")

    @kb.add("c-c")
    def _(event):
        event.app.exit(result="c-c")

    @kb.add("<any>")
    def _(event):
        key = event.key_sequence[0].key
        event.app.exit(result=getattr(key, "value", key))

    app = Application(
        layout=Layout(Window(FormattedTextControl(""), height=1)),
        key_bindings=kb,
        full_screen=False,
    )
    return app.run()


def report_error(message: str):
    """Prints a failure to stderr without leaving the UI."""
    error_console.print(f"[bold red]{message}[/bold red]")


def show_copied(command: str):
    console.print(f"[green]✓ Copied to clipboard:[/green] {command}")
