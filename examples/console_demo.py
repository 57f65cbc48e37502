"""Minimal console shell driving a widget session against a running chat service."""

import asyncio

from widget_core import WidgetIntent, create_session
from widget_core.domain.conversation import Message
from widget_core.domain.models import WidgetPhase


class ConsoleShell:
    def on_message_appended(self, message: Message) -> None:
        print(f"[{message.sender.value}] {message.rendered_markup}")

    def on_pending_changed(self, pending: bool) -> None:
        print("... typing" if pending else "")

    def on_phase_changed(self, phase: WidgetPhase) -> None:
        print(f"(widget {phase.value})")


async def main() -> None:
    session = create_session(shell=ConsoleShell())
    await session.dispatch(WidgetIntent.open_toggle())
    print(session.welcome_markup)
    await session.dispatch(WidgetIntent.send("What is **phishing**?"))
    await session.dispatch(WidgetIntent.send("and smishing?"))


if __name__ == "__main__":
    asyncio.run(main())
