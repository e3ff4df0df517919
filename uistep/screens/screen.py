"""Screen-scoped chains: a step whose result is the screen it has reached."""

from __future__ import annotations

from typing import Any, TypeVar

from uistep.core.step import Step

SC = TypeVar("SC", bound="Screen")


class Screen(Step[Any]):
    """
    Marker base for screen/state-tagged chains.

    Subclass once per screen and declare that screen's operations as methods
    finishing with ``haunt(NextScreen)``. An operation only exists on the
    screen it was declared for, so a type checker rejects calling it while the
    chain is on another screen; the runtime representation is an ordinary
    step whose result is the screen class.

    Usage:
        class Login(Screen):
            def login(self, username: str, password: str) -> Dashboard:
                return self.then(steps(...)).haunt(Dashboard)

        class Dashboard(Screen):
            def show_settings(self) -> Settings: ...

        Login.start().login("max", "secret").show_settings().to_void_step()
    """

    @classmethod
    def start(cls: type[SC]) -> SC:
        """Begin a chain on this screen without touching the driver."""
        return Step.always(None).haunt(cls)

    def __repr__(self) -> str:
        return f"<Screen {type(self).__name__}>"
