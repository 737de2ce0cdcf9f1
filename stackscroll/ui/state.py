from dataclasses import dataclass

from stackscroll.app_shell.navigation import path_for
from stackscroll.components.session import SessionManager
from stackscroll.domain.entities import User


@dataclass
class AppState:
    session: SessionManager
    redirect_after_login: str | None = None

    @property
    def current_user(self) -> User | None:
        # Always read through the manager; never keep a copy.
        return self.session.current_user()

    def take_redirect(self, default: str = "compose") -> str:
        """Pop the path saved by the sign-in guard, or the default route's path."""
        target = self.redirect_after_login or path_for(default)
        self.redirect_after_login = None
        return target
