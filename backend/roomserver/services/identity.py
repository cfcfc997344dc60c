from typing import Dict, Optional

from roomserver.errors import AlreadyLoggedIn, NameTaken
from roomserver.models import User


class IdentityRegistry:
    """Display names of the currently connected, logged-in users."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def login(self, connection: str, name: str) -> User:
        # One display name per connection until it disconnects
        if connection in self._users:
            raise AlreadyLoggedIn()
        # Exact, case-sensitive match
        if any(u.display_name == name for u in self._users.values()):
            raise NameTaken()
        user = User(display_name=name, connection=connection)
        self._users[connection] = user
        return user

    def logout(self, connection: str) -> None:
        self._users.pop(connection, None)

    def name_of(self, connection: str) -> Optional[str]:
        user = self._users.get(connection)
        return user.display_name if user else None

    def is_logged_in(self, connection: str) -> bool:
        return connection in self._users

    def __len__(self):
        return len(self._users)
