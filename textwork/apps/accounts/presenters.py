"""Display wrappers for paragraph authors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.contrib.auth.models import User

    from textwork.apps.accounts.models import UserGroup


class UserPresenter:
    """Presents a participant: full name when set, otherwise the username."""

    official = False

    def __init__(self, user: User):
        self.user = user

    @property
    def name(self) -> str:
        return self.user.get_full_name() or self.user.get_username()

    @property
    def nickname(self) -> str:
        return f"@{self.user.get_username()}"

    def __str__(self) -> str:
        return self.name


class UserGroupPresenter:
    """Presents a user group under its own name and nickname."""

    official = False

    def __init__(self, group: UserGroup):
        self.group = group

    @property
    def name(self) -> str:
        return self.group.name

    @property
    def nickname(self) -> str:
        return f"@{self.group.nickname}"

    def __str__(self) -> str:
        return self.name
