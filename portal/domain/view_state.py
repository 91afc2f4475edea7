"""Экраны портала и переходы между ними.

Состояние - размеченное объединение неизменяемых dataclass-ов,
все переходы проходят через одну функцию `reduce`.
"""
from dataclasses import dataclass, replace

from .entities import User, ROLE_ADMIN, ROLE_USER

LOGIN_FORM = "login"
SIGNUP_FORM = "signup"
FORMS = (LOGIN_FORM, SIGNUP_FORM)


# --- Состояния

@dataclass(frozen=True)
class Loading:
    until: float
    kind: str = "loading"


@dataclass(frozen=True)
class Unauthenticated:
    form: str = LOGIN_FORM
    kind: str = "unauthenticated"


@dataclass(frozen=True)
class StudentCard:
    user: User
    kind: str = "student"


@dataclass(frozen=True)
class AdminDashboard:
    user: User
    roster: tuple[User, ...] | None = None
    kind: str = "admin"


ViewState = Loading | Unauthenticated | StudentCard | AdminDashboard


# --- События

@dataclass(frozen=True)
class LoadingElapsed:
    pass


@dataclass(frozen=True)
class ShowForm:
    form: str


@dataclass(frozen=True)
class SessionStarted:
    user: User


@dataclass(frozen=True)
class RosterLoaded:
    users: tuple[User, ...]


@dataclass(frozen=True)
class SessionEnded:
    pass


Event = LoadingElapsed | ShowForm | SessionStarted | RosterLoaded | SessionEnded


def screen_for(user: User) -> ViewState:
    if user.role == ROLE_USER:
        return StudentCard(user=user)
    if user.role == ROLE_ADMIN:
        return AdminDashboard(user=user)
    # неизвестная роль не получает ни одного экрана
    return Unauthenticated(form=LOGIN_FORM)


def reduce(state: ViewState, event: Event) -> ViewState:
    if isinstance(event, SessionEnded):
        return Unauthenticated(form=LOGIN_FORM)

    if isinstance(event, SessionStarted):
        return screen_for(event.user)

    if isinstance(event, LoadingElapsed):
        if isinstance(state, Loading):
            return Unauthenticated(form=LOGIN_FORM)
        return state

    if isinstance(event, ShowForm):
        if event.form not in FORMS:
            raise ValueError(f"Unknown form: {event.form}")
        if isinstance(state, (Loading, Unauthenticated)):
            return Unauthenticated(form=event.form)
        return state

    if isinstance(event, RosterLoaded):
        if isinstance(state, AdminDashboard):
            return replace(state, roster=tuple(event.users))
        return state

    raise TypeError(f"Unsupported event: {event!r}")


def session_user(state: ViewState) -> User | None:
    if isinstance(state, (StudentCard, AdminDashboard)):
        return state.user
    return None
