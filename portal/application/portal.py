"""Сессия портала: текущий экран, уведомление и кэш списка студентов.

Здесь граница UI: ошибки форм и бэкенда превращаются в уведомления
и дальше не распространяются.

FastAPI выполняет синхронные обработчики в пуле потоков, поэтому все
публичные операции идут под одной блокировкой: одна операция за раз.
"""
import threading
import time
from typing import Callable

import structlog

from ..domain.entities import User, ROLES
from ..domain import view_state as vs
from .dto import LoginInput, SignupInput, AddUserInput, ForgotMatricInput
from .errors import ApiError, FormError
from .matric import generate_matric_number
from .notifications import NotificationCenter
from .use_cases.login_user import LoginUser
from .use_cases.manage_roster import (
    ManageRoster,
    CreatedUser,
    ALL_DEPARTMENTS,
    filter_by_department,
    roster_stats,
)
from .use_cases.recover_matric import RecoverMatric
from .use_cases.register_user import RegisterUser, Registration

logger = structlog.get_logger()


class Portal:
    def __init__(
        self,
        api,
        notification_seconds: float = 4.0,
        loading_seconds: float = 2.0,
        password_min_length: int = 6,
        clock: Callable[[], float] = time.monotonic,
        matric_generator: Callable[[], str] = generate_matric_number,
    ):
        self.clock = clock
        # RLock: вход администратора и добавление вызывают fetch_all_users
        self.lock = threading.RLock()
        self.notifications = NotificationCenter(notification_seconds, clock)
        self._state: vs.ViewState = vs.Loading(until=clock() + loading_seconds)

        self._login = LoginUser(api)
        self._register = RegisterUser(api, password_min_length, matric_generator)
        self._roster = ManageRoster(api, api, matric_generator)
        self._recover = RecoverMatric(api)

    # --- Состояние

    def dispatch(self, event: vs.Event) -> vs.ViewState:
        with self.lock:
            previous = self._state
            self._state = vs.reduce(previous, event)
            if self._state.kind != previous.kind:
                logger.info("view_transition", trigger=type(event).__name__,
                            from_view=previous.kind, to_view=self._state.kind)
            return self._state

    @property
    def view(self) -> vs.ViewState:
        with self.lock:
            if isinstance(self._state, vs.Loading) and self.clock() >= self._state.until:
                self.dispatch(vs.LoadingElapsed())
            return self._state

    @property
    def session(self) -> User | None:
        return vs.session_user(self.view)

    @property
    def roster(self) -> tuple[User, ...] | None:
        state = self.view
        return state.roster if isinstance(state, vs.AdminDashboard) else None

    def _require_admin(self) -> vs.AdminDashboard:
        state = self.view
        if not isinstance(state, vs.AdminDashboard):
            raise FormError("Admin access required")
        return state

    # --- Вход, регистрация, выход

    def show_form(self, form: str) -> vs.ViewState:
        return self.dispatch(vs.ShowForm(form))

    def login(self, form: LoginInput) -> User | None:
        with self.lock:
            if self.session is not None:
                self.notifications.error("You are already logged in")
                return None
            try:
                user = self._login.execute(form)
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return None

            if user.role not in ROLES:
                # сессию с неизвестной ролью не сохраняем
                logger.warning("unsupported_role", email=user.email, role=user.role)
                self.dispatch(vs.SessionEnded())
                self.notifications.error(f"Unsupported account role: {user.role}")
                return None

            self.dispatch(vs.SessionStarted(user))
            self.notifications.success(f"Login successful! Welcome {user.first_name}")
            if isinstance(self._state, vs.AdminDashboard):
                self.fetch_all_users()
            return user

    def signup(self, form: SignupInput) -> Registration | None:
        with self.lock:
            if self.session is not None:
                self.notifications.error("Log out before registering a new account")
                return None
            try:
                registration = self._register.execute(form)
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return None

            matric = registration.matric_number
            self.dispatch(vs.ShowForm(vs.LOGIN_FORM))
            self.notifications.success(
                f"Registration successful! Your matric number is {matric}. "
                "Keep it safe, you need it to log in.",
                matricNumber=matric,
            )
            return registration

    def logout(self) -> None:
        # только локально, бэкенд не вызывается
        with self.lock:
            self.dispatch(vs.SessionEnded())
            self.notifications.success("Logged out successfully")

    def forgot_matric(self, form: ForgotMatricInput) -> str | None:
        with self.lock:
            try:
                matric = self._recover.execute(form)
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return None
            self.notifications.success(f"Your matric number is {matric}", matricNumber=matric)
            return matric

    # --- Список студентов

    def fetch_all_users(self) -> tuple[User, ...] | None:
        with self.lock:
            try:
                self._require_admin()
                users = self._roster.fetch_all_users()
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return None
            self.dispatch(vs.RosterLoaded(users))
            return users

    def delete_user(self, user_id: str, confirm: Callable[[str], bool]) -> bool:
        with self.lock:
            try:
                state = self._require_admin()
                deleted = self._roster.delete_user(state.user, user_id, confirm)
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return False
            if not deleted:
                return False

            try:
                users = self._roster.fetch_all_users()
            except ApiError as e:
                # удаление прошло, убираем запись из кэша сами
                logger.warning("roster_refresh_failed", user_id=user_id, error=e.message)
                users = tuple(u for u in state.roster or () if u.id != str(user_id))
                self.dispatch(vs.RosterLoaded(users))
                self.notifications.error(
                    f"User deleted, but the roster could not be refreshed: {e.message}"
                )
                return True

            self.dispatch(vs.RosterLoaded(users))
            self.notifications.success("User deleted successfully")
            return True

    def add_user(self, form: AddUserInput) -> CreatedUser | None:
        with self.lock:
            try:
                self._require_admin()
                created = self._roster.add_user(form)
            except (FormError, ApiError) as e:
                self.notifications.error(str(e))
                return None

            details = {"matricNumber": created.matric_number}
            message = f"User added successfully. Matric number: {created.matric_number}"
            if created.temporary_password:
                details["temporaryPassword"] = created.temporary_password
                message += f", temporary password: {created.temporary_password}"
            self.notifications.success(message, **details)
            self.fetch_all_users()
            return created

    def filter_by_department(self, department: str = ALL_DEPARTMENTS) -> list[User]:
        return filter_by_department(self.roster or (), department)

    def stats(self) -> dict:
        return roster_stats(self.roster or ())
